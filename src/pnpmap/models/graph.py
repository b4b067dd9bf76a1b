"""Shapes consumed from the external dependency graph resolver."""

from __future__ import annotations

from pydantic import BaseModel, field_validator


class PackageReference(BaseModel):
    location: str | None = None  # Filesystem path, absent when not installed
    is_plugnplay: bool = False  # Eligible for map-based resolution
    dependencies: list[str] = []  # Dependency patterns, e.g. "left-pad@^1.0.0"


class PackageManifest(BaseModel):
    name: str
    version: str
    reference: PackageReference | None = None

    @field_validator("name")
    @classmethod
    def validate_name(cls, v: str) -> str:
        if not v:
            raise ValueError("package name must not be empty")
        return v


class ResolvedPattern(BaseModel):
    """Result of resolving a dependency pattern to a concrete package."""

    name: str
    version: str
