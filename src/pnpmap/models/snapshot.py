from __future__ import annotations

from pydantic import BaseModel, field_validator

SNAPSHOT_FORMAT_VERSION = 1


class SnapshotPackage(BaseModel):
    """Single package record as persisted in a map snapshot."""

    name: str | None
    reference: str | None
    location: str | None
    # Ordered (dependency name, reference) pairs
    dependencies: list[tuple[str, str]] = []


class MapSnapshot(BaseModel):
    """Self-contained persisted form of a package map.

    The reverse location index is not stored: it is derived from the package
    records when the snapshot is loaded.
    """

    format_version: int = SNAPSHOT_FORMAT_VERSION
    packages: list[SnapshotPackage]

    @field_validator("format_version")
    @classmethod
    def validate_format_version(cls, v: int) -> int:
        if v != SNAPSHOT_FORMAT_VERSION:
            raise ValueError(f"Unsupported snapshot format version: {v}")
        return v
