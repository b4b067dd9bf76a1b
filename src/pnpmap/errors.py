"""Error taxonomy for map construction, snapshot loading and request resolution.

Build errors abort map construction entirely. Resolution errors are fatal to
a single resolution request only and carry enough context (issuer, requested
name, declared dependencies) to diagnose a misdeclared dependency.
"""

from __future__ import annotations

from enum import StrEnum
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from pnpmap.models.records import PackageLocator


class ErrorCode(StrEnum):
    BUILD_FAILED = "BUILD_FAILED"
    DUPLICATE_LOCATION = "DUPLICATE_LOCATION"
    UNKNOWN_REQUESTER = "UNKNOWN_REQUESTER"
    UNDECLARED_DEPENDENCY = "UNDECLARED_DEPENDENCY"
    UNRESOLVABLE_LOCATION = "UNRESOLVABLE_LOCATION"
    SNAPSHOT_INVALID = "SNAPSHOT_INVALID"


class PnpMapError(Exception):
    """Base class for all errors raised by pnpmap."""

    def __init__(self, code: ErrorCode, message: str, recoverable: bool = False) -> None:
        super().__init__(message)
        self.code = code
        self.message = message
        self.recoverable = recoverable


class BuildError(PnpMapError):
    def __init__(self, message: str, code: ErrorCode = ErrorCode.BUILD_FAILED) -> None:
        super().__init__(code, message, recoverable=False)


class DuplicateLocationError(BuildError):
    """Two package identities were installed at the same location."""

    def __init__(self, location: str, existing: PackageLocator, duplicate: PackageLocator) -> None:
        super().__init__(
            f"Packages {existing} and {duplicate} share the install location {location}",
            code=ErrorCode.DUPLICATE_LOCATION,
        )
        self.location = location
        self.existing = existing
        self.duplicate = duplicate


class UnknownRequesterError(PnpMapError):
    def __init__(self, issuer: str, dependency_name: str | None = None) -> None:
        message = f"Could not find to which package belongs the path {issuer}"
        if dependency_name is not None:
            message += f" (while requiring {dependency_name})"
        super().__init__(ErrorCode.UNKNOWN_REQUESTER, message, recoverable=True)
        self.issuer = issuer
        self.dependency_name = dependency_name


class UndeclaredDependencyError(PnpMapError):
    def __init__(
        self,
        issuer_locator: PackageLocator,
        dependency_name: str,
        declared: list[str],
    ) -> None:
        if issuer_locator.is_top_level:
            message = (
                f"You cannot require a package ({dependency_name}) "
                "that is not declared in your dependencies"
            )
        else:
            message = (
                f"Package {issuer_locator} is trying to require package {dependency_name}, "
                f"which is not declared in its dependencies ({', '.join(declared)})"
            )
        super().__init__(ErrorCode.UNDECLARED_DEPENDENCY, message, recoverable=True)
        self.issuer_locator = issuer_locator
        self.dependency_name = dependency_name
        self.declared = declared


class UnresolvableLocationError(PnpMapError):
    def __init__(self, issuer_locator: PackageLocator, dependency: PackageLocator) -> None:
        super().__init__(
            ErrorCode.UNRESOLVABLE_LOCATION,
            f"Package {issuer_locator} depends on {dependency}, "
            "which has no recorded install location",
            recoverable=True,
        )
        self.issuer_locator = issuer_locator
        self.dependency = dependency


class SnapshotError(PnpMapError):
    def __init__(self, message: str) -> None:
        super().__init__(ErrorCode.SNAPSHOT_INVALID, message, recoverable=False)
