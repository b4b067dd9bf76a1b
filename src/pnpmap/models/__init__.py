from __future__ import annotations

from pnpmap.models.graph import PackageManifest, PackageReference, ResolvedPattern
from pnpmap.models.records import TOP_LEVEL_LOCATOR, PackageInformation, PackageLocator
from pnpmap.models.snapshot import SNAPSHOT_FORMAT_VERSION, MapSnapshot, SnapshotPackage

__all__ = [
    # graph
    "PackageManifest",
    "PackageReference",
    "ResolvedPattern",
    # records
    "PackageLocator",
    "PackageInformation",
    "TOP_LEVEL_LOCATOR",
    # snapshot
    "MapSnapshot",
    "SnapshotPackage",
    "SNAPSHOT_FORMAT_VERSION",
]
