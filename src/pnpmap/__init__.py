from __future__ import annotations

from pnpmap.builder import build_package_map, get_package_information_stores
from pnpmap.enforcement import DependencyRequest, DependencyResolver, parse_request
from pnpmap.errors import (
    BuildError,
    DuplicateLocationError,
    ErrorCode,
    PnpMapError,
    SnapshotError,
    UndeclaredDependencyError,
    UnknownRequesterError,
    UnresolvableLocationError,
)
from pnpmap.generate import generate_pnp_map
from pnpmap.logging_config import setup_logging
from pnpmap.models.records import TOP_LEVEL_LOCATOR, PackageInformation, PackageLocator
from pnpmap.package_map import PackageMap

__all__ = [
    # building
    "build_package_map",
    "get_package_information_stores",
    "generate_pnp_map",
    "setup_logging",
    # map
    "PackageMap",
    "PackageLocator",
    "PackageInformation",
    "TOP_LEVEL_LOCATOR",
    # resolution
    "DependencyResolver",
    "DependencyRequest",
    "parse_request",
    # errors
    "ErrorCode",
    "PnpMapError",
    "BuildError",
    "DuplicateLocationError",
    "UnknownRequesterError",
    "UndeclaredDependencyError",
    "UnresolvableLocationError",
    "SnapshotError",
]
