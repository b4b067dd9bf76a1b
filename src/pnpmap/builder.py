"""Build a package map from an already-resolved dependency graph.

The graph is walked once, in the resolver's topological order. Every package
that is eligible for map-based resolution and has an install location gets a
record; the others are left to a fallback resolution strategy. A synthetic
top-level record (``name = reference = None``) declares the seed packages.

Any dependency pattern the resolver cannot resolve aborts the build: no
partial map is ever returned.
"""

from __future__ import annotations

import asyncio
import os
from typing import TYPE_CHECKING

import structlog

from pnpmap.errors import BuildError
from pnpmap.models.records import TOP_LEVEL_LOCATOR, PackageInformation, PackageLocator
from pnpmap.package_map import PackageMap
from pnpmap.store import PackageInformationStores

if TYPE_CHECKING:
    from collections.abc import Sequence

    from pnpmap.config import MapSettings
    from pnpmap.protocols import GraphSource

log = structlog.get_logger()


def _strip_trailing_separators(location: str) -> str:
    stripped = location.rstrip("/" + os.sep)
    # The filesystem root keeps its separator
    return stripped or location[:1]


async def canonical_location(location: str) -> str:
    """Absolute, symlink-free form of ``location`` without trailing separators."""
    real = await asyncio.to_thread(os.path.realpath, location)
    return _strip_trailing_separators(real)


def resolve_dependencies(patterns: Sequence[str], resolver: GraphSource) -> dict[str, str]:
    """Map each pattern to ``{name: version}`` through the resolver."""
    dependencies: dict[str, str] = {}
    for pattern in patterns:
        try:
            resolved = resolver.get_strict_resolved_pattern(pattern)
        except LookupError as exc:
            raise BuildError(f"Could not resolve dependency pattern {pattern!r}") from exc
        if resolved is None:
            raise BuildError(f"Could not resolve dependency pattern {pattern!r}")
        dependencies[resolved.name] = resolved.version
    return dependencies


async def get_package_information_stores(
    seed_patterns: Sequence[str],
    resolver: GraphSource,
) -> PackageInformationStores:
    stores = PackageInformationStores()

    for manifest in resolver.get_topological_manifests(seed_patterns):
        reference = manifest.reference
        if reference is None or not reference.location or not reference.is_plugnplay:
            log.debug("package_skipped", name=manifest.name, version=manifest.version)
            continue

        dependencies = resolve_dependencies(reference.dependencies, resolver)
        location = await canonical_location(reference.location)
        stores.put(
            PackageLocator(manifest.name, manifest.version),
            PackageInformation(location=location, dependencies=dependencies),
        )

    stores.put(
        TOP_LEVEL_LOCATOR,
        PackageInformation(
            location=None,
            dependencies=resolve_dependencies(seed_patterns, resolver),
        ),
    )
    return stores


async def build_package_map(
    seed_patterns: Sequence[str],
    resolver: GraphSource,
    *,
    settings: MapSettings | None = None,
) -> PackageMap:
    strict = settings.reject_duplicate_locations if settings is not None else True
    stores = await get_package_information_stores(seed_patterns, resolver)
    package_map = PackageMap(stores, strict=strict)
    log.info(
        "package_map_built",
        packages=len(stores),
        locations=len(package_map.index),
        seeds=len(seed_patterns),
    )
    return package_map
