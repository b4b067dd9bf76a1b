"""Build a package map and persist it as a snapshot, as configured."""

from __future__ import annotations

from pathlib import Path
from typing import TYPE_CHECKING

from pnpmap.builder import build_package_map
from pnpmap.logging_config import setup_logging
from pnpmap.snapshot import write_json_snapshot, write_sqlite_snapshot

if TYPE_CHECKING:
    from collections.abc import Sequence

    from pnpmap.config import Settings
    from pnpmap.protocols import GraphSource


async def generate_pnp_map(
    seed_patterns: Sequence[str],
    resolver: GraphSource,
    settings: Settings,
) -> Path:
    """Return the path of the written snapshot.

    The snapshot is only written once the whole map has been built; a build
    failure leaves any previous snapshot untouched.
    """
    setup_logging(settings.logging)
    package_map = await build_package_map(seed_patterns, resolver, settings=settings.map)
    snapshot = package_map.to_snapshot()

    target = Path(settings.snapshot.path)
    if settings.snapshot.format == "sqlite":
        await write_sqlite_snapshot(snapshot, target)
    else:
        write_json_snapshot(snapshot, target)
    return target
