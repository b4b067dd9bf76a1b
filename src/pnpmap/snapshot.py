"""Persisted package map snapshots.

A snapshot is a static, self-contained copy of the package records. Loading
one rebuilds the reverse index and owner finder without consulting the
resolver again. Two encodings are supported: a JSON document and an SQLite
database.

Unlike a cache, a snapshot that cannot be read or written is a hard failure:
every I/O, SQLite and validation error is re-raised as ``SnapshotError``.
"""

from __future__ import annotations

from pathlib import Path
from typing import TYPE_CHECKING

import aiosqlite
import structlog
from pydantic import ValidationError

from pnpmap.errors import DuplicateLocationError, SnapshotError
from pnpmap.models.snapshot import MapSnapshot, SnapshotPackage
from pnpmap.package_map import PackageMap

if TYPE_CHECKING:
    import os

log = structlog.get_logger()

# ---------------------------------------------------------------------------
# JSON
# ---------------------------------------------------------------------------


def write_json_snapshot(snapshot: MapSnapshot, path: str | os.PathLike[str]) -> None:
    target = Path(path)
    try:
        target.parent.mkdir(parents=True, exist_ok=True)
        target.write_text(snapshot.model_dump_json(indent=2) + "\n", encoding="utf-8")
    except OSError as exc:
        raise SnapshotError(f"Could not write snapshot to {target}: {exc}") from exc
    log.info("snapshot_written", path=str(target), format="json", packages=len(snapshot.packages))


def read_json_snapshot(path: str | os.PathLike[str]) -> MapSnapshot:
    source = Path(path)
    try:
        raw = source.read_text(encoding="utf-8")
    except OSError as exc:
        raise SnapshotError(f"Could not read snapshot {source}: {exc}") from exc
    try:
        return MapSnapshot.model_validate_json(raw)
    except ValidationError as exc:
        raise SnapshotError(f"Invalid snapshot {source}: {exc}") from exc


def package_map_from_snapshot(snapshot: MapSnapshot, *, strict: bool = True) -> PackageMap:
    """Rebuild a PackageMap; a snapshot with shared install locations is invalid."""
    try:
        return PackageMap.from_snapshot(snapshot, strict=strict)
    except DuplicateLocationError as exc:
        raise SnapshotError(f"Invalid snapshot: {exc.message}") from exc


def load_package_map(path: str | os.PathLike[str], *, strict: bool = True) -> PackageMap:
    """Load a JSON snapshot straight into a ready-to-query PackageMap."""
    return package_map_from_snapshot(read_json_snapshot(path), strict=strict)


# ---------------------------------------------------------------------------
# SQLite
# ---------------------------------------------------------------------------

_CREATE_META_TABLE = """
CREATE TABLE IF NOT EXISTS snapshot_meta (
    key   TEXT PRIMARY KEY,
    value TEXT NOT NULL
)
"""

_CREATE_PACKAGE_TABLE = """
CREATE TABLE IF NOT EXISTS packages (
    id        INTEGER PRIMARY KEY,
    name      TEXT,
    reference TEXT,
    location  TEXT
)
"""

_CREATE_DEPENDENCY_TABLE = """
CREATE TABLE IF NOT EXISTS dependencies (
    package_id INTEGER NOT NULL REFERENCES packages(id) ON DELETE CASCADE,
    position   INTEGER NOT NULL,
    name       TEXT NOT NULL,
    reference  TEXT NOT NULL,
    PRIMARY KEY (package_id, name)
)
"""


class SnapshotDB:
    """SQLite-backed snapshot storage."""

    def __init__(self, db: aiosqlite.Connection) -> None:
        self._db = db

    async def init_db(self) -> None:
        """Create tables. Called once before the first save."""
        try:
            await self._db.execute("PRAGMA foreign_keys = ON")
            await self._db.execute(_CREATE_META_TABLE)
            await self._db.execute(_CREATE_PACKAGE_TABLE)
            await self._db.execute(_CREATE_DEPENDENCY_TABLE)
            await self._db.commit()
        except aiosqlite.Error as exc:
            raise SnapshotError(f"Could not initialise snapshot database: {exc}") from exc

    async def save(self, snapshot: MapSnapshot) -> None:
        """Replace the stored snapshot with ``snapshot``."""
        try:
            await self._db.execute("DELETE FROM dependencies")
            await self._db.execute("DELETE FROM packages")
            await self._db.execute(
                "INSERT OR REPLACE INTO snapshot_meta (key, value) VALUES (?, ?)",
                ("format_version", str(snapshot.format_version)),
            )
            for package_id, package in enumerate(snapshot.packages):
                await self._db.execute(
                    "INSERT INTO packages (id, name, reference, location) VALUES (?, ?, ?, ?)",
                    (package_id, package.name, package.reference, package.location),
                )
                await self._db.executemany(
                    "INSERT INTO dependencies (package_id, position, name, reference) "
                    "VALUES (?, ?, ?, ?)",
                    [
                        (package_id, position, name, reference)
                        for position, (name, reference) in enumerate(package.dependencies)
                    ],
                )
            await self._db.commit()
        except aiosqlite.Error as exc:
            await self._db.rollback()
            raise SnapshotError(f"Could not save snapshot: {exc}") from exc
        log.info("snapshot_written", format="sqlite", packages=len(snapshot.packages))

    async def load(self) -> MapSnapshot:
        try:
            cursor = await self._db.execute(
                "SELECT value FROM snapshot_meta WHERE key = 'format_version'"
            )
            row = await cursor.fetchone()
            if row is None:
                raise SnapshotError("Snapshot database is empty")

            cursor = await self._db.execute(
                "SELECT id, name, reference, location FROM packages ORDER BY id"
            )
            package_rows = await cursor.fetchall()

            cursor = await self._db.execute(
                "SELECT package_id, name, reference FROM dependencies "
                "ORDER BY package_id, position"
            )
            dependencies: dict[int, list[tuple[str, str]]] = {}
            for package_id, name, reference in await cursor.fetchall():
                dependencies.setdefault(package_id, []).append((name, reference))
        except aiosqlite.Error as exc:
            raise SnapshotError(f"Could not load snapshot: {exc}") from exc

        try:
            return MapSnapshot(
                format_version=int(row[0]),
                packages=[
                    SnapshotPackage(
                        name=name,
                        reference=reference,
                        location=location,
                        dependencies=dependencies.get(package_id, []),
                    )
                    for package_id, name, reference, location in package_rows
                ],
            )
        except (ValidationError, ValueError) as exc:
            raise SnapshotError(f"Invalid snapshot database: {exc}") from exc


async def write_sqlite_snapshot(snapshot: MapSnapshot, path: str | os.PathLike[str]) -> None:
    target = Path(path)
    try:
        target.parent.mkdir(parents=True, exist_ok=True)
    except OSError as exc:
        raise SnapshotError(f"Could not create {target.parent}: {exc}") from exc
    async with aiosqlite.connect(target) as db:
        store = SnapshotDB(db)
        await store.init_db()
        await store.save(snapshot)


async def read_sqlite_snapshot(path: str | os.PathLike[str]) -> MapSnapshot:
    """Read a snapshot database without modifying it."""
    source = Path(path)
    if not source.exists():
        raise SnapshotError(f"Snapshot database {source} does not exist")
    uri = source.resolve().as_uri() + "?mode=ro"
    try:
        async with aiosqlite.connect(uri, uri=True) as db:
            return await SnapshotDB(db).load()
    except aiosqlite.Error as exc:
        raise SnapshotError(f"Could not open snapshot database {source}: {exc}") from exc


async def load_sqlite_package_map(
    path: str | os.PathLike[str], *, strict: bool = True
) -> PackageMap:
    """Load an SQLite snapshot straight into a ready-to-query PackageMap."""
    return package_map_from_snapshot(await read_sqlite_snapshot(path), strict=strict)
