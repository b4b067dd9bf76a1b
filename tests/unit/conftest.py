"""Unit-specific fixtures (no I/O beyond in-memory SQLite)."""

from __future__ import annotations

import aiosqlite
import pytest

from pnpmap.snapshot import SnapshotDB


@pytest.fixture()
async def snapshot_db():
    """In-memory SQLite snapshot store for unit tests."""
    async with aiosqlite.connect(":memory:") as db:
        store = SnapshotDB(db)
        await store.init_db()
        yield store
