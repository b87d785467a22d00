"""Persistence backends for workspace snapshots.

A snapshot is the flat ``name -> content`` mapping of a workspace, stored as
one JSON object (keys are file names, values the raw file text, in workspace
order). Backends only read and write that text; the Workspace decides what to
do when they fail.
"""

import contextlib
import json
import os
import tempfile
from collections.abc import Mapping
from functools import partial
from pathlib import Path
from typing import Protocol, runtime_checkable

from anyio import to_thread
from loguru import logger
from pydantic import TypeAdapter, ValidationError
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker

from devspace.config import Settings
from devspace.db.engine import create_engine, create_session_factory, create_tables
from devspace.models.kv_cache import KVCache

_snapshot_adapter = TypeAdapter(dict[str, str])


def encode_snapshot(snapshot: Mapping[str, str]) -> str:
    return json.dumps(dict(snapshot), ensure_ascii=False)


def decode_snapshot(raw: str | bytes | None) -> dict[str, str] | None:
    """Parse snapshot text; anything corrupt or of the wrong shape is ``None``."""
    if not raw:
        return None
    try:
        return _snapshot_adapter.validate_json(raw)
    except ValidationError:
        return None


@runtime_checkable
class SnapshotStore(Protocol):
    async def load(self) -> dict[str, str] | None:
        """Return the last saved snapshot, or ``None`` when there is none."""
        ...

    async def save(self, snapshot: Mapping[str, str]) -> None:
        """Replace the saved snapshot."""
        ...


class MemorySnapshotStore:
    """Keeps the encoded snapshot in memory. Used by tests and ``--ephemeral``."""

    def __init__(self, raw: str | None = None) -> None:
        self.raw = raw

    async def load(self) -> dict[str, str] | None:
        return decode_snapshot(self.raw)

    async def save(self, snapshot: Mapping[str, str]) -> None:
        self.raw = encode_snapshot(snapshot)


class FileSnapshotStore:
    """JSON file on local disk, written atomically."""

    def __init__(self, path: str | Path) -> None:
        self.path = Path(path)

    async def load(self) -> dict[str, str] | None:
        try:
            raw = await to_thread.run_sync(partial(self.path.read_text, encoding="utf-8"))
        except FileNotFoundError:
            return None
        return decode_snapshot(raw)

    async def save(self, snapshot: Mapping[str, str]) -> None:
        await to_thread.run_sync(partial(_atomic_write, self.path, encode_snapshot(snapshot)))


class DatabaseSnapshotStore:
    """One ``kv_cache`` row keyed by the workspace storage key."""

    def __init__(self, session_factory: async_sessionmaker[AsyncSession], key: str) -> None:
        self._session_factory = session_factory
        self.key = key

    async def load(self) -> dict[str, str] | None:
        async with self._session_factory() as db:
            result = await db.execute(select(KVCache.value_text).where(KVCache.cache_key == self.key))
            return decode_snapshot(result.scalar_one_or_none())

    async def save(self, snapshot: Mapping[str, str]) -> None:
        value = encode_snapshot(snapshot)
        async with self._session_factory() as db:
            result = await db.execute(select(KVCache).where(KVCache.cache_key == self.key))
            row = result.scalar_one_or_none()
            if row is None:
                db.add(KVCache(cache_key=self.key, value_text=value))
            else:
                row.value_text = value
            await db.commit()


def _atomic_write(path: Path, data: str) -> None:
    """Write to a temp file in the same directory, then rename over ``path``."""
    path.parent.mkdir(parents=True, exist_ok=True)
    fd, tmp_path = tempfile.mkstemp(dir=path.parent, suffix=".tmp")
    try:
        with os.fdopen(fd, "w", encoding="utf-8") as f:
            f.write(data)
        os.replace(tmp_path, path)
    except BaseException:
        with contextlib.suppress(OSError):
            os.unlink(tmp_path)
        raise


def create_snapshot_store(settings: Settings) -> tuple[SnapshotStore, AsyncEngine | None]:
    """Build the configured backend; the engine (if any) must be disposed by the caller."""
    if settings.snapshot_store == "database":
        engine = create_engine(settings.database_url)
        return DatabaseSnapshotStore(create_session_factory(engine), settings.storage_key), engine
    if settings.snapshot_store == "memory":
        return MemorySnapshotStore(), None
    return FileSnapshotStore(settings.snapshot_path), None


async def open_snapshot_store(settings: Settings) -> tuple[SnapshotStore, AsyncEngine | None]:
    """Build the configured backend and make sure the database table exists."""
    store, engine = create_snapshot_store(settings)
    if engine is not None:
        try:
            await create_tables(engine)
        except Exception as e:
            logger.warning("Could not prepare snapshot table: {}", e)
    return store, engine
