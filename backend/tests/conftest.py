"""Shared fixtures: in-memory snapshot store, workspace and HTTP client."""

from collections.abc import AsyncIterator

import pytest
from httpx import ASGITransport, AsyncClient

from devspace.config import Settings
from devspace.main import create_app
from devspace.services.file_store import FileStore
from devspace.services.snapshot_store import MemorySnapshotStore
from devspace.services.workspace_service import Workspace


@pytest.fixture
def snapshot_store() -> MemorySnapshotStore:
    return MemorySnapshotStore()


@pytest.fixture
def workspace(snapshot_store: MemorySnapshotStore) -> Workspace:
    return Workspace(FileStore.baseline(), snapshot_store)


@pytest.fixture
async def client(workspace: Workspace) -> AsyncIterator[AsyncClient]:
    """HTTP client wired to an app whose workspace is the ``workspace`` fixture.

    The lifespan does not run under ``ASGITransport``, so the workspace is
    placed on ``app.state`` directly.
    """
    app = create_app(Settings(snapshot_store="memory"))
    app.state.workspace = workspace

    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac
