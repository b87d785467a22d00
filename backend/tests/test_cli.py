import asyncio
import json
import sys

import pytest
from click.testing import CliRunner
from loguru import logger

from devspace.cli import main
from devspace.config import get_settings
from devspace.db.engine import create_engine, create_session_factory
from devspace.services.snapshot_store import DatabaseSnapshotStore


@pytest.fixture
def snapshot_path(tmp_path, monkeypatch):
    path = tmp_path / "devspace.json"
    monkeypatch.setenv("DEVSPACE_SNAPSHOT_STORE", "file")
    monkeypatch.setenv("DEVSPACE_SNAPSHOT_PATH", str(path))
    monkeypatch.setenv("DEVSPACE_LOG_LEVEL", "WARNING")
    get_settings.cache_clear()
    yield path
    get_settings.cache_clear()
    # The CLI points loguru at the runner's stderr; put the default sink back
    logger.remove()
    logger.add(sys.stderr)


def test_compose_prints_document(snapshot_path) -> None:
    snapshot_path.write_text(json.dumps({"app.js": "cli()"}), encoding="utf-8")

    result = CliRunner().invoke(main, ["compose"])

    assert result.exit_code == 0
    assert "<script>\ncli()\n</script>" in result.output


def test_files_lists_names(snapshot_path) -> None:
    snapshot_path.write_text(json.dumps({"extra.css": "abc"}), encoding="utf-8")

    result = CliRunner().invoke(main, ["files"])

    assert result.exit_code == 0
    names = [line.split("\t")[0] for line in result.output.splitlines() if "\t" in line]
    assert names == ["index.html", "style.css", "app.js", "extra.css"]
    assert "extra.css\t3" in result.output


def test_reset_rewrites_snapshot(snapshot_path) -> None:
    snapshot_path.write_text(json.dumps({"main.html": "<p>"}), encoding="utf-8")

    result = CliRunner().invoke(main, ["reset", "--yes"])

    assert result.exit_code == 0
    assert "main.html" not in json.loads(snapshot_path.read_text(encoding="utf-8"))


def test_reset_fails_when_snapshot_cannot_be_written(snapshot_path, tmp_path, monkeypatch) -> None:
    # A directory in place of the snapshot file makes the final rename fail
    monkeypatch.setenv("DEVSPACE_SNAPSHOT_PATH", str(tmp_path))
    get_settings.cache_clear()

    result = CliRunner().invoke(main, ["reset", "--yes"])

    assert result.exit_code != 0
    assert "Could not write workspace snapshot" in result.output
    assert "Workspace reset to template." not in result.output


def test_db_upgrade_creates_database_then_round_trips(snapshot_path, tmp_path, monkeypatch) -> None:
    db_file = tmp_path / "nested" / "devspace.db"
    url = f"sqlite+aiosqlite:///{db_file}"
    monkeypatch.setenv("DEVSPACE_DATABASE_URL", url)
    get_settings.cache_clear()

    result = CliRunner().invoke(main, ["db", "upgrade"])

    assert result.exit_code == 0, result.output
    assert db_file.exists()

    async def round_trip() -> dict[str, str] | None:
        engine = create_engine(url)
        try:
            store = DatabaseSnapshotStore(create_session_factory(engine), "devspace-test")
            await store.save({"index.html": "<p>db</p>"})
            return await store.load()
        finally:
            await engine.dispose()

    assert asyncio.run(round_trip()) == {"index.html": "<p>db</p>"}


def test_reset_with_database_backend_needs_no_upgrade(snapshot_path, tmp_path, monkeypatch) -> None:
    db_file = tmp_path / "fresh" / "devspace.db"
    monkeypatch.setenv("DEVSPACE_SNAPSHOT_STORE", "database")
    monkeypatch.setenv("DEVSPACE_DATABASE_URL", f"sqlite+aiosqlite:///{db_file}")
    get_settings.cache_clear()

    result = CliRunner().invoke(main, ["reset", "--yes"])

    assert result.exit_code == 0, result.output
    assert db_file.exists()
