import asyncio

import click

from devspace.config import get_settings


@click.group()
def main() -> None:
    """DevSpace - offline-first multi-file workspace with inline preview."""


@main.command()
@click.option("--host", default=None, help="Bind host (default: from DEVSPACE_HOST).")
@click.option("--port", default=None, type=int, help="Bind port (default: from DEVSPACE_PORT).")
@click.option("--reload", is_flag=True, default=False, help="Enable auto-reload for development.")
def serve(host: str | None, port: int | None, reload: bool) -> None:
    """Start the workspace API server."""
    import uvicorn

    settings = get_settings()
    uvicorn.run(
        "devspace.main:app",
        host=host or settings.host,
        port=port or settings.port,
        reload=reload,
        log_level="warning",  # uvicorn's own logging is intercepted by loguru
    )


async def _open_workspace():
    from devspace.log import setup_logging
    from devspace.services.snapshot_store import open_snapshot_store
    from devspace.services.workspace_service import Workspace

    settings = get_settings()
    setup_logging(settings.log_level)
    store, engine = await open_snapshot_store(settings)
    workspace = await Workspace.open(store, **settings.canonical_files())
    return workspace, engine


@main.command()
@click.option("--report", is_flag=True, default=False, help="Print composition warnings to stderr.")
def compose(report: bool) -> None:
    """Print the composed preview document of the saved workspace."""

    async def _run() -> None:
        workspace, engine = await _open_workspace()
        try:
            click.echo(workspace.preview().document)
            if report:
                for warning in workspace.report().warnings:
                    click.echo(f"warning: {warning}", err=True)
        finally:
            if engine is not None:
                await engine.dispose()

    asyncio.run(_run())


@main.command(name="files")
def list_files() -> None:
    """List the files of the saved workspace."""

    async def _run() -> None:
        workspace, engine = await _open_workspace()
        try:
            for name in workspace.files.names():
                click.echo(f"{name}\t{len(workspace.read(name))}")
        finally:
            if engine is not None:
                await engine.dispose()

    asyncio.run(_run())


@main.command()
@click.confirmation_option(prompt="Reset the workspace to the template?")
def reset() -> None:
    """Discard all saved changes and restore the template files."""
    from devspace.log import setup_logging
    from devspace.services.file_store import FileStore
    from devspace.services.snapshot_store import open_snapshot_store

    settings = get_settings()
    setup_logging(settings.log_level)

    async def _run() -> None:
        store, engine = await open_snapshot_store(settings)
        try:
            await store.save(FileStore.baseline().snapshot())
        finally:
            if engine is not None:
                await engine.dispose()

    # Writing the snapshot is this command's only effect, so a failure is fatal here
    try:
        asyncio.run(_run())
    except Exception as e:
        raise click.ClickException(f"Could not write workspace snapshot: {e}") from e
    click.echo("Workspace reset to template.")


def _alembic_config():
    from pathlib import Path

    from alembic.config import Config

    script_location = Path(__file__).resolve().parent.parent / "alembic"
    cfg = Config()
    cfg.set_main_option("script_location", str(script_location))
    return cfg


@main.group()
def db() -> None:
    """Database snapshot backend management."""


@db.command()
@click.option("--revision", default="head", help="Target revision (default: head).")
def upgrade(revision: str) -> None:
    """Create or migrate the kv_cache table."""
    from alembic import command

    from devspace.db.engine import ensure_sqlite_directory

    ensure_sqlite_directory(get_settings().database_url)
    command.upgrade(_alembic_config(), revision)
    click.echo(f"Database upgraded to {revision}.")


if __name__ == "__main__":
    main()
