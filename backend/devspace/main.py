from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from loguru import logger

from devspace.config import Settings, get_settings
from devspace.log import setup_logging
from devspace.routers import files, preview, workspace
from devspace.services.file_store import (
    FileNameCollisionError,
    FileNotFoundInStoreError,
    FileStoreError,
    InvalidFileNameError,
)
from devspace.services.snapshot_store import open_snapshot_store
from devspace.services.workspace_service import Workspace


_ERROR_RESPONSES: dict[type[FileStoreError], tuple[int, str]] = {
    FileNameCollisionError: (409, "File already exists"),
    InvalidFileNameError: (422, "Invalid file name"),
    FileNotFoundInStoreError: (404, "File not found"),
}


async def file_store_error_handler(request: Request, exc: FileStoreError) -> JSONResponse:
    status_code, message = _ERROR_RESPONSES.get(type(exc), (400, "Rejected file operation"))
    return JSONResponse(status_code=status_code, content={"detail": f"{message}: {exc}"})


def create_app(settings: Settings | None = None) -> FastAPI:
    settings = settings or get_settings()

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        setup_logging(settings.log_level)
        store, engine = await open_snapshot_store(settings)
        logger.info("Snapshot store: {}", settings.snapshot_store)
        app.state.workspace = await Workspace.open(store, **settings.canonical_files())
        yield
        if engine is not None:
            await engine.dispose()

    app = FastAPI(title="DevSpace", version="0.1.0", lifespan=lifespan)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins.split(","),
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.add_exception_handler(FileStoreError, file_store_error_handler)

    app.include_router(files.router)
    app.include_router(preview.router)
    app.include_router(workspace.router)

    @app.get("/health")
    async def health():
        return {"status": "ok"}

    return app


app = create_app()
