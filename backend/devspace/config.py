from functools import lru_cache
from typing import Literal

from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    app_env: str = "development"
    log_level: str = "INFO"
    cors_origins: str = "http://localhost:5173"
    host: str = "127.0.0.1"
    port: int = 8000

    # Where the workspace snapshot lives between sessions
    snapshot_store: Literal["file", "database", "memory"] = "file"
    snapshot_path: str = "./data/devspace.json"
    database_url: str = "sqlite+aiosqlite:///./data/devspace.db"
    storage_key: str = "kimecube.devspace.v1"

    # Canonical files the preview compositor understands
    entry_file: str = "index.html"
    stylesheet_file: str = "style.css"
    script_file: str = "app.js"

    model_config = {"env_prefix": "DEVSPACE_", "env_file": ".env", "env_file_encoding": "utf-8"}

    def canonical_files(self) -> dict[str, str]:
        """Keyword arguments for the compositor functions."""
        return {
            "entry": self.entry_file,
            "stylesheet": self.stylesheet_file,
            "script": self.script_file,
        }


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Cached settings instance; call ``get_settings.cache_clear()`` after changing env vars."""
    return Settings()


settings = get_settings()
