"""Application configuration via pydantic-settings."""

import os
from functools import lru_cache
from pathlib import Path
from typing import Optional

from fastapi import Request
from pydantic_settings import BaseSettings, SettingsConfigDict

# Repository root (this file lives at backend/clubpro/config.py)
_PROJECT_ROOT = Path(__file__).resolve().parent.parent.parent

# 10 MB ceiling for JSON / urlencoded request bodies
DEFAULT_MAX_BODY_BYTES = 10 * 1024 * 1024


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8", extra="ignore")

    # Deployment signals
    VERCEL: Optional[str] = None
    NODE_ENV: Optional[str] = None

    # Database – only its presence is reported, never connected to
    DATABASE_URL: Optional[str] = None

    APP_VERSION: str = "1.0.0"
    LOG_LEVEL: str = "INFO"

    # Local server
    HOST: str = "0.0.0.0"
    PORT: int = 5000

    # Vite dev server used for the SPA redirect in development
    DEV_SERVER_URL: str = "http://localhost:5173"

    MAX_BODY_BYTES: int = DEFAULT_MAX_BODY_BYTES

    # Filesystem layout, relative paths are resolved against PROJECT_ROOT
    PROJECT_ROOT: str = str(_PROJECT_ROOT)
    CLIENT_DIR: str = "client"
    DIST_PUBLIC_DIR: str = "dist/public"
    SPA_ENTRY: str = "dist/index.html"
    NODE_MODULES_DIR: str = "node_modules"
    UPLOADS_DIR: str = "uploads"

    @property
    def is_serverless(self) -> bool:
        return bool(self.VERCEL)

    @property
    def is_production(self) -> bool:
        return self.NODE_ENV == "production"

    @property
    def database_configured(self) -> bool:
        return bool(self.DATABASE_URL)


_PATH_FIELDS = ("CLIENT_DIR", "DIST_PUBLIC_DIR", "SPA_ENTRY", "NODE_MODULES_DIR", "UPLOADS_DIR")


def absolutize_paths(s: Settings) -> Settings:
    """Resolve relative filesystem settings against PROJECT_ROOT."""
    root = Path(s.PROJECT_ROOT)
    for field in _PATH_FIELDS:
        value = getattr(s, field)
        if not os.path.isabs(value):
            setattr(s, field, str(root / value))
    return s


def _build_settings() -> Settings:
    """Build settings from the environment and the project-level .env file."""
    s = Settings(
        _env_file=str(_PROJECT_ROOT / ".env"),
        _env_file_encoding="utf-8",
    )
    return absolutize_paths(s)


@lru_cache
def get_settings() -> Settings:
    return _build_settings()


def get_app_settings(request: Request) -> Settings:
    """Dependency returning the settings the app was built with."""
    return request.app.state.settings
