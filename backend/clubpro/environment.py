"""Deployment mode resolution.

The mode is decided once, when the app is built, from two environment
signals (first match wins):

  1. VERCEL set            -> serverless (the platform serves static files)
  2. NODE_ENV=production   -> production (serve the built bundle)
  3. anything else         -> development (serve sources + node_modules,
                              redirect SPA routes to the Vite dev server)

Everything derived from the mode lives on the frozen ``Environment`` value,
which handlers receive through ``get_environment`` instead of re-reading
``os.environ``.
"""

import enum
import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Dict, Tuple

from fastapi import Request

from clubpro.config import Settings

logger = logging.getLogger(__name__)


class DeploymentMode(str, enum.Enum):
    SERVERLESS = "serverless"
    PRODUCTION = "production"
    DEVELOPMENT = "development"


class SpaStrategy(str, enum.Enum):
    BUNDLED_ENTRY = "bundled_entry"
    DEV_REDIRECT = "dev_redirect"


ALLOWED_ORIGINS: Dict[DeploymentMode, Tuple[str, ...]] = {
    DeploymentMode.SERVERLESS: (
        "https://vvc-soccer-2025.vercel.app",
        "https://brasschaat-vvc-club.vercel.app",
        "https://soccer-vvc-pro.vercel.app",
    ),
    DeploymentMode.PRODUCTION: (
        "https://soccerclubpro.vercel.app",
    ),
    DeploymentMode.DEVELOPMENT: (
        "http://localhost:5000",
        "http://127.0.0.1:5000",
        "http://0.0.0.0:5000",
    ),
}


@dataclass(frozen=True)
class AssetRoot:
    """A directory served under ``url_prefix`` ("" for the site root)."""

    url_prefix: str
    directory: Path
    typed_scripts: bool = False


@dataclass(frozen=True)
class Environment:
    mode: DeploymentMode
    allowed_origins: Tuple[str, ...]
    asset_roots: Tuple[AssetRoot, ...]
    spa_strategy: SpaStrategy
    spa_entry: Path
    dev_server_url: str
    expose_error_detail: bool


def resolve(settings: Settings) -> DeploymentMode:
    """Pick the deployment mode from the environment signals."""
    if settings.is_serverless:
        mode = DeploymentMode.SERVERLESS
    elif settings.is_production:
        mode = DeploymentMode.PRODUCTION
    else:
        mode = DeploymentMode.DEVELOPMENT
    logger.info(f"Resolved deployment mode: {mode.value}")
    return mode


def _asset_roots(mode: DeploymentMode, settings: Settings) -> Tuple[AssetRoot, ...]:
    roots = []
    if mode is DeploymentMode.PRODUCTION:
        roots.append(AssetRoot("", Path(settings.DIST_PUBLIC_DIR)))
    elif mode is DeploymentMode.DEVELOPMENT:
        roots.append(AssetRoot("", Path(settings.CLIENT_DIR), typed_scripts=True))
        roots.append(AssetRoot("/node_modules", Path(settings.NODE_MODULES_DIR)))
    # Uploaded content is served in every mode
    roots.append(AssetRoot("/uploads", Path(settings.UPLOADS_DIR)))
    return tuple(roots)


def build_environment(settings: Settings) -> Environment:
    mode = resolve(settings)
    strategy = (
        SpaStrategy.DEV_REDIRECT
        if mode is DeploymentMode.DEVELOPMENT
        else SpaStrategy.BUNDLED_ENTRY
    )
    return Environment(
        mode=mode,
        allowed_origins=ALLOWED_ORIGINS[mode],
        asset_roots=_asset_roots(mode, settings),
        spa_strategy=strategy,
        spa_entry=Path(settings.SPA_ENTRY),
        dev_server_url=settings.DEV_SERVER_URL.rstrip("/"),
        expose_error_detail=mode is DeploymentMode.DEVELOPMENT,
    )


def get_environment(request: Request) -> Environment:
    """Dependency returning the environment resolved at startup."""
    return request.app.state.environment
