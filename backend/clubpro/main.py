"""FastAPI application entry point: policy chain, status routes and SPA fallback."""

import logging
from typing import Optional

from fastapi import FastAPI

from clubpro.config import Settings, get_settings
from clubpro.environment import build_environment
from clubpro.policies import install_policies
from clubpro.routers import spa, status


def configure_logging(level: str) -> None:
    """Send log records to stderr once; later calls are no-ops."""
    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.INFO),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


def create_app(settings: Optional[Settings] = None) -> FastAPI:
    """Build the app for one process.

    The deployment mode and everything derived from it is resolved here,
    once, and stored on ``app.state.environment``.
    """
    settings = settings or get_settings()
    configure_logging(settings.LOG_LEVEL)
    env = build_environment(settings)

    app = FastAPI(
        title="Soccer Club Pro API",
        description=(
            "Front door for Soccer Club Pro (VVC Brasschaat). Serves the "
            "single-page app, its static assets and a few JSON status endpoints."
        ),
        version=settings.APP_VERSION,
        docs_url=None,
        redoc_url=None,
        openapi_url=None,
    )
    app.state.settings = settings
    app.state.environment = env

    install_policies(app, env, settings)

    # Status routes first; the SPA catch-all must stay last.
    app.include_router(status.router)
    app.include_router(spa.router)
    return app


# ASGI entrypoint: `uvicorn clubpro.main:app --port 5000`
app = create_app()


if __name__ == "__main__":
    import uvicorn

    _settings = get_settings()
    uvicorn.run(app, host=_settings.HOST, port=_settings.PORT)
