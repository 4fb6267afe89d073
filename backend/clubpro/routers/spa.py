"""Catch-all for paths no asset or status route claimed.

API paths get a 404 listing the real API routes; everything else is the
single-page app, served from the built entry file or redirected to the
Vite dev server depending on the deployment mode.
"""

import logging
import os
from pathlib import Path
from urllib.parse import quote

from fastapi import APIRouter, Depends, Request
from fastapi.responses import FileResponse, HTMLResponse, JSONResponse, RedirectResponse

from clubpro.dispatch import StageResult
from clubpro.environment import Environment, SpaStrategy, get_environment
from clubpro.routers.status import API_PREFIX, api_route_directory
from clubpro.schemas import ApiNotFoundResponse

logger = logging.getLogger(__name__)

router = APIRouter(include_in_schema=False)

FALLBACK_HTML = """<!DOCTYPE html>
<html lang="en">
<head>
  <meta charset="UTF-8">
  <meta name="viewport" content="width=device-width, initial-scale=1.0">
  <title>Soccer Club Pro - VVC Brasschaat</title>
</head>
<body>
  <div id="root"></div>
  <script>
    document.getElementById('root').innerHTML = '<h1>Loading Soccer Club Pro...</h1>';
  </script>
</body>
</html>
"""


# Reserved characters that may appear unescaped in a path segment
_PATH_SAFE = "/:@!$&'()*+,;=-._~"


def _request_url(request: Request) -> str:
    """Path and query as the client sent them, with the path re-escaped."""
    path = quote(request.scope["path"], safe=_PATH_SAFE)
    query = request.scope.get("query_string", b"").decode("latin-1")
    return f"{path}?{query}" if query else path


def api_not_found(request: Request) -> StageResult:
    return StageResult.not_found(
        JSONResponse(
            status_code=404,
            content=ApiNotFoundResponse(
                error="API Not Found",
                message=f"API route {_request_url(request)} not found",
                available_routes=api_route_directory(),
            ).model_dump(),
        )
    )


def _is_readable_file(path: Path) -> bool:
    return path.is_file() and os.access(path, os.R_OK)


def serve_entry(entry: Path) -> StageResult:
    """Serve the built index.html, or the inline placeholder if it is unusable."""
    if _is_readable_file(entry):
        return StageResult.served(FileResponse(str(entry), media_type="text/html"))
    logger.warning(f"SPA entry {entry} is missing or unreadable, serving fallback page")
    return StageResult.served(HTMLResponse(FALLBACK_HTML))


def redirect_to_dev_server(request: Request, dev_server_url: str) -> StageResult:
    return StageResult.served(
        RedirectResponse(f"{dev_server_url}{_request_url(request)}", status_code=302)
    )


def spa_fallback(request: Request, env: Environment) -> StageResult:
    path = request.scope["path"]
    if path.startswith(API_PREFIX):
        return api_not_found(request)
    if env.spa_strategy is SpaStrategy.DEV_REDIRECT:
        return redirect_to_dev_server(request, env.dev_server_url)
    return serve_entry(env.spa_entry)


@router.api_route("/{full_path:path}", methods=["GET", "HEAD"])
async def catch_all(request: Request, full_path: str, env: Environment = Depends(get_environment)):
    return spa_fallback(request, env).response
