"""Static asset serving across the active asset roots."""

import os
import stat
from typing import Iterable, List, Tuple

from starlette.concurrency import run_in_threadpool
from starlette.responses import Response
from starlette.staticfiles import StaticFiles
from starlette.types import ASGIApp, Receive, Scope, Send

from clubpro.dispatch import StageResult
from clubpro.environment import AssetRoot

MODULE_SCRIPT_TYPE = "application/javascript"
TYPED_SCRIPT_TYPE = "application/typescript"

MODULE_SCRIPT_EXTENSIONS = (".js", ".mjs")
TYPED_SCRIPT_EXTENSIONS = (".ts", ".tsx")


class ModuleScriptStaticFiles(StaticFiles):
    """StaticFiles that labels script files so browsers load them as modules."""

    def __init__(self, *args, typed_scripts: bool = False, **kwargs) -> None:
        super().__init__(*args, **kwargs)
        self.typed_scripts = typed_scripts

    def content_type_for(self, path: str):
        lowered = path.lower()
        if lowered.endswith(MODULE_SCRIPT_EXTENSIONS):
            return MODULE_SCRIPT_TYPE
        if self.typed_scripts and lowered.endswith(TYPED_SCRIPT_EXTENSIONS):
            return TYPED_SCRIPT_TYPE
        return None

    def file_response(self, full_path, stat_result, scope, status_code=200) -> Response:
        response = super().file_response(full_path, stat_result, scope, status_code)
        content_type = self.content_type_for(str(full_path))
        if content_type and response.status_code != 304:
            response.headers["content-type"] = content_type
        return response


class StaticAssetServer:
    """Serve a GET/HEAD request from the first asset root holding the file.

    Requests that do not name a regular file under any root are passed on to
    the wrapped app untouched; this stage never answers 404 itself.
    """

    def __init__(self, app: ASGIApp, roots: Iterable[AssetRoot] = ()) -> None:
        self.app = app
        self.roots: List[Tuple[AssetRoot, ModuleScriptStaticFiles]] = [
            (
                root,
                ModuleScriptStaticFiles(
                    directory=str(root.directory),
                    check_dir=False,
                    typed_scripts=root.typed_scripts,
                ),
            )
            for root in roots
        ]

    async def __call__(self, scope: Scope, receive: Receive, send: Send) -> None:
        if scope["type"] == "http" and scope["method"] in ("GET", "HEAD"):
            result = await self.lookup(scope)
            if result.response is not None:
                await result.response(scope, receive, send)
                return
        await self.app(scope, receive, send)

    async def lookup(self, scope: Scope) -> StageResult:
        path = scope["path"]
        for root, files in self.roots:
            relative = _strip_prefix(path, root.url_prefix)
            if not relative:
                continue
            full_path, stat_result = await run_in_threadpool(files.lookup_path, relative)
            if stat_result is not None and stat.S_ISREG(stat_result.st_mode):
                return StageResult.served(files.file_response(full_path, stat_result, scope))
        return StageResult.deferred()


def _strip_prefix(path: str, prefix: str) -> str:
    """Return ``path`` relative to ``prefix`` as a normalized filesystem path, or ""."""
    if prefix:
        if path != prefix and not path.startswith(prefix + "/"):
            return ""
        path = path[len(prefix):]
    parts = [part for part in path.split("/") if part]
    if not parts:
        return ""
    return os.path.normpath(os.path.join(*parts))
