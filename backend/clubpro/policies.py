"""Cross-cutting request policies applied before routing.

Order, outermost first:

  error boundary -> security headers -> gzip -> CORS -> body parser
  -> static assets -> router

Starlette wraps middleware in reverse registration order, so
``install_policies`` registers them innermost first.
"""

import json
import logging
from typing import Any, Optional
from urllib.parse import parse_qsl

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.middleware.gzip import GZipMiddleware
from starlette.datastructures import Headers
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.types import ASGIApp, Message, Receive, Scope, Send

from clubpro.config import Settings
from clubpro.environment import Environment
from clubpro.errors import ErrorBoundaryMiddleware, MalformedBody, PayloadTooLarge, PolicyRejection
from clubpro.static import StaticAssetServer

logger = logging.getLogger(__name__)

GZIP_MINIMUM_SIZE = 1000

# Helmet-style defaults; CSP and COEP are opt-in
SECURITY_HEADERS = {
    "Cross-Origin-Opener-Policy": "same-origin",
    "Cross-Origin-Resource-Policy": "same-origin",
    "Origin-Agent-Cluster": "?1",
    "Referrer-Policy": "no-referrer",
    "Strict-Transport-Security": "max-age=31536000; includeSubDomains",
    "X-Content-Type-Options": "nosniff",
    "X-DNS-Prefetch-Control": "off",
    "X-Download-Options": "noopen",
    "X-Frame-Options": "SAMEORIGIN",
    "X-Permitted-Cross-Domain-Policies": "none",
    "X-XSS-Protection": "0",
}
CONTENT_SECURITY_POLICY = (
    "default-src 'self';base-uri 'self';font-src 'self' https: data:;"
    "form-action 'self';frame-ancestors 'self';img-src 'self' data:;"
    "object-src 'none';script-src 'self';script-src-attr 'none';"
    "style-src 'self' https: 'unsafe-inline';upgrade-insecure-requests"
)


class SecurityHeadersMiddleware(BaseHTTPMiddleware):
    def __init__(
        self,
        app: ASGIApp,
        content_security_policy: bool = False,
        cross_origin_embedder_policy: bool = False,
    ) -> None:
        super().__init__(app)
        self.headers = dict(SECURITY_HEADERS)
        if content_security_policy:
            self.headers["Content-Security-Policy"] = CONTENT_SECURITY_POLICY
        if cross_origin_embedder_policy:
            self.headers["Cross-Origin-Embedder-Policy"] = "require-corp"

    async def dispatch(self, request: Request, call_next):
        response = await call_next(request)
        for name, value in self.headers.items():
            response.headers.setdefault(name, value)
        return response


def parse_body(body: bytes, content_type: str) -> Optional[Any]:
    """Decode a JSON or urlencoded body; other media types are left alone."""
    if not body:
        return None
    media_type = content_type.split(";", 1)[0].strip().lower()
    if media_type == "application/json" or media_type.endswith("+json"):
        try:
            return json.loads(body)
        except (UnicodeDecodeError, json.JSONDecodeError) as e:
            raise MalformedBody(f"Invalid JSON body: {e}")
    if media_type == "application/x-www-form-urlencoded":
        return dict(parse_qsl(body.decode("utf-8", errors="replace"), keep_blank_values=True))
    return None


class BodyParserMiddleware:
    """Buffer the request body up to ``max_bytes`` and parse it.

    The parsed value is stored on ``request.state.body``; the raw bytes are
    replayed so downstream handlers can still call ``request.body()``.
    """

    def __init__(self, app: ASGIApp, max_bytes: int) -> None:
        self.app = app
        self.max_bytes = max_bytes

    async def __call__(self, scope: Scope, receive: Receive, send: Send) -> None:
        if scope["type"] != "http":
            await self.app(scope, receive, send)
            return

        headers = Headers(scope=scope)
        try:
            declared = headers.get("content-length")
            if declared is not None and declared.isdigit() and int(declared) > self.max_bytes:
                raise PayloadTooLarge(
                    f"Request body of {declared} bytes exceeds the {self.max_bytes} byte limit"
                )
            body = await self._read_body(receive)
            parsed = parse_body(body, headers.get("content-type", ""))
        except PolicyRejection as rejection:
            logger.info(f"Rejected {scope['method']} {scope['path']}: {rejection.message}")
            await rejection.to_response()(scope, receive, send)
            return

        scope.setdefault("state", {})["body"] = parsed

        replayed = False

        async def replay() -> Message:
            nonlocal replayed
            if not replayed:
                replayed = True
                return {"type": "http.request", "body": body, "more_body": False}
            return await receive()

        await self.app(scope, replay, send)

    async def _read_body(self, receive: Receive) -> bytes:
        chunks = []
        total = 0
        while True:
            message = await receive()
            if message["type"] != "http.request":
                break
            chunk = message.get("body", b"")
            total += len(chunk)
            if total > self.max_bytes:
                raise PayloadTooLarge(f"Request body exceeds the {self.max_bytes} byte limit")
            chunks.append(chunk)
            if not message.get("more_body", False):
                break
        return b"".join(chunks)


def install_policies(app: FastAPI, env: Environment, settings: Settings) -> None:
    """Wrap the app in the policy chain for the resolved environment."""
    app.add_middleware(StaticAssetServer, roots=env.asset_roots)
    app.add_middleware(BodyParserMiddleware, max_bytes=settings.MAX_BODY_BYTES)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=list(env.allowed_origins),
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    app.add_middleware(GZipMiddleware, minimum_size=GZIP_MINIMUM_SIZE)
    app.add_middleware(
        SecurityHeadersMiddleware,
        content_security_policy=False,
        cross_origin_embedder_policy=False,
    )
    app.add_middleware(ErrorBoundaryMiddleware, expose_detail=env.expose_error_detail)
