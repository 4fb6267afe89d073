"""Policy rejections and the terminal error boundary."""

import logging

from starlette.responses import JSONResponse
from starlette.types import ASGIApp, Message, Receive, Scope, Send

from clubpro.schemas import ErrorResponse

logger = logging.getLogger(__name__)

GENERIC_ERROR_MESSAGE = "Something went wrong"


class PolicyRejection(Exception):
    """A request refused by the policy chain before any handler runs."""

    status_code = 400
    error = "Bad Request"

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message

    def to_response(self) -> JSONResponse:
        return JSONResponse(
            ErrorResponse(error=self.error, message=self.message).model_dump(),
            status_code=self.status_code,
        )


class PayloadTooLarge(PolicyRejection):
    status_code = 413
    error = "Payload Too Large"


class MalformedBody(PolicyRejection):
    status_code = 400
    error = "Bad Request"


class ErrorBoundaryMiddleware:
    """Turn any unhandled exception into a 500 JSON response.

    The error is always logged. Its message only reaches the client when
    ``expose_detail`` is set (development). Exceptions are never re-raised.
    """

    def __init__(self, app: ASGIApp, expose_detail: bool = False) -> None:
        self.app = app
        self.expose_detail = expose_detail

    async def __call__(self, scope: Scope, receive: Receive, send: Send) -> None:
        if scope["type"] != "http":
            await self.app(scope, receive, send)
            return

        response_started = False

        async def send_wrapper(message: Message) -> None:
            nonlocal response_started
            if message["type"] == "http.response.start":
                response_started = True
            await send(message)

        try:
            await self.app(scope, receive, send_wrapper)
        except Exception as exc:
            logger.exception(f"Server Error: {scope.get('method')} {scope.get('path')}")
            if response_started:
                # Headers already went out; nothing left to do but stop.
                return
            message = str(exc) if self.expose_detail else GENERIC_ERROR_MESSAGE
            response = JSONResponse(
                ErrorResponse(error="Internal Server Error", message=message).model_dump(),
                status_code=500,
            )
            await response(scope, receive, send)
