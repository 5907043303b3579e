from __future__ import annotations

import asyncio
import logging

from fastapi.responses import JSONResponse
from starlette.types import ASGIApp, Message, Receive, Scope, Send

from movie_api.core.classifier import INTERNAL_SERVER_ERROR, classify
from movie_api.core.error_codes import GeneralErrorCode
from movie_api.core.errors import ApiError, ApiResponse
from movie_api.core.logging import log_event
from movie_api.middleware.correlation import correlation_id_from_scope


def render_fault(exc: BaseException, correlation_id: str | None) -> JSONResponse:
    """Classify a fault and build the JSON error response for it."""
    try:
        status_code, body = classify(exc, correlation_id=correlation_id)
    except Exception as classify_error:
        log_event(
            correlation_id,
            logging.ERROR,
            f"Could not classify {type(exc).__name__}: {classify_error}",
            cause=exc,
            status_code=INTERNAL_SERVER_ERROR,
        )
        status_code = INTERNAL_SERVER_ERROR
        body = ApiResponse.failure([ApiError.from_code(GeneralErrorCode.UNEXPECTED)])
    return JSONResponse(status_code=status_code, content=body.model_dump(mode="json"))


class ExceptionStage:
    """Outer error boundary around the application.

    Whatever escapes the downstream chain is classified and written as a
    structured `{"data", "errors"}` body. If the response has already started
    there is nothing left to write; the fault is logged and re-raised.
    """

    def __init__(self, app: ASGIApp) -> None:
        self.app = app

    async def __call__(self, scope: Scope, receive: Receive, send: Send) -> None:
        if scope["type"] != "http":
            await self.app(scope, receive, send)
            return

        response_started = False

        async def send_tracking(message: Message) -> None:
            nonlocal response_started
            if message["type"] == "http.response.start":
                response_started = True
            await send(message)

        try:
            await self.app(scope, receive, send_tracking)
        except asyncio.CancelledError:
            log_event(
                correlation_id_from_scope(scope),
                logging.INFO,
                "Request cancelled before a response was produced",
            )
            raise
        except Exception as exc:
            correlation_id = correlation_id_from_scope(scope)
            if response_started:
                log_event(
                    correlation_id,
                    logging.ERROR,
                    f"Fault after response start: {type(exc).__name__}: {exc}",
                    cause=exc,
                )
                raise
            response = render_fault(exc, correlation_id)
            await response(scope, receive, send)
