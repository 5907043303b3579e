from __future__ import annotations

import uuid
from collections.abc import Callable

from fastapi import Request
from starlette.datastructures import Headers, MutableHeaders
from starlette.types import ASGIApp, Message, Receive, Scope, Send


DEFAULT_HEADER = "CorrelationId"


def new_correlation_id() -> str:
    return str(uuid.uuid4())


class CorrelationStage:
    """Assign each request a correlation id and echo it on the response.

    The inbound header is adopted verbatim when non-empty; otherwise a fresh
    UUID4 is generated. The id is stored on the request state (`scope["state"]`)
    and written into the response start message, so it is on every response,
    including the ones produced by the error path, before any body is sent.
    """

    def __init__(
        self,
        app: ASGIApp,
        header_name: str = DEFAULT_HEADER,
        id_factory: Callable[[], str] = new_correlation_id,
    ) -> None:
        self.app = app
        self.header_name = header_name
        self.id_factory = id_factory

    def begin(self, scope: Scope) -> str:
        inbound = Headers(scope=scope).get(self.header_name)
        correlation_id = inbound if inbound else self.id_factory()
        scope.setdefault("state", {})["correlation_id"] = correlation_id
        return correlation_id

    async def __call__(self, scope: Scope, receive: Receive, send: Send) -> None:
        if scope["type"] != "http":
            await self.app(scope, receive, send)
            return

        correlation_id = self.begin(scope)

        async def send_with_correlation(message: Message) -> None:
            if message["type"] == "http.response.start":
                headers = MutableHeaders(scope=message)
                headers[self.header_name] = correlation_id
            await send(message)

        await self.app(scope, receive, send_with_correlation)


def correlation_id_from_scope(scope: Scope) -> str | None:
    state = scope.get("state") or {}
    return state.get("correlation_id")


def get_correlation_id(request: Request) -> str:
    """FastAPI dependency: the current request's correlation id."""
    return getattr(request.state, "correlation_id", None) or ""
