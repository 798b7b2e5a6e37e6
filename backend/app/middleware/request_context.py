"""
Request context middleware.

Assigns every inbound HTTP request a correlation id, exposes it to logging
through TracingContext and echoes it back in the ``X-Request-ID`` header.
"""

from starlette.datastructures import Headers, MutableHeaders
from starlette.types import ASGIApp, Message, Receive, Scope, Send

from app.core.tracing import TracingContext

REQUEST_ID_HEADER = "X-Request-ID"


class RequestContextMiddleware:
    def __init__(self, app: ASGIApp):
        self.app = app

    async def __call__(self, scope: Scope, receive: Receive, send: Send) -> None:
        if scope["type"] != "http":
            await self.app(scope, receive, send)
            return

        correlation_id = (
            Headers(scope=scope).get(REQUEST_ID_HEADER)
            or TracingContext.generate_correlation_id()
        )
        TracingContext.set(correlation_id=correlation_id)

        async def send_with_request_id(message: Message) -> None:
            if message["type"] == "http.response.start":
                MutableHeaders(scope=message).append(REQUEST_ID_HEADER, correlation_id)
            await send(message)

        try:
            await self.app(scope, receive, send_with_request_id)
        finally:
            TracingContext.clear()
