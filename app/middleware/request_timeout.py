"""
Per-request deadline middleware
"""

import asyncio

from fastapi import status
from fastapi.responses import ORJSONResponse
from starlette.types import ASGIApp, Message, Receive, Scope, Send

from app.core.exceptions import error_body
from app.core.logging import log


class RequestTimeoutMiddleware:
    """Cancel request handling that runs past ``timeout`` seconds.

    Cancellation reaches whatever database round trip is in flight. If no
    response has started yet the client gets a 504 with the usual error body.
    """

    def __init__(self, app: ASGIApp, timeout: float):
        self.app = app
        self.timeout = timeout

    async def __call__(self, scope: Scope, receive: Receive, send: Send) -> None:
        if scope["type"] != "http" or not self.timeout:
            await self.app(scope, receive, send)
            return

        response_started = False

        async def send_wrapper(message: Message) -> None:
            nonlocal response_started
            if message["type"] == "http.response.start":
                response_started = True
            await send(message)

        try:
            await asyncio.wait_for(self.app(scope, receive, send_wrapper), timeout=self.timeout)
        except asyncio.TimeoutError:
            log.warning("Request exceeded deadline", path=scope.get("path"), timeout=self.timeout)
            if response_started:
                raise
            response = ORJSONResponse(
                status_code=status.HTTP_504_GATEWAY_TIMEOUT,
                content=error_body("request timed out", "RequestTimeout"),
            )
            await response(scope, receive, send)
