"""
Request timing and access logging middleware
"""

import time

from fastapi import Request
from starlette.middleware.base import BaseHTTPMiddleware
from starlette_context import context
from starlette_context.header_keys import HeaderKeys

from app.core.logging import log


class TimingMiddleware(BaseHTTPMiddleware):
    """Time every request, expose the duration and emit one access line"""

    async def dispatch(self, request: Request, call_next):
        start_time = time.perf_counter()

        response = await call_next(request)

        process_time = time.perf_counter() - start_time
        response.headers["X-Process-Time"] = f"{process_time:.6f}"

        log.info(
            "Request completed",
            method=request.method,
            path=request.url.path,
            status=response.status_code,
            duration_ms=round(process_time * 1000, 2),
            request_id=context.get(HeaderKeys.request_id) if context.exists() else None,
        )

        return response
