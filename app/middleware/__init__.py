"""
Middleware components for FastAPI
"""

from .request_timeout import RequestTimeoutMiddleware
from .timing import TimingMiddleware

__all__ = ["RequestTimeoutMiddleware", "TimingMiddleware"]
