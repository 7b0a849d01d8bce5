"""
API v1 routers
"""

from fastapi import APIRouter

from .brands import router as brands_router
from .health import router as health_router
from .products import router as products_router

api_router = APIRouter()

# Include routers
api_router.include_router(brands_router, prefix="/brands", tags=["brands"])
api_router.include_router(products_router, prefix="/products", tags=["products"])

__all__ = ["api_router", "health_router"]
