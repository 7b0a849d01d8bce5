"""
API schemas for request/response validation
"""

from .brand import BrandCreate, BrandRead
from .common import DataResponse, HealthCheckResponse, MessageResponse, PaginationParams
from .product import ProductCreate, ProductListing, ProductPatch, ProductRead, ProductUpdate

__all__ = [
    "BrandCreate",
    "BrandRead",
    "ProductCreate",
    "ProductUpdate",
    "ProductPatch",
    "ProductRead",
    "ProductListing",
    "PaginationParams",
    "DataResponse",
    "MessageResponse",
    "HealthCheckResponse",
]
