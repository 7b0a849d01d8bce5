"""
Service layer for business logic
"""

from .brand_service import BrandService
from .product_service import ProductService

__all__ = [
    "BrandService",
    "ProductService",
]
