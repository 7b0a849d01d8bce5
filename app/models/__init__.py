"""
SQLModel database models
"""

from .brand import Brand
from .product import Product

__all__ = [
    "Brand",
    "Product",
]
