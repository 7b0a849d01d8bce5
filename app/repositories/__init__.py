"""
Repository implementations
"""

from .base import BaseRepository
from .brand import BrandRepository
from .ports import BrandGateway, ProductGateway
from .product import ProductRepository

__all__ = [
    "BaseRepository",
    "BrandGateway",
    "ProductGateway",
    "BrandRepository",
    "ProductRepository",
]
