"""
Gateway contracts the services depend on.

The SQL repositories are the production implementations; tests substitute
in-memory ones. Gateways enforce column-level rules only and leave
cross-entity rules (brand must exist, brand must be unused) to the services.
"""

from abc import ABC, abstractmethod
from typing import List, Optional, Tuple
from uuid import UUID

from app.models import Brand, Product
from app.schemas.product import ProductCreate, ProductPatch, ProductRead


class BrandGateway(ABC):
    """Persistence operations for brands"""

    @abstractmethod
    async def create_brand(self, brand_name: str) -> Brand:
        """Insert a brand with a fresh id and timestamps"""

    @abstractmethod
    async def get(self, *, id: UUID) -> Optional[Brand]:
        """Return the brand, or None when it does not exist"""

    @abstractmethod
    async def delete(self, *, id: UUID) -> None:
        """Remove the brand; NotFoundError when no row was deleted"""

    @abstractmethod
    async def list_by_name(self) -> List[Brand]:
        """All brands, ordered by name ascending"""

    @abstractmethod
    async def is_referenced_by_products(self, brand_id: UUID) -> bool:
        """True when at least one product points at this brand"""


class ProductGateway(ABC):
    """Persistence operations for products"""

    @abstractmethod
    async def create(self, *, obj_in: ProductCreate) -> Product:
        """Insert a product; does not check that the brand exists"""

    @abstractmethod
    async def get_with_brand(self, product_id: UUID) -> Optional[ProductRead]:
        """Return the product with its brand name joined in, or None"""

    @abstractmethod
    async def apply_patch(self, product_id: UUID, patch: ProductPatch) -> ProductRead:
        """Write only the supplied fields; NotFoundError when the product is missing"""

    @abstractmethod
    async def delete(self, *, id: UUID) -> None:
        """Remove the product; NotFoundError when no row was deleted"""

    @abstractmethod
    async def list_page(self, *, limit: int, offset: int) -> Tuple[List[ProductRead], int]:
        """One page, newest first, plus the total number of products"""
