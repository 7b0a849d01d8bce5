"""
Product service with business logic
"""
from typing import Literal
from uuid import UUID

from app.core.exceptions import InvalidReferenceError, NotFoundError
from app.core.logging import log
from app.models import Brand
from app.repositories.ports import BrandGateway, ProductGateway
from app.schemas.product import ProductCreate, ProductListing, ProductRead, ProductUpdate


DEFAULT_PAGE_SIZE = 10
MAX_PAGE_SIZE = 100

# Offsets are bound as signed 64-bit integers by the database drivers
MAX_INT64 = 2**63 - 1
MIN_INT64 = -(2**63)


def normalize_pagination(page: int, limit: int, default_limit: int = DEFAULT_PAGE_SIZE, max_limit: int = MAX_PAGE_SIZE):
    """Clamp a requested page/limit pair to usable values and derive the offset"""
    if page < 1:
        page = 1
    if limit < 1 or limit > max_limit:
        limit = default_limit
    if page > MAX_INT64 // limit:
        page = MAX_INT64 // limit
    return page, limit, (page - 1) * limit


def total_pages(total: int, limit: int) -> int:
    # Integer ceiling, exact for any total
    return -(-total // limit) if total > 0 else 0


class ProductService:
    """Service layer for product operations"""

    def __init__(
        self,
        product_repo: ProductGateway,
        brand_repo: BrandGateway,
        partial_update_mode: Literal["explicit", "legacy"] = "explicit",
        default_page_size: int = DEFAULT_PAGE_SIZE,
        max_page_size: int = MAX_PAGE_SIZE,
    ):
        self.product_repo = product_repo
        self.brand_repo = brand_repo
        self.partial_update_mode = partial_update_mode
        self.default_page_size = default_page_size
        self.max_page_size = max_page_size

    async def _require_brand(self, brand_id: UUID) -> Brand:
        brand = await self.brand_repo.get(id=brand_id)
        if brand is None:
            log.warning("Product references missing brand", brand_id=str(brand_id))
            raise InvalidReferenceError("brand not found", brand_id=str(brand_id))
        return brand

    async def create_product(self, product_data: ProductCreate) -> ProductRead:
        """Create new product after verifying its brand exists"""
        brand = await self._require_brand(product_data.brand_id)

        product = await self.product_repo.create(obj_in=product_data)

        log.info("Created product", product_id=str(product.id), brand_id=str(brand.id))

        return ProductRead.model_validate(product).model_copy(update={"brand_name": brand.brand_name})

    async def get_product(self, product_id: UUID) -> ProductRead:
        """Get product by ID"""
        product = await self.product_repo.get_with_brand(product_id)
        if product is None:
            raise NotFoundError("product not found")
        return product

    async def update_product(self, product_id: UUID, product_update: ProductUpdate) -> ProductRead:
        """Apply a partial update.

        A new brand reference is resolved before anything is written. Existence
        checks and the write are separate round trips without locking, so two
        concurrent updates may interleave and the last writer wins.
        """
        patch = product_update.to_patch(self.partial_update_mode)

        if patch.brand_id is not None:
            await self._require_brand(patch.brand_id)

        product = await self.product_repo.apply_patch(product_id, patch)

        if not patch.is_empty:
            log.info("Updated product", product_id=str(product_id), fields=sorted(patch.changes()))

        return product

    async def delete_product(self, product_id: UUID) -> None:
        """Delete product after an explicit existence check"""
        product = await self.product_repo.get_with_brand(product_id)
        if product is None:
            raise NotFoundError("product not found")

        await self.product_repo.delete(id=product_id)

        log.info("Deleted product", product_id=str(product_id))

    async def list_products(self, page: int, limit: int) -> ProductListing:
        """Newest-first page of products with pagination metadata"""
        page, limit, offset = normalize_pagination(page, limit, self.default_page_size, self.max_page_size)

        products, total = await self.product_repo.list_page(limit=limit, offset=offset)

        return ProductListing(
            products=products,
            total=total,
            page=page,
            limit=limit,
            total_pages=total_pages(total, limit),
        )
