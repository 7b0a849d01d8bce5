"""
Brand service with business logic
"""

from typing import List
from uuid import UUID

from app.core.exceptions import ConflictError, NotFoundError
from app.core.logging import log
from app.repositories.ports import BrandGateway
from app.schemas.brand import BrandCreate, BrandRead


class BrandService:
    """Service layer for brand operations"""

    def __init__(self, brand_repo: BrandGateway):
        self.brand_repo = brand_repo

    async def create_brand(self, brand_data: BrandCreate) -> BrandRead:
        """Create new brand"""
        brand = await self.brand_repo.create_brand(brand_data.brand_name)

        log.info("Created brand", brand_id=str(brand.id), brand_name=brand.brand_name)

        return BrandRead.model_validate(brand)

    async def delete_brand(self, brand_id: UUID) -> None:
        """Delete a brand that no product references.

        Existence is checked before usage so a missing brand is always reported
        as not found, never as in use.
        """
        brand = await self.brand_repo.get(id=brand_id)
        if brand is None:
            raise NotFoundError("brand not found")

        if await self.brand_repo.is_referenced_by_products(brand_id):
            log.warning("Refused to delete brand in use", brand_id=str(brand_id))
            raise ConflictError("cannot delete brand: it is being used by products")

        await self.brand_repo.delete(id=brand_id)

        log.info("Deleted brand", brand_id=str(brand_id))

    async def list_brands(self) -> List[BrandRead]:
        brands = await self.brand_repo.list_by_name()
        return [BrandRead.model_validate(brand) for brand in brands]
