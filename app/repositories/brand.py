"""
Brand repository
"""
from typing import List
from uuid import UUID

from sqlalchemy.exc import SQLAlchemyError
from sqlmodel import func, select
from sqlmodel.ext.asyncio.session import AsyncSession

from app.core.exceptions import DatabaseError
from app.core.logging import log
from app.models import Brand, Product
from app.repositories.base import BaseRepository
from app.repositories.ports import BrandGateway
from app.schemas.brand import BrandCreate


class BrandRepository(BaseRepository[Brand, BrandCreate], BrandGateway):
    """Repository for brand operations"""

    def __init__(self, session: AsyncSession):
        super().__init__(Brand, session)

    async def create_brand(self, brand_name: str) -> Brand:
        return await self.create(obj_in=BrandCreate(brand_name=brand_name))

    async def list_by_name(self) -> List[Brand]:
        return await self.get_multi(order_by="brand_name")

    async def is_referenced_by_products(self, brand_id: UUID) -> bool:
        """Check whether any product still points at the brand"""
        statement = select(func.count()).select_from(Product).where(Product.brand_id == brand_id)

        try:
            result = await self.session.exec(statement)
            count = result.one()
        except SQLAlchemyError as e:
            log.error("Database error counting brand usage", brand_id=str(brand_id), error=str(e))
            raise DatabaseError("Error checking brand usage")

        return count > 0
