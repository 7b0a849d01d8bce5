"""
Product repository implementation
"""

from typing import List, Optional, Tuple
from uuid import UUID

from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlmodel import select
from sqlmodel.ext.asyncio.session import AsyncSession

from app.core.exceptions import DatabaseError, InvalidReferenceError, NotFoundError
from app.core.logging import log
from app.models import Brand, Product
from app.models.brand import utcnow
from app.repositories.base import BaseRepository
from app.repositories.ports import ProductGateway
from app.schemas.product import ProductCreate, ProductPatch, ProductRead


def _with_brand_name(product: Product, brand_name: Optional[str]) -> ProductRead:
    return ProductRead.model_validate(product).model_copy(update={"brand_name": brand_name})


class ProductRepository(BaseRepository[Product, ProductCreate], ProductGateway):
    """Repository for product operations"""

    # The only foreign key on products is the brand reference
    integrity_error = InvalidReferenceError

    def __init__(self, session: AsyncSession):
        super().__init__(Product, session)

    def _joined(self):
        # Orphaned references still read back, just without a brand name.
        # populate_existing so reads after a write reflect what the database stored.
        return (
            select(Product, Brand.brand_name)
            .outerjoin(Brand, Product.brand_id == Brand.id)
            .execution_options(populate_existing=True)
        )

    async def get_with_brand(self, product_id: UUID) -> Optional[ProductRead]:
        """Get product by ID with its brand's display name"""
        statement = self._joined().where(Product.id == product_id)

        try:
            result = await self.session.exec(statement)
            row = result.first()
        except SQLAlchemyError as e:
            log.error("Database error reading product", product_id=str(product_id), error=str(e))
            raise DatabaseError("Error reading Product")

        if row is None:
            return None

        product, brand_name = row
        return _with_brand_name(product, brand_name)

    async def apply_patch(self, product_id: UUID, patch: ProductPatch) -> ProductRead:
        """Write the supplied fields and refresh updated_at.

        An empty patch is a successful no-op returning the current record.
        """
        current = await self.get_with_brand(product_id)
        if current is None:
            raise NotFoundError("product not found")

        changes = patch.changes()
        if not changes:
            return current

        try:
            db_obj = await self.session.get(Product, product_id)
            if db_obj is None:
                raise NotFoundError("product not found")

            for field, value in changes.items():
                setattr(db_obj, field, value)
            db_obj.updated_at = utcnow()

            self.session.add(db_obj)
            await self.session.commit()
        except IntegrityError as e:
            await self.session.rollback()
            log.warning("Integrity error updating product", product_id=str(product_id), error=str(e.orig))
            raise InvalidReferenceError("brand not found")
        except SQLAlchemyError as e:
            await self.session.rollback()
            log.error("Database error updating product", product_id=str(product_id), error=str(e))
            raise DatabaseError("Error updating Product")

        updated = await self.get_with_brand(product_id)
        if updated is None:
            # Deleted by a concurrent request between the write and the read back
            raise NotFoundError("product not found")
        return updated

    async def list_page(self, *, limit: int, offset: int) -> Tuple[List[ProductRead], int]:
        """Newest-first page of products plus the overall product count"""
        total = await self.count()

        statement = (
            self._joined()
            .order_by(Product.created_at.desc())
            .limit(limit)
            .offset(offset)
        )

        try:
            result = await self.session.exec(statement)
            rows = result.all()
        except SQLAlchemyError as e:
            log.error("Database error listing products", limit=limit, offset=offset, error=str(e))
            raise DatabaseError("Error listing Product")

        return [_with_brand_name(product, brand_name) for product, brand_name in rows], total
