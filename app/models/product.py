"""
Product model
"""

from datetime import datetime
from uuid import UUID, uuid4

from sqlalchemy import DateTime
from sqlmodel import Field, SQLModel

from .brand import utcnow


class ProductBase(SQLModel):
    """Base product attributes"""

    product_name: str = Field(min_length=1, max_length=255)
    price: float
    qty: float


class Product(ProductBase, table=True):
    """Product database model

    The brand's display name is not stored here; repositories join it in at read time.
    """

    __tablename__ = "products"

    id: UUID = Field(default_factory=uuid4, primary_key=True)
    brand_id: UUID = Field(foreign_key="brands.id", index=True)
    created_at: datetime = Field(default_factory=utcnow, sa_type=DateTime(timezone=True), nullable=False, index=True)
    updated_at: datetime = Field(default_factory=utcnow, sa_type=DateTime(timezone=True), nullable=False)
