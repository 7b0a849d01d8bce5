"""
Product API schemas
"""

from datetime import datetime
from typing import List, Literal, Optional
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field

from app.core.exceptions import BadRequestError


NIL_UUID = UUID(int=0)


class ProductCreate(BaseModel):
    """Schema for creating a product"""

    model_config = ConfigDict(str_strip_whitespace=True)

    product_name: str = Field(..., min_length=1, max_length=255)
    price: float = Field(..., gt=0)
    qty: float = Field(..., ge=0)
    brand_id: UUID


class ProductPatch(BaseModel):
    """Fields a partial update will actually write; unset means untouched"""

    product_name: Optional[str] = None
    price: Optional[float] = None
    qty: Optional[float] = None
    brand_id: Optional[UUID] = None

    def changes(self) -> dict:
        return self.model_dump(exclude_none=True)

    @property
    def is_empty(self) -> bool:
        return not self.changes()


class ProductUpdate(BaseModel):
    """Schema for updating a product; every field optional"""

    model_config = ConfigDict(str_strip_whitespace=True)

    product_name: Optional[str] = Field(None, max_length=255)
    price: Optional[float] = None
    qty: Optional[float] = None
    brand_id: Optional[UUID] = None

    def to_patch(self, mode: Literal["explicit", "legacy"] = "explicit") -> ProductPatch:
        """Decide which fields the caller supplied.

        ``explicit`` trusts the JSON body: a key that is present is supplied, and a
        supplied value that breaks a column rule is rejected.

        ``legacy`` keeps the old wire behaviour where absence is inferred from
        sentinel values: an empty name, a price <= 0, a negative qty or the nil
        UUID mean "not supplied". An absent qty reads as 0 and is therefore
        always written.
        """
        if mode == "legacy":
            return self._legacy_patch()

        supplied = self.model_fields_set
        patch = ProductPatch()

        if "product_name" in supplied:
            if not self.product_name:
                raise BadRequestError("product_name must not be empty")
            patch.product_name = self.product_name
        if "price" in supplied:
            if self.price is None or self.price <= 0:
                raise BadRequestError("price must be greater than 0")
            patch.price = self.price
        if "qty" in supplied:
            if self.qty is None or self.qty < 0:
                raise BadRequestError("qty must be greater than or equal to 0")
            patch.qty = self.qty
        if "brand_id" in supplied:
            if self.brand_id is None or self.brand_id == NIL_UUID:
                raise BadRequestError("brand_id must be a non-nil UUID")
            patch.brand_id = self.brand_id

        return patch

    def _legacy_patch(self) -> ProductPatch:
        name = self.product_name or ""
        price = self.price if self.price is not None else 0.0
        qty = self.qty if self.qty is not None else 0.0
        brand_id = self.brand_id or NIL_UUID

        return ProductPatch(
            product_name=name if name != "" else None,
            price=price if price > 0 else None,
            qty=qty if qty >= 0 else None,
            brand_id=brand_id if brand_id != NIL_UUID else None,
        )


class ProductRead(BaseModel):
    """Product as returned to clients, with the brand's display name joined in"""

    id: UUID
    product_name: str
    price: float
    qty: float
    brand_id: UUID
    brand_name: Optional[str] = None
    created_at: datetime
    updated_at: datetime

    model_config = ConfigDict(from_attributes=True)


class ProductListing(BaseModel):
    """One page of products plus the numbers needed to page through the rest"""

    products: List[ProductRead]
    total: int
    page: int
    limit: int
    total_pages: int
