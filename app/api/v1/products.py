"""
Product API endpoints
"""

from uuid import UUID

from fastapi import APIRouter, status

from app.api.deps import PaginationDep, ProductServiceDep
from app.core.exceptions import ErrorResponse
from app.schemas.common import DataResponse, MessageResponse
from app.schemas.product import ProductCreate, ProductListing, ProductRead, ProductUpdate


router = APIRouter()

_not_found = {404: {"model": ErrorResponse}}
_bad_request = {400: {"model": ErrorResponse}}


@router.post(
    "",
    response_model=DataResponse[ProductRead],
    status_code=status.HTTP_201_CREATED,
    summary="Create product",
    responses={**_bad_request},
)
async def create_product(product_in: ProductCreate, product_service: ProductServiceDep) -> DataResponse[ProductRead]:
    """Create a product for an existing brand"""
    product = await product_service.create_product(product_in)
    return DataResponse(message="Product created successfully", data=product)


@router.get(
    "",
    response_model=DataResponse[ProductListing],
    summary="List products",
    description="Newest first, paginated by page/limit",
)
async def list_products(product_service: ProductServiceDep, pagination: PaginationDep) -> DataResponse[ProductListing]:
    """
    List products.

    - **page**: 1-based page number, defaults to 1
    - **limit**: items per page, defaults to 10 and falls back to 10 outside 1..100
    """
    listing = await product_service.list_products(pagination.page, pagination.limit)
    return DataResponse(message="Products retrieved successfully", data=listing)


@router.get(
    "/{product_id}",
    response_model=DataResponse[ProductRead],
    summary="Get product",
    responses={**_bad_request, **_not_found},
)
async def get_product(product_id: UUID, product_service: ProductServiceDep) -> DataResponse[ProductRead]:
    product = await product_service.get_product(product_id)
    return DataResponse(message="Product retrieved successfully", data=product)


@router.put(
    "/{product_id}",
    response_model=DataResponse[ProductRead],
    summary="Update product",
    responses={**_bad_request, **_not_found},
)
async def update_product(
    product_id: UUID,
    product_update: ProductUpdate,
    product_service: ProductServiceDep,
) -> DataResponse[ProductRead]:
    """
    Update a product.

    Only supplied fields change; an update that changes nothing still succeeds.
    """
    product = await product_service.update_product(product_id, product_update)
    return DataResponse(message="Product updated successfully", data=product)


@router.delete(
    "/{product_id}",
    response_model=MessageResponse,
    summary="Delete product",
    responses={**_bad_request, **_not_found},
)
async def delete_product(product_id: UUID, product_service: ProductServiceDep) -> MessageResponse:
    await product_service.delete_product(product_id)
    return MessageResponse(message="Product deleted successfully")
