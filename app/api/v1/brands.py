"""
Brand API endpoints
"""
from typing import List
from uuid import UUID

from fastapi import APIRouter, status

from app.api.deps import BrandServiceDep
from app.core.exceptions import ErrorResponse
from app.schemas.brand import BrandCreate, BrandRead
from app.schemas.common import DataResponse, MessageResponse


router = APIRouter()


@router.post(
    "",
    response_model=DataResponse[BrandRead],
    status_code=status.HTTP_201_CREATED,
    summary="Create brand",
    responses={400: {"model": ErrorResponse}, 500: {"model": ErrorResponse}},
)
async def create_brand(brand_in: BrandCreate, brand_service: BrandServiceDep) -> DataResponse[BrandRead]:
    """Create a new brand"""
    brand = await brand_service.create_brand(brand_in)
    return DataResponse(message="Brand created successfully", data=brand)


@router.get(
    "",
    response_model=DataResponse[List[BrandRead]],
    summary="List brands",
    description="All brands ordered by name",
)
async def list_brands(brand_service: BrandServiceDep) -> DataResponse[List[BrandRead]]:
    brands = await brand_service.list_brands()
    return DataResponse(message="Brands retrieved successfully", data=brands)


@router.delete(
    "/{brand_id}",
    response_model=MessageResponse,
    summary="Delete brand",
    description="Delete a brand (only if no products reference it)",
    responses={
        400: {"model": ErrorResponse},
        404: {"model": ErrorResponse},
        409: {"model": ErrorResponse, "description": "Brand is being used by products"},
    },
)
async def delete_brand(brand_id: UUID, brand_service: BrandServiceDep) -> MessageResponse:
    """
    Delete a brand.

    Fails with 409 while any product still references it.
    """
    await brand_service.delete_brand(brand_id)
    return MessageResponse(message="Brand deleted successfully")
