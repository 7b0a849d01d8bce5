"""
API Dependencies for dependency injection
"""
from typing import Annotated, AsyncGenerator, Optional

from fastapi import Depends, Query, Request
from sqlmodel.ext.asyncio.session import AsyncSession

from app.core.config import settings
from app.core.database import Database
from app.repositories import BrandRepository, ProductRepository
from app.schemas.common import PaginationParams
from app.services import BrandService, ProductService
from app.services.product_service import MAX_INT64, MIN_INT64


# Database handle owned by the application (created in the lifespan)
def get_database(request: Request) -> Database:
    return request.app.state.db


DatabaseDep = Annotated[Database, Depends(get_database)]


async def get_async_session(db: DatabaseDep) -> AsyncGenerator[AsyncSession, None]:
    """One session per request, released when the response is done"""
    async with db.session() as session:
        yield session


AsyncSessionDep = Annotated[AsyncSession, Depends(get_async_session)]


# Repositories
async def get_brand_repository(session: AsyncSessionDep) -> BrandRepository:
    """Get brand repository instance"""
    return BrandRepository(session)


async def get_product_repository(session: AsyncSessionDep) -> ProductRepository:
    """Get product repository instance"""
    return ProductRepository(session)


BrandRepoDep = Annotated[BrandRepository, Depends(get_brand_repository)]
ProductRepoDep = Annotated[ProductRepository, Depends(get_product_repository)]


# Services
async def get_brand_service(brand_repo: BrandRepoDep) -> BrandService:
    """Get brand service instance"""
    return BrandService(brand_repo)


async def get_product_service(product_repo: ProductRepoDep, brand_repo: BrandRepoDep) -> ProductService:
    """Get product service instance"""
    return ProductService(
        product_repo,
        brand_repo,
        partial_update_mode=settings.partial_update_mode,
        default_page_size=settings.default_page_size,
        max_page_size=settings.max_page_size,
    )


BrandServiceDep = Annotated[BrandService, Depends(get_brand_service)]
ProductServiceDep = Annotated[ProductService, Depends(get_product_service)]


def _as_int(raw: Optional[str], default: int) -> int:
    """Parse a query integer; unparsable or outside signed 64-bit gives the default"""
    if raw is None:
        return default
    try:
        value = int(raw)
    except ValueError:
        return default
    if not MIN_INT64 <= value <= MAX_INT64:
        return default
    return value


# Common parameters
async def get_pagination(
    page: Optional[str] = Query(None, description="Page number (default 1)"),
    limit: Optional[str] = Query(None, description="Items per page (default 10, max 100)"),
) -> PaginationParams:
    """Lenient pagination: anything unparsable falls back to the defaults"""
    return PaginationParams(
        page=_as_int(page, 1),
        limit=_as_int(limit, settings.default_page_size),
    )


PaginationDep = Annotated[PaginationParams, Depends(get_pagination)]
