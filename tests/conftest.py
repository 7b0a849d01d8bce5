"""
Test configuration and fixtures
"""

from typing import Dict, List, Optional, Tuple
from uuid import UUID

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient

from app.core.config import settings
from app.core.database import Database
from app.core.exceptions import NotFoundError
from app.main import create_application
from app.models import Brand, Product
from app.models.brand import utcnow
from app.repositories.ports import BrandGateway, ProductGateway
from app.schemas.product import ProductCreate, ProductPatch, ProductRead
from app.services import BrandService, ProductService


# Fresh in-memory database per test
TEST_DATABASE_URL = "sqlite+aiosqlite:///:memory:"


@pytest_asyncio.fixture
async def database():
    """Set up test database"""
    db = Database(settings, url=TEST_DATABASE_URL)
    await db.init_models()

    yield db

    await db.dispose()


@pytest_asyncio.fixture
async def db_session(database):
    """Create a test database session"""
    async with database.session() as session:
        yield session


@pytest_asyncio.fixture
async def client(database):
    """Create test client bound to the test database"""
    app = create_application(database=database)

    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as ac:
        yield ac


# In-memory gateways for service-level tests


class InMemoryBrandGateway(BrandGateway):
    """Brand storage kept in a dict; records every call for ordering assertions"""

    def __init__(self):
        self.brands: Dict[UUID, Brand] = {}
        self.products: Dict[UUID, Product] = {}
        self.calls: List[str] = []

    async def create_brand(self, brand_name: str) -> Brand:
        self.calls.append("create_brand")
        brand = Brand(brand_name=brand_name)
        self.brands[brand.id] = brand
        return brand

    async def get(self, *, id: UUID) -> Optional[Brand]:
        self.calls.append("get")
        return self.brands.get(id)

    async def delete(self, *, id: UUID) -> None:
        self.calls.append("delete")
        if self.brands.pop(id, None) is None:
            raise NotFoundError("brand not found")

    async def list_by_name(self) -> List[Brand]:
        self.calls.append("list_by_name")
        return sorted(self.brands.values(), key=lambda brand: brand.brand_name)

    async def is_referenced_by_products(self, brand_id: UUID) -> bool:
        self.calls.append("is_referenced_by_products")
        return any(product.brand_id == brand_id for product in self.products.values())


class InMemoryProductGateway(ProductGateway):
    """Product storage sharing the brand dict for name lookups"""

    def __init__(self, brands: Dict[UUID, Brand]):
        self.brands = brands
        self.products: Dict[UUID, Product] = {}

    def _read(self, product: Product) -> ProductRead:
        brand = self.brands.get(product.brand_id)
        return ProductRead.model_validate(product).model_copy(
            update={"brand_name": brand.brand_name if brand else None}
        )

    async def create(self, *, obj_in: ProductCreate) -> Product:
        product = Product(**obj_in.model_dump())
        self.products[product.id] = product
        return product

    async def get_with_brand(self, product_id: UUID) -> Optional[ProductRead]:
        product = self.products.get(product_id)
        return self._read(product) if product else None

    async def apply_patch(self, product_id: UUID, patch: ProductPatch) -> ProductRead:
        product = self.products.get(product_id)
        if product is None:
            raise NotFoundError("product not found")

        changes = patch.changes()
        if changes:
            for field, value in changes.items():
                setattr(product, field, value)
            product.updated_at = utcnow()

        return self._read(product)

    async def delete(self, *, id: UUID) -> None:
        if self.products.pop(id, None) is None:
            raise NotFoundError("product not found")

    async def list_page(self, *, limit: int, offset: int) -> Tuple[List[ProductRead], int]:
        ordered = sorted(self.products.values(), key=lambda product: product.created_at, reverse=True)
        return [self._read(product) for product in ordered[offset:offset + limit]], len(ordered)


@pytest.fixture
def brand_gateway():
    return InMemoryBrandGateway()


@pytest.fixture
def product_gateway(brand_gateway):
    gateway = InMemoryProductGateway(brand_gateway.brands)
    # Usage checks see the same products the product gateway writes
    brand_gateway.products = gateway.products
    return gateway


@pytest.fixture
def brand_service(brand_gateway):
    return BrandService(brand_gateway)


@pytest.fixture
def product_service(product_gateway, brand_gateway):
    return ProductService(product_gateway, brand_gateway)


@pytest.fixture
def legacy_product_service(product_gateway, brand_gateway):
    return ProductService(product_gateway, brand_gateway, partial_update_mode="legacy")


@pytest.fixture
def sample_brand_data():
    """Sample brand payload"""
    return {"brand_name": "Acme"}


@pytest.fixture
def sample_product_data():
    """Sample product payload without its brand id"""
    return {"product_name": "Widget", "price": 9.99, "qty": 5}
