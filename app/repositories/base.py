"""
Base repository pattern implementation with async support
"""
from abc import ABC
from typing import Any, Generic, List, Optional, Type, TypeVar, Union
from uuid import UUID

from pydantic import BaseModel
from sqlalchemy import asc, delete, desc
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlmodel import SQLModel, func, select
from sqlmodel.ext.asyncio.session import AsyncSession

from app.core.exceptions import BaseAPIException, ConflictError, DatabaseError, NotFoundError
from app.core.logging import log


ModelType = TypeVar("ModelType", bound=SQLModel)
CreateSchemaType = TypeVar("CreateSchemaType", bound=BaseModel)


class BaseRepository(Generic[ModelType, CreateSchemaType], ABC):
    """
    Generic repository for data access with async support.
    Implements the CRUD operations shared by every table.

    Backend failures are translated into DatabaseError; integrity violations
    into ``integrity_error`` (ConflictError unless a subclass says otherwise).
    Cancellation is never caught here.
    """

    integrity_error: Type[BaseAPIException] = ConflictError

    def __init__(self, model: Type[ModelType], session: AsyncSession):
        self.model = model
        self.session = session

    @property
    def name(self) -> str:
        return self.model.__name__

    async def create(self, *, obj_in: CreateSchemaType, **kwargs: Any) -> ModelType:
        """Create a new record"""
        try:
            # Convert Pydantic model to dict
            obj_in_data = obj_in.model_dump(exclude_unset=True)
            obj_in_data.update(kwargs)  # Add any additional fields

            # Create SQLModel instance
            db_obj = self.model(**obj_in_data)

            self.session.add(db_obj)
            await self.session.commit()
            await self.session.refresh(db_obj)

            log.debug(f"Inserted {self.name}", id=str(db_obj.id))
            return db_obj

        except IntegrityError as e:
            await self.session.rollback()
            log.warning(f"Integrity error creating {self.name}", error=str(e.orig))
            raise self.integrity_error(f"Conflict creating {self.name}")
        except SQLAlchemyError as e:
            await self.session.rollback()
            log.error(f"Database error creating {self.name}", error=str(e))
            raise DatabaseError(f"Error creating {self.name}")

    async def get(self, *, id: Union[UUID, str]) -> Optional[ModelType]:
        """Get a record by ID"""
        if isinstance(id, str):
            id = UUID(id)

        try:
            statement = select(self.model).where(self.model.id == id)
            result = await self.session.exec(statement)
            return result.first()
        except SQLAlchemyError as e:
            log.error(f"Database error reading {self.name}", error=str(e))
            raise DatabaseError(f"Error reading {self.name}")

    async def get_multi(
        self,
        *,
        skip: int = 0,
        limit: Optional[int] = None,
        order_by: Optional[str] = None,
        order_desc: bool = False,
    ) -> List[ModelType]:
        """Get multiple records, optionally ordered and paginated"""
        statement = select(self.model)

        # Apply ordering
        if order_by and hasattr(self.model, order_by):
            order_column = getattr(self.model, order_by)
            statement = statement.order_by(desc(order_column) if order_desc else asc(order_column))

        # Apply pagination
        if skip:
            statement = statement.offset(skip)
        if limit is not None:
            statement = statement.limit(limit)

        try:
            result = await self.session.exec(statement)
            return list(result.all())
        except SQLAlchemyError as e:
            log.error(f"Database error listing {self.name}", error=str(e))
            raise DatabaseError(f"Error listing {self.name}")

    async def count(self) -> int:
        """Count all records"""
        try:
            statement = select(func.count()).select_from(self.model)
            result = await self.session.exec(statement)
            return result.one()
        except SQLAlchemyError as e:
            log.error(f"Database error counting {self.name}", error=str(e))
            raise DatabaseError(f"Error counting {self.name}")

    async def delete(self, *, id: Union[UUID, str]) -> None:
        """Hard delete; NotFoundError when nothing matched"""
        if isinstance(id, str):
            id = UUID(id)

        try:
            result = await self.session.execute(delete(self.model).where(self.model.id == id))
            await self.session.commit()
        except IntegrityError as e:
            await self.session.rollback()
            log.warning(f"Integrity error deleting {self.name}", id=str(id), error=str(e.orig))
            raise self.integrity_error(f"Conflict deleting {self.name}")
        except SQLAlchemyError as e:
            await self.session.rollback()
            log.error(f"Database error deleting {self.name}", error=str(e))
            raise DatabaseError(f"Error deleting {self.name}")

        if result.rowcount == 0:
            raise NotFoundError(f"{self.name.lower()} not found")

        log.debug(f"Deleted {self.name}", id=str(id))
