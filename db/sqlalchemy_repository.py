import logging
from typing import Any, List, Optional, Type

from sqlalchemy import delete, select, update
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from db.base_repository import CRUDRepository, T
from db.models import Base
from models.primary_key import resolve_primary_key

logger = logging.getLogger(__name__)

class SQLAlchemyRepository(CRUDRepository[T]):
    """
    Persists pydantic schemas through a mapped SQLAlchemy table.
    The schema's primary key field must have the same name as the ORM column.
    """

    def __init__(self, session: AsyncSession, orm_model: Type[Base], schema: Type[T]):
        self.session = session
        self.orm_model = orm_model
        self.schema = schema
        self.pk = resolve_primary_key(schema)
        self.pk_column = getattr(orm_model, self.pk.name)

    async def read_all(self) -> List[T]:
        result = await self.session.execute(select(self.orm_model))
        return [self.schema.model_validate(row, from_attributes=True) for row in result.scalars().all()]

    async def read(self, key: Any) -> Optional[T]:
        stmt = (
            select(self.orm_model)
            .where(self.pk_column == key)
            .execution_options(populate_existing=True)
        )
        result = await self.session.execute(stmt)
        row = result.scalar_one_or_none()
        return self.schema.model_validate(row, from_attributes=True) if row else None

    async def create(self, value: T) -> Optional[T]:
        data = value.model_dump()
        if self.pk.auto_increment:
            data.pop(self.pk.name, None)

        row = self.orm_model(**data)
        try:
            # SAVEPOINT: a rejected insert must not undo the caller's other writes.
            # flush() assigns the generated key without committing
            async with self.session.begin_nested():
                self.session.add(row)
                await self.session.flush()
        except IntegrityError as e:
            logger.warning(f"Could not insert {self.schema.__name__}: {e.orig}")
            return None

        await self.session.refresh(row)
        return self.schema.model_validate(row, from_attributes=True)

    async def update(self, key: Any, value: T) -> bool:
        stmt = (
            update(self.orm_model)
            .where(self.pk_column == key)
            .values(**value.model_dump(exclude={self.pk.name}))
            .returning(self.pk_column)
        )
        result = await self.session.execute(stmt)
        return result.scalar_one_or_none() is not None

    async def delete(self, key: Any) -> bool:
        stmt = (
            delete(self.orm_model)
            .where(self.pk_column == key)
            .returning(self.pk_column)
        )
        result = await self.session.execute(stmt)
        return result.scalar_one_or_none() is not None
