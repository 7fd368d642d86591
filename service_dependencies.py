from fastapi import Depends
import logging
from typing import Dict, Type
from sqlalchemy.ext.asyncio import AsyncSession

from config import REPOSITORY_BACKEND
from db.base_repository import CRUDRepository
from db.database import get_db
from db.memory_repository import InMemoryRepository
from db.models import Base, ItemModel
from db.sqlalchemy_repository import SQLAlchemyRepository
from models.schemas import Item

logger = logging.getLogger(__name__)

# One in-memory store per schema, shared by every request in this process
_memory_repositories: Dict[Type, InMemoryRepository] = {}

def get_memory_repository(schema: Type) -> InMemoryRepository:
    repo = _memory_repositories.get(schema)
    if repo is None:
        repo = InMemoryRepository(schema)
        _memory_repositories[schema] = repo
        logger.info(f"Created in-memory repository for {schema.__name__}.")
    return repo

def make_repository(db: AsyncSession, orm_model: Type[Base], schema: Type) -> CRUDRepository:
    if REPOSITORY_BACKEND == "memory":
        return get_memory_repository(schema)
    return SQLAlchemyRepository(db, orm_model, schema)

def get_item_repository(db: AsyncSession = Depends(get_db)) -> CRUDRepository[Item]:
    return make_repository(db, ItemModel, Item)
