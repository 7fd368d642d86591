import logging
from typing import Generic, List, Optional, Type, TypeVar

from pydantic import BaseModel

from db.base_repository import CRUDRepository
from models.primary_key import PrimaryKeyInfo, resolve_primary_key

logger = logging.getLogger(__name__)

T = TypeVar("T", bound=BaseModel)
O = TypeVar("O", bound=CRUDRepository)

class CRUDService(Generic[T, O]):
    """
    Basic get/create/update/delete operations over a repository.

    Route keys arrive as strings and are converted to the model's primary key
    type before the repository is called; a key that does not convert raises
    KeyCoercionError. Missing results are reported as None (False for delete).
    Subclasses may override any operation.
    """

    def __init__(self, model: Type[T], repository: O):
        self.model = model
        self._repository = repository
        self._primary_key = resolve_primary_key(model)

    @property
    def primary_key(self) -> PrimaryKeyInfo:
        return self._primary_key

    @property
    def is_pk_auto_increment(self) -> bool:
        return self._primary_key.auto_increment

    @property
    def repository(self) -> O:
        return self._repository

    async def get_all(self) -> Optional[List[T]]:
        """Retrieves every object, or None if there are none."""
        items = await self._repository.read_all()
        if not items:
            logger.info(f"No {self.model.__name__} records found.")
            return None
        return items

    async def get(self, key: str) -> Optional[T]:
        """Retrieves a single object by its primary key string."""
        item = await self._repository.read(self._primary_key.coerce(key))
        if item is None:
            logger.info(f"{self.model.__name__} {key} not found.")
            return None
        return item

    async def create(self, value: T) -> Optional[T]:
        """Inserts a new object. Returns it with any generated key, or None on failure."""
        created = await self._repository.create(value)
        if created is None:
            logger.info(f"{self.model.__name__} was not created.")
            return None
        return created

    async def update(self, key: str, value: T) -> Optional[T]:
        """Replaces the object with the given key. Returns the supplied value, or None."""
        if not await self._repository.update(self._primary_key.coerce(key), value):
            logger.info(f"{self.model.__name__} {key} not updated.")
            return None
        return value

    async def delete(self, key: str) -> bool:
        """Deletes the object with the given key. True if it was found and deleted."""
        if not await self._repository.delete(self._primary_key.coerce(key)):
            logger.info(f"{self.model.__name__} {key} not deleted.")
            return False
        return True
