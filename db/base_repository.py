import logging
from abc import ABC, abstractmethod
from typing import Any, Generic, List, Optional, TypeVar

from pydantic import BaseModel

logger = logging.getLogger(__name__)

T = TypeVar("T", bound=BaseModel)

class CRUDRepository(ABC, Generic[T]):
    """
    Storage operations a CRUD endpoint delegates to.
    Keys are already converted to the primary key's native type.
    """

    @abstractmethod
    async def read_all(self) -> List[T]:
        """Returns every stored object, or an empty list."""

    @abstractmethod
    async def read(self, key: Any) -> Optional[T]:
        """Returns the object with the given primary key, or None."""

    @abstractmethod
    async def create(self, value: T) -> Optional[T]:
        """Stores a new object and returns it (with any generated key), or None on failure."""

    @abstractmethod
    async def update(self, key: Any, value: T) -> bool:
        """Replaces the object with the given key. False when nothing matched."""

    @abstractmethod
    async def delete(self, key: Any) -> bool:
        """Removes the object with the given key. False when nothing matched."""
