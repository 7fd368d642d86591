import logging
from typing import Any, Dict, List, Optional, Type

from db.base_repository import CRUDRepository, T
from models.primary_key import KeyCoercionError, PrimaryKeyError, resolve_primary_key

logger = logging.getLogger(__name__)

class InMemoryRepository(CRUDRepository[T]):
    """
    Dict-backed repository.
    Auto-increment keys are counted from 1 upwards and converted to the key field's type.
    """

    def __init__(self, schema: Type[T]):
        self.schema = schema
        self.pk = resolve_primary_key(schema)
        self._items: Dict[Any, T] = {}
        self._next_id = 1
        if self.pk.auto_increment:
            try:
                self.pk.coerce(str(self._next_id))
            except KeyCoercionError as e:
                raise PrimaryKeyError(
                    f"{schema.__name__}.{self.pk.name} cannot hold generated integer keys."
                ) from e

    async def read_all(self) -> List[T]:
        return list(self._items.values())

    async def read(self, key: Any) -> Optional[T]:
        return self._items.get(key)

    async def create(self, value: T) -> Optional[T]:
        if self.pk.auto_increment:
            key = self.pk.coerce(str(self._next_id))
            self._next_id += 1
        else:
            key = self.pk.value_of(value)
            if key is None or key in self._items:
                logger.warning(f"Rejected {self.schema.__name__} with missing or duplicate key {key!r}")
                return None

        stored = value.model_copy(update={self.pk.name: key})
        self._items[key] = stored
        return stored

    async def update(self, key: Any, value: T) -> bool:
        if key not in self._items:
            return False
        # The stored object keeps the key it is addressed by
        self._items[key] = value.model_copy(update={self.pk.name: key})
        return True

    async def delete(self, key: Any) -> bool:
        return self._items.pop(key, None) is not None
