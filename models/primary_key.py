import logging
import types
from dataclasses import dataclass
from functools import lru_cache
from typing import Any, Optional, Type, Union, get_args, get_origin

from pydantic import BaseModel, TypeAdapter, ValidationError

logger = logging.getLogger(__name__)


class PrimaryKeyError(TypeError):
    """Raised when a model type does not declare exactly one primary key."""


class KeyCoercionError(ValueError):
    """Raised when a route key string cannot be converted to the key's type."""

    def __init__(self, raw: str, target: Any, reason: str = ""):
        self.raw = raw
        self.target = target
        self.reason = reason
        super().__init__(f"Key '{raw}' is not a valid {getattr(target, '__name__', target)}.")


class PrimaryKey:
    """
    Marker for the primary key field of a model.
    Attach it through Annotated metadata:

        id: Annotated[Optional[int], PrimaryKey(auto_increment=True)] = None
    """

    def __init__(self, auto_increment: bool = False):
        self.auto_increment = auto_increment

    def __repr__(self) -> str:
        return f"PrimaryKey(auto_increment={self.auto_increment})"


def _strip_optional(annotation: Any) -> Any:
    origin = get_origin(annotation)
    if origin is Union or origin is getattr(types, "UnionType", None):
        args = [arg for arg in get_args(annotation) if arg is not type(None)]
        if len(args) == 1:
            return args[0]
    return annotation


@dataclass(frozen=True)
class PrimaryKeyInfo:
    name: str
    type: Any
    auto_increment: bool = False

    def coerce(self, raw: str) -> Any:
        """
        Converts a route parameter string into the native key type.

        Uses pydantic's lax parsing, so integer keys also accept forms such as
        "+1", "1_000" and "1.0" (a zero fraction).
        """
        try:
            return _adapter_for(self.type).validate_python(raw)
        except ValidationError as e:
            errors = e.errors()
            reason = errors[0]["msg"] if errors else str(e)
            raise KeyCoercionError(raw, self.type, reason) from e

    def value_of(self, instance: BaseModel) -> Any:
        return getattr(instance, self.name)


@lru_cache(maxsize=None)
def _adapter_for(key_type: Any) -> TypeAdapter:
    return TypeAdapter(key_type)


@lru_cache(maxsize=None)
def resolve_primary_key(model: Type[BaseModel]) -> PrimaryKeyInfo:
    """
    Finds the single field of `model` carrying a PrimaryKey marker.
    Raises PrimaryKeyError when there is none or more than one.
    """
    if not (isinstance(model, type) and issubclass(model, BaseModel)):
        raise PrimaryKeyError(f"{model!r} is not a pydantic model.")

    found = []
    for name, field in model.model_fields.items():
        marker: Optional[PrimaryKey] = next(
            (meta for meta in field.metadata if isinstance(meta, PrimaryKey)), None
        )
        if marker is not None:
            found.append((name, field, marker))

    if not found:
        raise PrimaryKeyError(f"{model.__name__} has no field marked with PrimaryKey.")
    if len(found) > 1:
        names = ", ".join(name for name, _, _ in found)
        raise PrimaryKeyError(f"{model.__name__} has more than one primary key: {names}.")

    name, field, marker = found[0]
    info = PrimaryKeyInfo(
        name=name,
        type=_strip_optional(field.annotation),
        auto_increment=marker.auto_increment,
    )
    logger.debug(f"Resolved primary key for {model.__name__}: {info}")
    return info
