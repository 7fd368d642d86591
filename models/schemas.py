from typing import Annotated, Optional
from pydantic import BaseModel, ConfigDict, Field

from models.primary_key import PrimaryKey

# Utility function for Pydantic's alias_generator
def to_camel(string: str) -> str:
    """Converts a string from snake_case to camelCase."""
    if "_" not in string:
        return string
    parts = string.split('_')
    return parts[0] + "".join(part.capitalize() for part in parts[1:])

# Base configuration class
class CamelModel(BaseModel):
    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        from_attributes=True
    )

# --- ITEM SCHEMAS ---

class Item(CamelModel):
    id: Annotated[Optional[int], PrimaryKey(auto_increment=True)] = Field(
        None, description="Database ID, assigned on insert."
    )
    name: str = Field(..., description="Display name of the item.")
