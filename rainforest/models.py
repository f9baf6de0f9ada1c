# rainforest/models.py
from pydantic import BaseModel, ConfigDict, Field
from typing import Any, Optional


class Product(BaseModel):
    model_config = ConfigDict(frozen=True, populate_by_name=True)

    id: int
    name: str
    price: float  # dollars
    category: str  # Category.name
    description: str
    image: str
    in_stock: bool = Field(alias="inStock")
    featured: Optional[bool] = None


class Category(BaseModel):
    model_config = ConfigDict(frozen=True, populate_by_name=True)

    id: int
    name: str  # url-friendly key, e.g. "powders"
    display_name: str = Field(alias="displayName")
    description: str


class ApiResponse(BaseModel):
    success: bool
    data: Optional[Any] = None
    error: Optional[str] = None


def to_json(value: Any) -> Any:
    """Serialize models (or lists of them) the way they appear in the source files."""
    if isinstance(value, BaseModel):
        return value.model_dump(by_alias=True, exclude_none=True)
    if isinstance(value, (list, tuple)):
        return [to_json(v) for v in value]
    return value
