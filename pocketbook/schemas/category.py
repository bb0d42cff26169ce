"""Category schemas."""

from pydantic import BaseModel, ConfigDict, Field

from pocketbook.schemas.common import NonBlankStr


class CategoryCreate(BaseModel):
    """Create a new category."""

    type: NonBlankStr = Field(..., max_length=255)
    color: NonBlankStr = Field(..., max_length=50)


class CategoryUpdate(BaseModel):
    """Replace a category's type and color."""

    type: NonBlankStr = Field(..., max_length=255)
    color: NonBlankStr = Field(..., max_length=50)


class CategoryDelete(BaseModel):
    """Types of the categories to delete."""

    types: list[NonBlankStr] = Field(..., min_length=1)


class CategoryResponse(BaseModel):
    """Category response."""

    model_config = ConfigDict(from_attributes=True)

    type: str
    color: str


class CountData(BaseModel):
    """Number of transactions affected by a category change."""

    count: int
