from pydantic import BaseModel, ConfigDict, Field
from typing import Any


class SearchRequest(BaseModel):
    """Request model for product search."""

    model_config = ConfigDict(populate_by_name=True)

    query: str = ""
    search_type: str = Field(default="text", alias="searchType")
    query_vector: list[float] | None = Field(default=None, alias="queryVector")


class ProductCreateRequest(BaseModel):
    """Request model for adding a product."""

    title: str = ""
    description: str = ""
    category: str | None = None
    price: float | None = None
    title_vector: list[float] | None = None
    description_vector: list[float] | None = None


class VespaSearchRequest(BaseModel):
    """Request model for the pass-through external engine query."""

    yql: str = ""
    params: dict[str, Any] = Field(default_factory=dict)
