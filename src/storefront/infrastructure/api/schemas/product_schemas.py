"""Pydantic schemas for product endpoints."""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field


class ProductResponse(BaseModel):
    """A catalog product."""

    model_config = ConfigDict(from_attributes=True)

    id: str = Field(..., description="Product ID")
    name: str = Field(..., description="Product name")
    description: str = Field(..., description="Product description")
    price: float = Field(..., description="Unit price")
    image: str = Field(..., description="Stored image path")
    sell: bool = Field(..., description="Whether the product is listed")
    created_at: datetime
    updated_at: datetime


class ProductPageResponse(BaseModel):
    """One page of a catalog search."""

    data: list[ProductResponse] = Field(..., description="Products on this page")
    total: int = Field(..., description="Number of products matching the filter")
