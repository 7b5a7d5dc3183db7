"""Pydantic schemas for order endpoints."""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field

from storefront.infrastructure.api.schemas.product_schemas import ProductResponse


class PlacedOrderLine(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    product_id: str
    quantity: int


class PlacedOrderResponse(BaseModel):
    """A freshly placed order."""

    model_config = ConfigDict(from_attributes=True)

    id: str = Field(..., description="Order ID")
    created_at: datetime
    items: list[PlacedOrderLine]


class OrderLineResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    product: ProductResponse
    quantity: int


class OrderResponse(BaseModel):
    """An order with its products resolved."""

    model_config = ConfigDict(from_attributes=True)

    id: str = Field(..., description="Order ID")
    created_at: datetime
    items: list[OrderLineResponse]


class OrderOwnerResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    account: str


class AdminOrderResponse(OrderResponse):
    """An order with its account and products resolved."""

    user: OrderOwnerResponse
