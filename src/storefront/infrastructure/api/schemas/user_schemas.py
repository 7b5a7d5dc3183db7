"""Pydantic schemas for account, session and cart endpoints.

Request fields are optional at the schema level; the account validator
decides which field is reported first.
"""

from pydantic import BaseModel, ConfigDict, Field

from storefront.infrastructure.api.schemas.product_schemas import ProductResponse


class RegisterRequest(BaseModel):
    """Request body for account registration."""

    account: str | None = Field(None, description="Login handle (4-20 letters or digits)")
    email: str | None = Field(None, description="Email address")
    password: str | None = Field(None, description="Password (4-20 characters)")


class LoginRequest(BaseModel):
    """Request body for login."""

    account: str | None = Field(None, description="Login handle")
    password: str | None = Field(None, description="Password")


class CartUpdateRequest(BaseModel):
    """Request body for a relative cart change."""

    product: str | None = Field(None, description="Product ID")
    quantity: int = Field(..., description="Quantity to add, negative to remove")


class ProfileResponse(BaseModel):
    """Minimal profile shown by the client."""

    account: str = Field(..., description="Login handle")
    role: str = Field(..., description="USER or ADMIN")
    cart: int = Field(..., description="Aggregate cart quantity")


class LoginResponse(ProfileResponse):
    """Profile plus the new session token."""

    token: str = Field(..., description="Bearer session token")


class CartLineResponse(BaseModel):
    """A cart line with its product resolved."""

    model_config = ConfigDict(from_attributes=True)

    product: ProductResponse
    quantity: int
