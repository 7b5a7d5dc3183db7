"""Account API routes.

Provides endpoints for registration, session management and the cart.
"""

from fastapi import APIRouter

from storefront.core.logging import get_logger
from storefront.domain.services import AccountService, AuthService, CartService
from storefront.infrastructure.api.dependencies import (
    AuthenticatedSession,
    DbSession,
    LenientSession,
)
from storefront.infrastructure.api.schemas import (
    ApiResponse,
    CartLineResponse,
    CartUpdateRequest,
    LoginRequest,
    LoginResponse,
    ProfileResponse,
    RegisterRequest,
)
from storefront.infrastructure.persistence.models import UserModel

logger = get_logger(__name__)

router = APIRouter()


def _profile(user: UserModel) -> ProfileResponse:
    return ProfileResponse(account=user.account, role=user.role, cart=user.cart_quantity)


@router.post(
    "",
    response_model=ApiResponse[None],
    responses={
        400: {"description": "Validation error"},
        409: {"description": "Account or email already registered"},
    },
)
async def register(request: RegisterRequest, session: DbSession) -> ApiResponse[None]:
    """Register a new account with the USER role."""
    await AccountService(session).register(
        account=request.account,
        email=request.email,
        password=request.password,
    )
    return ApiResponse[None](message="Account registered")


@router.post(
    "/login",
    response_model=ApiResponse[LoginResponse],
    responses={400: {"description": "Missing or incorrect credentials"}},
)
async def login(request: LoginRequest, session: DbSession) -> ApiResponse[LoginResponse]:
    """Log in and open a new session.

    The returned token must be presented as "Authorization: Bearer <token>".
    """
    token, user = await AuthService(session).login(request.account, request.password)
    profile = _profile(user)
    return ApiResponse[LoginResponse](
        message="Logged in",
        result=LoginResponse(token=token, **profile.model_dump()),
    )


@router.patch(
    "/extend",
    response_model=ApiResponse[str],
    responses={401: {"description": "Invalid session"}},
)
async def extend(context: LenientSession, session: DbSession) -> ApiResponse[str]:
    """Replace the presented token with a new one, even if it has expired."""
    new_token = await AuthService(session).rotate(context.user, context.token)
    return ApiResponse[str](message="Session extended", result=new_token)


@router.get(
    "/profile",
    response_model=ApiResponse[ProfileResponse],
    responses={401: {"description": "Invalid or expired session"}},
)
async def profile(context: AuthenticatedSession) -> ApiResponse[ProfileResponse]:
    """Get the profile of the authenticated account."""
    return ApiResponse[ProfileResponse](result=_profile(context.user))


@router.delete(
    "/logout",
    response_model=ApiResponse[None],
    responses={401: {"description": "Invalid session"}},
)
async def logout(context: LenientSession, session: DbSession) -> ApiResponse[None]:
    """Revoke the presented token, even if it has expired."""
    await AuthService(session).logout(context.user, context.token)
    return ApiResponse[None](message="Logged out")


@router.patch(
    "/cart",
    response_model=ApiResponse[int],
    responses={
        400: {"description": "Invalid product ID, product not for sale or invalid quantity"},
        401: {"description": "Invalid or expired session"},
        404: {"description": "Product not found"},
    },
)
async def update_cart(
    request: CartUpdateRequest,
    context: AuthenticatedSession,
    session: DbSession,
) -> ApiResponse[int]:
    """Add a quantity delta to the cart line of a product.

    Returns the aggregate cart quantity after the change.
    """
    quantity = await CartService(session).adjust_cart(
        context.user, request.product, request.quantity
    )
    return ApiResponse[int](message="Cart updated", result=quantity)


@router.get(
    "/cart",
    response_model=ApiResponse[list[CartLineResponse]],
    responses={401: {"description": "Invalid or expired session"}},
)
async def get_cart(
    context: AuthenticatedSession, session: DbSession
) -> ApiResponse[list[CartLineResponse]]:
    """Get the cart of the authenticated account with products resolved."""
    items = await CartService(session).get_cart(context.user)
    return ApiResponse[list[CartLineResponse]](
        result=[CartLineResponse.model_validate(item) for item in items]
    )
