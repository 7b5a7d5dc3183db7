"""Order API routes."""

from fastapi import APIRouter

from storefront.core.logging import get_logger
from storefront.domain.services import OrderService
from storefront.infrastructure.api.dependencies import (
    AdminSession,
    AuthenticatedSession,
    DbSession,
)
from storefront.infrastructure.api.schemas import (
    AdminOrderResponse,
    ApiResponse,
    OrderResponse,
    PlacedOrderResponse,
)

logger = get_logger(__name__)

router = APIRouter()


@router.post(
    "",
    response_model=ApiResponse[PlacedOrderResponse],
    responses={
        400: {"description": "Cart is empty or contains an unlisted product"},
        401: {"description": "Invalid or expired session"},
    },
)
async def place_order(
    context: AuthenticatedSession, session: DbSession
) -> ApiResponse[PlacedOrderResponse]:
    """Turn the cart into an order and empty the cart."""
    order = await OrderService(session).place_order(context.user)
    return ApiResponse[PlacedOrderResponse](
        message="Order placed",
        result=PlacedOrderResponse.model_validate(order),
    )


@router.get(
    "",
    response_model=ApiResponse[list[OrderResponse]],
    responses={401: {"description": "Invalid or expired session"}},
)
async def list_orders(
    context: AuthenticatedSession, session: DbSession
) -> ApiResponse[list[OrderResponse]]:
    """List the orders of the authenticated account."""
    orders = await OrderService(session).list_for_user(context.user)
    return ApiResponse[list[OrderResponse]](
        result=[OrderResponse.model_validate(order) for order in orders]
    )


@router.get(
    "/all",
    response_model=ApiResponse[list[AdminOrderResponse]],
    responses={
        401: {"description": "Invalid or expired session"},
        403: {"description": "Administrator required"},
    },
)
async def list_all_orders(
    context: AdminSession, session: DbSession
) -> ApiResponse[list[AdminOrderResponse]]:
    """List every order with its account."""
    orders = await OrderService(session).list_all()
    return ApiResponse[list[AdminOrderResponse]](
        result=[AdminOrderResponse.model_validate(order) for order in orders]
    )
