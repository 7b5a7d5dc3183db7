"""Order service.

Placing an order re-reads the cart from the database, refuses it if any
product has been delisted since it was added, then inserts the order and
clears the cart in a single transaction.
"""

from sqlalchemy.ext.asyncio import AsyncSession

from storefront.core.exceptions import ContainsUnlistedProduct, EmptyCart
from storefront.core.logging import get_logger
from storefront.infrastructure.persistence.models import OrderItemModel, OrderModel, UserModel
from storefront.infrastructure.persistence.repositories import OrderRepository, UserRepository

logger = get_logger(__name__)


class OrderService:
    """Service for order placement and retrieval."""

    def __init__(self, session: AsyncSession) -> None:
        self.session = session
        self.user_repo = UserRepository(session)
        self.order_repo = OrderRepository(session)

    async def place_order(self, user: UserModel) -> OrderModel:
        """Convert the user's cart into an order.

        Returns:
            The created order.

        Raises:
            EmptyCart: If the cart has no lines.
            ContainsUnlistedProduct: If a product in the cart is no longer for sale.
        """
        if not user.cart_items:
            raise EmptyCart()

        cart = await self.user_repo.reload_cart(user)
        if not cart:
            raise EmptyCart()
        if not all(item.product.sell for item in cart):
            logger.info("Order refused: cart contains unlisted product", user_id=user.id)
            raise ContainsUnlistedProduct()

        order = OrderModel(
            user_id=user.id,
            items=[
                OrderItemModel(
                    product_id=item.product_id, product=item.product, quantity=item.quantity
                )
                for item in cart
            ],
        )
        await self.order_repo.create(order)

        user.cart_items.clear()
        await self.user_repo.save(user)
        await self.session.commit()

        logger.info(
            "Order placed",
            order_id=order.id,
            user_id=user.id,
            lines=len(order.items),
            quantity=sum(item.quantity for item in order.items),
        )
        return order

    async def list_for_user(self, user: UserModel) -> list[OrderModel]:
        """Get the user's own orders."""
        return await self.order_repo.list_by_user(user.id)

    async def list_all(self) -> list[OrderModel]:
        """Get every order of every account."""
        return await self.order_repo.list_all()
