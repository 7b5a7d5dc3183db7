"""Cart service.

Cart lines live on the user. A relative quantity change is applied to the
matching line; a line whose quantity would drop to zero or below is removed
instead, so stored quantities are always at least one.
"""

from sqlalchemy.ext.asyncio import AsyncSession

from storefront.core.exceptions import ProductNotForSale, ProductNotFound, ValidationFailed
from storefront.core.logging import get_logger
from storefront.domain.services.identifiers import require_valid_id
from storefront.infrastructure.persistence.models import CartItemModel, UserModel
from storefront.infrastructure.persistence.repositories import (
    ProductRepository,
    UserRepository,
)

logger = get_logger(__name__)


class CartService:
    """Service for shopping cart mutations."""

    def __init__(self, session: AsyncSession) -> None:
        self.session = session
        self.user_repo = UserRepository(session)
        self.product_repo = ProductRepository(session)

    async def adjust_cart(self, user: UserModel, product_id: str | None, delta: int) -> int:
        """Apply a relative quantity change for one product.

        Args:
            user: The cart owner.
            product_id: ID of the product to add, change or remove.
            delta: Quantity to add (negative to remove).

        Returns:
            The aggregate cart quantity after the change.

        Raises:
            InvalidId: If product_id is not a valid ID.
            ProductNotFound: If a new line references a missing product.
            ProductNotForSale: If a new line references a delisted product.
            ValidationFailed: If a new line would start at zero or below.
        """
        product_id = require_valid_id(product_id)

        index = next(
            (i for i, item in enumerate(user.cart_items) if item.product_id == product_id),
            -1,
        )

        if index > -1:
            quantity = user.cart_items[index].quantity + delta
            if quantity <= 0:
                user.cart_items.pop(index)
            else:
                user.cart_items[index].quantity = quantity
        else:
            product = await self.product_repo.get_by_id(product_id)
            if product is None:
                raise ProductNotFound()
            if not product.sell:
                raise ProductNotForSale()
            if delta <= 0:
                raise ValidationFailed("quantity", "Cart quantity must be at least 1")

            user.cart_items.append(
                CartItemModel(product_id=product.id, product=product, quantity=delta)
            )

        await self.user_repo.save(user)
        await self.session.commit()

        logger.info(
            "Cart updated",
            user_id=user.id,
            product_id=product_id,
            delta=delta,
            cart_quantity=user.cart_quantity,
        )
        return user.cart_quantity

    async def get_cart(self, user: UserModel) -> list[CartItemModel]:
        """Get the user's cart lines with product details, as stored."""
        return await self.user_repo.reload_cart(user)
