"""Order repository for database operations.

Orders are insert-only, so there is no update method.
"""

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from storefront.infrastructure.persistence.models import OrderItemModel, OrderModel


class OrderRepository:
    """Repository for order database operations."""

    def __init__(self, session: AsyncSession) -> None:
        """Initialize the repository.

        Args:
            session: SQLAlchemy async session.
        """
        self.session = session

    async def create(self, order: OrderModel) -> OrderModel:
        """Insert a new order with its line items."""
        self.session.add(order)
        await self.session.flush()
        return order

    async def list_by_user(self, user_id: str) -> list[OrderModel]:
        """Get a user's orders, oldest first, with products loaded."""
        result = await self.session.execute(
            select(OrderModel)
            .where(OrderModel.user_id == user_id)
            .options(selectinload(OrderModel.items).selectinload(OrderItemModel.product))
            .order_by(OrderModel.created_at.asc())
            .execution_options(populate_existing=True)
        )
        return list(result.scalars().all())

    async def list_all(self) -> list[OrderModel]:
        """Get every order, oldest first, with users and products loaded."""
        result = await self.session.execute(
            select(OrderModel)
            .options(
                selectinload(OrderModel.user),
                selectinload(OrderModel.items).selectinload(OrderItemModel.product),
            )
            .order_by(OrderModel.created_at.asc())
            .execution_options(populate_existing=True)
        )
        return list(result.scalars().all())
