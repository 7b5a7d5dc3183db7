"""User repository for database operations."""

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from storefront.infrastructure.persistence.models import CartItemModel, ProductModel, UserModel


class UserRepository:
    """Repository for user database operations."""

    def __init__(self, session: AsyncSession) -> None:
        """Initialize the repository.

        Args:
            session: SQLAlchemy async session.
        """
        self.session = session

    async def create(self, user: UserModel) -> UserModel:
        """Create a new user.

        Args:
            user: User model to create.

        Returns:
            Created user model.
        """
        self.session.add(user)
        await self.session.flush()
        return user

    async def get_by_id(self, user_id: str) -> UserModel | None:
        """Get a user by ID."""
        result = await self.session.execute(
            select(UserModel).where(UserModel.id == user_id)
        )
        return result.scalar_one_or_none()

    async def get_by_account(self, account: str) -> UserModel | None:
        """Get a user by login handle."""
        result = await self.session.execute(
            select(UserModel).where(UserModel.account == account)
        )
        return result.scalar_one_or_none()

    async def get_with_token(self, user_id: str, token: str) -> UserModel | None:
        """Get a user by ID only if the token is one of its live sessions.

        Args:
            user_id: User ID taken from the token's subject claim.
            token: The raw bearer token.

        Returns:
            User model if found and the token is live, None otherwise.
        """
        user = await self.get_by_id(user_id)
        if user is None or token not in user.tokens:
            return None
        return user

    async def account_exists(self, account: str) -> bool:
        """Check if a login handle is already taken."""
        result = await self.session.execute(
            select(UserModel.id).where(UserModel.account == account).limit(1)
        )
        return result.scalar_one_or_none() is not None

    async def email_exists(self, email: str) -> bool:
        """Check if an email is already registered."""
        result = await self.session.execute(
            select(UserModel.id).where(UserModel.email == email).limit(1)
        )
        return result.scalar_one_or_none() is not None

    async def reload_cart(self, user: UserModel) -> list[CartItemModel]:
        """Re-read a user's cart lines and their products from the database.

        Any in-memory state of the cart and the referenced products is
        overwritten with what is currently stored.

        Args:
            user: The user whose cart to reload.

        Returns:
            Fresh list of cart line items with products loaded.
        """
        await self.session.refresh(user, attribute_names=["cart_items"])
        result = await self.session.execute(
            select(CartItemModel)
            .where(CartItemModel.user_id == user.id)
            .order_by(CartItemModel.position)
            .execution_options(populate_existing=True)
        )
        items = list(result.scalars().all())

        product_ids = {item.product_id for item in items}
        if product_ids:
            await self.session.execute(
                select(ProductModel)
                .where(ProductModel.id.in_(product_ids))
                .execution_options(populate_existing=True)
            )
        return items

    async def save(self, user: UserModel) -> UserModel:
        """Flush pending changes to a user with a version check.

        Raises:
            sqlalchemy.orm.exc.StaleDataError: If another request updated
                the same user since it was loaded.
        """
        user.touch()
        await self.session.flush()
        return user
