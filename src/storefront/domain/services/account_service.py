"""Account service for registration and administrator bootstrap."""

from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from storefront.core.exceptions import Conflict, ValidationFailed
from storefront.core.logging import get_logger
from storefront.domain.entities import UserRole
from storefront.domain.services.account_validator import (
    AccountValidator,
    default_account_validator,
)
from storefront.infrastructure.auth import hash_password
from storefront.infrastructure.persistence.models import UserModel
from storefront.infrastructure.persistence.repositories import UserRepository

logger = get_logger(__name__)

DUPLICATE_ACCOUNT_MESSAGE = "Account already registered"


class AccountService:
    """Service for account management business logic."""

    def __init__(
        self,
        session: AsyncSession,
        validator: AccountValidator = default_account_validator,
    ) -> None:
        """Initialize the account service.

        Args:
            session: SQLAlchemy async session.
            validator: Field validator run before any write.
        """
        self.session = session
        self.user_repo = UserRepository(session)
        self.validator = validator

    async def register(
        self,
        account: str | None,
        email: str | None,
        password: str | None,
        role: UserRole = UserRole.USER,
    ) -> UserModel:
        """Create a new account.

        Args:
            account: Login handle.
            email: Email address.
            password: Plaintext password, hashed before storage.
            role: Role of the new account.

        Returns:
            The created user.

        Raises:
            ValidationFailed: For the first invalid field.
            Conflict: If the handle or email is already registered.
        """
        errors = self.validator.validate(account, password, email)
        if errors:
            raise ValidationFailed(errors[0].field, errors[0].message)

        if await self.user_repo.account_exists(account):
            raise Conflict(DUPLICATE_ACCOUNT_MESSAGE, field="account")
        if await self.user_repo.email_exists(email):
            raise Conflict(DUPLICATE_ACCOUNT_MESSAGE, field="email")

        user = UserModel(
            account=account,
            email=email,
            password_hash=hash_password(password),
            role=role.value,
            tokens=[],
            cart_items=[],
        )
        try:
            await self.user_repo.create(user)
            await self.session.commit()
        except IntegrityError as e:
            await self.session.rollback()
            logger.info("Registration lost a uniqueness race", account=account)
            raise Conflict(DUPLICATE_ACCOUNT_MESSAGE) from e

        logger.info("Account registered", user_id=user.id, account=account, role=user.role)
        return user

    async def ensure_admin(self, account: str, email: str, password: str) -> UserModel:
        """Create an administrator, or promote the existing account with this handle.

        The password of an existing account is left untouched.

        Returns:
            The administrator user.
        """
        user = await self.user_repo.get_by_account(account)
        if user is None:
            return await self.register(account, email, password, role=UserRole.ADMIN)

        if not user.is_admin:
            user.role = UserRole.ADMIN.value
            await self.user_repo.save(user)
            await self.session.commit()
            logger.info("Account promoted to administrator", user_id=user.id, account=account)
        return user
