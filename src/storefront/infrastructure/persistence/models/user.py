"""SQLAlchemy model for the users table.

A user row is the account document: credentials, role, the ordered list
of live session tokens and the ordered cart line items.
"""

import uuid
from datetime import datetime, timezone

from sqlalchemy import JSON, DateTime, Integer, String
from sqlalchemy.ext.mutable import MutableList
from sqlalchemy.ext.orderinglist import ordering_list
from sqlalchemy.orm import Mapped, mapped_column, relationship

from storefront.domain.entities import UserRole
from storefront.infrastructure.persistence.database import Base


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


class UserModel(Base):
    """SQLAlchemy model for the users table.

    Attributes:
        id: Primary key (UUID string).
        account: Unique login handle (4-20 alphanumeric characters).
        email: Unique email address.
        password_hash: Argon2 hash of the password.
        role: USER or ADMIN.
        tokens: Live session tokens, in issue order. Rotation overwrites
            an entry in place so positions stay stable.
        cart_items: Cart line items, in the order they were added.
        version: Optimistic concurrency counter, bumped on every UPDATE.
    """

    __tablename__ = "users"

    id: Mapped[str] = mapped_column(
        String(36),
        primary_key=True,
        default=lambda: str(uuid.uuid4()),
        comment="User ID (UUID)",
    )
    account: Mapped[str] = mapped_column(
        String(20),
        nullable=False,
        unique=True,
        index=True,
        comment="Login handle",
    )
    email: Mapped[str] = mapped_column(
        String(255),
        nullable=False,
        unique=True,
        index=True,
    )
    password_hash: Mapped[str] = mapped_column(
        String(255),
        nullable=False,
    )
    role: Mapped[str] = mapped_column(
        String(10),
        nullable=False,
        default=UserRole.USER.value,
    )
    tokens: Mapped[list[str]] = mapped_column(
        MutableList.as_mutable(JSON),
        nullable=False,
        default=list,
    )
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=utcnow,
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=utcnow,
    )
    version: Mapped[int] = mapped_column(Integer, nullable=False)

    cart_items: Mapped[list["CartItemModel"]] = relationship(  # noqa: F821
        "CartItemModel",
        back_populates="user",
        order_by="CartItemModel.position",
        collection_class=ordering_list("position"),
        cascade="all, delete-orphan",
        lazy="selectin",
    )
    orders: Mapped[list["OrderModel"]] = relationship(  # noqa: F821
        "OrderModel",
        back_populates="user",
    )

    __mapper_args__ = {"version_id_col": version}

    @property
    def cart_quantity(self) -> int:
        """Sum of quantities across all cart line items."""
        return sum(item.quantity for item in self.cart_items)

    @property
    def is_admin(self) -> bool:
        return self.role == UserRole.ADMIN.value

    def touch(self) -> None:
        """Mark the row modified so the next flush runs a version-checked UPDATE."""
        self.updated_at = utcnow()

    def __repr__(self) -> str:
        return f"<User(id={self.id}, account={self.account}, role={self.role})>"
