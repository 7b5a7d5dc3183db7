"""SQLAlchemy model for cart line items.

Line items are owned by exactly one user and have no identity outside
that user's cart.
"""

from sqlalchemy import CheckConstraint, ForeignKey, Integer, String
from sqlalchemy.orm import Mapped, mapped_column, relationship

from storefront.infrastructure.persistence.database import Base


class CartItemModel(Base):
    """A (product, quantity) pair in a user's cart."""

    __tablename__ = "cart_items"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    user_id: Mapped[str] = mapped_column(
        String(36),
        ForeignKey("users.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    product_id: Mapped[str] = mapped_column(
        String(36),
        ForeignKey("products.id"),
        nullable=False,
    )
    quantity: Mapped[int] = mapped_column(Integer, nullable=False)
    position: Mapped[int] = mapped_column(Integer, nullable=False, default=0)

    user: Mapped["UserModel"] = relationship(  # noqa: F821
        "UserModel",
        back_populates="cart_items",
    )
    product: Mapped["ProductModel"] = relationship(  # noqa: F821
        "ProductModel",
        lazy="selectin",
    )

    __table_args__ = (
        CheckConstraint("quantity >= 1", name="ck_cart_items_quantity_positive"),
    )

    def __repr__(self) -> str:
        return f"<CartItem(product_id={self.product_id}, quantity={self.quantity})>"
