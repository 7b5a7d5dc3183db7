"""SQLAlchemy model for the products table."""

import uuid
from datetime import datetime

from sqlalchemy import Boolean, DateTime, Float, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from storefront.infrastructure.persistence.database import Base
from storefront.infrastructure.persistence.models.user import utcnow


class ProductModel(Base):
    """SQLAlchemy model for the products table.

    Attributes:
        id: Primary key (UUID string).
        name: Display name.
        description: Free-text description, searched together with the name.
        price: Unit price, never negative.
        image: Stored image path relative to the storage root.
        sell: Whether the product is listed and purchasable.
    """

    __tablename__ = "products"

    id: Mapped[str] = mapped_column(
        String(36),
        primary_key=True,
        default=lambda: str(uuid.uuid4()),
    )
    name: Mapped[str] = mapped_column(String(255), nullable=False)
    description: Mapped[str] = mapped_column(Text, nullable=False)
    price: Mapped[float] = mapped_column(Float, nullable=False)
    image: Mapped[str] = mapped_column(String(512), nullable=False)
    sell: Mapped[bool] = mapped_column(Boolean, nullable=False, default=True, index=True)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=utcnow,
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=utcnow,
        onupdate=utcnow,
    )

    def __repr__(self) -> str:
        return f"<Product(id={self.id}, name={self.name}, sell={self.sell})>"
