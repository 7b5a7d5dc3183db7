"""Product catalog service."""

from dataclasses import dataclass
from typing import Any

from sqlalchemy.ext.asyncio import AsyncSession

from storefront.core.exceptions import ProductNotFound, ValidationFailed
from storefront.core.logging import get_logger
from storefront.domain.services.identifiers import require_valid_id
from storefront.domain.services.product_validator import (
    ProductValidator,
    default_product_validator,
)
from storefront.infrastructure.persistence.models import ProductModel
from storefront.infrastructure.persistence.repositories import ProductRepository
from storefront.infrastructure.storage import LocalImageStorage, UploadedImage

logger = get_logger(__name__)

ASCENDING = {"asc", "ascending", "1"}
DEFAULT_PAGE_SIZE = 10


@dataclass(frozen=True)
class ProductQuery:
    """Search, sort and pagination parameters for catalog listings."""

    search: str | None = None
    sort_by: str = "created_at"
    sort_order: str = "desc"
    page: int = 1
    items_per_page: int = DEFAULT_PAGE_SIZE


class ProductService:
    """Service for catalog management and search."""

    def __init__(
        self,
        session: AsyncSession,
        storage: LocalImageStorage | None = None,
        validator: ProductValidator = default_product_validator,
    ) -> None:
        self.session = session
        self.product_repo = ProductRepository(session)
        self.storage = storage or LocalImageStorage()
        self.validator = validator

    async def create(self, data: dict[str, Any], image: UploadedImage | None) -> ProductModel:
        """Create a product.

        Args:
            data: name, description, price and sell.
            image: The uploaded product image (required).

        Raises:
            ValidationFailed: For the first invalid field.
        """
        self._validate({**data, "image": image.filename if image else None}, partial=False)
        image_path = self.storage.save(image)

        product = ProductModel(
            name=data["name"],
            description=data["description"],
            price=data["price"],
            sell=data["sell"],
            image=image_path,
        )
        try:
            await self.product_repo.create(product)
            await self.session.commit()
        except Exception:
            await self.session.rollback()
            self.storage.delete(image_path)
            raise

        logger.info("Product created", product_id=product.id, sell=product.sell)
        return product

    async def edit(
        self,
        product_id: str,
        data: dict[str, Any],
        image: UploadedImage | None = None,
    ) -> ProductModel:
        """Update the supplied fields of a product.

        Omitted fields, including the image, keep their current value. A
        replaced image file is removed once the change is committed.

        Raises:
            InvalidId: If product_id is not a valid ID.
            ProductNotFound: If the product does not exist.
            ValidationFailed: For the first invalid field.
        """
        product_id = require_valid_id(product_id)
        changes = {key: value for key, value in data.items() if value is not None}
        if image is not None:
            changes["image"] = image.filename
        self._validate(changes, partial=True)

        product = await self.product_repo.get_by_id(product_id)
        if product is None:
            raise ProductNotFound()

        previous_image = product.image
        if image is not None:
            changes["image"] = self.storage.save(image)
        for field, value in changes.items():
            setattr(product, field, value)

        try:
            await self.product_repo.update(product)
            await self.session.commit()
        except Exception:
            await self.session.rollback()
            if image is not None:
                self.storage.delete(changes["image"])
            raise

        if image is not None and previous_image != changes["image"]:
            self.storage.delete(previous_image)

        logger.info("Product updated", product_id=product.id, fields=sorted(changes))
        return product

    async def get(self, product_id: str) -> ProductModel:
        """Get one product, listed or not.

        Raises:
            InvalidId: If product_id is not a valid ID.
            ProductNotFound: If the product does not exist.
        """
        product = await self.product_repo.get_by_id(require_valid_id(product_id))
        if product is None:
            raise ProductNotFound()
        return product

    async def search(
        self, query: ProductQuery, include_unlisted: bool = False
    ) -> tuple[list[ProductModel], int]:
        """Search the catalog.

        Args:
            query: Search, sort and pagination parameters.
            include_unlisted: Include products that are not for sale.

        Returns:
            Tuple of (page of products, number of products matching the filter).
        """
        page = max(query.page, 1)
        page_size = query.items_per_page if query.items_per_page > 0 else DEFAULT_PAGE_SIZE
        sort_order = "asc" if str(query.sort_order).lower() in ASCENDING else "desc"

        return await self.product_repo.search_paginated(
            page=page,
            page_size=page_size,
            sort_by=query.sort_by,
            sort_order=sort_order,
            search_query=query.search or None,
            only_for_sale=not include_unlisted,
        )

    def _validate(self, data: dict[str, Any], partial: bool) -> None:
        errors = self.validator.validate(data, partial=partial)
        if errors:
            raise ValidationFailed(errors[0].field, errors[0].message)
