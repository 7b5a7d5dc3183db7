"""Product repository for database operations."""

from sqlalchemy import func, or_, select
from sqlalchemy.ext.asyncio import AsyncSession

from storefront.infrastructure.persistence.models import ProductModel

SORTABLE_COLUMNS = {
    "name": ProductModel.name,
    "price": ProductModel.price,
    "sell": ProductModel.sell,
    "created_at": ProductModel.created_at,
    "updated_at": ProductModel.updated_at,
    "createdAt": ProductModel.created_at,
    "updatedAt": ProductModel.updated_at,
}


class ProductRepository:
    """Repository for product database operations."""

    def __init__(self, session: AsyncSession) -> None:
        """Initialize the repository.

        Args:
            session: SQLAlchemy async session.
        """
        self.session = session

    async def create(self, product: ProductModel) -> ProductModel:
        """Create a new product."""
        self.session.add(product)
        await self.session.flush()
        return product

    async def get_by_id(self, product_id: str) -> ProductModel | None:
        """Get a product by ID."""
        result = await self.session.execute(
            select(ProductModel).where(ProductModel.id == product_id)
        )
        return result.scalar_one_or_none()

    async def update(self, product: ProductModel) -> ProductModel:
        """Flush pending changes to a product."""
        await self.session.flush()
        return product

    async def search_paginated(
        self,
        page: int = 1,
        page_size: int = 10,
        sort_by: str = "created_at",
        sort_order: str = "desc",
        search_query: str | None = None,
        only_for_sale: bool = True,
    ) -> tuple[list[ProductModel], int]:
        """Get a page of products with optional search and sorting.

        Args:
            page: Page number (1-indexed).
            page_size: Number of items per page.
            sort_by: Column to sort by (name, price, sell, created_at, updated_at,
                or createdAt and updatedAt).
            sort_order: Sort order (asc or desc).
            search_query: Optional case-insensitive substring of name or description.
            only_for_sale: Restrict to listed products.

        Returns:
            Tuple of (list of products, total count matching the filter).
        """
        query = select(ProductModel)

        if only_for_sale:
            query = query.where(ProductModel.sell.is_(True))

        if search_query:
            query = query.where(
                or_(
                    ProductModel.name.icontains(search_query, autoescape=True),
                    ProductModel.description.icontains(search_query, autoescape=True),
                )
            )

        count_query = select(func.count()).select_from(query.subquery())
        total = (await self.session.execute(count_query)).scalar_one()

        sort_column = SORTABLE_COLUMNS.get(sort_by, ProductModel.created_at)
        if sort_order == "asc":
            query = query.order_by(sort_column.asc(), ProductModel.id.asc())
        else:
            query = query.order_by(sort_column.desc(), ProductModel.id.desc())

        offset = (page - 1) * page_size
        query = query.offset(offset).limit(page_size)

        result = await self.session.execute(query)
        return list(result.scalars().all()), total
