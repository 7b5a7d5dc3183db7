"""Product catalog API routes.

Creating and editing products take multipart form data so that the image
file can be uploaded with the product fields.
"""

from typing import Annotated

from fastapi import APIRouter, Depends, File, Form, Query, UploadFile

from storefront.core.logging import get_logger
from storefront.domain.services import ProductQuery, ProductService
from storefront.infrastructure.api.dependencies import AdminSession, DbSession, ImageStorage
from storefront.infrastructure.api.schemas import (
    ApiResponse,
    ProductPageResponse,
    ProductResponse,
)
from storefront.infrastructure.storage import UploadedImage

logger = get_logger(__name__)

router = APIRouter()


async def _read_upload(image: UploadFile | None) -> UploadedImage | None:
    if image is None:
        return None
    return UploadedImage(
        filename=image.filename or "",
        content_type=image.content_type or "application/octet-stream",
        content=await image.read(),
    )


def product_query(
    search: str | None = Query(None, description="Term matched against name and description"),
    sort_by_camel: str | None = Query(None, alias="sortBy", description="Field to sort by"),
    sort_order_camel: str | None = Query(None, alias="sortOrder", description="asc or desc"),
    items_per_page_camel: int | None = Query(None, alias="itemsPerPage", description="Page size"),
    sort_by: str = Query("created_at"),
    sort_order: str = Query("desc"),
    page: int = Query(1, description="1-based page number"),
    items_per_page: int = Query(10),
) -> ProductQuery:
    """Build the search query from the request parameters.

    The camelCase names (sortBy, sortOrder, itemsPerPage) take precedence
    over their snake_case equivalents when both are given.
    """
    return ProductQuery(
        search=search,
        sort_by=sort_by_camel or sort_by,
        sort_order=sort_order_camel or sort_order,
        page=page,
        items_per_page=(
            items_per_page_camel if items_per_page_camel is not None else items_per_page
        ),
    )


SearchQuery = Annotated[ProductQuery, Depends(product_query)]


async def _search(
    session: DbSession,
    query: ProductQuery,
    include_unlisted: bool,
) -> ApiResponse[ProductPageResponse]:
    products, total = await ProductService(session).search(
        query, include_unlisted=include_unlisted
    )
    return ApiResponse[ProductPageResponse](
        result=ProductPageResponse(
            data=[ProductResponse.model_validate(product) for product in products],
            total=total,
        )
    )


@router.post(
    "",
    response_model=ApiResponse[ProductResponse],
    responses={
        400: {"description": "Validation error"},
        401: {"description": "Invalid or expired session"},
        403: {"description": "Administrator required"},
    },
)
async def create_product(
    context: AdminSession,
    session: DbSession,
    storage: ImageStorage,
    name: str | None = Form(None),
    description: str | None = Form(None),
    price: float | None = Form(None),
    sell: bool | None = Form(None),
    image: UploadFile | None = File(None, description="Product image"),
) -> ApiResponse[ProductResponse]:
    """Create a product with its image."""
    product = await ProductService(session, storage=storage).create(
        {"name": name, "description": description, "price": price, "sell": sell},
        await _read_upload(image),
    )
    return ApiResponse[ProductResponse](
        message="Product created",
        result=ProductResponse.model_validate(product),
    )


@router.get("", response_model=ApiResponse[ProductPageResponse])
async def search_products(session: DbSession, query: SearchQuery) -> ApiResponse[ProductPageResponse]:
    """Search products that are for sale."""
    return await _search(session, query, include_unlisted=False)


@router.get(
    "/all",
    response_model=ApiResponse[ProductPageResponse],
    responses={
        401: {"description": "Invalid or expired session"},
        403: {"description": "Administrator required"},
    },
)
async def search_all_products(
    context: AdminSession,
    session: DbSession,
    query: SearchQuery,
) -> ApiResponse[ProductPageResponse]:
    """Search all products, including those not for sale."""
    return await _search(session, query, include_unlisted=True)


@router.get(
    "/{product_id}",
    response_model=ApiResponse[ProductResponse],
    responses={
        400: {"description": "Invalid product ID"},
        404: {"description": "Product not found"},
    },
)
async def get_product(product_id: str, session: DbSession) -> ApiResponse[ProductResponse]:
    """Get a single product."""
    product = await ProductService(session).get(product_id)
    return ApiResponse[ProductResponse](result=ProductResponse.model_validate(product))


@router.patch(
    "/{product_id}",
    response_model=ApiResponse[ProductResponse],
    responses={
        400: {"description": "Invalid product ID or validation error"},
        401: {"description": "Invalid or expired session"},
        403: {"description": "Administrator required"},
        404: {"description": "Product not found"},
    },
)
async def edit_product(
    product_id: str,
    context: AdminSession,
    session: DbSession,
    storage: ImageStorage,
    name: str | None = Form(None),
    description: str | None = Form(None),
    price: float | None = Form(None),
    sell: bool | None = Form(None),
    image: UploadFile | None = File(None, description="Replacement image"),
) -> ApiResponse[ProductResponse]:
    """Edit the supplied fields of a product.

    Omitted fields, including the image, are left unchanged.
    """
    product = await ProductService(session, storage=storage).edit(
        product_id,
        {"name": name, "description": description, "price": price, "sell": sell},
        await _read_upload(image),
    )
    return ApiResponse[ProductResponse](
        message="Product updated",
        result=ProductResponse.model_validate(product),
    )
