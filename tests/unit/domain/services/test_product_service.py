"""Unit tests for ProductService."""

from pathlib import Path

import pytest
from sqlalchemy.exc import SQLAlchemyError

from storefront.core.config import Settings
from storefront.core.exceptions import InvalidId, ProductNotFound, ValidationFailed
from storefront.domain.services import ProductQuery, ProductService
from storefront.infrastructure.storage import LocalImageStorage, UploadedImage

PRODUCT_DATA = {
    "name": "Widget",
    "description": "A useful widget",
    "price": 9.5,
    "sell": True,
}


async def _failing_commit():
    raise SQLAlchemyError("commit failed")


@pytest.fixture
def storage(tmp_path):
    return LocalImageStorage(Settings(storage_path=str(tmp_path)))


@pytest.fixture
def image():
    return UploadedImage(filename="widget.PNG", content_type="image/png", content=b"\x89PNG data")


@pytest.fixture
def service(db_session, storage):
    return ProductService(db_session, storage=storage)


class TestCreate:
    """Tests for ProductService.create."""

    @pytest.mark.asyncio
    async def test_create_stores_image(self, service, storage, image):
        product = await service.create(PRODUCT_DATA, image)

        assert product.id is not None
        assert product.name == "Widget"
        assert product.image.endswith(".png")
        assert (Path(storage.storage_path) / product.image).read_bytes() == b"\x89PNG data"

    @pytest.mark.asyncio
    async def test_image_is_required(self, service):
        with pytest.raises(ValidationFailed) as exc_info:
            await service.create(PRODUCT_DATA, None)

        assert exc_info.value.field == "image"

    @pytest.mark.asyncio
    async def test_first_invalid_field_is_reported(self, service, image):
        with pytest.raises(ValidationFailed) as exc_info:
            await service.create({**PRODUCT_DATA, "name": "", "price": -1}, image)

        assert exc_info.value.field == "name"

    @pytest.mark.asyncio
    async def test_disallowed_image_type(self, service):
        text_file = UploadedImage(filename="notes.txt", content_type="text/plain", content=b"hi")

        with pytest.raises(ValidationFailed) as exc_info:
            await service.create(PRODUCT_DATA, text_file)

        assert exc_info.value.field == "image"

    @pytest.mark.asyncio
    async def test_failed_commit_removes_stored_image(
        self, service, storage, image, db_session, monkeypatch
    ):
        monkeypatch.setattr(db_session, "commit", _failing_commit)

        with pytest.raises(SQLAlchemyError):
            await service.create(PRODUCT_DATA, image)

        assert list(Path(storage.storage_path).iterdir()) == []


class TestEdit:
    """Tests for ProductService.edit."""

    @pytest.mark.asyncio
    async def test_only_supplied_fields_change(self, service, make_product):
        product = await make_product(name="Old", price=1.0)

        edited = await service.edit(product.id, {"name": None, "price": 2.5, "sell": None})

        assert edited.name == "Old"
        assert edited.price == 2.5
        assert edited.image == "widget.png"

    @pytest.mark.asyncio
    async def test_delist(self, service, make_product):
        product = await make_product()

        edited = await service.edit(product.id, {"sell": False})

        assert edited.sell is False

    @pytest.mark.asyncio
    async def test_replace_image(self, service, make_product, image):
        product = await make_product()

        edited = await service.edit(product.id, {}, image)

        assert edited.image != "widget.png"
        assert edited.image.endswith(".png")

    @pytest.mark.asyncio
    async def test_replaced_image_file_is_removed(self, service, storage, image):
        product = await service.create(PRODUCT_DATA, image)
        old_file = Path(storage.storage_path) / product.image

        edited = await service.edit(product.id, {}, image)

        assert not old_file.exists()
        assert (Path(storage.storage_path) / edited.image).exists()

    @pytest.mark.asyncio
    async def test_failed_commit_removes_new_image(
        self, service, storage, image, make_product, db_session, monkeypatch
    ):
        product = await make_product()
        monkeypatch.setattr(db_session, "commit", _failing_commit)

        with pytest.raises(SQLAlchemyError):
            await service.edit(product.id, {}, image)

        assert list(Path(storage.storage_path).iterdir()) == []

    @pytest.mark.asyncio
    async def test_invalid_value(self, service, make_product):
        product = await make_product()

        with pytest.raises(ValidationFailed) as exc_info:
            await service.edit(product.id, {"price": -3})

        assert exc_info.value.field == "price"

    @pytest.mark.asyncio
    async def test_unknown_product(self, service):
        with pytest.raises(ProductNotFound):
            await service.edit("00000000-0000-0000-0000-000000000000", {"price": 1})

    @pytest.mark.asyncio
    async def test_invalid_id(self, service):
        with pytest.raises(InvalidId):
            await service.edit("123", {"price": 1})


class TestGet:
    """Tests for ProductService.get."""

    @pytest.mark.asyncio
    async def test_get_unlisted_product(self, service, make_product):
        product = await make_product(sell=False)

        assert (await service.get(product.id)).id == product.id

    @pytest.mark.asyncio
    async def test_get_unknown_product(self, service):
        with pytest.raises(ProductNotFound):
            await service.get("00000000-0000-0000-0000-000000000000")


class TestSearch:
    """Tests for ProductService.search."""

    @pytest.mark.asyncio
    async def test_public_search_excludes_unlisted(self, service, make_product):
        listed = await make_product(name="Listed")
        await make_product(name="Hidden", sell=False)

        products, total = await service.search(ProductQuery())

        assert [p.id for p in products] == [listed.id]
        assert total == 1

    @pytest.mark.asyncio
    async def test_admin_search_includes_unlisted(self, service, make_product):
        await make_product(name="Listed")
        await make_product(name="Hidden", sell=False)

        products, total = await service.search(ProductQuery(), include_unlisted=True)

        assert sorted(p.name for p in products) == ["Hidden", "Listed"]
        assert total == 2

    @pytest.mark.asyncio
    async def test_total_counts_matching_rows(self, service, make_product):
        await make_product(name="Red chair")
        await make_product(name="Blue chair")
        await make_product(name="Red lamp", sell=False)
        await make_product(name="Table")

        _, total = await service.search(ProductQuery(search="chair"))
        _, admin_total = await service.search(ProductQuery(search="red"), include_unlisted=True)

        assert total == 2
        assert admin_total == 2

    @pytest.mark.asyncio
    async def test_search_matches_description_case_insensitively(self, service, make_product):
        match = await make_product(name="Stool", description="Made of OAK wood")
        await make_product(name="Chair", description="Plastic")

        products, _ = await service.search(ProductQuery(search="oak"))

        assert [p.id for p in products] == [match.id]

    @pytest.mark.asyncio
    async def test_search_term_is_literal(self, service, make_product):
        await make_product(name="Anything")

        products, total = await service.search(ProductQuery(search="%"))

        assert products == []
        assert total == 0

    @pytest.mark.asyncio
    async def test_pagination(self, service, make_product):
        for i in range(25):
            await make_product(name=f"Product {i:02d}")
        names = [f"Product {i:02d}" for i in range(25)]

        pages = []
        for page in (1, 2, 3):
            products, total = await service.search(
                ProductQuery(sort_by="name", sort_order="asc", page=page, items_per_page=10)
            )
            assert total == 25
            pages.append([p.name for p in products])

        assert pages[0] == names[0:10]
        assert pages[1] == names[10:20]
        assert pages[2] == names[20:25]

    @pytest.mark.asyncio
    async def test_sort_by_price_descending(self, service, make_product):
        for price in (5.0, 1.0, 3.0):
            await make_product(name=f"P{price}", price=price)

        products, _ = await service.search(ProductQuery(sort_by="price", sort_order="desc"))

        assert [p.price for p in products] == [5.0, 3.0, 1.0]

    @pytest.mark.asyncio
    async def test_out_of_range_paging_falls_back(self, service, make_product):
        await make_product()

        products, total = await service.search(ProductQuery(page=0, items_per_page=0))

        assert len(products) == 1
        assert total == 1
