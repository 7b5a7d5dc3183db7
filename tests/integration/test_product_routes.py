"""Integration tests for the /product endpoints."""

import pytest
from httpx import AsyncClient

PNG = ("widget.png", b"\x89PNG image bytes", "image/png")
FORM = {"name": "Widget", "description": "A useful widget", "price": "9.5", "sell": "true"}


class TestCreateProduct:
    """Tests for POST /product."""

    @pytest.mark.asyncio
    async def test_admin_creates_product(self, client: AsyncClient, admin_headers):
        response = await client.post(
            "/product", data=FORM, files={"image": PNG}, headers=admin_headers
        )

        assert response.status_code == 200
        result = response.json()["result"]
        assert result["name"] == "Widget"
        assert result["price"] == 9.5
        assert result["sell"] is True
        assert result["image"].endswith(".png")

    @pytest.mark.asyncio
    async def test_image_required(self, client: AsyncClient, admin_headers):
        response = await client.post("/product", data=FORM, headers=admin_headers)

        assert response.status_code == 400
        assert response.json()["message"] == "Product image is required"

    @pytest.mark.asyncio
    async def test_non_numeric_price(self, client: AsyncClient, admin_headers):
        response = await client.post(
            "/product",
            data={**FORM, "price": "cheap"},
            files={"image": PNG},
            headers=admin_headers,
        )

        assert response.status_code == 400
        assert response.json()["success"] is False

    @pytest.mark.asyncio
    async def test_non_image_upload(self, client: AsyncClient, admin_headers):
        response = await client.post(
            "/product",
            data=FORM,
            files={"image": ("notes.txt", b"hello", "text/plain")},
            headers=admin_headers,
        )

        assert response.status_code == 400

    @pytest.mark.asyncio
    async def test_requires_admin(self, client: AsyncClient, user_headers):
        response = await client.post("/product", data=FORM, files={"image": PNG}, headers=user_headers)

        assert response.status_code == 403
        assert response.json() == {"success": False, "message": "Permission denied"}

    @pytest.mark.asyncio
    async def test_requires_session(self, client: AsyncClient):
        response = await client.post("/product", data=FORM, files={"image": PNG})

        assert response.status_code == 401


class TestSearchProducts:
    """Tests for GET /product and GET /product/all."""

    @pytest.mark.asyncio
    async def test_public_search_hides_unlisted(self, client: AsyncClient, make_product):
        listed = await make_product(name="Listed")
        await make_product(name="Hidden", sell=False)

        response = await client.get("/product")

        assert response.status_code == 200
        result = response.json()["result"]
        assert [p["id"] for p in result["data"]] == [listed.id]
        assert result["total"] == 1

    @pytest.mark.asyncio
    async def test_admin_search_shows_everything(self, client: AsyncClient, admin_headers, make_product):
        await make_product(name="Listed")
        await make_product(name="Hidden", sell=False)

        response = await client.get("/product/all", headers=admin_headers)

        assert response.status_code == 200
        assert response.json()["result"]["total"] == 2

    @pytest.mark.asyncio
    async def test_admin_search_requires_admin(self, client: AsyncClient, user_headers):
        response = await client.get("/product/all", headers=user_headers)

        assert response.status_code == 403

    @pytest.mark.asyncio
    async def test_query_parameters(self, client: AsyncClient, make_product):
        for i in range(12):
            await make_product(name=f"Chair {i:02d}")
        await make_product(name="Table")

        response = await client.get(
            "/product",
            params={
                "search": "chair",
                "sort_by": "name",
                "sort_order": "asc",
                "page": 2,
                "items_per_page": 5,
            },
        )

        result = response.json()["result"]
        assert [p["name"] for p in result["data"]] == [f"Chair {i:02d}" for i in range(5, 10)]
        assert result["total"] == 12

    @pytest.mark.asyncio
    async def test_camel_case_query_parameters(self, client: AsyncClient, make_product):
        for i in range(12):
            await make_product(name=f"Chair {i:02d}")

        response = await client.get(
            "/product",
            params={"sortBy": "name", "sortOrder": "asc", "itemsPerPage": 5, "page": 1},
        )

        result = response.json()["result"]
        assert [p["name"] for p in result["data"]] == [f"Chair {i:02d}" for i in range(5)]
        assert result["total"] == 12

    @pytest.mark.asyncio
    async def test_sort_by_created_at_camel_case(self, client: AsyncClient, make_product):
        for i in range(3):
            await make_product(name=f"Chair {i}")

        camel = await client.get("/product", params={"sortBy": "createdAt", "sortOrder": "asc"})
        snake = await client.get("/product", params={"sort_by": "created_at", "sort_order": "asc"})

        assert camel.json()["result"]["data"] == snake.json()["result"]["data"]
        assert len(camel.json()["result"]["data"]) == 3


class TestGetProduct:
    """Tests for GET /product/{id}."""

    @pytest.mark.asyncio
    async def test_get_product(self, client: AsyncClient, make_product):
        product = await make_product(name="Lamp")

        response = await client.get(f"/product/{product.id}")

        assert response.status_code == 200
        assert response.json()["result"]["name"] == "Lamp"

    @pytest.mark.asyncio
    async def test_invalid_id(self, client: AsyncClient):
        response = await client.get("/product/not-an-id")

        assert response.status_code == 400
        assert response.json()["message"] == "Invalid product ID"

    @pytest.mark.asyncio
    async def test_unknown_product(self, client: AsyncClient):
        response = await client.get("/product/00000000-0000-0000-0000-000000000000")

        assert response.status_code == 404
        assert response.json() == {"success": False, "message": "Product not found"}


class TestEditProduct:
    """Tests for PATCH /product/{id}."""

    @pytest.mark.asyncio
    async def test_partial_edit(self, client: AsyncClient, admin_headers, make_product):
        product = await make_product(name="Old name", price=1.0)

        response = await client.patch(
            f"/product/{product.id}", data={"price": "2.5", "sell": "false"}, headers=admin_headers
        )

        assert response.status_code == 200
        result = response.json()["result"]
        assert result["name"] == "Old name"
        assert result["price"] == 2.5
        assert result["sell"] is False

    @pytest.mark.asyncio
    async def test_edit_replaces_image(self, client: AsyncClient, admin_headers, make_product):
        product = await make_product()

        response = await client.patch(
            f"/product/{product.id}", files={"image": PNG}, headers=admin_headers
        )

        assert response.status_code == 200
        assert response.json()["result"]["image"] != "widget.png"

    @pytest.mark.asyncio
    async def test_edit_invalid_value(self, client: AsyncClient, admin_headers, make_product):
        product = await make_product()

        response = await client.patch(
            f"/product/{product.id}", data={"price": "-1"}, headers=admin_headers
        )

        assert response.status_code == 400
        assert response.json()["message"] == "Product price cannot be negative"

    @pytest.mark.asyncio
    async def test_edit_unknown_product(self, client: AsyncClient, admin_headers):
        response = await client.patch(
            "/product/00000000-0000-0000-0000-000000000000",
            data={"price": "3"},
            headers=admin_headers,
        )

        assert response.status_code == 404

    @pytest.mark.asyncio
    async def test_edit_requires_admin(self, client: AsyncClient, user_headers, make_product):
        product = await make_product()

        response = await client.patch(
            f"/product/{product.id}", data={"price": "3"}, headers=user_headers
        )

        assert response.status_code == 403
