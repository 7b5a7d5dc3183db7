"""Integration tests for the /order endpoints."""

import pytest
from httpx import AsyncClient


async def _add_to_cart(client: AsyncClient, headers, product, quantity: int) -> None:
    response = await client.patch(
        "/user/cart", json={"product": product.id, "quantity": quantity}, headers=headers
    )
    assert response.status_code == 200


@pytest.mark.asyncio
async def test_empty_cart(client: AsyncClient, user_headers):
    response = await client.post("/order", headers=user_headers)

    assert response.status_code == 400
    assert response.json() == {"success": False, "message": "Cart is empty"}


@pytest.mark.asyncio
async def test_place_order(client: AsyncClient, user_headers, make_product):
    mug = await make_product(name="Mug")
    lamp = await make_product(name="Lamp")
    await _add_to_cart(client, user_headers, mug, 2)
    await _add_to_cart(client, user_headers, lamp, 1)

    response = await client.post("/order", headers=user_headers)

    assert response.status_code == 200
    result = response.json()["result"]
    assert [(i["product_id"], i["quantity"]) for i in result["items"]] == [
        (mug.id, 2),
        (lamp.id, 1),
    ]
    assert (await client.get("/user/cart", headers=user_headers)).json()["result"] == []
    profile = (await client.get("/user/profile", headers=user_headers)).json()["result"]
    assert profile["cart"] == 0


@pytest.mark.asyncio
async def test_unlisted_product_blocks_order(client: AsyncClient, db_session, user_headers, make_product):
    product = await make_product()
    await _add_to_cart(client, user_headers, product, 1)
    product.sell = False
    await db_session.commit()

    response = await client.post("/order", headers=user_headers)

    assert response.status_code == 400
    assert response.json()["message"] == "Cart contains unlisted product"
    cart = (await client.get("/user/cart", headers=user_headers)).json()["result"]
    assert [line["product"]["id"] for line in cart] == [product.id]


@pytest.mark.asyncio
async def test_list_own_orders(client: AsyncClient, user_headers, admin_headers, make_product):
    product = await make_product(name="Mug")
    await _add_to_cart(client, user_headers, product, 2)
    await client.post("/order", headers=user_headers)
    await _add_to_cart(client, admin_headers, product, 1)
    await client.post("/order", headers=admin_headers)

    response = await client.get("/order", headers=user_headers)

    assert response.status_code == 200
    orders = response.json()["result"]
    assert len(orders) == 1
    assert orders[0]["items"][0]["quantity"] == 2
    assert orders[0]["items"][0]["product"]["name"] == "Mug"


@pytest.mark.asyncio
async def test_list_all_orders(client: AsyncClient, user_headers, admin_headers, make_product):
    product = await make_product()
    await _add_to_cart(client, user_headers, product, 1)
    await client.post("/order", headers=user_headers)

    response = await client.get("/order/all", headers=admin_headers)

    assert response.status_code == 200
    orders = response.json()["result"]
    assert [order["user"]["account"] for order in orders] == ["alice01"]
    assert orders[0]["items"][0]["product"]["id"] == product.id


@pytest.mark.asyncio
async def test_list_all_requires_admin(client: AsyncClient, user_headers):
    response = await client.get("/order/all", headers=user_headers)

    assert response.status_code == 403


@pytest.mark.asyncio
async def test_orders_require_session(client: AsyncClient):
    assert (await client.get("/order")).status_code == 401
    assert (await client.post("/order")).status_code == 401
