"""End-to-end tests against a local aiohttp storefront."""

from __future__ import annotations

from collections.abc import AsyncIterator
from typing import Any

import pytest
import pytest_asyncio
from aiohttp import web
from aiohttp.test_utils import TestServer as _TestServer

from pycart.client import CartClient
from pycart.config import CartConfig
from pycart.exceptions import CartApiError, CartError, CartTransportError
from pycart.state.outcome import CartFailure
from pycart.state.store import CartStore
from pycart.storage import MemoryStorage

_STOCK: dict[int, Any] = {
    1: {"id": 1, "amount": 3},
    2: {"id": 2, "amount": 5},
    5: {"id": 5, "amount": "lots"},
    6: {"id": 2, "amount": 5},
    9: {"id": 9, "amount": 5},
}
_PRODUCTS: dict[int, Any] = {
    1: {"id": 1, "title": "Tênis de Caminhada", "price": 179.9, "image": "https://img/1.jpg"},
    2: {"id": 2, "title": "Tênis VR", "price": 139.9, "image": "https://img/2.jpg"},
}


async def _stock(request: web.Request) -> web.Response:
    product_id = int(request.match_info["product_id"])
    if product_id == 7:
        return web.Response(text="<html>oops</html>", content_type="text/html")
    if product_id == 8:
        return web.Response(body=b'{"id":8,"amount":3,"x":"\xff\xfe"}', content_type="application/json")
    if product_id not in _STOCK:
        return web.json_response({}, status=404)
    return web.json_response(_STOCK[product_id])


async def _product(request: web.Request) -> web.Response:
    product_id = int(request.match_info["product_id"])
    if product_id == 9:
        return web.Response(text='{"id": 9, "title": "Glow", "price": Infinity}', content_type="application/json")
    if product_id not in _PRODUCTS:
        return web.json_response({}, status=404)
    return web.json_response(_PRODUCTS[product_id])


@pytest_asyncio.fixture
async def base_url() -> AsyncIterator[str]:
    app = web.Application()
    app.router.add_get("/stock/{product_id}", _stock)
    app.router.add_get("/products/{product_id}", _product)
    server = _TestServer(app)
    await server.start_server()
    try:
        yield str(server.make_url("/")).rstrip("/")
    finally:
        await server.close()


@pytest.mark.asyncio
async def test_get_stock_and_product(base_url: str) -> None:
    async with CartClient(CartConfig(base_url=base_url)) as client:
        stock = await client.get_stock(1)
        product = await client.get_product(2)

    assert stock.amount == 3
    assert product.title == "Tênis VR"
    assert product.price == 139.9


@pytest.mark.asyncio
async def test_missing_product_is_transport_error(base_url: str) -> None:
    async with CartClient(CartConfig(base_url=base_url)) as client:
        with pytest.raises(CartTransportError) as exc_info:
            await client.get_stock(42)

    assert exc_info.value.status_code == 404
    assert exc_info.value.endpoint == "/stock/42"


@pytest.mark.asyncio
async def test_non_json_body_is_transport_error(base_url: str) -> None:
    async with CartClient(CartConfig(base_url=base_url)) as client:
        with pytest.raises(CartTransportError, match="Invalid JSON"):
            await client.get_stock(7)


@pytest.mark.asyncio
async def test_invalid_payload_is_api_error(base_url: str) -> None:
    async with CartClient(CartConfig(base_url=base_url)) as client:
        with pytest.raises(CartApiError):
            await client.get_stock(5)


@pytest.mark.asyncio
async def test_unreachable_server_is_transport_error() -> None:
    async with CartClient(CartConfig(base_url="http://127.0.0.1:9", request_timeout=2.0)) as client:
        with pytest.raises(CartTransportError):
            await client.get_stock(1)


@pytest.mark.asyncio
async def test_client_requires_context_manager() -> None:
    client = CartClient(CartConfig())
    with pytest.raises(CartError, match="not initialized"):
        await client.get_stock(1)


@pytest.mark.asyncio
async def test_store_against_live_api(base_url: str) -> None:
    config = CartConfig(base_url=base_url)
    storage = MemoryStorage()

    async with CartClient(config) as client:
        store = CartStore.from_config(config, client, storage=storage)
        assert (await store.add_product(1)).ok
        assert (await store.add_product(1)).ok
        assert (await store.update_product_amount(1, 3)).ok
        over = await store.add_product(1)
        missing = await store.add_product(42)

    assert over.failure is CartFailure.INSUFFICIENT_STOCK
    assert missing.failure is CartFailure.LOOKUP_FAILED
    assert [(item.id, item.amount) for item in store.cart] == [(1, 3)]

    # A fresh store over the same storage sees the persisted cart.
    reloaded = CartStore.from_config(config, CartClient(config), storage=storage)
    assert reloaded.cart == store.cart


@pytest.mark.asyncio
async def test_body_not_utf8_is_transport_error(base_url: str) -> None:
    async with CartClient(CartConfig(base_url=base_url)) as client:
        with pytest.raises(CartTransportError, match="Invalid JSON"):
            await client.get_stock(8)


@pytest.mark.asyncio
async def test_infinite_price_is_api_error(base_url: str) -> None:
    async with CartClient(CartConfig(base_url=base_url)) as client:
        with pytest.raises(CartApiError):
            await client.get_product(9)


@pytest.mark.asyncio
async def test_store_reports_malformed_responses_as_lookup_failures(base_url: str) -> None:
    config = CartConfig(base_url=base_url)
    storage = MemoryStorage()

    async with CartClient(config) as client:
        store = CartStore.from_config(config, client, storage=storage)
        undecodable = await store.add_product(8)
        wrong_id = await store.add_product(6)
        infinite_price = await store.add_product(9)
        update = await store.update_product_amount(8, 1)

    for outcome in (undecodable, wrong_id, infinite_price, update):
        assert outcome.failure is CartFailure.LOOKUP_FAILED
    assert store.cart == ()
    assert storage.read(config.storage_key) is None
