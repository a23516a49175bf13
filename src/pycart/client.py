"""High-level async client for the storefront stock and catalog API."""

from __future__ import annotations

import logging
from typing import Any

import aiohttp

from pycart._api.products import fetch_product
from pycart._api.stock import fetch_stock
from pycart._transport import HttpTransport
from pycart.config import CartConfig
from pycart.exceptions import CartError
from pycart.models.product import Product, Stock

_logger = logging.getLogger(__name__)


class CartClient:
    """Async client for the storefront API.

    Implements both the stock service and the product catalog used by
    :class:`~pycart.state.store.CartStore`.

    Usage::

        async with CartClient(config) as client:
            stock = await client.get_stock(1)
            product = await client.get_product(1)
    """

    def __init__(
        self,
        config: CartConfig,
        *,
        session: aiohttp.ClientSession | None = None,
    ) -> None:
        self._config = config
        self._external_session = session is not None
        self._http_session = session
        self._transport: HttpTransport | None = None

    # ------------------------------------------------------------------
    # Context manager lifecycle
    # ------------------------------------------------------------------

    async def __aenter__(self) -> CartClient:
        if self._http_session is None:
            self._http_session = aiohttp.ClientSession()
        self._transport = HttpTransport(self._config, self._http_session)
        return self

    async def __aexit__(self, *exc: Any) -> None:
        if not self._external_session and self._http_session is not None:
            await self._http_session.close()
            self._http_session = None
        self._transport = None

    # ------------------------------------------------------------------
    # Internal helpers
    # ------------------------------------------------------------------

    def _require_transport(self) -> HttpTransport:
        if self._transport is None:
            raise CartError("Client not initialized. Use 'async with CartClient(...) as client:'")
        return self._transport

    # ------------------------------------------------------------------
    # Read endpoints
    # ------------------------------------------------------------------

    async def get_stock(self, product_id: int) -> Stock:
        """Fetch how many units of *product_id* are available."""
        stock = await fetch_stock(self._require_transport(), product_id)
        _logger.debug("Stock for product %s: %s", product_id, stock.amount)
        return stock

    async def get_product(self, product_id: int) -> Product:
        """Fetch catalog metadata for *product_id*."""
        return await fetch_product(self._require_transport(), product_id)
