"""Cart store.

This is the only component allowed to mutate the cart. Every successful
mutation is written to persistent storage before the operation returns.
"""

from __future__ import annotations

import asyncio
import contextlib
import logging
from collections.abc import AsyncIterator, Callable, Sequence
from typing import Protocol

from pycart._constants import STORAGE_KEY
from pycart.config import CartConfig
from pycart.exceptions import CartError, CartStorageError
from pycart.models.product import CartItem, Product, Stock
from pycart.state.outcome import CartFailure, CartOperation, CartOutcome
from pycart.state.policy import find_index, has_stock, next_amount
from pycart.state.snapshot import dump_cart, load_cart
from pycart.storage import PersistentStore, storage_for_config

_logger = logging.getLogger(__name__)

CartListener = Callable[[tuple[CartItem, ...]], None]


class StockService(Protocol):
    async def get_stock(self, product_id: int) -> Stock:
        ...


class ProductCatalog(Protocol):
    async def get_product(self, product_id: int) -> Product:
        ...


class StorefrontService(StockService, ProductCatalog, Protocol):
    """A single backend answering both stock and catalog lookups."""


class CartStore:
    """Ordered, persisted shopping cart validated against remote stock.

    Operations suspend only while a stock or catalog lookup is pending.
    The cart is re-read once the last lookup resolves, and mutation,
    persistence and listener notification then run without suspending.
    """

    def __init__(
        self,
        *,
        stock: StockService,
        catalog: ProductCatalog,
        storage: PersistentStore,
        storage_key: str = STORAGE_KEY,
        serialize_operations: bool = False,
    ) -> None:
        self._stock = stock
        self._catalog = catalog
        self._storage = storage
        self._storage_key = storage_key
        self._lock: asyncio.Lock | None = asyncio.Lock() if serialize_operations else None
        self._listeners: list[CartListener] = []
        self._items: tuple[CartItem, ...] = load_cart(storage.read(storage_key))
        _logger.debug("Loaded cart with %d item(s)", len(self._items))

    @classmethod
    def from_config(
        cls,
        config: CartConfig,
        service: StorefrontService,
        *,
        storage: PersistentStore | None = None,
    ) -> CartStore:
        """Build a store whose stock and catalog lookups go through *service*.

        *service* is usually a :class:`~pycart.client.CartClient`.
        """
        return cls(
            stock=service,
            catalog=service,
            storage=storage if storage is not None else storage_for_config(config.storage_path),
            storage_key=config.storage_key,
            serialize_operations=config.serialize_operations,
        )

    # ------------------------------------------------------------------
    # Read access
    # ------------------------------------------------------------------

    @property
    def cart(self) -> tuple[CartItem, ...]:
        """Current cart contents, in insertion order."""
        return self._items

    def get_item(self, product_id: int) -> CartItem | None:
        index = find_index(self._items, product_id)
        return None if index is None else self._items[index]

    @property
    def total_items(self) -> int:
        """Sum of all line item amounts."""
        return sum(item.amount for item in self._items)

    @property
    def distinct_count(self) -> int:
        return len(self._items)

    @property
    def subtotal(self) -> float:
        return sum(item.line_total for item in self._items)

    def subscribe(self, listener: CartListener) -> Callable[[], None]:
        """Call *listener* with the new cart after every successful mutation.

        Returns a callable that removes the listener.
        """
        self._listeners.append(listener)

        def _unsubscribe() -> None:
            with contextlib.suppress(ValueError):
                self._listeners.remove(listener)

        return _unsubscribe

    # ------------------------------------------------------------------
    # Operations
    # ------------------------------------------------------------------

    async def add_product(self, product_id: int) -> CartOutcome:
        """Add one unit of *product_id*, fetching its metadata on first add."""
        async with self._serialized():
            return await self._add_product(product_id)

    async def remove_product(self, product_id: int) -> CartOutcome:
        """Remove the line item for *product_id* entirely."""
        async with self._serialized():
            return self._remove_product(product_id)

    async def update_product_amount(self, product_id: int, amount: int) -> CartOutcome:
        """Set the amount of an item already in the cart.

        Amounts of zero or less are ignored and reported as success; use
        :meth:`remove_product` to drop an item.
        """
        async with self._serialized():
            return await self._update_product_amount(product_id, amount)

    # ------------------------------------------------------------------
    # Internal helpers
    # ------------------------------------------------------------------

    @contextlib.asynccontextmanager
    async def _serialized(self) -> AsyncIterator[None]:
        if self._lock is None:
            yield
            return
        async with self._lock:
            yield

    async def _fetch_stock(self, operation: CartOperation, product_id: int) -> Stock | None:
        try:
            stock = await self._stock.get_stock(product_id)
        except CartError:
            _logger.debug("%s: stock lookup for product %s failed", operation, product_id, exc_info=True)
            return None
        if stock.id != product_id:
            _logger.debug("%s: stock service returned product %s for id %s", operation, stock.id, product_id)
            return None
        return stock

    async def _add_product(self, product_id: int) -> CartOutcome:
        op = CartOperation.ADD
        stock = await self._fetch_stock(op, product_id)
        if stock is None:
            return CartOutcome.failed(op, product_id, CartFailure.LOOKUP_FAILED)

        index = find_index(self._items, product_id)
        if index is None:
            if not has_stock(next_amount(None), stock.amount):
                return CartOutcome.failed(op, product_id, CartFailure.INSUFFICIENT_STOCK)
            try:
                product = await self._catalog.get_product(product_id)
            except CartError:
                _logger.debug("add: catalog lookup for product %s failed", product_id, exc_info=True)
                return CartOutcome.failed(op, product_id, CartFailure.LOOKUP_FAILED)
            if product.id != product_id:
                _logger.debug("add: catalog returned product %s for id %s", product.id, product_id)
                return CartOutcome.failed(op, product_id, CartFailure.LOOKUP_FAILED)

            # Another call may have added the product while the catalog lookup was pending.
            index = find_index(self._items, product_id)
            if index is None:
                return self._commit(op, product_id, [*self._items, CartItem.from_product(product)])

        existing = self._items[index]
        requested = next_amount(existing)
        if not has_stock(requested, stock.amount):
            return CartOutcome.failed(op, product_id, CartFailure.INSUFFICIENT_STOCK)

        items = list(self._items)
        items[index] = existing.model_copy(update={"amount": requested})
        return self._commit(op, product_id, items)

    def _remove_product(self, product_id: int) -> CartOutcome:
        op = CartOperation.REMOVE
        index = find_index(self._items, product_id)
        if index is None:
            _logger.debug("remove: product %s is not in the cart", product_id)
            return CartOutcome.failed(op, product_id, CartFailure.ITEM_NOT_IN_CART)

        items = list(self._items)
        del items[index]
        return self._commit(op, product_id, items)

    async def _update_product_amount(self, product_id: int, amount: int) -> CartOutcome:
        op = CartOperation.UPDATE
        if amount <= 0:
            return CartOutcome.success(op, product_id)

        stock = await self._fetch_stock(op, product_id)
        if stock is None:
            return CartOutcome.failed(op, product_id, CartFailure.LOOKUP_FAILED)
        if not has_stock(amount, stock.amount):
            return CartOutcome.failed(op, product_id, CartFailure.INSUFFICIENT_STOCK)

        index = find_index(self._items, product_id)
        if index is None:
            _logger.debug("update: product %s is not in the cart", product_id)
            return CartOutcome.failed(op, product_id, CartFailure.ITEM_NOT_IN_CART)

        items = list(self._items)
        items[index] = items[index].model_copy(update={"amount": amount})
        return self._commit(op, product_id, items)

    def _commit(self, operation: CartOperation, product_id: int, items: Sequence[CartItem]) -> CartOutcome:
        self._items = tuple(items)
        self._persist()
        _logger.debug("%s: product %s committed, cart has %d item(s)", operation, product_id, len(self._items))
        self._notify()
        return CartOutcome.success(operation, product_id)

    def _persist(self) -> None:
        try:
            self._storage.write(self._storage_key, dump_cart(self._items))
        except CartStorageError:
            _logger.warning("Failed to persist cart snapshot", exc_info=True)

    def _notify(self) -> None:
        snapshot = self._items
        for listener in list(self._listeners):
            try:
                listener(snapshot)
            except Exception:
                _logger.debug("Cart listener failed", exc_info=True)
