"""Operation outcomes returned by the cart store.

Operations never raise for expected failures; callers inspect the
outcome and decide how to present it.
"""

from __future__ import annotations

from enum import StrEnum

from pydantic import BaseModel, ConfigDict

from pycart._constants import (
    MESSAGE_ADD_FAILED,
    MESSAGE_INSUFFICIENT_STOCK,
    MESSAGE_REMOVE_FAILED,
    MESSAGE_UPDATE_FAILED,
)


class CartOperation(StrEnum):
    ADD = "add"
    REMOVE = "remove"
    UPDATE = "update"


class CartFailure(StrEnum):
    LOOKUP_FAILED = "lookup_failed"
    INSUFFICIENT_STOCK = "insufficient_stock"
    ITEM_NOT_IN_CART = "item_not_in_cart"


_GENERIC_MESSAGES: dict[CartOperation, str] = {
    CartOperation.ADD: MESSAGE_ADD_FAILED,
    CartOperation.REMOVE: MESSAGE_REMOVE_FAILED,
    CartOperation.UPDATE: MESSAGE_UPDATE_FAILED,
}


class CartOutcome(BaseModel):
    """Result of a single cart operation."""

    model_config = ConfigDict(frozen=True)

    operation: CartOperation
    product_id: int
    failure: CartFailure | None = None

    @classmethod
    def success(cls, operation: CartOperation, product_id: int) -> CartOutcome:
        return cls(operation=operation, product_id=product_id)

    @classmethod
    def failed(cls, operation: CartOperation, product_id: int, failure: CartFailure) -> CartOutcome:
        return cls(operation=operation, product_id=product_id, failure=failure)

    @property
    def ok(self) -> bool:
        return self.failure is None

    @property
    def message(self) -> str | None:
        """User-facing notification text, ``None`` on success."""
        if self.failure is None:
            return None
        if self.failure is CartFailure.INSUFFICIENT_STOCK:
            return MESSAGE_INSUFFICIENT_STOCK
        return _GENERIC_MESSAGES[self.operation]

    def __bool__(self) -> bool:
        return self.ok
