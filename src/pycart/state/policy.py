"""Stock rules for cart mutations.

Pure functions; the store decides what to do with the answers.
"""

from __future__ import annotations

from collections.abc import Sequence

from pycart.models.product import CartItem


def find_index(items: Sequence[CartItem], product_id: int) -> int | None:
    for index, item in enumerate(items):
        if item.id == product_id:
            return index
    return None


def next_amount(existing: CartItem | None) -> int:
    """Amount an item would have after adding one more unit."""
    return (existing.amount if existing is not None else 0) + 1


def has_stock(requested: int, available: int) -> bool:
    return requested <= available
