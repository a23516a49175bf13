"""Cart snapshot encoding.

The snapshot is a JSON array of line items::

    [{"id": 1, "title": "...", "price": 179.9, "image": "...", "amount": 2}]

Anything that does not decode into a list of valid, uniquely identified
items is treated as no snapshot at all.
"""

from __future__ import annotations

import logging
from collections.abc import Sequence

from pydantic import TypeAdapter, ValidationError

from pycart.models.product import CartItem

_logger = logging.getLogger(__name__)

_ITEMS = TypeAdapter(list[CartItem])


def dump_cart(items: Sequence[CartItem]) -> str:
    return _ITEMS.dump_json(list(items)).decode("utf-8")


def load_cart(text: str | None) -> tuple[CartItem, ...]:
    """Decode a stored snapshot, returning an empty cart if it is unusable."""
    if not text:
        return ()
    try:
        items = _ITEMS.validate_json(text)
    except ValidationError as exc:
        _logger.warning("Discarding malformed cart snapshot (%d error(s))", exc.error_count())
        return ()

    seen: set[int] = set()
    for item in items:
        if item.id in seen:
            _logger.warning("Discarding cart snapshot with duplicate product id %s", item.id)
            return ()
        seen.add(item.id)
    return tuple(items)
