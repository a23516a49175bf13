"""Stock lookup endpoint.

Endpoints:
  - /stock/{id}
"""

from __future__ import annotations

from pycart._api._common import fetch_model
from pycart._constants import STOCK_ENDPOINT
from pycart._transport import Transport
from pycart.models.product import Stock


async def fetch_stock(transport: Transport, product_id: int) -> Stock:
    """Fetch the available quantity of *product_id*."""
    return await fetch_model(
        endpoint=STOCK_ENDPOINT.format(product_id=product_id),
        transport=transport,
        model=Stock,
        defaults={"id": product_id},
    )
