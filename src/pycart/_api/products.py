"""Product catalog endpoint.

Endpoints:
  - /products/{id}
"""

from __future__ import annotations

from pycart._api._common import fetch_model
from pycart._constants import PRODUCT_ENDPOINT
from pycart._transport import Transport
from pycart.models.product import Product


async def fetch_product(transport: Transport, product_id: int) -> Product:
    """Fetch catalog metadata for *product_id*."""
    return await fetch_model(
        endpoint=PRODUCT_ENDPOINT.format(product_id=product_id),
        transport=transport,
        model=Product,
        defaults={"id": product_id},
    )
