"""Internal constants shared across the library."""

BASE_URL = "http://localhost:3333"
USER_AGENT = "pycart/1.0"

#: Storage key under which the cart snapshot is persisted.
STORAGE_KEY = "@RocketShoes:cart"

STOCK_ENDPOINT = "/stock/{product_id}"
PRODUCT_ENDPOINT = "/products/{product_id}"

# ------------------------------------------------------------------
# User-facing notification texts
# ------------------------------------------------------------------

MESSAGE_INSUFFICIENT_STOCK = "Requested quantity is out of stock"
MESSAGE_ADD_FAILED = "Error adding product"
MESSAGE_REMOVE_FAILED = "Error removing product"
MESSAGE_UPDATE_FAILED = "Error changing product quantity"
