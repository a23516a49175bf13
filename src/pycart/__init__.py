"""pycart - Async shopping cart state backed by a storefront stock API."""

from importlib.metadata import PackageNotFoundError, version

try:
    __version__ = version("pycart")
except PackageNotFoundError:
    __version__ = "0+local"
from pycart.client import CartClient
from pycart.config import CartConfig
from pycart.exceptions import (
    CartApiError,
    CartConfigError,
    CartError,
    CartStorageError,
    CartTransportError,
)
from pycart.models import CartItem, Product, Stock
from pycart.state.outcome import CartFailure, CartOperation, CartOutcome
from pycart.state.store import CartStore, ProductCatalog, StockService, StorefrontService
from pycart.storage import FileStorage, MemoryStorage, PersistentStore

__all__ = [
    "__version__",
    "CartApiError",
    "CartClient",
    "CartConfig",
    "CartConfigError",
    "CartError",
    "CartFailure",
    "CartItem",
    "CartOperation",
    "CartOutcome",
    "CartStorageError",
    "CartStore",
    "CartTransportError",
    "FileStorage",
    "MemoryStorage",
    "PersistentStore",
    "Product",
    "ProductCatalog",
    "Stock",
    "StockService",
    "StorefrontService",
]
