"""Typed models for storefront payloads and cart contents."""

from pycart.models.product import CartItem, Product, Stock

__all__ = [
    "CartItem",
    "Product",
    "Stock",
]
