"""Product, stock and cart line item models."""

from __future__ import annotations

from pydantic import AliasChoices, Field

from pycart.models._base import CartBaseModel


class Product(CartBaseModel):
    """Catalog metadata for a single product.

    Parameters
    ----------
    id : int
        Product identifier.
    title : str
        Display name. Upstream payloads may call it ``name``.
    price : float
        Unit price.
    image : str
        Image URL.
    """

    id: int
    title: str = Field(validation_alias=AliasChoices("title", "name"))
    price: float = Field(ge=0, allow_inf_nan=False)
    image: str = ""


class Stock(CartBaseModel):
    """Available quantity for a product."""

    id: int
    amount: int = Field(ge=0)


class CartItem(Product):
    """One product's entry in the cart.

    Metadata is copied from the catalog when the item is first added and
    is not refreshed afterwards.
    """

    amount: int = Field(ge=1)

    @classmethod
    def from_product(cls, product: Product, amount: int = 1) -> CartItem:
        return cls(**product.model_dump(), amount=amount)

    @property
    def line_total(self) -> float:
        return self.price * self.amount
