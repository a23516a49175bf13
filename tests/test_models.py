"""Tests for payload models and the cart snapshot format."""

from __future__ import annotations

import json

import pytest
from pydantic import ValidationError

from pycart.models.product import CartItem, Product, Stock
from pycart.state.snapshot import dump_cart, load_cart


class TestProduct:
    def test_accepts_name_alias(self) -> None:
        product = Product.model_validate({"id": 4, "name": "Runner", "price": 99.5, "image": "x.jpg"})
        assert product.title == "Runner"

    def test_ignores_unknown_keys_and_nulls(self) -> None:
        product = Product.model_validate({"id": 4, "title": "Runner", "price": 10, "image": None, "sku": "A1"})
        assert product.image == ""
        assert not hasattr(product, "sku")

    def test_is_frozen(self) -> None:
        product = Product(id=1, title="Runner", price=1.0)
        with pytest.raises(ValidationError):
            product.price = 2.0  # type: ignore[misc]

    def test_infinite_price_rejected(self) -> None:
        with pytest.raises(ValidationError):
            Product.model_validate({"id": 1, "title": "Glow", "price": float("inf")})


class TestStock:
    def test_negative_amount_rejected(self) -> None:
        with pytest.raises(ValidationError):
            Stock.model_validate({"id": 1, "amount": -1})

    def test_numeric_string_coerced(self) -> None:
        assert Stock.model_validate({"id": "2", "amount": "7"}).amount == 7


class TestCartItem:
    def test_from_product_copies_metadata(self) -> None:
        product = Product(id=3, title="Trail", price=50.0, image="t.jpg")
        item = CartItem.from_product(product)
        assert (item.id, item.title, item.price, item.image, item.amount) == (3, "Trail", 50.0, "t.jpg", 1)

    def test_amount_must_be_positive(self) -> None:
        with pytest.raises(ValidationError):
            CartItem(id=1, title="x", price=1.0, amount=0)

    def test_line_total(self) -> None:
        assert CartItem(id=1, title="x", price=2.5, amount=4).line_total == 10.0


class TestSnapshot:
    def test_snapshot_is_json_array_of_items(self) -> None:
        items = (CartItem(id=1, title="Runner", price=179.9, image="r.jpg", amount=2),)
        assert json.loads(dump_cart(items)) == [
            {"id": 1, "title": "Runner", "price": 179.9, "image": "r.jpg", "amount": 2}
        ]

    def test_round_trip_preserves_order_and_values(self) -> None:
        items = (
            CartItem(id=2, title="B", price=1.25, amount=3),
            CartItem(id=1, title="A", price=9.99, image="a.png", amount=1),
        )
        assert load_cart(dump_cart(items)) == items

    def test_empty_cart(self) -> None:
        assert dump_cart(()) == "[]"
        assert load_cart("[]") == ()

    @pytest.mark.parametrize("text", [None, ""])
    def test_missing_snapshot(self, text: str | None) -> None:
        assert load_cart(text) == ()

    def test_duplicate_ids_discarded(self) -> None:
        raw = json.dumps(
            [
                {"id": 1, "title": "A", "price": 1, "amount": 1},
                {"id": 1, "title": "A", "price": 1, "amount": 2},
            ]
        )
        assert load_cart(raw) == ()

    def test_zero_amount_discarded(self) -> None:
        raw = json.dumps([{"id": 1, "title": "A", "price": 1, "amount": 0}])
        assert load_cart(raw) == ()
