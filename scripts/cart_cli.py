#!/usr/bin/env python3
"""Manipulate a persisted cart against a live storefront API.

Configuration comes from ``CART_*`` environment variables (see
``CartConfig.from_env``); ``--storage`` and ``--base-url`` override them.

Examples::

    cart_cli.py --storage cart.json add 1
    cart_cli.py --storage cart.json update 1 3
    cart_cli.py --storage cart.json remove 1
    cart_cli.py --storage cart.json show
"""

from __future__ import annotations

import argparse
import asyncio
import logging
import sys
from pathlib import Path
from typing import Any

_repo = Path(__file__).resolve().parent.parent
_src = _repo / "src"
if _src.is_dir():
    sys.path.insert(0, str(_src))

from pycart import CartClient, CartConfig, CartOutcome, CartStore  # noqa: E402


def _parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description=__doc__, formatter_class=argparse.RawDescriptionHelpFormatter)
    parser.add_argument("--base-url", help="Storefront API base URL")
    parser.add_argument("--storage", help="Snapshot file (default: CART_STORAGE_PATH or in-memory)")
    parser.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging")

    sub = parser.add_subparsers(dest="command", required=True)
    sub.add_parser("show", help="Print the cart")
    add = sub.add_parser("add", help="Add one unit of a product")
    add.add_argument("product_id", type=int)
    remove = sub.add_parser("remove", help="Remove a product")
    remove.add_argument("product_id", type=int)
    update = sub.add_parser("update", help="Set the amount of a product")
    update.add_argument("product_id", type=int)
    update.add_argument("amount", type=int)
    return parser.parse_args(argv)


def _print_cart(store: CartStore) -> None:
    if not store.cart:
        print("Cart is empty")
        return
    for item in store.cart:
        print(f"{item.id:>5}  {item.title:<40} {item.amount:>3} x {item.price:>9.2f} = {item.line_total:>10.2f}")
    print(f"{store.total_items} unit(s), subtotal {store.subtotal:.2f}")


async def _run(args: argparse.Namespace) -> int:
    overrides: dict[str, Any] = {}
    if args.base_url:
        overrides["base_url"] = args.base_url
    if args.storage:
        overrides["storage_path"] = args.storage
    config = CartConfig.from_env(**overrides)

    async with CartClient(config) as client:
        store = CartStore.from_config(config, client)
        outcome: CartOutcome | None = None
        if args.command == "add":
            outcome = await store.add_product(args.product_id)
        elif args.command == "remove":
            outcome = await store.remove_product(args.product_id)
        elif args.command == "update":
            outcome = await store.update_product_amount(args.product_id, args.amount)

        if outcome is not None and not outcome.ok:
            print(f"error: {outcome.message}", file=sys.stderr)
            return 1
        _print_cart(store)
    return 0


def main(argv: list[str] | None = None) -> int:
    args = _parse_args(argv)
    logging.basicConfig(level=logging.DEBUG if args.verbose else logging.WARNING)
    return asyncio.run(_run(args))


if __name__ == "__main__":
    raise SystemExit(main())
