"""Shared helpers for storefront API endpoint modules.

It is internal to pycart and may change at any time.
"""

from __future__ import annotations

from typing import Any, TypeVar

from pydantic import BaseModel, ValidationError

from pycart._transport import Transport
from pycart.exceptions import CartApiError

TModel = TypeVar("TModel", bound=BaseModel)


async def fetch_model(
    *,
    endpoint: str,
    transport: Transport,
    model: type[TModel],
    defaults: dict[str, Any] | None = None,
) -> TModel:
    """GET *endpoint* and validate the JSON object into *model*.

    *defaults* fill keys the payload omits (e.g. the requested id).
    """
    payload = await transport.get_json(endpoint)
    if not isinstance(payload, dict):
        raise CartApiError(
            f"{endpoint} returned {type(payload).__name__}, expected an object",
            endpoint=endpoint,
        )
    if defaults:
        payload = {**defaults, **payload}
    try:
        return model.model_validate(payload)
    except ValidationError as exc:
        raise CartApiError(
            f"{endpoint} returned an invalid {model.__name__}: {exc.error_count()} error(s)",
            endpoint=endpoint,
        ) from exc
