"""Base model for storefront API payloads.

Every payload model inherits from :class:`CartBaseModel` which provides:

* frozen instances, so snapshots handed to callers cannot be mutated
  behind the store's back.
* ``extra="ignore"`` so unrelated upstream keys are dropped.
* A ``model_validator(mode="before")`` that drops ``None`` values so the
  field default is used instead.
"""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, model_validator


class CartBaseModel(BaseModel):
    """Base for storefront payload and cart models."""

    model_config = ConfigDict(
        frozen=True,
        extra="ignore",
        populate_by_name=True,
    )

    @model_validator(mode="before")
    @classmethod
    def _drop_nulls(cls, values: Any) -> Any:
        if not isinstance(values, dict):
            return values
        return {key: value for key, value in values.items() if value is not None}
