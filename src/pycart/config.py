"""Client configuration for pycart."""

from __future__ import annotations

import dataclasses
import os
from typing import Any

from pycart._constants import BASE_URL, STORAGE_KEY
from pycart.exceptions import CartConfigError


def _env_bool(value: str | None, default: bool) -> bool:
    if value is None:
        return default
    normalized = value.strip().lower()
    if normalized in {"1", "true", "yes", "y", "on"}:
        return True
    if normalized in {"0", "false", "no", "n", "off"}:
        return False
    return default


@dataclasses.dataclass(frozen=True)
class CartConfig:
    """Cart configuration.

    Parameters
    ----------
    base_url : str
        Storefront API base URL serving ``/stock/{id}`` and ``/products/{id}``.
    storage_key : str
        Key under which the cart snapshot is persisted.
    storage_path : str or None
        File used by :class:`~pycart.storage.FileStorage`. ``None`` keeps
        the cart in memory only.
    request_timeout : float
        Total timeout in seconds for a single stock or product lookup.
    serialize_operations : bool
        Run cart operations one at a time behind a per-store lock. By
        default a second operation may start while another one is still
        waiting on a lookup.
    """

    base_url: str = BASE_URL
    storage_key: str = STORAGE_KEY
    storage_path: str | None = None
    request_timeout: float = 10.0
    serialize_operations: bool = False

    def __post_init__(self) -> None:
        if not self.base_url.strip():
            raise CartConfigError("base_url must be non-empty")
        if not self.storage_key.strip():
            raise CartConfigError("storage_key must be non-empty")
        if self.request_timeout <= 0:
            raise CartConfigError(f"request_timeout must be positive, got {self.request_timeout}")
        # Endpoint paths always start with "/".
        object.__setattr__(self, "base_url", self.base_url.strip().rstrip("/"))

    @classmethod
    def from_env(cls, **overrides: Any) -> CartConfig:
        """Create configuration from environment variables.

        Reads optional ``CART_*`` variables. Explicit keyword arguments
        override environment values.

        Parameters
        ----------
        **overrides
            Explicit field values that take precedence over env vars.

        Returns
        -------
        CartConfig
            Populated configuration.
        """
        env = os.environ

        _ENV_CONFIG_MAP = {
            "CART_BASE_URL": "base_url",
            "CART_STORAGE_KEY": "storage_key",
            "CART_STORAGE_PATH": "storage_path",
        }
        config_kwargs: dict[str, Any] = {}
        for env_key, field_name in _ENV_CONFIG_MAP.items():
            val = env.get(env_key)
            if val is not None:
                config_kwargs[field_name] = val

        timeout_env = env.get("CART_REQUEST_TIMEOUT")
        if timeout_env is not None and "request_timeout" not in overrides:
            try:
                config_kwargs["request_timeout"] = float(timeout_env)
            except ValueError as exc:
                raise CartConfigError(f"CART_REQUEST_TIMEOUT is not a number: {timeout_env!r}") from exc

        if "serialize_operations" not in overrides:
            config_kwargs["serialize_operations"] = _env_bool(env.get("CART_SERIALIZE_OPERATIONS"), False)

        config_kwargs.update(overrides)

        return cls(**config_kwargs)
