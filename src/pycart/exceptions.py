"""Custom exception hierarchy for pycart."""

from __future__ import annotations


class CartError(Exception):
    """Base exception for all pycart errors."""


class CartConfigError(CartError):
    """Invalid or missing configuration."""


class CartTransportError(CartError):
    """HTTP-level failure (network, non-200, invalid JSON)."""

    def __init__(
        self,
        message: str,
        *,
        status_code: int | None = None,
        endpoint: str = "",
    ) -> None:
        self.status_code = status_code
        self.endpoint = endpoint
        super().__init__(message)


class CartApiError(CartError):
    """API answered, but the payload did not match the expected model."""

    def __init__(self, message: str, *, endpoint: str = "") -> None:
        self.endpoint = endpoint
        super().__init__(message)


class CartStorageError(CartError):
    """The cart snapshot could not be written to persistent storage."""
