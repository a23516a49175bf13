"""HTTP transport for the storefront REST API."""

from __future__ import annotations

import json
import logging
from typing import Any, Protocol

import aiohttp

from pycart._constants import USER_AGENT
from pycart.config import CartConfig
from pycart.exceptions import CartTransportError

_logger = logging.getLogger(__name__)


class Transport(Protocol):
    """Structural transport interface used by endpoint modules.

    Having a protocol here makes it easy to pass test doubles/mocks while
    keeping the production implementation (`HttpTransport`) concrete.
    """

    async def get_json(self, endpoint: str) -> Any:
        ...


class HttpTransport:
    """Plain JSON-over-HTTP transport backed by an aiohttp session."""

    def __init__(self, config: CartConfig, http_session: aiohttp.ClientSession) -> None:
        self._config = config
        self._http = http_session
        self._timeout = aiohttp.ClientTimeout(total=config.request_timeout)

    async def get_json(self, endpoint: str) -> Any:
        """GET *endpoint* and return the decoded JSON body.

        Raises
        ------
        CartTransportError
            On network errors, timeouts, non-200 statuses or a body that
            is not JSON.
        """
        url = f"{self._config.base_url}{endpoint}"
        headers = {
            "accept": "application/json",
            "user-agent": USER_AGENT,
        }

        _logger.debug("GET %s", url)

        try:
            async with self._http.get(url, headers=headers, timeout=self._timeout) as resp:
                body = await resp.read()
                if resp.status != 200:
                    raise CartTransportError(
                        f"HTTP {resp.status} from {endpoint}: {body[:200]!r}",
                        status_code=resp.status,
                        endpoint=endpoint,
                    )
        except CartTransportError:
            raise
        except (aiohttp.ClientError, TimeoutError) as exc:
            raise CartTransportError(
                f"Request to {endpoint} failed: {exc!r}",
                endpoint=endpoint,
            ) from exc

        try:
            return json.loads(body.decode("utf-8"))
        except (UnicodeDecodeError, json.JSONDecodeError) as exc:
            raise CartTransportError(
                f"Invalid JSON from {endpoint}: {body[:200]!r}",
                endpoint=endpoint,
            ) from exc
