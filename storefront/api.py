"""HTTP client for the storefront backend.

Endpoints used:
- GET  /filter-options?category=<category>  -> {"<dimension>": ["<option>", ...]}
- POST /orders                              -> {"order_id": <id>, ...}

Every failure is raised as a StorefrontError subclass: FetchError for
non-success statuses and malformed payloads, NetworkError for transport
failures. Callers decide whether to swallow or surface them.
"""

from __future__ import annotations

import logging
from typing import Any

import httpx

from storefront.config import API_BASE_URL, HTTP_TIMEOUT_SECONDS
from storefront.errors import FetchError, NetworkError
from storefront.models import OrderSubmission

logger = logging.getLogger(__name__)


def build_client(base_url: str = API_BASE_URL, **kwargs: Any) -> httpx.AsyncClient:
    """Create the shared async client used by the providers below."""
    kwargs.setdefault("timeout", HTTP_TIMEOUT_SECONDS)
    return httpx.AsyncClient(base_url=base_url, **kwargs)


class _BackendResource:
    def __init__(self, client: httpx.AsyncClient) -> None:
        self.client = client

    async def _request(self, method: str, path: str, **kwargs: Any) -> Any:
        try:
            response = await self.client.request(method, path, **kwargs)
        except httpx.TransportError as exc:
            logger.error(f"{method} {path} transport failure: {exc!r}")
            raise NetworkError(f"{method} {path} failed: {exc}") from exc
        except httpx.HTTPError as exc:
            # Decoding and redirect failures: the server answered but the response is unusable.
            logger.error(f"{method} {path} unusable response: {exc!r}")
            raise FetchError(f"{method} {path} returned an unusable response: {exc}") from exc

        if not response.is_success:
            logger.error(f"{method} {path} returned HTTP {response.status_code}")
            raise FetchError(f"{method} {path} returned HTTP {response.status_code}", response.status_code)

        try:
            return response.json()
        except ValueError as exc:
            raise FetchError(f"{method} {path} returned a non-JSON body", response.status_code) from exc


class FilterOptionsProvider(_BackendResource):
    """Fetch the filter dimensions available for a category."""

    async def get_options(self, category: str) -> dict[str, list[str]]:
        data = await self._request("GET", "/filter-options", params={"category": category})
        if not isinstance(data, dict):
            raise FetchError("Filter options payload is not an object")

        options: dict[str, list[str]] = {}
        for dimension, values in data.items():
            if not isinstance(values, list) or not all(isinstance(value, str) for value in values):
                raise FetchError(f"Filter options for {dimension!r} are not a list of strings")
            options[str(dimension)] = list(values)
        return options


class OrderClient(_BackendResource):
    """Create orders on the backend."""

    async def create_order(self, submission: OrderSubmission) -> Any:
        """Submit an order and return the backend-assigned order id."""
        data = await self._request("POST", "/orders", json=submission.to_payload())
        order_id = data.get("order_id") if isinstance(data, dict) else None
        # A 2xx without an id still means the order was not created.
        if not order_id:
            logger.error(f"POST /orders succeeded without order_id: {data!r}")
            raise FetchError("Order response did not include an order_id")
        return order_id
