"""Spoonacular API client."""

import logging
from dataclasses import dataclass
from typing import Protocol

import httpx

from spoonacular_proxy.domain.upstream import Locator
from spoonacular_proxy.errors import UpstreamError

_logger = logging.getLogger(__name__)


class SpoonacularClient(Protocol):
    """Interface for Spoonacular API interactions."""

    async def send(self, locator: Locator) -> object:
        """Perform the call described by a locator and return decoded JSON."""

    async def close(self) -> None:
        """Release any held connections."""


@dataclass
class HttpxSpoonacularClient(SpoonacularClient):
    """HTTPX-backed Spoonacular client."""

    api_key: str
    base_url: str
    http_client: httpx.AsyncClient
    timeout_seconds: float = 15

    @classmethod
    def create(
        cls, api_key: str, base_url: str, timeout_seconds: float = 15
    ) -> "HttpxSpoonacularClient":
        """Create a Spoonacular client with a managed httpx session."""
        return cls(
            api_key=api_key,
            base_url=base_url,
            http_client=httpx.AsyncClient(),
            timeout_seconds=timeout_seconds,
        )

    async def send(self, locator: Locator) -> object:
        """Send the request and decode its JSON body."""
        url = f"{self.base_url.rstrip('/')}{locator.path}"
        params = {**locator.params, "apiKey": self.api_key}
        _logger.debug("Upstream %s %s", locator.method, locator.path)
        try:
            response = await self.http_client.request(
                locator.method,
                url,
                params=params,
                data=locator.form,
                headers=locator.headers or None,
                timeout=self.timeout_seconds,
            )
        except httpx.HTTPError as exc:
            raise UpstreamError(f"Request failed: {exc}") from exc

        if not response.is_success:
            raise UpstreamError(
                f"API error: {response.status_code} {response.reason_phrase}",
                status_code=response.status_code,
            )
        try:
            return response.json()
        except ValueError as exc:
            raise UpstreamError(
                f"Invalid JSON in upstream response: {exc}",
                status_code=response.status_code,
            ) from exc

    async def close(self) -> None:
        """Close the underlying HTTP session."""
        await self.http_client.aclose()
