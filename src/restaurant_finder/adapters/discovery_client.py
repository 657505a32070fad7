"""Restaurant discovery API client."""

import logging
from dataclasses import dataclass
from typing import Protocol

import httpx
from pydantic import ValidationError

from restaurant_finder.domain.discovery import ErrorPayload
from restaurant_finder.errors import UpstreamError

NETWORK_ERROR_MESSAGE = "Network error: could not reach the restaurant discovery API"
INVALID_RESPONSE_MESSAGE = "Invalid response from the restaurant discovery API"

_logger = logging.getLogger(__name__)


class DiscoveryClient(Protocol):
    """Interface for discovery API interactions."""

    async def fetch_by_postcode(self, postcode: str) -> dict[str, object]:
        """Return raw restaurant data for a normalized postcode."""


@dataclass
class HttpxDiscoveryClient(DiscoveryClient):
    """HTTPX-backed discovery client."""

    base_url: str
    http_client: httpx.AsyncClient
    timeout_seconds: float = 10.0

    @classmethod
    def create(
        cls, base_url: str, timeout_seconds: float = 10.0
    ) -> "HttpxDiscoveryClient":
        """Create a discovery client with a managed httpx session."""
        return cls(
            base_url=base_url.rstrip("/"),
            http_client=httpx.AsyncClient(),
            timeout_seconds=timeout_seconds,
        )

    async def fetch_by_postcode(self, postcode: str) -> dict[str, object]:
        """Fetch enriched restaurants for a postcode."""
        url = (
            f"{self.base_url}/discovery/uk/restaurants/enriched/bypostcode/{postcode}"
        )
        try:
            response = await self.http_client.get(
                url,
                headers={"Accept": "application/json"},
                timeout=self.timeout_seconds,
            )
        except httpx.DecodingError as exc:
            _logger.warning(
                "Discovery response for %s was undecodable: %s", postcode, exc
            )
            raise UpstreamError(INVALID_RESPONSE_MESSAGE) from exc
        except httpx.RequestError as exc:
            _logger.warning("Discovery request failed for %s: %s", postcode, exc)
            raise UpstreamError(NETWORK_ERROR_MESSAGE) from exc

        if not response.is_success:
            message = _error_message(response)
            _logger.warning(
                "Discovery API returned status=%s for %s: %s",
                response.status_code,
                postcode,
                message,
            )
            raise UpstreamError(message, status_code=response.status_code)

        try:
            payload = response.json()
        except ValueError as exc:
            raise UpstreamError(
                INVALID_RESPONSE_MESSAGE, status_code=response.status_code
            ) from exc
        if not isinstance(payload, dict):
            raise UpstreamError(
                INVALID_RESPONSE_MESSAGE, status_code=response.status_code
            )
        return payload

    async def close(self) -> None:
        """Close the underlying HTTP session."""
        await self.http_client.aclose()


def _error_message(response: httpx.Response) -> str:
    """Extract the best available error message from a failed response."""
    body = response.text
    try:
        return ErrorPayload.model_validate_json(body).message
    except ValidationError:
        text = body.strip()
    return text or f"{response.status_code} {response.reason_phrase}".strip()
