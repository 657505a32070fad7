"""Upstream restaurant fetcher."""

import logging
from dataclasses import dataclass

from pydantic import ValidationError

from restaurant_finder.adapters.discovery_client import (
    INVALID_RESPONSE_MESSAGE,
    DiscoveryClient,
)
from restaurant_finder.domain.discovery import DiscoveryResponse, Venue
from restaurant_finder.domain.restaurants import RestaurantSummary
from restaurant_finder.errors import UpstreamError

MAX_RESULTS = 10
MIN_RATING = 0.0
MAX_RATING = 5.0

_logger = logging.getLogger(__name__)


@dataclass
class RestaurantFetcher:
    """Fetches restaurants from the discovery API and trims them to summaries."""

    client: DiscoveryClient
    max_results: int = MAX_RESULTS

    async def fetch_by_postcode(self, postcode: str) -> list[RestaurantSummary]:
        """Return up to ``max_results`` restaurants in upstream order."""
        payload = await self.client.fetch_by_postcode(postcode)
        try:
            response = DiscoveryResponse.model_validate(payload)
        except ValidationError as exc:
            _logger.warning(
                "Discovery payload for %s failed validation: %s",
                postcode,
                exc.error_count(),
            )
            raise UpstreamError(INVALID_RESPONSE_MESSAGE) from exc
        return [
            to_summary(venue) for venue in response.restaurants[: self.max_results]
        ]


def to_summary(venue: Venue) -> RestaurantSummary:
    """Map an upstream venue to a restaurant summary."""
    address = venue.address
    return RestaurantSummary(
        name=venue.name,
        cuisines=tuple(cuisine.name for cuisine in venue.cuisines),
        rating=min(max(venue.rating.star_rating, MIN_RATING), MAX_RATING),
        address=f"{address.first_line}, {address.city}, {address.postal_code}",
    )
