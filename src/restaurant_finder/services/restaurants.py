"""Restaurant lookup service combining validation, caching and fetching."""

import logging
from collections.abc import Callable
from dataclasses import dataclass, field
from datetime import datetime

from restaurant_finder.domain.postcodes import Invalid
from restaurant_finder.domain.restaurants import RestaurantSummary
from restaurant_finder.errors import BadRequestError
from restaurant_finder.services.cache import RestaurantCache, utc_now
from restaurant_finder.services.discovery import RestaurantFetcher
from restaurant_finder.services.postcodes import PostcodeValidator

_logger = logging.getLogger(__name__)


@dataclass
class RestaurantQueryService:
    """Resolves raw postcodes to restaurant summaries."""

    fetcher: RestaurantFetcher
    cache: RestaurantCache
    validator: PostcodeValidator = field(default_factory=PostcodeValidator)
    clock: Callable[[], datetime] = utc_now

    async def resolve(self, raw_postcode: str) -> list[RestaurantSummary]:
        """Return restaurants for a postcode, serving from cache when fresh.

        Raises ``BadRequestError`` for malformed postcodes and lets
        ``UpstreamError`` from the fetcher propagate untouched. An empty list
        is a valid answer.
        """
        result = self.validator.validate(raw_postcode)
        if isinstance(result, Invalid):
            raise BadRequestError(result.reason)
        postcode = result.postcode

        cached = self._read_cache(postcode)
        if cached is not None:
            _logger.debug("Restaurant cache hit: postcode=%s", postcode)
            return list(cached)

        _logger.debug("Restaurant cache miss: postcode=%s", postcode)
        restaurants = await self.fetcher.fetch_by_postcode(postcode)
        self._write_cache(postcode, restaurants)
        return restaurants

    def _read_cache(self, postcode: str) -> tuple[RestaurantSummary, ...] | None:
        try:
            return self.cache.get(postcode)
        except Exception:
            _logger.exception("Restaurant cache read failed: postcode=%s", postcode)
            return None

    def _write_cache(self, postcode: str, restaurants: list[RestaurantSummary]) -> None:
        try:
            self.cache.put(postcode, restaurants)
            self.cache.evict_expired(self.clock() - self.cache.ttl)
        except Exception:
            _logger.exception("Restaurant cache write failed: postcode=%s", postcode)
