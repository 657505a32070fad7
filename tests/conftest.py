"""Shared test fixtures."""

from dataclasses import dataclass, field
from datetime import UTC, datetime, timedelta

import pytest

from restaurant_finder.adapters.discovery_client import DiscoveryClient
from restaurant_finder.config import Settings
from restaurant_finder.containers import AppContainer
from restaurant_finder.errors import UpstreamError
from restaurant_finder.services.cache import InMemoryRestaurantCache
from restaurant_finder.services.discovery import RestaurantFetcher
from restaurant_finder.services.restaurants import RestaurantQueryService


def make_venue(index: int, star_rating: float = 4.5) -> dict[str, object]:
    """Build a discovery API venue payload."""
    return {
        "id": str(1000 + index),
        "name": f"Restaurant {index}",
        "uniqueName": f"restaurant-{index}",
        "cuisines": [
            {"name": "Pizza", "uniqueName": "pizza"},
            {"name": "Italian", "uniqueName": "italian"},
        ],
        "rating": {"starRating": star_rating, "count": 120 + index},
        "address": {
            "firstLine": f"{index} High Street",
            "city": "Bangor",
            "postalCode": "LL57 4BB",
            "location": {"type": "Point", "coordinates": [-4.12, 53.22]},
        },
        "isOpenNowForDelivery": True,
    }


@dataclass
class FakeClock:
    """Manually advanced clock."""

    now: datetime = field(default_factory=lambda: datetime(2024, 5, 1, tzinfo=UTC))

    def __call__(self) -> datetime:
        return self.now

    def advance(self, delta: timedelta) -> None:
        self.now += delta


@dataclass
class FakeDiscoveryClient(DiscoveryClient):
    """Fake discovery client returning canned payloads per postcode."""

    payloads: dict[str, dict[str, object]] = field(default_factory=dict)
    default_venue_count: int = 3
    error: UpstreamError | None = None
    calls: list[str] = field(default_factory=list)

    async def fetch_by_postcode(self, postcode: str) -> dict[str, object]:
        self.calls.append(postcode)
        if self.error is not None:
            raise self.error
        if postcode in self.payloads:
            return self.payloads[postcode]
        return {
            "restaurants": [
                make_venue(index) for index in range(self.default_venue_count)
            ]
        }


@pytest.fixture
def settings() -> Settings:
    return Settings(
        discovery_base_url="https://discovery.test",
        cache_ttl_seconds=900,
        cache_max_entries=50,
        cache_shard_count=4,
    )


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def discovery_client() -> FakeDiscoveryClient:
    return FakeDiscoveryClient()


@pytest.fixture
def cache(clock: FakeClock) -> InMemoryRestaurantCache:
    return InMemoryRestaurantCache(
        ttl=timedelta(minutes=15), max_entries=50, shard_count=4, clock=clock
    )


@pytest.fixture
def restaurant_service(
    discovery_client: FakeDiscoveryClient,
    cache: InMemoryRestaurantCache,
    clock: FakeClock,
) -> RestaurantQueryService:
    return RestaurantQueryService(
        fetcher=RestaurantFetcher(client=discovery_client),
        cache=cache,
        clock=clock,
    )


@pytest.fixture
def container(
    settings: Settings,
    cache: InMemoryRestaurantCache,
    restaurant_service: RestaurantQueryService,
) -> AppContainer:
    async def close_resources() -> None:
        return None

    return AppContainer(
        settings=settings,
        cache=cache,
        restaurant_service=restaurant_service,
        close_resources=close_resources,
    )
