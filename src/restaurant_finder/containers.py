"""Dependency container wiring for the application."""

from collections.abc import Awaitable, Callable
from dataclasses import dataclass
from datetime import timedelta

from supabase import create_client

from restaurant_finder.adapters.discovery_client import HttpxDiscoveryClient
from restaurant_finder.adapters.supabase_restaurant_cache import (
    SupabaseRestaurantCache,
)
from restaurant_finder.config import Settings
from restaurant_finder.services.cache import InMemoryRestaurantCache, RestaurantCache
from restaurant_finder.services.discovery import RestaurantFetcher
from restaurant_finder.services.postcodes import PostcodeValidator
from restaurant_finder.services.restaurants import RestaurantQueryService


@dataclass
class AppContainer:
    """Holds application-wide dependencies."""

    settings: Settings
    cache: RestaurantCache
    restaurant_service: RestaurantQueryService
    close_resources: Callable[[], Awaitable[None]]


def build_cache(settings: Settings) -> RestaurantCache:
    """Create the configured restaurant cache backend."""
    ttl = timedelta(seconds=settings.cache_ttl_seconds)
    if settings.cache_backend == "supabase":
        if not settings.supabase_url or not settings.supabase_service_key:
            raise ValueError(
                "supabase_url and supabase_service_key are required "
                "for the supabase cache backend"
            )
        supabase_client = create_client(
            settings.supabase_url, settings.supabase_service_key
        )
        return SupabaseRestaurantCache(
            client=supabase_client,
            ttl=ttl,
            max_entries=settings.cache_max_entries,
        )
    return InMemoryRestaurantCache(
        ttl=ttl,
        max_entries=settings.cache_max_entries,
        shard_count=settings.cache_shard_count,
    )


def build_container(settings: Settings | None = None) -> AppContainer:
    """Create the default dependency container."""
    resolved_settings = settings or Settings()
    cache = build_cache(resolved_settings)
    discovery_client = HttpxDiscoveryClient.create(
        base_url=resolved_settings.discovery_base_url,
        timeout_seconds=resolved_settings.upstream_timeout_seconds,
    )
    restaurant_service = RestaurantQueryService(
        fetcher=RestaurantFetcher(
            client=discovery_client,
            max_results=resolved_settings.max_results,
        ),
        cache=cache,
        validator=PostcodeValidator(),
    )

    async def close_resources() -> None:
        await discovery_client.close()

    return AppContainer(
        settings=resolved_settings,
        cache=cache,
        restaurant_service=restaurant_service,
        close_resources=close_resources,
    )
