"""Supabase-backed restaurant cache."""

from collections.abc import Callable, Sequence
from dataclasses import dataclass, field
from datetime import datetime, timedelta

from supabase import Client

from restaurant_finder.domain.restaurants import RestaurantSummary
from restaurant_finder.services.cache import (
    DEFAULT_MAX_ENTRIES,
    DEFAULT_TTL,
    RestaurantCache,
    utc_now,
)

_TABLE = "cached_restaurants"


@dataclass
class SupabaseRestaurantCache(RestaurantCache):
    """Supabase implementation storing one row per postcode."""

    client: Client
    ttl: timedelta = DEFAULT_TTL
    max_entries: int = DEFAULT_MAX_ENTRIES
    clock: Callable[[], datetime] = field(default=utc_now)

    def get(self, key: str) -> tuple[RestaurantSummary, ...] | None:
        """Return cached restaurants written within the TTL."""
        cutoff = self.clock() - self.ttl
        response = (
            self.client.table(_TABLE)
            .select("postcode, restaurants, written_at")
            .eq("postcode", key)
            .gte("written_at", cutoff.isoformat())
            .limit(1)
            .execute()
        )
        if not response.data:
            return None
        rows = response.data[0].get("restaurants") or []
        return tuple(RestaurantSummary.from_dict(row) for row in rows)

    def put(self, key: str, value: Sequence[RestaurantSummary]) -> None:
        """Upsert restaurants for a postcode and trim the table to size."""
        self.client.table(_TABLE).upsert(
            {
                "postcode": key,
                "restaurants": [summary.to_dict() for summary in value],
                "written_at": self.clock().isoformat(),
            },
            on_conflict="postcode",
        ).execute()
        self._trim()

    def evict_expired(self, cutoff: datetime) -> int:
        """Delete rows written at or before the cutoff."""
        response = (
            self.client.table(_TABLE)
            .delete()
            .lte("written_at", cutoff.isoformat())
            .execute()
        )
        return len(response.data or [])

    def invalidate(self, key: str) -> None:
        """Delete the row for a postcode."""
        self.client.table(_TABLE).delete().eq("postcode", key).execute()

    def _trim(self) -> None:
        """Delete the oldest rows beyond ``max_entries``."""
        response = (
            self.client.table(_TABLE)
            .select("postcode")
            .order("written_at", desc=True)
            .range(self.max_entries, self.max_entries + 999)
            .execute()
        )
        overflow = [row["postcode"] for row in response.data or []]
        if overflow:
            self.client.table(_TABLE).delete().in_("postcode", overflow).execute()
