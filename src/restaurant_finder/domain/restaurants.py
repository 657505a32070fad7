"""Restaurant domain models."""

from dataclasses import dataclass


@dataclass(frozen=True)
class RestaurantSummary:
    """Compact restaurant view returned to callers."""

    name: str
    cuisines: tuple[str, ...]
    rating: float
    address: str

    def to_dict(self) -> dict[str, object]:
        """Return a JSON-friendly representation."""
        return {
            "name": self.name,
            "cuisines": list(self.cuisines),
            "rating": self.rating,
            "address": self.address,
        }

    @classmethod
    def from_dict(cls, data: dict[str, object]) -> "RestaurantSummary":
        """Rebuild a summary from its JSON representation."""
        return cls(
            name=str(data["name"]),
            cuisines=tuple(str(cuisine) for cuisine in data.get("cuisines") or []),
            rating=float(data["rating"]),
            address=str(data["address"]),
        )
