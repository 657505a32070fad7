"""Models for discovery API payloads."""

from pydantic import BaseModel, ConfigDict, Field


class Cuisine(BaseModel):
    """Cuisine tag attached to a venue."""

    model_config = ConfigDict(populate_by_name=True)

    name: str
    unique_name: str | None = Field(default=None, alias="uniqueName")


class Rating(BaseModel):
    """Aggregate customer rating."""

    model_config = ConfigDict(populate_by_name=True)

    star_rating: float = Field(default=0.0, alias="starRating")
    count: int = 0


class Address(BaseModel):
    """Venue street address."""

    model_config = ConfigDict(populate_by_name=True)

    first_line: str = Field(alias="firstLine")
    city: str
    postal_code: str = Field(alias="postalCode")


class Venue(BaseModel):
    """Single restaurant entry from the discovery API."""

    id: str | int
    name: str
    cuisines: list[Cuisine] = Field(default_factory=list)
    rating: Rating = Field(default_factory=Rating)
    address: Address


class DiscoveryResponse(BaseModel):
    """Top-level discovery API response."""

    restaurants: list[Venue] = Field(default_factory=list)


class ErrorPayload(BaseModel):
    """Error body returned by the discovery API on failure."""

    message: str
