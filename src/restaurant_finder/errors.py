"""Error types raised by the restaurant query path."""


class RestaurantFinderError(Exception):
    """Base error for restaurant lookups."""


class BadRequestError(RestaurantFinderError):
    """Raised when the caller supplied an unusable postcode."""

    def __init__(self, reason: str) -> None:
        super().__init__(reason)
        self.reason = reason


class UpstreamError(RestaurantFinderError):
    """Raised when the discovery API call fails or returns garbage."""

    def __init__(self, reason: str, status_code: int | None = None) -> None:
        super().__init__(reason)
        self.reason = reason
        self.status_code = status_code
