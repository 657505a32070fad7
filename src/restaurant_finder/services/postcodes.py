"""UK postcode validation."""

import re
from dataclasses import dataclass

from restaurant_finder.domain.postcodes import (
    POSTCODE_INVALID,
    POSTCODE_REQUIRED,
    POSTCODE_TOO_LONG,
    POSTCODE_TOO_SHORT,
    Invalid,
    Valid,
    ValidationResult,
)

MIN_POSTCODE_LENGTH = 5
MAX_POSTCODE_LENGTH = 7

_WHITESPACE = re.compile(r"\s+")

# Outward code (area + district) followed by the inward code, spaces removed.
_POSTCODE_PATTERN = re.compile(
    r"^(?:GIR0AA|"
    r"(?:[A-Z][0-9]{1,2}"
    r"|[A-Z][A-HJ-Y][0-9]{1,2}"
    r"|[A-Z][0-9][A-Z]"
    r"|[A-Z][A-HJ-Y][0-9][A-Z])"
    r"[0-9][A-Z]{2})$"
)


def normalize(raw: str) -> str:
    """Strip all whitespace and upper-case a raw postcode."""
    return _WHITESPACE.sub("", raw).upper()


@dataclass(frozen=True)
class PostcodeValidator:
    """Validates UK postcodes by shape only, not against a postcode database."""

    min_length: int = MIN_POSTCODE_LENGTH
    max_length: int = MAX_POSTCODE_LENGTH

    def normalize(self, raw: str) -> str:
        """Return the normalized form of a raw postcode."""
        return normalize(raw)

    def validate(self, raw: str) -> ValidationResult:
        """Validate a raw postcode, checking length before format."""
        if not raw or raw.isspace():
            return Invalid(POSTCODE_REQUIRED)

        postcode = normalize(raw)
        if len(postcode) < self.min_length:
            return Invalid(POSTCODE_TOO_SHORT)
        if len(postcode) > self.max_length:
            return Invalid(POSTCODE_TOO_LONG)
        if not _POSTCODE_PATTERN.match(postcode):
            return Invalid(POSTCODE_INVALID)
        return Valid(postcode)
