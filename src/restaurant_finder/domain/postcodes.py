"""Postcode validation outcomes."""

from dataclasses import dataclass

POSTCODE_REQUIRED = "Postcode is required"
POSTCODE_TOO_SHORT = "Postcode should be at least 5 characters"
POSTCODE_TOO_LONG = "Postcode should be at most 7 characters"
POSTCODE_INVALID = "Enter a valid postcode"


@dataclass(frozen=True)
class Valid:
    """Validation passed; carries the normalized postcode."""

    postcode: str


@dataclass(frozen=True)
class Invalid:
    """Validation failed with a user-facing reason."""

    reason: str


ValidationResult = Valid | Invalid
