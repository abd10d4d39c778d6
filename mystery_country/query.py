import math
from dataclasses import dataclass
from typing import Tuple

from mystery_country.boundaries import CountryBoundary

MARGIN_SEPARATOR = '--'


class InvalidQueryError(ValueError):
    """A distance or margin that cannot be searched for."""


def _check_non_negative(label: str, value: float):
    if not math.isfinite(value):
        raise InvalidQueryError(f"{label} must be a finite number")
    if value < 0:
        raise InvalidQueryError(f"{label} cannot be negative")


@dataclass(frozen=True)
class SearchQuery:
    guessed: CountryBoundary
    target_km: float
    margin_km: float = 0.0

    def __post_init__(self):
        _check_non_negative("Distance", self.target_km)
        _check_non_negative("Margin", self.margin_km)


def _parse_number(text: str, label: str) -> float:
    try:
        return float(text.strip())
    except ValueError:
        raise InvalidQueryError(f"Invalid {label.lower()} format: '{text.strip()}'") from None


def parse_distance_input(text: str) -> Tuple[float, float]:
    """Parses '<distance>' or '<distance>--<margin>' into (distance_km, margin_km)."""
    parts = text.strip().split(MARGIN_SEPARATOR)
    if len(parts) == 1:
        distance, margin = _parse_number(parts[0], "Distance"), 0.0
    elif len(parts) == 2:
        distance, margin = _parse_number(parts[0], "Distance"), _parse_number(parts[1], "Margin")
    else:
        raise InvalidQueryError("Invalid input format. Use 'distance' or 'distance--margin'")

    _check_non_negative("Distance", distance)
    _check_non_negative("Margin", margin)
    return distance, margin
