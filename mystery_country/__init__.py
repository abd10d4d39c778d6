"""Deduce a mystery country from a known country and an approximate distance."""

from mystery_country.boundaries import BoundaryPoint, BoundaryStore, CountryBoundary, load_boundaries
from mystery_country.cache import DistanceCache, pair_key
from mystery_country.geometry import haversine_km, min_distance_km
from mystery_country.query import InvalidQueryError, SearchQuery, parse_distance_input
from mystery_country.search import SearchResult, find_candidates, find_mystery_countries
from mystery_country.special_cases import is_special_case

__version__ = "0.1.0"

__all__ = [
    "BoundaryPoint",
    "BoundaryStore",
    "CountryBoundary",
    "DistanceCache",
    "InvalidQueryError",
    "SearchQuery",
    "SearchResult",
    "find_candidates",
    "find_mystery_countries",
    "haversine_km",
    "is_special_case",
    "load_boundaries",
    "min_distance_km",
    "pair_key",
    "parse_distance_input",
]
