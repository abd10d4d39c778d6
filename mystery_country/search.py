import logging
from dataclasses import dataclass, field
from typing import Iterable, List

from mystery_country.boundaries import CountryBoundary
from mystery_country.cache import DistanceCache
from mystery_country.config import MARGIN_STEP_KM, MAX_MARGIN_KM
from mystery_country.geometry import min_distance_km
from mystery_country.query import SearchQuery
from mystery_country.special_cases import is_special_case

logger = logging.getLogger(__name__)


@dataclass
class SearchResult:
    candidates: List[str] = field(default_factory=list)
    margin_km: float = 0.0
    initial_margin_km: float = 0.0
    iterations: int = 0

    @property
    def found(self) -> bool:
        return bool(self.candidates)

    @property
    def expanded(self) -> bool:
        return self.margin_km > self.initial_margin_km


def find_mystery_countries(
    guessed: CountryBoundary,
    known_distance_km: float,
    margin_error_km: float,
    all_countries: Iterable[CountryBoundary],
    cache: DistanceCache,
) -> List[str]:
    """Names of all countries whose distance to `guessed` lies within the margin band."""
    lower_bound = known_distance_km - margin_error_km
    upper_bound = known_distance_km + margin_error_km

    matches = []
    for country in all_countries:
        if country.key == guessed.key:
            continue
        if is_special_case(guessed.name, country.name):
            matches.append(country.name)
            continue

        distance_km = cache.get_or_compute(
            guessed.name,
            country.name,
            lambda: min_distance_km(guessed.points, country.points),
        )
        if distance_km is None:
            continue
        if lower_bound <= distance_km <= upper_bound:
            matches.append(country.name)
    return matches


def find_candidates(
    guessed: CountryBoundary,
    known_distance_km: float,
    initial_margin_km: float,
    all_countries: Iterable[CountryBoundary],
    cache: DistanceCache,
    step_km: float = MARGIN_STEP_KM,
    max_margin_km: float = MAX_MARGIN_KM,
) -> SearchResult:
    """Widens the margin by `step_km` until something matches or `max_margin_km` is reached.

    Each margin value triggers a full re-scan of every country; distances come
    from the cache after the first pass. An empty result at the ceiling is a
    normal outcome.
    """
    query = SearchQuery(guessed, known_distance_km, initial_margin_km)
    if step_km <= 0:
        raise ValueError(f"Margin step must be positive, got {step_km}")
    countries = list(all_countries)

    margin_error_km = query.margin_km
    iterations = 0
    while True:
        iterations += 1
        possible_countries = find_mystery_countries(
            query.guessed, query.target_km, margin_error_km, countries, cache
        )
        if possible_countries or margin_error_km >= max_margin_km:
            break
        # margin is always start + n * step
        margin_error_km = query.margin_km + iterations * step_km
        logger.debug(f"No countries found, increasing search margin to {margin_error_km} km...")

    logger.info(
        f"Search from {guessed.name} at {known_distance_km} km: {len(possible_countries)} found "
        f"with margin {margin_error_km} km after {iterations} pass(es). "
        f"Cache size {len(cache)} (hits={cache.hits}, misses={cache.misses})."
    )
    return SearchResult(
        candidates=possible_countries,
        margin_km=margin_error_km,
        initial_margin_km=query.margin_km,
        iterations=iterations,
    )
