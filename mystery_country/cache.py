import logging
import threading
from typing import Callable, Dict, FrozenSet, Optional, Tuple

from mystery_country.boundaries import normalize_name

logger = logging.getLogger(__name__)

PairKey = FrozenSet[str]


def pair_key(country1: str, country2: str) -> PairKey:
    """Order- and case-independent key for a pair of country names."""
    return frozenset([normalize_name(country1), normalize_name(country2)])


class DistanceCache:
    """Process-lifetime table of minimum distances between country pairs.

    A single lock guards the check-compute-insert sequence, so every unordered
    pair is computed at most once even with concurrent callers. The compute
    step runs while the lock is held.
    """

    def __init__(self):
        self._distances: Dict[PairKey, float] = {}
        self._lock = threading.Lock()
        self.hits = 0
        self.misses = 0

    def get_or_compute(self, country1: str, country2: str, compute: Callable[[], Optional[float]]) -> Optional[float]:
        key = pair_key(country1, country2)
        with self._lock:
            if key in self._distances:
                self.hits += 1
                return self._distances[key]
            self.misses += 1
            distance = compute()
            if distance is None:
                logger.debug(f"No distance available for {country1} / {country2}; not cached.")
                return None
            self._distances[key] = distance
            return distance

    def get(self, country1: str, country2: str) -> Optional[float]:
        with self._lock:
            return self._distances.get(pair_key(country1, country2))

    def __contains__(self, pair: Tuple[str, str]) -> bool:
        country1, country2 = pair
        with self._lock:
            return pair_key(country1, country2) in self._distances

    def __len__(self) -> int:
        with self._lock:
            return len(self._distances)
