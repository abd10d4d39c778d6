import math
from typing import Optional, Sequence

import numpy as np

from mystery_country.boundaries import BoundaryPoint
from mystery_country.config import DISTANCE_CHUNK_SIZE, EARTH_RADIUS_KM


def haversine_km(p1: BoundaryPoint, p2: BoundaryPoint) -> float:
    """Great-circle distance between two points in km."""
    lat1, lon1 = math.radians(p1.lat), math.radians(p1.lon)
    lat2, lon2 = math.radians(p2.lat), math.radians(p2.lon)
    a = math.sin((lat2 - lat1) / 2) ** 2 + math.cos(lat1) * math.cos(lat2) * math.sin((lon2 - lon1) / 2) ** 2
    return 2 * EARTH_RADIUS_KM * math.asin(min(1.0, math.sqrt(a)))


def _as_radians(points: Sequence[BoundaryPoint]) -> np.ndarray:
    return np.radians(np.asarray(points, dtype=np.float64).reshape(-1, 2))


def min_distance_km(points_a: Sequence[BoundaryPoint], points_b: Sequence[BoundaryPoint]) -> Optional[float]:
    """Smallest haversine distance between any vertex of A and any vertex of B.

    Every pair is evaluated, so the cost is O(len(a) * len(b)). The work is
    split into row blocks of at most DISTANCE_CHUNK_SIZE pairs to bound memory.
    Returns None when either side has no points.
    """
    if len(points_a) == 0 or len(points_b) == 0:
        return None

    a = _as_radians(points_a)
    b = _as_radians(points_b)
    lat_b, lon_b = b[:, 0], b[:, 1]
    cos_lat_b = np.cos(lat_b)
    rows_per_block = max(1, DISTANCE_CHUNK_SIZE // len(b))

    # haversine term is monotonic in distance; convert once at the end
    best = np.inf
    for start in range(0, len(a), rows_per_block):
        block = a[start:start + rows_per_block]
        lat_a = block[:, 0:1]
        lon_a = block[:, 1:2]
        h = (np.sin((lat_b - lat_a) / 2) ** 2
             + np.cos(lat_a) * cos_lat_b * np.sin((lon_b - lon_a) / 2) ** 2)
        best = min(best, float(h.min()))

    return 2 * EARTH_RADIUS_KM * math.asin(min(1.0, math.sqrt(best)))
