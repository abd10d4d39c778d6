import math

from mystery_country.boundaries import BoundaryPoint, CountryBoundary
from mystery_country.config import EARTH_RADIUS_KM


def point_east_of_origin(distance_km):
    """A point on the equator `distance_km` east of (0, 0)."""
    return BoundaryPoint(lat=0.0, lon=math.degrees(distance_km / EARTH_RADIUS_KM))


def country(name, *points):
    return CountryBoundary(name=name, points=tuple(BoundaryPoint(*p) for p in points))
