import pytest

from mystery_country.boundaries import BoundaryPoint, BoundaryStore, CountryBoundary
from mystery_country.cache import DistanceCache

from helpers import country, point_east_of_origin


@pytest.fixture
def cache():
    return DistanceCache()


@pytest.fixture
def europe():
    return BoundaryStore([
        country("France", (46.0, 2.0), (43.3, 5.4), (48.9, 2.3)),
        country("Monaco", (43.7, 7.4)),
        country("Italy", (41.9, 12.5), (45.5, 9.2)),
        country("San Marino", (43.9, 12.4)),
        country("Spain", (40.4, -3.7), (41.4, 2.2)),
        country("Atlantis"),
    ])


@pytest.fixture
def equator_pair():
    """Two single-point countries roughly 100 km apart."""
    return BoundaryStore([
        CountryBoundary("Alpha", (BoundaryPoint(0.0, 0.0),)),
        CountryBoundary("Beta", (point_east_of_origin(100.0),)),
    ])
