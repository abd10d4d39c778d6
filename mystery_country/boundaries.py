import logging
import os
from dataclasses import dataclass
from typing import Dict, Iterable, Iterator, List, NamedTuple, Optional, Tuple

import geopandas as gpd
from shapely.geometry import MultiPolygon, Polygon, shape
from shapely.geometry.base import BaseGeometry

from mystery_country.config import COUNTRY_DATA_FILE, SHAPES_NAME_COLUMN, VALID_GEOMETRY_TYPES

logger = logging.getLogger(__name__)


class BoundaryPoint(NamedTuple):
    """A boundary vertex in decimal degrees."""
    lat: float
    lon: float


@dataclass(frozen=True)
class CountryBoundary:
    name: str
    points: Tuple[BoundaryPoint, ...] = ()

    @property
    def key(self) -> str:
        return normalize_name(self.name)


def normalize_name(name: str) -> str:
    """Case-insensitive comparison key for a country name."""
    return name.strip().casefold()


def _ring_points(ring) -> List[BoundaryPoint]:
    # GeoJSON order is (lon, lat)
    return [BoundaryPoint(lat=float(y), lon=float(x)) for x, y, *_ in ring.coords]


def _polygon_points(polygon: Polygon) -> List[BoundaryPoint]:
    if polygon.is_empty:
        return []
    points = _ring_points(polygon.exterior)
    for interior in polygon.interiors:
        points.extend(_ring_points(interior))
    return points


def extract_points(geometry: Optional[BaseGeometry]) -> Optional[Tuple[BoundaryPoint, ...]]:
    """Flattens every ring of a Polygon or MultiPolygon into boundary points.

    MultiPolygons are walked polygon by polygon, then ring by ring (exterior
    first), then vertex by vertex. Any other geometry kind yields None.
    """
    if geometry is None:
        return None
    if isinstance(geometry, MultiPolygon):
        points: List[BoundaryPoint] = []
        for polygon in geometry.geoms:
            points.extend(_polygon_points(polygon))
        return tuple(points)
    if isinstance(geometry, Polygon):
        return tuple(_polygon_points(geometry))
    return None


class BoundaryStore:
    """Read-only table of country boundaries, kept in source order."""

    def __init__(self, countries: Iterable[CountryBoundary] = ()):
        self._countries: List[CountryBoundary] = []
        self._by_key: Dict[str, CountryBoundary] = {}
        for country in countries:
            if country.key in self._by_key:
                logger.warning(f"Duplicate country name '{country.name}' ignored.")
                continue
            self._by_key[country.key] = country
            self._countries.append(country)

    def __iter__(self) -> Iterator[CountryBoundary]:
        return iter(self._countries)

    def __len__(self) -> int:
        return len(self._countries)

    def __contains__(self, name: object) -> bool:
        return isinstance(name, str) and normalize_name(name) in self._by_key

    def find(self, name: str) -> Optional[CountryBoundary]:
        return self._by_key.get(normalize_name(name))

    def names(self) -> List[str]:
        return [country.name for country in self._countries]

    @classmethod
    def from_rows(cls, rows: Iterable[Tuple[object, Optional[BaseGeometry]]]) -> 'BoundaryStore':
        """Builds a store from (name, geometry) pairs, skipping unusable rows."""
        countries = []
        skipped = 0
        for name, geometry in rows:
            if not isinstance(name, str) or not name.strip():
                skipped += 1
                continue
            points = extract_points(geometry)
            if points is None:
                skipped += 1
                continue
            countries.append(CountryBoundary(name=name.strip(), points=points))
        if skipped:
            logger.debug(f"Removed {skipped} features due to missing name or unsupported geometry.")
        return cls(countries)

    @classmethod
    def from_geodataframe(cls, gdf: gpd.GeoDataFrame, name_col: str = SHAPES_NAME_COLUMN) -> 'BoundaryStore':
        return cls.from_rows(zip(gdf[name_col], gdf.geometry))

    @classmethod
    def from_feature_collection(cls, collection: dict, name_col: str = SHAPES_NAME_COLUMN) -> 'BoundaryStore':
        """Builds a store straight from a parsed GeoJSON FeatureCollection."""
        if not isinstance(collection, dict) or collection.get('type') != 'FeatureCollection':
            raise ValueError("GeoJSON is not a FeatureCollection")

        def rows():
            for feature in collection.get('features') or []:
                properties = feature.get('properties') or {}
                geometry = feature.get('geometry')
                if not geometry or geometry.get('type') not in VALID_GEOMETRY_TYPES:
                    yield properties.get(name_col), None
                    continue
                try:
                    yield properties.get(name_col), shape(geometry)
                except (ValueError, TypeError, AttributeError, IndexError) as e:
                    logger.debug(f"Skipping malformed geometry for {properties.get(name_col)!r}: {e}")
                    yield properties.get(name_col), None

        return cls.from_rows(rows())


def load_boundaries(filepath: str = COUNTRY_DATA_FILE, name_col: str = SHAPES_NAME_COLUMN) -> Optional[BoundaryStore]:
    """Loads, validates CRS, and converts a GeoJSON file into a BoundaryStore."""
    logger.info(f"Loading country boundaries from {filepath}...")
    if not os.path.exists(filepath):
        logger.error(f"Boundary file '{filepath}' not found.")
        return None
    try:
        gdf = gpd.read_file(filepath)
        logger.info(f"Loaded {len(gdf)} raw shape features.")

        if name_col not in gdf.columns:
            logger.error(f"Required column '{name_col}' missing in boundary file.")
            return None

        # Ensure CRS is geographic
        if gdf.crs is None:
            logger.warning("Boundary file CRS missing. Assuming EPSG:4326 (WGS84).")
            gdf = gdf.set_crs('EPSG:4326')
        elif not gdf.crs.is_geographic:
            logger.warning(f"Boundary file CRS '{gdf.crs.name}' is projected. Reprojecting to EPSG:4326.")
            gdf = gdf.to_crs('EPSG:4326')

        gdf = gdf[gdf.geometry.notna()]
        gdf = gdf[gdf.geometry.geom_type.isin(VALID_GEOMETRY_TYPES)]
        store = BoundaryStore.from_geodataframe(gdf, name_col)
        logger.info(f"Boundary preprocessing complete. Stored {len(store)} countries.")
        return store

    except Exception as e:
        logger.error(f"Error loading/processing boundary file '{filepath}': {e}", exc_info=True)
        return None
