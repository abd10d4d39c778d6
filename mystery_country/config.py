import logging
import os

from dotenv import load_dotenv

load_dotenv()
logger = logging.getLogger(__name__)


def _env_float(name: str, default: float) -> float:
    raw = os.environ.get(name)
    if raw is None or raw.strip() == '':
        return default
    try:
        return float(raw)
    except ValueError:
        logger.warning(f"Ignoring invalid value for {name}: '{raw}'. Using {default}.")
        return default


# --- Configuration & Constants ---
COUNTRY_DATA_FILE = os.environ.get('COUNTRY_DATA_FILE', 'country_data.json')
SHAPES_NAME_COLUMN = 'NAME'
VALID_GEOMETRY_TYPES = ["Polygon", "MultiPolygon"]

EARTH_RADIUS_KM = 6371.0088
DISTANCE_CHUNK_SIZE = 1_000_000  # pairwise distances per numpy block

MARGIN_STEP_KM = _env_float('MARGIN_STEP_KM', 1.0)
MAX_MARGIN_KM = _env_float('MAX_MARGIN_KM', 100.0)
if MARGIN_STEP_KM <= 0:
    logger.warning(f"MARGIN_STEP_KM must be positive, got {MARGIN_STEP_KM}. Using 1.0.")
    MARGIN_STEP_KM = 1.0
if MAX_MARGIN_KM < 0:
    logger.warning(f"MAX_MARGIN_KM must be non-negative, got {MAX_MARGIN_KM}. Using 100.0.")
    MAX_MARGIN_KM = 100.0

LOG_LEVEL = os.environ.get('LOG_LEVEL', 'INFO').upper()
LOG_FORMAT = '%(asctime)s %(levelname)s %(name)s: %(message)s'


def configure_logging(level: str = LOG_LEVEL):
    """Sets up root logging for the console and HTTP entry points."""
    numeric_level = getattr(logging, level, None)
    if not isinstance(numeric_level, int):
        numeric_level = logging.INFO
    logging.basicConfig(level=numeric_level, format=LOG_FORMAT)
