import logging
import sys
from typing import Callable, Optional

from mystery_country.boundaries import BoundaryStore, load_boundaries
from mystery_country.cache import DistanceCache
from mystery_country.config import COUNTRY_DATA_FILE, configure_logging
from mystery_country.query import InvalidQueryError, parse_distance_input
from mystery_country.search import find_candidates

logger = logging.getLogger(__name__)

QUIT_COMMAND = 'quit'
COUNTRY_PROMPT = "\nEnter the country you guessed (or 'quit' to exit): "
DISTANCE_PROMPT = "Enter the distance (km) and optional margin (e.g., 500--50): "


def _format_km(value: float) -> str:
    return f"{value:g}"


def run_session(
    store: BoundaryStore,
    cache: DistanceCache,
    input_fn: Optional[Callable[[str], str]] = None,
    output_fn: Optional[Callable[[str], None]] = None,
):
    """Interactive loop: one query is answered fully before the next prompt."""
    input_fn = input_fn or input
    output_fn = output_fn or print
    output_fn("Country Distance Calculator")
    output_fn("==========================")

    while True:
        try:
            guessed_name = input_fn(COUNTRY_PROMPT).strip()
        except EOFError:
            guessed_name = QUIT_COMMAND

        if guessed_name.lower() == QUIT_COMMAND:
            output_fn("Thank you for using the Country Distance Calculator!")
            return

        guessed = store.find(guessed_name)
        if guessed is None:
            output_fn(f"Error: Country '{guessed_name}' not found in database")
            continue

        try:
            distance_text = input_fn(DISTANCE_PROMPT)
        except EOFError:
            output_fn("Thank you for using the Country Distance Calculator!")
            return

        try:
            known_distance_km, initial_margin = parse_distance_input(distance_text)
        except InvalidQueryError as e:
            output_fn(f"Error parsing distance: {e}")
            continue

        result = find_candidates(guessed, known_distance_km, initial_margin, store, cache)

        if not result.found:
            output_fn(f"\nNo countries found even with increased margin of {_format_km(result.margin_km)} km.")
            continue
        if result.expanded:
            output_fn(f"\nFound countries with adjusted margin of {_format_km(result.margin_km)} km:")
        output_fn(f"\nPossible mystery countries ({len(result.candidates)} found):")
        for country_name in result.candidates:
            output_fn(f"- {country_name}")


def main(argv: Optional[list] = None) -> int:
    configure_logging()
    args = sys.argv[1:] if argv is None else argv
    data_file = args[0] if args else COUNTRY_DATA_FILE
    store = load_boundaries(data_file)
    if store is None or len(store) == 0:
        logger.critical(f"FATAL: No country boundaries could be loaded from '{data_file}'.")
        return 1
    run_session(store, DistanceCache())
    return 0


if __name__ == '__main__':
    sys.exit(main())
