from typing import FrozenSet

from mystery_country.cache import PairKey, pair_key

# Enclaves, exclaves and dependencies whose border geometry misleads the search.
SPECIAL_PAIRS: FrozenSet[PairKey] = frozenset([
    pair_key("South Africa", "Lesotho"),
    pair_key("Italy", "Vatican"),
    pair_key("Italy", "San Marino"),
    pair_key("France", "Monaco"),
    pair_key("Spain", "Gibraltar"),
    pair_key("China", "Hong Kong"),
    pair_key("China", "Macau"),
])


def is_special_case(country1: str, country2: str) -> bool:
    return pair_key(country1, country2) in SPECIAL_PAIRS
