"""
Static TomTom lookup tables for nearby search planning.

Loaded once at import time and never mutated.
"""

from types import MappingProxyType
from typing import Mapping, NamedTuple, Optional, Tuple

# Reference: https://developer.tomtom.com/search-api/documentation/product-information/supported-category-codes
EV_STATION_CATEGORY_CODE = "7309"
EV_STATION_LABEL = "electric vehicle station"

# Result caps per sub-query
CATEGORY_RESULT_LIMIT = 100
KEYWORD_RESULT_LIMIT = 50
CHARGER_RESULT_LIMIT = 100

DEFAULT_POI_CATEGORIES: Tuple[str, ...] = ("parks",)

# User-facing POI category name -> TomTom category code
POI_CATEGORY_CODES: Mapping[str, str] = MappingProxyType({
    "parks": "9927",         # Natural/Recreational areas
    "attractions": "9909",   # Tourist attractions
    "museums": "9902",       # Museums
    "restaurants": "9376",   # Restaurants
    "hotels": "9373",        # Hotels/Lodging
    "scenic": "9927",        # Scenic areas (same as parks)
    "camping": "9911",       # Camping/RV parks
})

# Free-text term used in the category search path, when it differs from the name
POI_CATEGORY_LABELS: Mapping[str, str] = MappingProxyType({
    "parks": "national park",
})

# Supplementary keyword searches per category
POI_KEYWORD_SYNONYMS: Mapping[str, Tuple[str, ...]] = MappingProxyType({
    "parks": ("national park", "state park", "national monument", "national forest", "regional park"),
    "attractions": ("tourist attraction", "landmark", "scenic viewpoint", "observation deck", "visitor center"),
    "museums": ("museum", "art gallery", "science center", "history center", "cultural center"),
    "restaurants": ("restaurant", "cafe", "diner", "food court", "brewery"),
    "hotels": ("hotel", "motel", "resort", "inn", "lodge"),
    "camping": ("campground", "rv park", "camping", "national forest campground", "state park camping"),
})


class ChargerSearch(NamedTuple):
    """Template for one charger sub-query: a keyword, or a category code with its label."""
    keyword: Optional[str] = None
    category_code: Optional[str] = None
    label: Optional[str] = None


CHARGER_TYPE_FAST = "fast"
CHARGER_TYPE_LEVEL2 = "level2"

CHARGER_SEARCHES: Mapping[str, Tuple[ChargerSearch, ...]] = MappingProxyType({
    CHARGER_TYPE_FAST: (
        ChargerSearch(keyword="supercharger"),
        ChargerSearch(keyword="fast charging"),
        ChargerSearch(keyword="dc charging"),
    ),
    CHARGER_TYPE_LEVEL2: (
        ChargerSearch(keyword="level 2 charging"),
        ChargerSearch(keyword="destination charging"),
        ChargerSearch(category_code=EV_STATION_CATEGORY_CODE, label=EV_STATION_LABEL),
    ),
})

# Any other charger type, including none
DEFAULT_CHARGER_SEARCHES: Tuple[ChargerSearch, ...] = (
    ChargerSearch(category_code=EV_STATION_CATEGORY_CODE, label=EV_STATION_LABEL),
    ChargerSearch(keyword="charging station"),
)


def category_code_for(name: str) -> str:
    """TomTom code for a category name; unknown names pass through as a literal code."""
    return POI_CATEGORY_CODES.get(name, name)


def category_label_for(name: str) -> str:
    return POI_CATEGORY_LABELS.get(name, name)


def keyword_synonyms_for(name: str) -> Tuple[str, ...]:
    return POI_KEYWORD_SYNONYMS.get(name, ())


def charger_searches_for(charger_type: Optional[str]) -> Tuple[ChargerSearch, ...]:
    return CHARGER_SEARCHES.get(charger_type or "", DEFAULT_CHARGER_SEARCHES)
