"""
Search plan builder - turns one nearby-search request into provider sub-queries.

Pure functions, no I/O. The plan order is the order queries are dispatched
in; it does not fix the order results are merged in.
"""

import logging
from typing import Iterable, List, Optional

from gateway.providers.models import EndpointKind, Location, SearchQuery
from gateway.providers.tomtom.categories import (
    CATEGORY_RESULT_LIMIT,
    CHARGER_RESULT_LIMIT,
    DEFAULT_POI_CATEGORIES,
    KEYWORD_RESULT_LIMIT,
    category_code_for,
    category_label_for,
    charger_searches_for,
    keyword_synonyms_for,
)

logger = logging.getLogger(__name__)


def _capped(default_cap: int, limit: Optional[int]) -> int:
    if limit is None:
        return default_cap
    return min(default_cap, limit)


def _check_bounds(radius_meters: int, limit: Optional[int]) -> None:
    if radius_meters <= 0:
        raise ValueError(f"radius must be positive, got {radius_meters}")
    if limit is not None and limit <= 0:
        raise ValueError(f"limit must be positive, got {limit}")


def build_charging_station_plan(
    location: Location,
    radius_meters: int,
    charger_type: Optional[str] = None,
    limit: Optional[int] = None,
) -> List[SearchQuery]:
    """
    Plan the sub-queries for a charging-station search.

    ``fast`` and ``level2`` map to three targeted searches each; any other
    value, including None, maps to the generic two-search plan. Each query is
    tagged with its keyword, or with its label for category searches.

    Args:
        location: Search center
        radius_meters: Search radius in meters
        charger_type: Charger filter (fast, level2 or anything else)
        limit: Optional per-query result cap

    Returns:
        Ordered list of sub-queries
    """
    _check_bounds(radius_meters, limit)
    result_limit = _capped(CHARGER_RESULT_LIMIT, limit)

    plan = []
    for search in charger_searches_for(charger_type):
        if search.category_code is not None:
            plan.append(SearchQuery(
                endpoint_kind=EndpointKind.CATEGORY_SEARCH,
                category_code=search.category_code,
                category=search.label,
                label=search.label,
                location=location,
                radius_meters=radius_meters,
                result_limit=result_limit,
            ))
        else:
            plan.append(SearchQuery(
                endpoint_kind=EndpointKind.KEYWORD_SEARCH,
                keyword=search.keyword,
                category=search.keyword,
                label=search.keyword,
                location=location,
                radius_meters=radius_meters,
                result_limit=result_limit,
            ))

    logger.debug(f"Charging plan for charger_type={charger_type!r}: {len(plan)} sub-queries")
    return plan


def build_poi_plan(
    location: Location,
    radius_meters: int,
    categories: Optional[Iterable[str]] = None,
    limit: Optional[int] = None,
) -> List[SearchQuery]:
    """
    Plan the sub-queries for a categorized POI search.

    Every requested category contributes one category-code search; after all
    of those come the keyword searches for each category's synonyms, tagged
    with the requested category name. Unknown names are sent as a literal
    category code and have no synonyms.

    Args:
        location: Search center
        radius_meters: Search radius in meters
        categories: Requested category names; defaults to ``["parks"]`` when None.
            An empty list plans no queries
        limit: Optional per-query result cap

    Returns:
        Ordered list of sub-queries
    """
    _check_bounds(radius_meters, limit)

    if categories is None:
        categories = DEFAULT_POI_CATEGORIES
    # Order-preserving dedup of the requested names
    names = list(dict.fromkeys(categories))

    plan = [
        SearchQuery(
            endpoint_kind=EndpointKind.CATEGORY_SEARCH,
            category_code=category_code_for(name),
            category=name,
            label=category_label_for(name),
            location=location,
            radius_meters=radius_meters,
            result_limit=_capped(CATEGORY_RESULT_LIMIT, limit),
        )
        for name in names
    ]

    for name in names:
        for keyword in keyword_synonyms_for(name):
            plan.append(SearchQuery(
                endpoint_kind=EndpointKind.KEYWORD_SEARCH,
                keyword=keyword,
                category=name,
                label=keyword,
                location=location,
                radius_meters=radius_meters,
                result_limit=_capped(KEYWORD_RESULT_LIMIT, limit),
            ))

    logger.debug(f"POI plan for categories={names}: {len(plan)} sub-queries")
    return plan
