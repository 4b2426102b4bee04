"""
Nearby Search Service - request-level orchestration of the aggregation engine.

This service handles:
- Binding to the configured provider (missing credentials are fatal)
- Planning sub-queries for charging-station and categorized POI searches
- Running the plan through the result aggregator
- Normalizing the merged records into the response shape
"""

import logging
from typing import Iterable, List, Optional

from pydantic import BaseModel, Field

from gateway.providers.base import SearchProvider
from gateway.providers.manager import create_provider
from gateway.providers.models import AggregationStats, CanonicalPOI, Location
from gateway.services.query_executor import QueryExecutor
from gateway.services.response_normalizer import (
    DEFAULT_POI_NAME,
    DEFAULT_STATION_NAME,
    normalize_records,
)
from gateway.services.result_aggregator import ResultAggregator
from gateway.services.search_plan_builder import build_charging_station_plan, build_poi_plan

logger = logging.getLogger(__name__)


class ChargingStationSearchResult(BaseModel):
    stations: List[CanonicalPOI] = Field(default_factory=list)
    total_results: int = Field(default=0)
    stats: AggregationStats = Field(default_factory=AggregationStats, exclude=True)


class POISearchResult(BaseModel):
    pois: List[CanonicalPOI] = Field(default_factory=list)
    total_results: int = Field(default=0)
    stats: AggregationStats = Field(default_factory=AggregationStats, exclude=True)


class NearbySearchService:
    """
    Service for finding charging stations and categorized POIs near a point.

    One instance can serve many requests; every call gets its own plan and
    its own dedup state.
    """

    def __init__(
        self,
        provider: SearchProvider,
        aggregator: Optional[ResultAggregator] = None,
    ):
        """
        Initialize the Nearby Search Service.

        Args:
            provider: Geo-search provider the sub-queries go to
            aggregator: Aggregator to use (optional, built from settings)
        """
        self.provider = provider
        self.aggregator = aggregator or ResultAggregator(QueryExecutor(provider))

    async def search_charging_stations(
        self,
        latitude: float,
        longitude: float,
        radius: int,
        limit: Optional[int] = None,
        charger_type: Optional[str] = None,
    ) -> ChargingStationSearchResult:
        """
        Find charging stations around a location.

        Args:
            latitude: Search center latitude
            longitude: Search center longitude
            radius: Search radius in meters
            limit: Optional per-query result cap
            charger_type: fast, level2, or anything else for the generic search

        Returns:
            ChargingStationSearchResult; empty when every sub-query failed
        """
        location = Location(latitude=latitude, longitude=longitude)
        plan = build_charging_station_plan(location, radius, charger_type=charger_type, limit=limit)

        logger.info(
            f"Charging station search at {latitude},{longitude} r={radius}m "
            f"charger_type={charger_type!r} ({len(plan)} sub-queries)"
        )

        aggregated = await self.aggregator.aggregate(plan)
        stations = normalize_records(
            aggregated.records, default_name=DEFAULT_STATION_NAME, source=self.provider.source
        )
        return ChargingStationSearchResult(
            stations=stations, total_results=len(stations), stats=aggregated.stats
        )

    async def search_pois(
        self,
        latitude: float,
        longitude: float,
        radius: int,
        limit: Optional[int] = None,
        categories: Optional[Iterable[str]] = None,
    ) -> POISearchResult:
        """
        Find POIs of the requested categories around a location.

        Args:
            latitude: Search center latitude
            longitude: Search center longitude
            radius: Search radius in meters
            limit: Optional per-query result cap
            categories: Category names; defaults to parks when None

        Returns:
            POISearchResult; empty when every sub-query failed
        """
        categories = list(categories) if categories is not None else None
        location = Location(latitude=latitude, longitude=longitude)
        plan = build_poi_plan(location, radius, categories=categories, limit=limit)

        logger.info(
            f"POI search at {latitude},{longitude} r={radius}m "
            f"categories={categories} ({len(plan)} sub-queries)"
        )

        aggregated = await self.aggregator.aggregate(plan)
        pois = normalize_records(
            aggregated.records, default_name=DEFAULT_POI_NAME, source=self.provider.source
        )
        return POISearchResult(pois=pois, total_results=len(pois), stats=aggregated.stats)


def get_nearby_search_service() -> NearbySearchService:
    """
    Build the service for the configured provider.

    Raises:
        ProviderConfigurationError: If the provider credentials are missing
    """
    return NearbySearchService(create_provider())
