"""
Unit tests for gateway/services/nearby_search_service.py

End-to-end through plan, aggregation and normalization with a fake provider.
"""

import pytest

from gateway.providers.base import ProviderConfigurationError, ProviderResponseError
from gateway.services.nearby_search_service import (
    NearbySearchService,
    get_nearby_search_service,
)
from gateway.services.query_executor import QueryExecutor
from gateway.services.result_aggregator import ResultAggregator
from tests.conftest import FakeSearchProvider, make_record, make_records


def _service(provider):
    aggregator = ResultAggregator(
        QueryExecutor(provider, timeout_seconds=1.0), max_concurrency=8, request_timeout_seconds=5.0
    )
    return NearbySearchService(provider, aggregator=aggregator)


class TestSearchChargingStations:

    @pytest.mark.asyncio
    async def test_default_plan_merges_disjoint_results(self):
        provider = FakeSearchProvider(responses={
            "7309": make_records("cat", 10),
            "charging station": make_records("kw", 7),
        })

        result = await _service(provider).search_charging_stations(37.77, -122.42, 50000)

        assert result.total_results == 17
        assert len(result.stations) == 17
        assert len({s.id for s in result.stations}) == 17
        assert {s.category for s in result.stations} == {"electric vehicle station", "charging station"}
        assert all(s.source == "tomtom" for s in result.stations)

    @pytest.mark.asyncio
    async def test_fast_chargers_are_tagged_by_keyword(self):
        provider = FakeSearchProvider(responses={
            "supercharger": [make_record("sc-1", name="Tesla Supercharger")],
            "dc charging": [make_record("dc-1", name="EVgo")],
        })

        result = await _service(provider).search_charging_stations(
            37.77, -122.42, 50000, charger_type="fast"
        )

        assert {s.id: s.category for s in result.stations} == {
            "sc-1": "supercharger",
            "dc-1": "dc charging",
        }
        assert sorted(provider.terms_called) == ["dc charging", "fast charging", "supercharger"]

    @pytest.mark.asyncio
    async def test_missing_names_use_station_placeholder(self):
        provider = FakeSearchProvider(responses={"7309": [make_record("nameless", name=None)]})

        result = await _service(provider).search_charging_stations(37.77, -122.42, 50000)

        assert result.stations[0].name == "Unknown Station"

    @pytest.mark.asyncio
    async def test_total_outage_is_an_empty_success(self):
        provider = FakeSearchProvider(errors={
            "7309": ProviderResponseError(500),
            "charging station": ProviderResponseError(500),
        })

        result = await _service(provider).search_charging_stations(37.77, -122.42, 50000)

        assert result.stations == []
        assert result.total_results == 0
        assert result.stats.failed == 2

    @pytest.mark.asyncio
    async def test_limit_reaches_the_provider(self):
        provider = FakeSearchProvider()

        await _service(provider).search_charging_stations(37.77, -122.42, 50000, limit=5)

        assert all(q.result_limit == 5 for q in provider.calls)

    @pytest.mark.asyncio
    async def test_stats_are_not_serialized(self):
        provider = FakeSearchProvider(responses={"7309": make_records("cat", 1)})

        result = await _service(provider).search_charging_stations(37.77, -122.42, 50000)

        assert "stats" not in result.model_dump()


class TestSearchPOIs:

    @pytest.mark.asyncio
    async def test_default_category_is_parks(self):
        provider = FakeSearchProvider(responses={"9927": [make_record("yosemite", name="Yosemite")]})

        result = await _service(provider).search_pois(37.77, -122.42, 50000)

        assert len(provider.calls) == 6
        assert [(p.id, p.category) for p in result.pois] == [("yosemite", "parks")]

    @pytest.mark.asyncio
    async def test_duplicates_across_synonyms_are_merged(self):
        provider = FakeSearchProvider(responses={
            "9927": [make_record("p1"), make_record("p2")],
            "state park": [make_record("p2"), make_record("p3")],
            "national forest": [make_record("p1")],
        })

        result = await _service(provider).search_pois(37.77, -122.42, 50000, categories=["parks"])

        assert sorted(p.id for p in result.pois) == ["p1", "p2", "p3"]
        assert result.total_results == 3
        assert result.stats.duplicates == 2

    @pytest.mark.asyncio
    async def test_categories_accept_any_iterable(self):
        provider = FakeSearchProvider()

        await _service(provider).search_pois(37.77, -122.42, 50000, categories=iter(["museums"]))

        assert provider.terms_called[0] == "9902"
        assert len(provider.calls) == 6

    @pytest.mark.asyncio
    async def test_empty_categories_run_no_queries(self):
        provider = FakeSearchProvider(responses={"9927": [make_record("yosemite")]})

        result = await _service(provider).search_pois(37.77, -122.42, 50000, categories=[])

        assert provider.calls == []
        assert result.pois == []
        assert result.total_results == 0

    @pytest.mark.asyncio
    async def test_missing_names_use_poi_placeholder(self):
        provider = FakeSearchProvider(responses={"9927": [make_record("nameless", name=None)]})

        result = await _service(provider).search_pois(37.77, -122.42, 50000)

        assert result.pois[0].name == "Unknown POI"


class TestGetNearbySearchService:

    def test_missing_credentials_are_fatal(self, no_api_key_env):
        with pytest.raises(ProviderConfigurationError):
            get_nearby_search_service()

    def test_builds_service_on_configured_provider(self, mock_env_vars):
        service = get_nearby_search_service()

        assert service.provider.source == "tomtom"
        assert service.aggregator.max_concurrency == 8
        assert service.aggregator.request_timeout_seconds == 5.0
        assert service.aggregator.executor.timeout_seconds == 2.0
