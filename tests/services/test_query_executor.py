"""
Unit tests for gateway/services/query_executor.py

Per-query failure isolation: every provider-side problem becomes an empty
record list with a status, and cancellation still propagates.
"""

import asyncio

import httpx
import pytest

from gateway.providers.base import MalformedPayloadError, ProviderResponseError
from gateway.services.query_executor import QueryExecutor, QueryStatus
from gateway.services.search_plan_builder import build_charging_station_plan
from tests.conftest import FakeSearchProvider, make_records


@pytest.fixture
def fast_plan(sample_location):
    return build_charging_station_plan(sample_location, 50000, charger_type="fast")


class TestQueryExecutorSuccess:

    @pytest.mark.asyncio
    async def test_returns_records_in_provider_order(self, fast_plan):
        records = make_records("sc", 3)
        provider = FakeSearchProvider(responses={"supercharger": records})
        executor = QueryExecutor(provider, timeout_seconds=1.0)

        result = await executor.execute(fast_plan[0])

        assert result.status is QueryStatus.OK
        assert result.succeeded
        assert [r["id"] for r in result.records] == ["sc-0", "sc-1", "sc-2"]

    @pytest.mark.asyncio
    async def test_result_carries_query_category(self, fast_plan):
        provider = FakeSearchProvider()
        executor = QueryExecutor(provider, timeout_seconds=1.0)

        result = await executor.execute(fast_plan[1])

        assert result.query is fast_plan[1]
        assert result.category == "fast charging"

    @pytest.mark.asyncio
    async def test_makes_exactly_one_attempt(self, fast_plan):
        provider = FakeSearchProvider(errors={"supercharger": ProviderResponseError(503)})
        executor = QueryExecutor(provider, timeout_seconds=1.0)

        await executor.execute(fast_plan[0])

        assert provider.terms_called == ["supercharger"]


class TestQueryExecutorFailures:

    @pytest.mark.asyncio
    @pytest.mark.parametrize("error", [
        ProviderResponseError(500, "boom"),
        MalformedPayloadError("not json"),
        httpx.ConnectError("connection refused"),
        httpx.ReadError("connection reset"),
    ])
    async def test_errors_resolve_to_empty_list(self, fast_plan, error):
        provider = FakeSearchProvider(errors={"supercharger": error})
        executor = QueryExecutor(provider, timeout_seconds=1.0)

        result = await executor.execute(fast_plan[0])

        assert result.status is QueryStatus.FAILED
        assert result.records == []
        assert result.error

    @pytest.mark.asyncio
    async def test_hanging_provider_is_bounded_by_timeout(self, fast_plan):
        provider = FakeSearchProvider(delays={"supercharger": 5.0})
        executor = QueryExecutor(provider, timeout_seconds=0.05)

        result = await asyncio.wait_for(executor.execute(fast_plan[0]), timeout=2.0)

        assert result.status is QueryStatus.TIMED_OUT
        assert result.records == []
        assert provider.cancelled == 1

    @pytest.mark.asyncio
    async def test_http_timeout_counts_as_timed_out(self, fast_plan):
        provider = FakeSearchProvider(errors={"supercharger": httpx.ReadTimeout("slow")})
        executor = QueryExecutor(provider, timeout_seconds=1.0)

        result = await executor.execute(fast_plan[0])

        assert result.status is QueryStatus.TIMED_OUT

    @pytest.mark.asyncio
    async def test_cancellation_propagates(self, fast_plan):
        provider = FakeSearchProvider(delays={"supercharger": 5.0})
        executor = QueryExecutor(provider, timeout_seconds=10.0)

        task = asyncio.create_task(executor.execute(fast_plan[0]))
        await asyncio.sleep(0.05)
        task.cancel()

        with pytest.raises(asyncio.CancelledError):
            await task
        assert provider.cancelled == 1

    def test_timeout_defaults_to_settings(self, mock_env_vars):
        executor = QueryExecutor(FakeSearchProvider())
        assert executor.timeout_seconds == 2.0
