"""
Pytest configuration and shared fixtures.

This module provides common fixtures for all tests in the gateway project:
a scriptable fake search provider, TomTom-shaped record builders and
environment helpers.
"""

import pytest
import os
import asyncio
from typing import Any, Dict, List, Optional

# Add the project root to Python path
import sys
from pathlib import Path
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))

from gateway.providers.base import SearchProvider, ProviderType
from gateway.providers.models import Location, SearchQuery


def make_record(
    record_id: str,
    name: Optional[str] = "Test Place",
    lat: Optional[float] = 37.7749,
    lon: Optional[float] = -122.4194,
    dist: Optional[float] = 1234.5,
    address: Optional[str] = "1 Market St, San Francisco, CA 94105",
    phone: Optional[str] = None,
    url: Optional[str] = None,
    categories: Optional[List[str]] = None,
) -> Dict[str, Any]:
    """Build a record shaped like an item of TomTom's ``results`` array."""
    record: Dict[str, Any] = {"type": "POI", "id": record_id}
    poi: Dict[str, Any] = {}
    if name is not None:
        poi["name"] = name
    if phone is not None:
        poi["phone"] = phone
    if url is not None:
        poi["url"] = url
    if categories is not None:
        poi["categories"] = categories
    record["poi"] = poi
    if address is not None:
        record["address"] = {"freeformAddress": address}
    if lat is not None or lon is not None:
        record["position"] = {"lat": lat, "lon": lon}
    if dist is not None:
        record["dist"] = dist
    return record


def make_records(prefix: str, count: int) -> List[Dict[str, Any]]:
    return [make_record(f"{prefix}-{i}", name=f"{prefix} {i}") for i in range(count)]


class FakeSearchProvider(SearchProvider):
    """
    Scriptable provider keyed by query term (category code or keyword).

    ``responses`` gives the records per term, ``delays`` a sleep before
    answering and ``errors`` an exception to raise instead of answering.
    """

    def __init__(
        self,
        responses: Optional[Dict[str, List[Dict[str, Any]]]] = None,
        delays: Optional[Dict[str, float]] = None,
        errors: Optional[Dict[str, BaseException]] = None,
    ):
        self.responses = responses or {}
        self.delays = delays or {}
        self.errors = errors or {}
        self.calls: List[SearchQuery] = []
        self.in_flight = 0
        self.max_in_flight = 0
        self.cancelled = 0
        self.closed = False

    async def category_search(self, query: SearchQuery):
        return await self._answer(query)

    async def keyword_search(self, query: SearchQuery):
        return await self._answer(query)

    async def _answer(self, query: SearchQuery):
        self.calls.append(query)
        self.in_flight += 1
        self.max_in_flight = max(self.max_in_flight, self.in_flight)
        try:
            delay = self.delays.get(query.term, 0)
            if delay:
                await asyncio.sleep(delay)
            else:
                await asyncio.sleep(0)
            if query.term in self.errors:
                raise self.errors[query.term]
            return list(self.responses.get(query.term, []))
        except asyncio.CancelledError:
            self.cancelled += 1
            raise
        finally:
            self.in_flight -= 1

    async def aclose(self):
        self.closed = True

    @property
    def provider_type(self):
        return ProviderType.TOMTOM

    @property
    def terms_called(self) -> List[str]:
        return [query.term for query in self.calls]


@pytest.fixture
def sample_location():
    """San Francisco, the location used throughout the scenarios."""
    return Location(latitude=37.77, longitude=-122.42)


@pytest.fixture
def fake_provider():
    return FakeSearchProvider()


@pytest.fixture
def mock_env_vars():
    """Mock environment variables for testing."""
    from gateway.providers.settings import reset_settings
    from gateway.providers.manager import reset_manager

    original_values = {}
    test_values = {
        'TOMTOM_API_KEY': 'test_tomtom_key_12345',
        'TOMTOM_BASE_URL': 'https://api.tomtom.test',
        'SEARCH_QUERY_TIMEOUT_SECONDS': '2',
        'SEARCH_REQUEST_TIMEOUT_SECONDS': '5',
        'SEARCH_MAX_CONCURRENCY': '8',
    }

    for key, value in test_values.items():
        original_values[key] = os.getenv(key)
        os.environ[key] = value

    reset_settings()
    reset_manager()

    yield test_values

    for key, original_value in original_values.items():
        if original_value is None:
            os.environ.pop(key, None)
        else:
            os.environ[key] = original_value

    reset_settings()
    reset_manager()


@pytest.fixture
def no_api_key_env():
    """Environment without TomTom credentials."""
    from gateway.providers.settings import reset_settings
    from gateway.providers.manager import reset_manager

    original = os.environ.pop('TOMTOM_API_KEY', None)
    reset_settings()
    reset_manager()

    yield

    if original is not None:
        os.environ['TOMTOM_API_KEY'] = original
    reset_settings()
    reset_manager()
