"""
TomTom Search API provider implementation.

This module implements the SearchProvider interface for TomTom Search API v2,
covering category search (``categorySearch``) and free-text POI search
(``poiSearch``).
"""

import httpx
import logging
from typing import Any, Dict, List, Optional, Tuple
from urllib.parse import quote

from ..base import (
    MalformedPayloadError,
    ProviderConfigurationError,
    ProviderResponseError,
    ProviderType,
    SearchProvider,
)
from ..models import RawProviderRecord, SearchQuery

logger = logging.getLogger(__name__)


class TomTomProvider(SearchProvider):
    """
    TomTom Search API provider.

    Each call issues exactly one GET request and returns the ``results`` array
    untouched. Requires TOMTOM_API_KEY to be set.
    """

    def __init__(
        self,
        api_key: Optional[str] = None,
        base_url: Optional[str] = None,
        client: Optional[httpx.AsyncClient] = None,
    ):
        """
        Initialize TomTom provider.

        Args:
            api_key: API key; defaults to TOMTOM_API_KEY from settings
            base_url: API base URL; defaults to TOMTOM_BASE_URL from settings
            client: Optional preconfigured HTTP client

        Raises:
            ProviderConfigurationError: If no API key is configured
        """
        from ..settings import get_settings

        settings = get_settings()
        self._api_key = api_key or settings.tomtom_api_key

        if not self._api_key:
            raise ProviderConfigurationError(
                "TOMTOM_API_KEY is required for TomTom provider. Please set it in environment or .env file"
            )

        self._base_url = (base_url or settings.tomtom_base_url).rstrip("/")
        self._client = client or httpx.AsyncClient(
            timeout=settings.search_query_timeout_seconds,
            headers={
                "User-Agent": "evgateway/1.0"
            }
        )

        logger.info("TomTom provider initialized successfully")

    async def category_search(self, query: SearchQuery) -> List[RawProviderRecord]:
        """
        Search by category code using TomTom Category Search.

        Args:
            query: Category search query

        Returns:
            Raw TomTom result items
        """
        url, params = self._request_for(query)
        return await self._get_results(url, params, query)

    async def keyword_search(self, query: SearchQuery) -> List[RawProviderRecord]:
        """
        Search by keyword using TomTom POI Search.

        Args:
            query: Keyword search query

        Returns:
            Raw TomTom result items
        """
        url, params = self._request_for(query)
        return await self._get_results(url, params, query)

    def _request_for(self, query: SearchQuery) -> Tuple[str, Dict[str, str]]:
        """Map a query to its TomTom endpoint URL and query string."""
        params = {
            "key": self._api_key,
            "lat": str(query.location.latitude),
            "lon": str(query.location.longitude),
            "radius": str(query.radius_meters),
            "limit": str(query.result_limit),
            "view": "Unified",
        }
        if query.category_code is not None:
            params["categorySet"] = query.category_code
            return f"{self._base_url}/search/2/categorySearch/{quote(query.label, safe='')}.json", params
        return f"{self._base_url}/search/2/poiSearch/{quote(query.keyword, safe='')}.json", params

    async def _get_results(
        self,
        url: str,
        params: Dict[str, str],
        query: SearchQuery
    ) -> List[RawProviderRecord]:
        response = await self._client.get(url, params=params)

        if not response.is_success:
            raise ProviderResponseError(response.status_code, response.text[:200])

        try:
            data: Any = response.json()
        except ValueError as e:
            raise MalformedPayloadError(f"TomTom returned non-JSON body for '{query.term}': {e}") from e

        if not isinstance(data, dict):
            raise MalformedPayloadError(f"TomTom payload for '{query.term}' is not an object")

        results = data.get("results", [])
        if results is None:
            results = []
        if not isinstance(results, list):
            raise MalformedPayloadError(f"TomTom 'results' for '{query.term}' is not a list")

        logger.debug(f"TomTom {query.endpoint_kind.value} '{query.term}' returned {len(results)} results")
        return results

    @property
    def provider_type(self) -> ProviderType:
        """Return TomTom provider type."""
        return ProviderType.TOMTOM

    async def aclose(self) -> None:
        await self._client.aclose()

    async def __aenter__(self):
        """Async context manager entry."""
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        """Async context manager exit."""
        await self.aclose()
