"""
Base interfaces and error types for geo-search providers.

A provider exposes the two search capabilities the aggregation engine needs:
category-code search and free-text keyword search. Both raise on failure;
isolating failures per sub-query is the caller's job.
"""

from abc import ABC, abstractmethod
from enum import Enum
from typing import List

from .models import EndpointKind, RawProviderRecord, SearchQuery


class ProviderType(Enum):
    """Supported geo-search providers."""
    TOMTOM = "tomtom"


class ProviderError(Exception):
    """Base class for errors raised while talking to a provider."""


class ProviderConfigurationError(ProviderError, ValueError):
    """Provider credentials or settings are missing."""


class ProviderResponseError(ProviderError):
    """Provider answered with a non-success HTTP status."""

    def __init__(self, status_code: int, message: str = ""):
        self.status_code = status_code
        self.message = message
        super().__init__(f"Provider returned HTTP {status_code}: {message}".rstrip(": "))


class MalformedPayloadError(ProviderError):
    """Provider answered with a body that is not the expected JSON shape."""


class SearchProvider(ABC):
    """
    Abstract base class for geo-search providers.

    Implementations turn a ``SearchQuery`` into one HTTP request and return
    the provider's raw result records in provider order.
    """

    @abstractmethod
    async def category_search(self, query: SearchQuery) -> List[RawProviderRecord]:
        """
        Search by provider category code.

        Args:
            query: Query with ``endpoint_kind == CATEGORY_SEARCH``

        Returns:
            Raw provider records

        Raises:
            ProviderError: On non-success status or malformed payload
            httpx.HTTPError: On transport failure
        """
        pass

    @abstractmethod
    async def keyword_search(self, query: SearchQuery) -> List[RawProviderRecord]:
        """
        Search by free-text keyword.

        Args:
            query: Query with ``endpoint_kind == KEYWORD_SEARCH``

        Returns:
            Raw provider records

        Raises:
            ProviderError: On non-success status or malformed payload
            httpx.HTTPError: On transport failure
        """
        pass

    async def search(self, query: SearchQuery) -> List[RawProviderRecord]:
        """Dispatch a query to the endpoint its kind names."""
        if query.endpoint_kind is EndpointKind.CATEGORY_SEARCH:
            return await self.category_search(query)
        return await self.keyword_search(query)

    async def aclose(self) -> None:
        """Release network resources held by the provider."""
        return None

    @property
    @abstractmethod
    def provider_type(self) -> ProviderType:
        """Return the provider type identifier."""
        pass

    @property
    def source(self) -> str:
        """Literal stored in ``CanonicalPOI.source``."""
        return self.provider_type.value
