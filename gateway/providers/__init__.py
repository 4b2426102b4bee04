"""
Geo-search provider abstraction layer.

This module provides a unified interface for the external search providers
the nearby search engine fans out to. Providers only know how to turn one
SearchQuery into one HTTP call; planning, aggregation and normalization live
in ``gateway.services``.
"""

from .base import (
    SearchProvider,
    ProviderType,
    ProviderError,
    ProviderConfigurationError,
    ProviderResponseError,
    MalformedPayloadError,
)
from .models import (
    EndpointKind,
    Location,
    SearchQuery,
    TaggedRecord,
    CanonicalPOI,
    AggregationStats,
    AggregationResult,
)
from .manager import SearchProviderManager, create_provider

__all__ = [
    'SearchProvider',
    'ProviderType',
    'ProviderError',
    'ProviderConfigurationError',
    'ProviderResponseError',
    'MalformedPayloadError',
    'EndpointKind',
    'Location',
    'SearchQuery',
    'TaggedRecord',
    'CanonicalPOI',
    'AggregationStats',
    'AggregationResult',
    'SearchProviderManager',
    'create_provider'
]
