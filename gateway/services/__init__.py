"""Services module."""
from gateway.services.nearby_search_service import NearbySearchService, get_nearby_search_service
from gateway.services.query_executor import QueryExecutor, QueryResult, QueryStatus
from gateway.services.result_aggregator import ResultAggregator

__all__ = [
    "NearbySearchService",
    "get_nearby_search_service",
    "QueryExecutor",
    "QueryResult",
    "QueryStatus",
    "ResultAggregator",
]
