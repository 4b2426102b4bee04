"""
Query executor - runs one sub-query against the provider in isolation.

Whatever goes wrong with a single sub-query (error status, transport failure,
malformed payload, timeout) ends up as an empty record list so sibling
queries are never affected. Cancellation is the one thing that propagates.
"""

import asyncio
import logging
import time
from dataclasses import dataclass, field
from enum import Enum
from typing import List, Optional

import httpx

from gateway.providers.base import ProviderError, SearchProvider
from gateway.providers.models import RawProviderRecord, SearchQuery

logger = logging.getLogger(__name__)


class QueryStatus(str, Enum):
    OK = "ok"
    FAILED = "failed"
    TIMED_OUT = "timed_out"


@dataclass
class QueryResult:
    """Records returned by one sub-query, with the query that produced them."""

    query: SearchQuery
    records: List[RawProviderRecord] = field(default_factory=list)
    status: QueryStatus = QueryStatus.OK
    error: Optional[str] = None
    elapsed_ms: float = 0.0

    @property
    def category(self) -> str:
        return self.query.category

    @property
    def succeeded(self) -> bool:
        return self.status is QueryStatus.OK


class QueryExecutor:
    """
    Executes single sub-queries with a per-query timeout.

    At most one attempt is made per query; there is no retry.
    """

    def __init__(self, provider: SearchProvider, timeout_seconds: Optional[float] = None):
        """
        Args:
            provider: Provider holding the credentials and HTTP client
            timeout_seconds: Per-query bound; defaults to SEARCH_QUERY_TIMEOUT_SECONDS
        """
        if timeout_seconds is None:
            from gateway.providers.settings import get_settings
            timeout_seconds = get_settings().search_query_timeout_seconds

        self.provider = provider
        self.timeout_seconds = timeout_seconds

    async def execute(self, query: SearchQuery) -> QueryResult:
        """
        Run one query and never raise for provider-side problems.

        Returns:
            QueryResult with the provider records, or an empty list on failure
        """
        start_time = time.perf_counter()
        result = QueryResult(query=query)

        try:
            result.records = await asyncio.wait_for(
                self.provider.search(query), timeout=self.timeout_seconds
            )
        except (asyncio.TimeoutError, httpx.TimeoutException):
            result.status = QueryStatus.TIMED_OUT
            result.error = f"timed out after {self.timeout_seconds:.1f}s"
        except (ProviderError, httpx.HTTPError) as e:
            result.status = QueryStatus.FAILED
            result.error = f"{e.__class__.__name__}: {e}"
        except (TypeError, ValueError, KeyError) as e:
            # Provider payload shapes that slipped past the provider's own checks
            result.status = QueryStatus.FAILED
            result.error = f"malformed payload: {e}"

        result.elapsed_ms = (time.perf_counter() - start_time) * 1000

        if result.succeeded:
            logger.debug(
                f"Sub-query {query.endpoint_kind.value} '{query.term}' [{query.category}] "
                f"returned {len(result.records)} records in {result.elapsed_ms:.0f}ms"
            )
        else:
            result.records = []
            logger.warning(
                f"Sub-query {query.endpoint_kind.value} '{query.term}' [{query.category}] "
                f"{result.status.value}: {result.error}"
            )

        return result
