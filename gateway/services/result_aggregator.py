"""
Result aggregator - scatter-gather over a search plan.

All sub-queries are dispatched at once (bounded by a semaphore) and report
back over a queue. The coordinating coroutine is the only writer of the
dedup state, so the first query to *complete* with a given id decides its
category tag.
"""

import asyncio
import logging
import time
from typing import List, Optional, Set

from gateway.providers.models import (
    AggregationResult,
    AggregationStats,
    SearchQuery,
    TaggedRecord,
)
from gateway.services.query_executor import QueryExecutor, QueryResult, QueryStatus

logger = logging.getLogger(__name__)


class ResultAggregator:
    """
    Runs a search plan concurrently and merges the results.

    The aggregator never raises for provider-side failures: failed or timed
    out sub-queries simply contribute nothing. Cancelling the calling task
    cancels every outstanding sub-query.
    """

    def __init__(
        self,
        executor: QueryExecutor,
        max_concurrency: Optional[int] = None,
        request_timeout_seconds: Optional[float] = None,
    ):
        """
        Args:
            executor: Executor used for every sub-query
            max_concurrency: Sub-queries in flight at once; defaults to SEARCH_MAX_CONCURRENCY
            request_timeout_seconds: Bound for the whole call; defaults to SEARCH_REQUEST_TIMEOUT_SECONDS
        """
        if max_concurrency is None or request_timeout_seconds is None:
            from gateway.providers.settings import get_settings
            settings = get_settings()
            if max_concurrency is None:
                max_concurrency = settings.search_max_concurrency
            if request_timeout_seconds is None:
                request_timeout_seconds = settings.search_request_timeout_seconds

        if max_concurrency < 1:
            raise ValueError(f"max_concurrency must be at least 1, got {max_concurrency}")

        self.executor = executor
        self.max_concurrency = max_concurrency
        self.request_timeout_seconds = request_timeout_seconds

    async def aggregate(self, plan: List[SearchQuery]) -> AggregationResult:
        """
        Execute every query in the plan and merge their records.

        Records are kept in first-seen order: completion order across
        queries, provider order within a query. A record whose id was already
        seen is discarded.

        Args:
            plan: Sub-queries to run

        Returns:
            AggregationResult with id-unique tagged records and counters
        """
        start_time = time.perf_counter()
        result = AggregationResult(stats=AggregationStats(planned=len(plan)))
        seen_ids: Set[str] = set()

        if not plan:
            return result

        loop = asyncio.get_running_loop()
        deadline = loop.time() + self.request_timeout_seconds
        semaphore = asyncio.Semaphore(self.max_concurrency)
        completed: "asyncio.Queue[QueryResult]" = asyncio.Queue()

        async def run(query: SearchQuery) -> None:
            try:
                async with semaphore:
                    query_result = await self.executor.execute(query)
            except asyncio.CancelledError:
                raise
            except Exception as e:
                logger.exception(f"Unexpected error running sub-query '{query.term}'")
                query_result = QueryResult(
                    query=query, status=QueryStatus.FAILED, error=str(e)
                )
            completed.put_nowait(query_result)

        tasks = [asyncio.create_task(run(query)) for query in plan]
        received = 0

        try:
            while received < len(tasks):
                remaining = deadline - loop.time()
                if remaining <= 0:
                    raise asyncio.TimeoutError()
                query_result = await asyncio.wait_for(completed.get(), timeout=remaining)
                received += 1
                self._merge(query_result, result, seen_ids)
        except asyncio.TimeoutError:
            outstanding = len(tasks) - received
            result.stats.timed_out += outstanding
            logger.warning(
                f"Aggregation hit the {self.request_timeout_seconds:.1f}s request timeout; "
                f"cancelling {outstanding} outstanding sub-queries"
            )
        finally:
            for task in tasks:
                if not task.done():
                    task.cancel()
            await asyncio.gather(*tasks, return_exceptions=True)

        result.stats.elapsed_ms = (time.perf_counter() - start_time) * 1000
        stats = result.stats
        logger.info(
            f"Aggregated {len(result.records)} unique records from {stats.planned} sub-queries "
            f"(ok={stats.succeeded}, failed={stats.failed}, timed_out={stats.timed_out}, "
            f"duplicates={stats.duplicates}, success_rate={stats.success_rate:.0f}%) "
            f"in {stats.elapsed_ms:.0f}ms"
        )
        return result

    @staticmethod
    def _merge(query_result: QueryResult, result: AggregationResult, seen_ids: Set[str]) -> None:
        stats = result.stats
        if query_result.status is QueryStatus.OK:
            stats.succeeded += 1
        elif query_result.status is QueryStatus.TIMED_OUT:
            stats.timed_out += 1
        else:
            stats.failed += 1

        for record in query_result.records:
            if not isinstance(record, dict):
                continue
            record_id = record.get("id")
            if record_id is None:
                continue
            key = str(record_id)
            if key in seen_ids:
                stats.duplicates += 1
                continue
            seen_ids.add(key)
            result.records.append(TaggedRecord(record, query_result.category))
