"""
Batch Fetcher - paginated retrieval of every site for a query

Page 0 is fetched first and provides the total count. The remaining offsets
are fetched in waves of at most `max_concurrent` concurrent requests, waves
strictly one after another. Pages that still fail after their retry are
recorded in `failed_offsets` instead of failing the call; only a failed
page 0 (or a zero total) aborts the whole fetch.
"""

from typing import Dict, List, Optional
import logging
import time

from .config import FetcherConfig
from .errors import FoundationalFetchError, PageFetchError
from .models import AggregateResult, PageRequest, PageResult, SiteActivityQuery
from .site_activity_api import SiteActivityAPIClient
from .waves import WaveOutcome, run_in_waves

logger = logging.getLogger(__name__)


def planned_offsets(total: int, page_size: int) -> List[int]:
    """Offsets of every page after the first: page_size, 2*page_size, ... < total"""
    return list(range(page_size, total, page_size))


class BatchFetcher:
    """Fetches all pages for a query within a bounded concurrency budget"""

    def __init__(
        self,
        config: FetcherConfig,
        client: Optional[SiteActivityAPIClient] = None,
    ):
        self.config = config
        self.client = client or SiteActivityAPIClient(config)

    def _fetch_first_page(self, query: SiteActivityQuery) -> PageResult:
        request = PageRequest(offset=0, page_size=self.config.page_size, query=query)
        try:
            first = self.client.fetch_page(request)
        except PageFetchError as e:
            logger.error(f"❌ First page failed, aborting fetch: {e.reason}")
            raise FoundationalFetchError(
                f"First page request failed: {e.reason}", status_code=e.status_code
            ) from e

        if first.total_count is None:
            raise FoundationalFetchError(
                "First page response did not report summary.totalSites"
            )
        if first.total_count <= 0:
            raise FoundationalFetchError("Upstream reported no sites for this query")
        return first

    def fetch_all(self, query: SiteActivityQuery) -> AggregateResult:
        """
        Fetch every page for `query` and merge them in ascending offset order

        Args:
            query: Filter criteria forwarded to every page request

        Returns:
            AggregateResult: Merged records, totals and any failed offsets

        Raises:
            FoundationalFetchError: If page 0 fails after its retry or the
                upstream reports zero sites
        """
        page_size = self.config.page_size
        start_time = time.time()

        first = self._fetch_first_page(query)
        total_requested = first.total_count
        logger.info(
            f"First page returned {len(first.records)} sites, "
            f"upstream total is {total_requested}"
        )

        pages: Dict[int, PageResult] = {0: first}

        offsets = planned_offsets(total_requested, page_size)
        if offsets:
            logger.info(
                f"Fetching {len(offsets)} more pages of {page_size} "
                f"in waves of {self.config.max_concurrent}"
            )

            def fetch_offset(offset: int) -> PageResult:
                return self.client.fetch_page(
                    PageRequest(offset=offset, page_size=page_size, query=query)
                )

            def record_wave(index: int, settled: List[WaveOutcome]) -> None:
                for outcome in settled:
                    if outcome.ok:
                        pages[outcome.item] = outcome.value
                    else:
                        pages[outcome.item] = PageResult(
                            offset=outcome.item, succeeded=False, error=str(outcome.error)
                        )
                        logger.warning(
                            f"⚠️ Batch at offset {outcome.item} lost: {outcome.error}"
                        )
                logger.info(
                    f"Wave {index} settled: {sum(o.ok for o in settled)}/"
                    f"{len(settled)} pages succeeded"
                )

            run_in_waves(
                offsets,
                fetch_offset,
                self.config.max_concurrent,
                on_wave_complete=record_wave,
            )

        ordered = tuple(pages[offset] for offset in sorted(pages))
        records = []
        for page in ordered:
            records.extend(page.records)

        result = AggregateResult(
            records=records,
            total_requested=total_requested,
            total_returned=len(records),
            failed_offsets=frozenset(p.offset for p in ordered if not p.succeeded),
            page_size=page_size,
            pages=ordered,
        )

        elapsed = time.time() - start_time
        if result.is_partial:
            logger.warning(f"⚠️ Partial result: {result.warning}")
        logger.info(
            f"✅ Fetched {result.total_returned}/{result.total_requested} sites "
            f"in {elapsed:.2f} seconds"
        )
        return result
