"""
Site Activity Pipeline

Two entry points share one batch fetcher:
1. Proxy request: fetch every page for the dashboard's filters and wrap the
   result in the caller-facing envelope (success with optional warning, or
   an error body with an HTTP status).
2. Snapshot: fetch, validate, compute KPIs and store the sites locally.
"""

from datetime import datetime
from typing import Any, Dict, Optional, Tuple
import logging

from ..coreutils.logging import log_function_call

# Extract layer imports
from ..extract.batch_fetcher import BatchFetcher
from ..extract.config import FetcherConfig
from ..extract.data_fetcher import fetch_raw_sites_data
from ..extract.errors import ConfigurationError, FoundationalFetchError
from ..extract.models import SiteActivityQuery

# Transform layer imports
from ..transformation.filters import filter_sites
from ..transformation.kpis import calculate_kpis
from ..transformation.response import build_error_response, build_success_response
from ..transformation.validators import validate_data_quality

# Load layer imports
from ..load.local_storage import save_sites_snapshot

logger = logging.getLogger(__name__)


class SiteActivityPipeline:
    """Orchestrates fetch -> transform -> (optional) store"""

    def __init__(
        self,
        config: Optional[FetcherConfig] = None,
        fetcher: Optional[BatchFetcher] = None,
        output_dir: str = "output",
        dry_run: bool = False,
    ):
        """
        Initialize the pipeline

        Args:
            config: Fetcher configuration (read from env on first use if omitted)
            fetcher: Pre-built fetcher, takes precedence over `config`
            output_dir: Where snapshots are written
            dry_run: If true, skip writing snapshots
        """
        self.config = config
        self.output_dir = output_dir
        self.dry_run = dry_run
        self._fetcher = fetcher

    @property
    def fetcher(self) -> BatchFetcher:
        if self._fetcher is None:
            self._fetcher = BatchFetcher(self.config or FetcherConfig.from_env())
        return self._fetcher

    def handle_request(self, query: SiteActivityQuery) -> Tuple[int, Dict[str, Any]]:
        """
        Serve one proxy request

        Args:
            query: Dashboard filters

        Returns:
            Tuple[int, Dict]: HTTP status code and response body
        """
        logger.info("=== API PROXY REQUEST ===")
        log_function_call("BatchFetcher.fetch_all", query=query)

        try:
            result = self.fetcher.fetch_all(query)
        except ConfigurationError as e:
            logger.error(f"❌ Proxy not configured: {e}")
            return 500, build_error_response(f"API not configured: {e}")
        except FoundationalFetchError as e:
            status_code = e.status_code if e.status_code and e.status_code >= 400 else 502
            logger.error(f"❌ Site activity unavailable: {e}")
            return status_code, build_error_response(f"API request failed: {e.reason}")

        return 200, build_success_response(result, query)

    def run_snapshot(
        self, query: SiteActivityQuery, active_only: bool = False
    ) -> Dict[str, Any]:
        """
        Fetch sites, compute KPIs and save a local snapshot

        Args:
            query: Filters for the upstream
            active_only: Compute KPIs over ACTIVE sites only (the snapshot
                always holds every fetched site)

        Returns:
            dict: Totals, KPIs, warning and saved file paths
        """
        logger.info("🚀 Starting site activity snapshot")
        logger.info("=" * 50)

        try:
            # Step 1: Extract
            logger.info("🔄 Step 1: Fetching sites...")
            log_function_call("fetch_raw_sites_data", query=query, active_only=active_only)
            sites_df, result = fetch_raw_sites_data(query, fetcher=self.fetcher)

            # Step 2: Transform
            logger.info("🔄 Step 2: Validating and computing KPIs...")
            quality = validate_data_quality(sites_df)
            kpi_df = filter_sites(
                sites_df,
                active_only=active_only,
                from_date=query.from_date,
                to_date=query.to_date,
            )
            kpis = calculate_kpis(kpi_df)

            # Step 3: Load
            files: Dict[str, str] = {}
            if not self.dry_run:
                logger.info("💾 Step 3: Saving snapshot...")
                files = save_sites_snapshot(
                    sites_df, self.output_dir, label=query.utm_source
                )
            else:
                logger.info("🔍 DRY RUN: Skipping snapshot save")

            logger.info(f"✅ Snapshot completed: {sites_df.height} sites")
            return {
                "timestamp": datetime.now().isoformat(),
                "total_requested": result.total_requested,
                "total_returned": result.total_returned,
                "warning": result.warning,
                "duplicates": quality["duplicate_counts"].get("siteId", 0),
                "kpis": kpis,
                "files": files,
            }

        except Exception as e:
            logger.error(f"❌ Snapshot failed: {e}")
            raise
