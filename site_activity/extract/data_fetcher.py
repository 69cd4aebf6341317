"""
Data Fetcher - Extract Layer

Pure functions that turn fetched site records into Polars DataFrames.
No business logic, just I/O and shape normalisation.
"""

import polars as pl
from typing import Any, Dict, List, Optional, Tuple
import logging

from .batch_fetcher import BatchFetcher
from .config import FetcherConfig
from .models import AggregateResult, SiteActivityQuery
from .schemas import RAW_SITES_SCHEMA

logger = logging.getLogger(__name__)


def sites_to_dataframe(records: List[Dict[str, Any]]) -> pl.DataFrame:
    """
    Convert raw site records to a DataFrame with RAW_SITES_SCHEMA

    Missing fields become null and fields outside the schema are dropped.

    Args:
        records: Site records as returned by the upstream

    Returns:
        pl.DataFrame: Sites data with RAW_SITES_SCHEMA
    """
    if not records:
        return pl.DataFrame(schema=RAW_SITES_SCHEMA)

    rows = [{name: record.get(name) for name in RAW_SITES_SCHEMA} for record in records]
    df = pl.DataFrame(rows, schema=RAW_SITES_SCHEMA, strict=False)

    logger.info(f"Converted {df.height} site records to DataFrame")
    return df


def fetch_raw_sites_data(
    query: SiteActivityQuery,
    config: Optional[FetcherConfig] = None,
    fetcher: Optional[BatchFetcher] = None,
) -> Tuple[pl.DataFrame, AggregateResult]:
    """
    Fetch every site for `query` and return it as a DataFrame

    Args:
        query: Filter criteria for the upstream
        config: Fetcher configuration (read from env if omitted)
        fetcher: Pre-built fetcher, mainly for tests

    Returns:
        Tuple[pl.DataFrame, AggregateResult]: Sites data and the raw aggregate
    """
    logger.info(f"Fetching raw sites data for {query}")

    fetcher = fetcher or BatchFetcher(config or FetcherConfig.from_env())
    result = fetcher.fetch_all(query)
    return sites_to_dataframe(result.records), result
