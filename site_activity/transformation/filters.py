"""
Client-side site filters, as applied by the dashboard after fetching.
"""

import polars as pl
from datetime import date
from typing import Optional, Union
import logging

from ..coreutils.time import parse_iso_date

logger = logging.getLogger(__name__)


def filter_sites(
    df: pl.DataFrame,
    active_only: bool = False,
    from_date: Optional[Union[str, date]] = None,
    to_date: Optional[Union[str, date]] = None,
) -> pl.DataFrame:
    """
    Filter sites by status and onboard date

    Args:
        df: Sites data with RAW_SITES_SCHEMA
        active_only: Keep only sites whose status is ACTIVE (any case)
        from_date: Inclusive lower bound on onboard_date
        to_date: Inclusive upper bound on onboard_date

    Returns:
        pl.DataFrame: Filtered sites
    """
    filtered = df

    if active_only:
        filtered = filtered.filter(
            pl.col("site_status").str.to_uppercase() == "ACTIVE"
        )

    start = parse_iso_date(from_date)
    end = parse_iso_date(to_date)
    if start or end:
        # onboard_date may carry a time part
        onboard = pl.col("onboard_date").str.slice(0, 10).str.to_date(
            "%Y-%m-%d", strict=False
        )
        if start:
            filtered = filtered.filter(onboard >= start)
        if end:
            filtered = filtered.filter(onboard <= end)

    logger.info(f"Filtered sites: {df.height} -> {filtered.height}")
    return filtered
