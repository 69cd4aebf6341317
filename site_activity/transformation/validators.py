"""
Data Validators - Transform Layer

Pure functions for validating fetched sites.
Reports null counts and duplicate site ids.
"""

import polars as pl
from typing import Dict, Any
import logging

logger = logging.getLogger(__name__)

REQUIRED_FIELDS = ["siteId", "onboard_date", "consent", "site_status"]


def validate_data_quality(df: pl.DataFrame) -> Dict[str, Any]:
    """
    Validate data quality and return quality metrics

    Args:
        df: Sites DataFrame to validate

    Returns:
        Dict: Quality metrics and validation results
    """
    logger.info("Validating data quality for sites")

    quality_metrics = {
        "total_records": df.height,
        "null_counts": {},
        "duplicate_counts": {},
        "data_types": df.schema,
    }

    for column in df.columns:
        null_count = df.select(pl.col(column).is_null().sum()).item()
        quality_metrics["null_counts"][column] = null_count

    # Overlapping pages show up as repeated site ids
    if "siteId" in df.columns:
        duplicate_count = df.height - df.select(pl.col("siteId").n_unique()).item()
        quality_metrics["duplicate_counts"]["siteId"] = duplicate_count

    # Log quality issues
    for column, null_count in quality_metrics["null_counts"].items():
        if null_count > 0 and column in REQUIRED_FIELDS:
            logger.warning(f"Column '{column}' has {null_count} null values")

    for key, duplicate_count in quality_metrics["duplicate_counts"].items():
        if duplicate_count > 0:
            logger.warning(f"Duplicate records found for '{key}': {duplicate_count}")

    logger.info("Data quality validation completed for sites")
    return quality_metrics
