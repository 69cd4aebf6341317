"""
Local Storage - Load Layer

Pure functions for local snapshot storage of fetched sites.
Writes Parquet and JSON snapshot files.
"""

import polars as pl
import json
import os
from datetime import datetime
from pathlib import Path
from typing import Optional, Dict
import logging

logger = logging.getLogger(__name__)


def save_parquet(df: pl.DataFrame, filepath: str) -> str:
    """
    Save DataFrame to Parquet file

    Args:
        df: DataFrame to save
        filepath: Path to save file

    Returns:
        str: Path to saved file
    """
    logger.info(f"Saving DataFrame to Parquet: {filepath}")

    Path(filepath).parent.mkdir(parents=True, exist_ok=True)
    df.write_parquet(filepath)

    logger.info(f"Saved {df.height} records to {filepath}")
    return filepath


def save_json(df: pl.DataFrame, filepath: str) -> str:
    """
    Save DataFrame to JSON file

    Args:
        df: DataFrame to save
        filepath: Path to save file

    Returns:
        str: Path to saved file
    """
    logger.info(f"Saving DataFrame to JSON: {filepath}")

    Path(filepath).parent.mkdir(parents=True, exist_ok=True)
    data = df.to_dicts()

    with open(filepath, "w") as f:
        json.dump(data, f, indent=2, default=str)

    logger.info(f"Saved {len(data)} records to {filepath}")
    return filepath


def save_sites_snapshot(
    df: pl.DataFrame,
    output_dir: str = "output",
    label: Optional[str] = None,
) -> Dict[str, str]:
    """
    Save a timestamped snapshot of sites data

    Args:
        df: Sites DataFrame
        output_dir: Output directory
        label: Optional name part, e.g. the utm source

    Returns:
        Dict: Paths to saved files
    """
    stamp = datetime.now().strftime("%Y-%m-%dT%H%M%S")
    name = f"sites_{label}_{stamp}" if label else f"sites_{stamp}"

    parquet_path = os.path.join(output_dir, f"{name}.parquet")
    json_path = os.path.join(output_dir, f"{name}.json")

    return {"parquet": save_parquet(df, parquet_path), "json": save_json(df, json_path)}
