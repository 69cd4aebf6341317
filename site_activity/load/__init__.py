"""
Load Layer - Local persistence of fetched sites

This layer handles writing snapshots to disk.
- No imports from the extract layer's network code
- Parquet and JSON snapshots
"""
