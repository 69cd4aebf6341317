"""
Extract Layer Schemas

Raw data schema for site records coming from the site-activity API.
Field names are kept exactly as the upstream sends them.
"""

import polars as pl

RAW_SITES_SCHEMA = pl.Schema(
    [
        ("agent_name", pl.String()),
        ("siteId", pl.String()),
        ("siteAddress", pl.String()),
        ("onboard_date", pl.String()),
        ("consent", pl.String()),  # YES / NO / PENDING
        ("consent_type", pl.String()),  # VERBAL / DIGITAL / null
        ("is_shared", pl.Boolean()),
        ("site_status", pl.String()),
        ("has_appointment", pl.Boolean()),
        ("appointment_date", pl.String()),
        ("appointment_time_from", pl.String()),
        ("appointment_time_to", pl.String()),
        ("appointment_set_date", pl.String()),
        ("share_count", pl.Int64()),
        ("last_shared_date", pl.String()),
        ("deleted_date", pl.String()),
        ("consent_updated_date", pl.String()),
    ]
)
