"""
KPI calculation over fetched sites.

One canonical formula set: counts per pipeline stage and their rates as
percentages of all sites (0 when there are no sites).
"""

import polars as pl
from typing import Any, Dict


def _rate(part: int, total: int) -> float:
    return (part / total) * 100 if total > 0 else 0.0


def calculate_kpis(df: pl.DataFrame) -> Dict[str, Any]:
    """Compute dashboard KPIs from sites data with RAW_SITES_SCHEMA"""
    total_sites = df.height

    # upstream mixes "ACTIVE" and "active"
    counts = df.select(
        (pl.col("site_status").str.to_uppercase() == "ACTIVE").sum().alias("active"),
        (pl.col("consent") == "YES").sum().alias("consent_granted"),
        (pl.col("consent") == "NO").sum().alias("consent_pending"),
        pl.col("is_shared").fill_null(False).sum().alias("shared"),
        pl.col("has_appointment").fill_null(False).sum().alias("appointments"),
    ).row(0, named=True)

    active_sites = int(counts["active"] or 0)
    consent_granted = int(counts["consent_granted"] or 0)
    consent_pending = int(counts["consent_pending"] or 0)
    shared_sites = int(counts["shared"] or 0)
    sites_with_appointments = int(counts["appointments"] or 0)

    return {
        "totalSites": total_sites,
        "activeSites": active_sites,
        "inactiveSites": total_sites - active_sites,
        "consentGranted": consent_granted,
        "consentPending": consent_pending,
        "consentRate": _rate(consent_granted, total_sites),
        "sharedSites": shared_sites,
        "shareRate": _rate(shared_sites, total_sites),
        "sitesWithAppointments": sites_with_appointments,
        "appointmentRate": _rate(sites_with_appointments, total_sites),
    }
