"""
Proxy response envelopes.

Success:
    {code, status, data: {summary: {totalSites, dateRange, agentFilter?, warning?},
                          pagination: {limit, offset, total}, sites}}
Failure:
    {error}
"""

from typing import Any, Dict

from ..extract.models import AggregateResult, SiteActivityQuery


def build_success_response(
    result: AggregateResult, query: SiteActivityQuery
) -> Dict[str, Any]:
    """
    Build the caller-facing response for a (possibly partial) fetch

    `summary.warning` is present only when some batches failed.
    """
    summary: Dict[str, Any] = {
        "totalSites": result.total_returned,
        "dateRange": {"from": query.from_date, "to": query.to_date},
    }
    if query.agent_email:
        summary["agentFilter"] = query.agent_email
    if result.is_partial:
        summary["warning"] = result.warning

    return {
        "code": 200,
        "status": "success",
        "data": {
            "summary": summary,
            "pagination": {
                "limit": result.page_size,
                "offset": 0,
                "total": result.total_requested,
            },
            "sites": result.records,
        },
    }


def build_error_response(message: str) -> Dict[str, Any]:
    return {"error": message}
