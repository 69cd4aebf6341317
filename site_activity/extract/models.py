"""
Extract Layer Models

Immutable request/result types passed between the API client, the wave
scheduler and the batch fetcher. Records are opaque mappings: the extract
layer never interprets site fields, it only concatenates them.
"""

import math
from dataclasses import dataclass, field
from typing import Any, Dict, FrozenSet, List, Optional, Tuple

Record = Dict[str, Any]


@dataclass(frozen=True)
class SiteActivityQuery:
    """Filter criteria forwarded verbatim to every page request"""

    utm_source: str
    from_date: Optional[str] = None
    to_date: Optional[str] = None
    site_type: str = "domestic"
    include_details: bool = True
    agent_email: Optional[str] = None

    def to_params(self) -> Dict[str, str]:
        """Render upstream query parameters, omitting unset optional fields"""
        params = {
            "utmSource": self.utm_source,
            "siteType": self.site_type,
            "includeDetails": "true" if self.include_details else "false",
        }
        if self.from_date:
            params["from"] = self.from_date
        if self.to_date:
            params["to"] = self.to_date
        if self.agent_email:
            params["agentEmail"] = self.agent_email
        return params


@dataclass(frozen=True)
class PageRequest:
    offset: int
    page_size: int
    query: SiteActivityQuery

    def __post_init__(self):
        if self.offset < 0:
            raise ValueError(f"offset must be >= 0, got {self.offset}")
        if self.page_size <= 0:
            raise ValueError(f"page_size must be > 0, got {self.page_size}")

    def params(self) -> Dict[str, Any]:
        params: Dict[str, Any] = self.query.to_params()
        params["limit"] = self.page_size
        params["offset"] = self.offset
        return params


@dataclass(frozen=True)
class PageResult:
    """Outcome of one page. `total_count` is only meaningful for offset 0."""

    offset: int
    records: List[Record] = field(default_factory=list)
    total_count: Optional[int] = None
    succeeded: bool = True
    error: Optional[str] = None


@dataclass(frozen=True)
class AggregateResult:
    """Concatenation of every successful page, in ascending offset order.

    `pages` holds every page outcome by offset, failed pages included.
    """

    records: List[Record]
    total_requested: int
    total_returned: int
    failed_offsets: FrozenSet[int]
    page_size: int
    pages: Tuple[PageResult, ...] = ()

    @property
    def is_partial(self) -> bool:
        return bool(self.failed_offsets)

    @property
    def page_count(self) -> int:
        return max(1, math.ceil(self.total_requested / self.page_size))

    @property
    def warning(self) -> Optional[str]:
        """Human-readable warning, only when some batches were lost"""
        if not self.failed_offsets:
            return None
        return (
            f"{len(self.failed_offsets)} of {self.page_count} batches failed; "
            f"returned {self.total_returned} of {self.total_requested} sites"
        )
