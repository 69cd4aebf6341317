"""
Error taxonomy for the extract layer.

Page-level failures past the first page are absorbed by the batch fetcher and
reported as data; only `FoundationalFetchError` and `ConfigurationError`
reach callers of `BatchFetcher.fetch_all`.
"""

from typing import Optional


class SiteActivityError(Exception):
    """Base class for site-activity errors"""


class ConfigurationError(SiteActivityError):
    """Missing or invalid fetcher configuration"""


class PageFetchError(SiteActivityError):
    """A single page request failed"""

    def __init__(
        self,
        offset: int,
        reason: str,
        status_code: Optional[int] = None,
        retryable: bool = False,
    ):
        self.offset = offset
        self.reason = reason
        self.status_code = status_code
        self.retryable = retryable
        super().__init__(f"Page at offset {offset} failed: {reason}")


class MalformedResponseError(PageFetchError):
    """Upstream answered with JSON that does not have the expected shape"""

    def __init__(self, offset: int, reason: str):
        super().__init__(offset, f"malformed response: {reason}")


class FoundationalFetchError(SiteActivityError):
    """The first page failed, so no total count and no partial result exist"""

    def __init__(self, reason: str, status_code: Optional[int] = None):
        self.reason = reason
        self.status_code = status_code
        super().__init__(reason)
