"""
Site Activity API Client - Pure I/O Operations

Fetches single pages from the upstream site-activity endpoint.
Each page gets its own timeout and a bounded retry loop: HTTP 504 and
timeouts are retried with identical parameters, immediately, up to
`max_attempts` attempts in total. Anything else fails the page at once.
"""

import requests
import time
from typing import Any, Optional
import logging

from ..coreutils.request import new_session, get_json
from .config import FetcherConfig
from .errors import MalformedResponseError, PageFetchError
from .models import PageRequest, PageResult

logger = logging.getLogger(__name__)

RETRYABLE_STATUS_CODES = {504}


def parse_page(request: PageRequest, payload: Any) -> PageResult:
    """
    Validate an upstream payload and turn it into a PageResult

    Expected shape: {code, status, data: {summary: {totalSites, ...}, sites: [...]}}

    Raises:
        MalformedResponseError: If the payload does not have that shape
    """
    if not isinstance(payload, dict):
        raise MalformedResponseError(
            request.offset, f"expected object, got {type(payload).__name__}"
        )

    data = payload.get("data")
    if not isinstance(data, dict):
        raise MalformedResponseError(request.offset, "missing 'data' object")

    sites = data.get("sites")
    if not isinstance(sites, list):
        raise MalformedResponseError(request.offset, "missing 'data.sites' list")
    if not all(isinstance(site, dict) for site in sites):
        raise MalformedResponseError(request.offset, "'data.sites' must hold objects")

    total_count = None
    summary = data.get("summary")
    if isinstance(summary, dict):
        raw_total = summary.get("totalSites")
        # bool is an int subclass
        if isinstance(raw_total, int) and not isinstance(raw_total, bool):
            total_count = raw_total

    return PageResult(offset=request.offset, records=sites, total_count=total_count)


class SiteActivityAPIClient:
    """Pure API client for the site-activity endpoint"""

    def __init__(
        self, config: FetcherConfig, session: Optional[requests.Session] = None
    ):
        self.config = config
        self.session = session or new_session(
            api_key=config.api_key, pool_maxsize=config.max_concurrent
        )

    def _fetch_once(self, request: PageRequest) -> PageResult:
        """Single attempt; every failure is raised as PageFetchError"""
        try:
            payload = get_json(
                self.session,
                self.config.url,
                params=request.params(),
                timeout=self.config.timeout_seconds,
            )
        except requests.Timeout as e:
            raise PageFetchError(
                request.offset,
                f"timed out after {self.config.timeout_seconds}s",
                retryable=True,
            ) from e
        except requests.HTTPError as e:
            status_code = e.response.status_code if e.response is not None else None
            raise PageFetchError(
                request.offset,
                f"HTTP {status_code}",
                status_code=status_code,
                retryable=status_code in RETRYABLE_STATUS_CODES,
            ) from e
        except requests.RequestException as e:
            raise PageFetchError(request.offset, f"request failed: {e}") from e
        except ValueError as e:
            raise MalformedResponseError(request.offset, str(e)) from e

        return parse_page(request, payload)

    def fetch_page(self, request: PageRequest) -> PageResult:
        """
        Fetch one page, retrying a 504/timeout with identical parameters

        Args:
            request: Page to fetch

        Returns:
            PageResult: Successful page

        Raises:
            PageFetchError: After a non-retryable failure or once
                `max_attempts` attempts have all failed
        """
        max_attempts = self.config.max_attempts
        for attempt in range(1, max_attempts + 1):
            start_time = time.time()
            try:
                result = self._fetch_once(request)
            except PageFetchError as e:
                if not e.retryable or attempt == max_attempts:
                    logger.warning(
                        f"Page offset={request.offset} failed on attempt "
                        f"{attempt}/{max_attempts}: {e.reason}"
                    )
                    raise
                logger.warning(
                    f"Attempt {attempt}/{max_attempts} for offset={request.offset} "
                    f"failed ({e.reason}), retrying..."
                )
                continue

            logger.debug(
                f"Fetched offset={request.offset} ({len(result.records)} sites) "
                f"in {time.time() - start_time:.2f} seconds"
            )
            return result

        # max_attempts >= 1 is enforced by FetcherConfig
        raise PageFetchError(request.offset, "no attempts made")
