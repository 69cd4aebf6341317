"""
Shared fixtures: a scripted fake of the upstream HTTP session.

The fake answers `session.get(url, params=..., timeout=...)` like the
site-activity endpoint, keyed by the `offset` parameter. Scripted outcomes
(exceptions or status codes) are consumed first, then the offset falls back
to a normal page. It also records every call and the peak number of
concurrent calls.
"""

import json
import threading
import time
from typing import Any, Dict, List, Optional

import pytest
import requests

from site_activity.extract.config import FetcherConfig
from site_activity.extract.models import SiteActivityQuery

UPSTREAM_URL = "https://upstream.test/carbon/v3"


def make_site(index: int) -> Dict[str, Any]:
    return {
        "agent_name": f"Agent {index % 3}",
        "siteId": f"site-{index:05d}",
        "siteAddress": f"{index} Solar Street",
        "onboard_date": "2024-05-01",
        "consent": "YES" if index % 2 == 0 else "NO",
        "consent_type": "DIGITAL",
        "is_shared": index % 4 == 0,
        "site_status": "ACTIVE",
        "has_appointment": False,
        "appointment_date": None,
        "appointment_time_from": None,
        "appointment_time_to": None,
        "appointment_set_date": None,
        "share_count": 0,
        "last_shared_date": None,
        "deleted_date": None,
        "consent_updated_date": None,
    }


def page_payload(offset: int, count: int, total: int) -> Dict[str, Any]:
    return {
        "code": 200,
        "status": "success",
        "data": {
            "summary": {"totalSites": total},
            "sites": [make_site(offset + i) for i in range(count)],
        },
    }


def make_response(status_code: int, payload: Any = None, text: str = "") -> requests.Response:
    response = requests.Response()
    response.status_code = status_code
    response.url = f"{UPSTREAM_URL}/site-activity"
    response.encoding = "utf-8"
    response._content = (json.dumps(payload) if payload is not None else text).encode()
    return response


class FakeSession:
    """Stands in for requests.Session against a paginated upstream"""

    def __init__(
        self,
        total: int,
        script: Optional[Dict[int, List[Any]]] = None,
        delays: Optional[Dict[int, float]] = None,
        default_delay: float = 0.0,
    ):
        self.total = total
        self.script = {offset: list(items) for offset, items in (script or {}).items()}
        self.delays = delays or {}
        self.default_delay = default_delay
        self.calls: List[Dict[str, Any]] = []
        self.events: List[tuple] = []
        self.in_flight = 0
        self.max_in_flight = 0
        self._lock = threading.Lock()

    def calls_for(self, offset: int) -> List[Dict[str, Any]]:
        return [call for call in self.calls if call["params"]["offset"] == offset]

    def get(self, url, params=None, headers=None, timeout=None):
        offset = params["offset"]
        with self._lock:
            self.calls.append({"url": url, "params": dict(params), "timeout": timeout})
            self.events.append(("start", offset))
            self.in_flight += 1
            self.max_in_flight = max(self.max_in_flight, self.in_flight)
            scripted = self.script.get(offset)
            outcome = scripted.pop(0) if scripted else None

        try:
            time.sleep(self.delays.get(offset, self.default_delay))
            if isinstance(outcome, BaseException):
                raise outcome
            if isinstance(outcome, int):
                return make_response(outcome, text="upstream error")
            if isinstance(outcome, requests.Response):
                return outcome
            count = max(0, min(params["limit"], self.total - offset))
            return make_response(200, page_payload(offset, count, self.total))
        finally:
            with self._lock:
                self.in_flight -= 1
                self.events.append(("end", offset))


@pytest.fixture()
def config() -> FetcherConfig:
    return FetcherConfig(
        base_url=UPSTREAM_URL,
        api_key="test-key",
        page_size=200,
        max_concurrent=2,
        timeout_seconds=5,
        max_attempts=2,
    )


@pytest.fixture()
def query() -> SiteActivityQuery:
    return SiteActivityQuery(
        utm_source="PROJECTSOLAR",
        from_date="2024-01-01",
        to_date="2024-12-31",
        site_type="domestic",
    )
