import time
import logging
from urllib3.util.retry import Retry
import requests
from requests.adapters import HTTPAdapter
from typing import Any, Dict, Optional

logger = logging.getLogger(__name__)

# Page fetches run their own single-retry loop, so the transport must not
# retry underneath it. read=False re-raises read timeouts as themselves so
# requests reports them as ReadTimeout, not as a ConnectionError.
NO_RETRY_STRATEGY = Retry(
    total=0,
    read=False,
    redirect=False,
    status=0,
    raise_on_status=False,
)


def new_session(
    api_key: Optional[str] = None, pool_maxsize: int = 10
) -> requests.Session:
    """Create a new requests session sized for concurrent page fetches"""
    session = requests.Session()
    adapter = HTTPAdapter(
        max_retries=NO_RETRY_STRATEGY,
        pool_connections=pool_maxsize,
        pool_maxsize=pool_maxsize,
    )
    session.mount("http://", adapter)
    session.mount("https://", adapter)

    # Set default headers
    session.headers.update(
        {
            "User-Agent": "site-activity-proxy/0.1",
            "Accept": "application/json",
            "Content-Type": "application/json",
        }
    )
    if api_key:
        session.headers["api_key"] = api_key

    return session


def get_json(
    session: requests.Session,
    url: str,
    params: Optional[Dict[str, Any]] = None,
    headers: Optional[Dict[str, str]] = None,
    timeout: float = 30,
) -> Any:
    """Single GET attempt returning parsed JSON.

    Args:
        session: HTTP session to use
        url: URL to fetch
        params: Optional query parameters
        headers: Optional extra headers
        timeout: Request timeout in seconds

    Returns:
        Parsed JSON response

    Raises:
        requests.Timeout: When the request exceeds `timeout`
        requests.HTTPError: On a non-2xx status
        requests.RequestException: On connection errors
        ValueError: On invalid JSON responses
    """
    start = time.time()
    response = session.get(url, params=params, headers=headers, timeout=timeout)
    response.raise_for_status()

    try:
        data = response.json()
    except ValueError as e:
        raise ValueError(f"Invalid JSON response from {url}: {e}") from e

    logger.debug(f"Fetched from {url} {params}: {time.time() - start:.2f} seconds")
    return data
