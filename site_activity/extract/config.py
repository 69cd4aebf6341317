"""
Fetcher configuration.

The batch fetcher never reads ambient state: a `FetcherConfig` is built once
(usually from the environment) and injected at construction.
"""

from dataclasses import dataclass

from ..coreutils.env import env_get, env_get_float, env_get_int
from .errors import ConfigurationError

DEFAULT_BASE_URL = "https://api.thelabrador.co.uk/carbon/v3"
DEFAULT_ENDPOINT = "/site-activity"
DEFAULT_PAGE_SIZE = 200
DEFAULT_MAX_CONCURRENT = 2
DEFAULT_TIMEOUT_SECONDS = 45.0
DEFAULT_MAX_ATTEMPTS = 2  # first attempt + one retry


@dataclass(frozen=True)
class FetcherConfig:
    """Connection and batching settings for the site-activity upstream"""

    base_url: str
    api_key: str
    page_size: int = DEFAULT_PAGE_SIZE
    max_concurrent: int = DEFAULT_MAX_CONCURRENT
    timeout_seconds: float = DEFAULT_TIMEOUT_SECONDS
    max_attempts: int = DEFAULT_MAX_ATTEMPTS
    endpoint: str = DEFAULT_ENDPOINT

    def __post_init__(self):
        if not self.base_url:
            raise ConfigurationError("base_url must not be empty")
        if not self.api_key:
            raise ConfigurationError("api_key must not be empty")
        if self.page_size <= 0:
            raise ConfigurationError(f"page_size must be > 0, got {self.page_size}")
        if self.max_concurrent <= 0:
            raise ConfigurationError(
                f"max_concurrent must be > 0, got {self.max_concurrent}"
            )
        if self.timeout_seconds <= 0:
            raise ConfigurationError(
                f"timeout_seconds must be > 0, got {self.timeout_seconds}"
            )
        if self.max_attempts < 1:
            raise ConfigurationError(
                f"max_attempts must be >= 1, got {self.max_attempts}"
            )

    @property
    def url(self) -> str:
        return f"{self.base_url.rstrip('/')}/{self.endpoint.lstrip('/')}"

    @classmethod
    def from_env(cls) -> "FetcherConfig":
        """
        Build configuration from SITE_ACTIVITY_* environment variables

        Returns:
            FetcherConfig: Validated configuration

        Raises:
            ConfigurationError: If the API key is missing or a value is invalid
        """
        api_key = env_get("SITE_ACTIVITY_API_KEY")
        if not api_key:
            raise ConfigurationError("SITE_ACTIVITY_API_KEY not found in environment")

        try:
            return cls(
                base_url=env_get("SITE_ACTIVITY_API_URL", DEFAULT_BASE_URL),
                api_key=api_key,
                page_size=env_get_int("SITE_ACTIVITY_PAGE_SIZE", DEFAULT_PAGE_SIZE),
                max_concurrent=env_get_int(
                    "SITE_ACTIVITY_MAX_CONCURRENT", DEFAULT_MAX_CONCURRENT
                ),
                timeout_seconds=env_get_float(
                    "SITE_ACTIVITY_TIMEOUT_SECONDS", DEFAULT_TIMEOUT_SECONDS
                ),
                max_attempts=env_get_int(
                    "SITE_ACTIVITY_MAX_ATTEMPTS", DEFAULT_MAX_ATTEMPTS
                ),
            )
        except ValueError as e:
            raise ConfigurationError(str(e)) from e
