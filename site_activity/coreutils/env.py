from dotenv import load_dotenv
import os

load_dotenv()  # take environment variables from .env


def env_get(key: str, default: str | None = None) -> str | None:
    """Get environment variable or return default."""
    value = os.getenv(key, default)
    if isinstance(value, str) and not value.strip():
        return default
    return value


def env_get_int(key: str, default: int) -> int:
    """Get an integer environment variable or return default."""
    raw = env_get(key)
    if raw is None:
        return default
    try:
        return int(raw)
    except ValueError as e:
        raise ValueError(f"Environment variable {key} must be an integer, got {raw!r}") from e


def env_get_float(key: str, default: float) -> float:
    """Get a float environment variable or return default."""
    raw = env_get(key)
    if raw is None:
        return default
    try:
        return float(raw)
    except ValueError as e:
        raise ValueError(f"Environment variable {key} must be a number, got {raw!r}") from e
