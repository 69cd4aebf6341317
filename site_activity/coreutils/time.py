from datetime import date, datetime, timedelta


def default_date_range(days: int = 30, today: date | None = None) -> tuple[str, str]:
    """Return (from, to) ISO dates covering the last `days` days up to today."""
    today = today or date.today()
    return (today - timedelta(days=days)).isoformat(), today.isoformat()


def parse_iso_date(value: str | date | None) -> date | None:
    """Parse YYYY-MM-DD (or a longer ISO timestamp) into a date."""
    if value is None:
        return None
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    return date.fromisoformat(value[:10])
