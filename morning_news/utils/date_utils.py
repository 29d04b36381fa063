from datetime import datetime, timezone
from typing import Any, Optional

MILLISECOND_EPOCH_THRESHOLD = 10 ** 12


def utc_now() -> datetime:
    return datetime.now(timezone.utc).replace(tzinfo=None)


def _to_naive_utc(value: datetime) -> datetime:
    if value.tzinfo is None:
        return value
    return value.astimezone(timezone.utc).replace(tzinfo=None)


def parse_datetime(value: Any) -> Optional[datetime]:
    """
    Parse an ISO-8601 string, a datetime, or a unix timestamp (seconds or
    milliseconds) into a naive UTC datetime. Returns None when unparseable.
    """
    if value is None or value == "":
        return None

    if isinstance(value, datetime):
        return _to_naive_utc(value)

    if isinstance(value, bool):
        return None

    if isinstance(value, (int, float)):
        seconds = value / 1000 if value >= MILLISECOND_EPOCH_THRESHOLD else value
        try:
            return datetime.fromtimestamp(seconds, tz=timezone.utc).replace(tzinfo=None)
        except (OverflowError, OSError, ValueError):
            return None

    if isinstance(value, str):
        text = value.strip()
        if text.endswith("Z"):
            text = text[:-1] + "+00:00"
        try:
            return _to_naive_utc(datetime.fromisoformat(text))
        except ValueError:
            return None

    return None
