"""Common utility functions following DRY and KISS principles."""
import math
from datetime import datetime, timezone
from typing import Any


def clamp_int(value: Any, minimum: int, maximum: int, fallback: int) -> int:
    """Coerce a config value into ``[minimum, maximum]``.

    Blank, non-numeric and non-finite values yield ``fallback``; fractional
    numbers are truncated toward zero before clamping.
    """
    if isinstance(value, bool):
        return fallback
    if isinstance(value, str):
        if not value.strip():
            return fallback
        try:
            number = float(value.strip())
        except ValueError:
            return fallback
    elif isinstance(value, (int, float)):
        number = float(value)
    else:
        return fallback

    if not math.isfinite(number):
        return fallback
    return max(minimum, min(maximum, math.trunc(number)))


def normalize_optional(value: str | None) -> str | None:
    """Trim a string, mapping blank results to None."""
    if value is None:
        return None
    stripped = value.strip()
    return stripped or None


def to_iso8601(value: datetime) -> str:
    """Render a timestamp as ISO-8601, treating naive values as UTC."""
    if value.tzinfo is None:
        value = value.replace(tzinfo=timezone.utc)
    return value.isoformat()
