# backtest_viewer/data/time_keys.py
"""
Date truncation shared by every normalizer.
Truncation is a string operation: everything before the first time separator.
"""
import re
from datetime import date
from typing import Any, Optional

from .models import TimeKey

_TIME_SEPARATOR = re.compile(r'[T ]')

# Only the dashed calendar form; compact and week dates would not collapse
# onto the same key as their dashed equivalent
_TIME_KEY_PATTERN = re.compile(r'^\d{4}-\d{2}-\d{2}$')


def truncate_datetime(value: str) -> str:
    """
    Return the substring preceding the first time separator.

    Idempotent: truncate_datetime('2024-01-02') == '2024-01-02'
    """
    return _TIME_SEPARATOR.split(value, maxsplit=1)[0]


def to_time_key(value: Any) -> Optional[TimeKey]:
    """
    Convert a raw datetime field to a TimeKey.

    Returns None for missing, non-string, empty, or non-date values; callers
    drop such records. Only 'YYYY-MM-DD' dates are accepted.
    """
    if not isinstance(value, str):
        return None
    value = value.strip()
    if not value:
        return None

    key = truncate_datetime(value)
    if not _TIME_KEY_PATTERN.match(key):
        return None
    try:
        date.fromisoformat(key)
    except ValueError:
        return None
    return key
