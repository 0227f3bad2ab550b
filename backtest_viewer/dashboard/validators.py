# backtest_viewer/dashboard/validators.py
"""
Request form validation rules
"""
import re
from datetime import date
from typing import Optional, Tuple

import pandas as pd

_AMOUNT_STRIP = re.compile(r'[$\s,]')
_AMOUNT_PATTERN = re.compile(r'^\d*\.?\d*$')
_THOUSANDS = re.compile(r'\B(?=(\d{3})+(?!\d))')

# Market data is only available up to this many months before today
DATA_LAG_MONTHS = 2


def parse_amount(text: str) -> Tuple[Optional[str], Optional[str], Optional[str]]:
    """
    Clean a typed investment amount.

    Returns:
        (clean value, display value, error). Empty input gives (None, '', None).

    Example: '$10000.5' -> ('10000.5', '10,000.5', None)
    """
    clean = _AMOUNT_STRIP.sub('', text or '')
    if not clean:
        return None, '', None

    if not _AMOUNT_PATTERN.match(clean) or clean == '.':
        return None, text, 'Invalid number'

    integer_part, dot, fraction = clean.partition('.')
    grouped = _THOUSANDS.sub(',', integer_part)
    return clean, f"{grouped}{dot}{fraction}", None


def max_allowed_date(today: Optional[date] = None) -> date:
    today = today or date.today()
    return (pd.Timestamp(today) - pd.DateOffset(months=DATA_LAG_MONTHS)).date()


def is_date_allowed(value: date, today: Optional[date] = None) -> bool:
    return value <= max_allowed_date(today)


def is_range_valid(start: Optional[date], end: Optional[date]) -> bool:
    return start is not None and end is not None and start <= end
