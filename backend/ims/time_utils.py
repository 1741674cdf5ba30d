from __future__ import annotations

import calendar
import re
from datetime import date
from typing import Optional, Tuple

_DATE_RE = re.compile(r"^\d{4}-\d{2}-\d{2}$")


def today() -> date:
    """Local calendar date used for month defaults."""
    return date.today()


def parse_date(value: Optional[str]) -> Optional[date]:
    """
    Parse a canonical YYYY-MM-DD date string.

    - None / "" -> None
    - anything else that is not exactly YYYY-MM-DD raises ValueError
    """
    if value is None:
        return None
    s = value.strip()
    if not s:
        return None
    if not _DATE_RE.match(s):
        raise ValueError(f"{value!r} is not a YYYY-MM-DD date")
    return date.fromisoformat(s)


def format_date(d: date) -> str:
    return d.strftime("%Y-%m-%d")


def current_month_range(on: Optional[date] = None) -> Tuple[str, str]:
    """First and last day of the month containing `on` (default: today)."""
    on = on or today()
    last_day = calendar.monthrange(on.year, on.month)[1]
    return (
        format_date(on.replace(day=1)),
        format_date(on.replace(day=last_day)),
    )


def month_label(on: Optional[date] = None) -> str:
    """Report title period, e.g. 'October 2026'."""
    on = on or today()
    return f"{calendar.month_name[on.month]} {on.year}"
