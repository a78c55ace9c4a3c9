from __future__ import annotations

import time
from datetime import date, datetime


def parse_iso_date(value: str) -> date:
    """`YYYY-MM-DD` to a date; raises ValueError otherwise."""
    return datetime.strptime(value, "%Y-%m-%d").date()


def now_local() -> datetime:
    return datetime.now()


def now_ts() -> int:
    """Unix time in whole seconds, the unit of token and session expiry."""
    return int(time.time())
