from __future__ import annotations

import re
from datetime import date, datetime
from typing import Any

from .textutil import as_str

_DATE_RX = re.compile(r"^\s*(\d{4})-(\d{1,2})-(\d{1,2})(?:[ T]\d{1,2}:\d{2}(?::\d{2})?.*)?\s*$")


def parse_date(raw: Any) -> date:
    """
    Parse a host date ("2023-05-10", "2023-05-10 08:00:00", ISO 8601).
    Raises ValueError for anything else.
    """
    if isinstance(raw, datetime):
        return raw.date()
    if isinstance(raw, date):
        return raw
    s = as_str(raw)
    m = _DATE_RX.match(s)
    if not m:
        raise ValueError(f"Unrecognized date: {s!r}")
    y, mo, d = (int(g) for g in m.groups())
    return date(y, mo, d)


def format_date(raw: Any) -> str:
    """Render a host date as "YYYY/MM/DD"."""
    return parse_date(raw).strftime("%Y/%m/%d")


def year_of(raw: Any) -> int:
    return parse_date(raw).year
