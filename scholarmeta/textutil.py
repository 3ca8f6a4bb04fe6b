from __future__ import annotations

from typing import Any


def as_str(v: Any) -> str:
    """
    Best-effort string coercion.

    - None -> ""
    - str -> unchanged
    - bool -> "" for False (host flags are never tag content)
    - everything else -> str(v)
    """
    if v is None or v is False:
        return ""
    if isinstance(v, str):
        return v
    return str(v)


def first_nonempty(*values: Any) -> str:
    """First value that is non-empty after stripping, else ""."""
    for v in values:
        s = as_str(v).strip()
        if s:
            return s
    return ""
