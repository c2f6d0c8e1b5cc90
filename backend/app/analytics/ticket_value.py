from __future__ import annotations

import re
from typing import Any

_NON_NUMERIC = re.compile(r"[^\d.,]")
_LEADING_NUMBER = re.compile(r"\d+(?:\.\d*)?|\.\d+")


def _leading_float(s: str) -> float:
    # parseFloat-style: take the longest numeric prefix, ignore the rest
    match = _LEADING_NUMBER.match(s)
    if not match:
        return 0.0
    try:
        return float(match.group(0))
    except ValueError:
        return 0.0


def parse_ticket_value(value: Any) -> float:
    """
    Parse a free-form ticket value in Brazilian ("1.234,56") or English
    ("1234.56") notation. Returns 0.0 for anything unparsable.

    A lone dot followed by exactly three digits is read as a thousands
    separator, so "2.000" is 2000 and "1.234" is 1234 (never 1.234).
    """
    if not value:
        return 0.0

    cleaned = _NON_NUMERIC.sub("", str(value).strip())
    has_dot = "." in cleaned
    has_comma = "," in cleaned

    if has_dot and has_comma:
        return _leading_float(cleaned.replace(".", "").replace(",", "."))

    if has_dot:
        last_group = cleaned.split(".")[-1]
        if len(last_group) == 3:
            return _leading_float(cleaned.replace(".", ""))
        return _leading_float(cleaned)

    if has_comma:
        return _leading_float(cleaned.replace(",", "."))

    return _leading_float(cleaned)
