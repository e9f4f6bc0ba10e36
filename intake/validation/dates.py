"""Normalizes model-supplied dates to YYYY-MM-DD."""

import re
from datetime import date
from typing import Any

_ISO_RE = re.compile(r"^(\d{4})-(\d{2})-(\d{2})")
_MONTH_NAME_RE = re.compile(r"^(\d{1,4})[-/ ]([A-Za-zç]{3})[a-zç]*\.?[-/ ](\d{2,4})$", re.IGNORECASE)
_NUMERIC_RE = re.compile(r"^(\d{1,4})[-/.](\d{1,2})[-/.](\d{2,4})$")

MONTHS: dict[str, int] = {
    "jan": 1, "feb": 2, "fev": 2, "mar": 3, "apr": 4, "abr": 4,
    "may": 5, "mai": 5, "jun": 6, "jul": 7, "aug": 8, "ago": 8,
    "sep": 9, "set": 9, "oct": 10, "out": 10, "nov": 11, "dec": 12, "dez": 12,
}


def normalize_date(value: Any) -> str | None:
    """Return an ISO calendar day for the usual spreadsheet and document formats.

    Handles ISO (a trailing time is dropped), DD/MM/YYYY, DD-MM-YY,
    YYYY/MM/DD, DD-MMM-YY and YYYY-MMM-DD. Text that matches none of these, or
    names an impossible day, is returned stripped and unchanged so the entity
    services can reject it. Returns None for empty or non-string values.
    """
    if not isinstance(value, str) or not value.strip():
        return None
    text = value.strip()

    iso = _ISO_RE.match(text)
    if iso:
        return _as_iso(int(iso[1]), int(iso[2]), int(iso[3])) or text

    named = _MONTH_NAME_RE.match(text)
    if named and named[2].lower() in MONTHS:
        first, last = named[1], named[3]
        day, year = (last, first) if int(first) > 31 else (first, last)
        return _as_iso(_full_year(year), MONTHS[named[2].lower()], int(day)) or text

    numeric = _NUMERIC_RE.match(text)
    if numeric:
        first, month, last = numeric[1], int(numeric[2]), numeric[3]
        if int(first) > 31:
            return _as_iso(int(first), month, int(last)) or text
        return _as_iso(_full_year(last), month, int(first)) or text
    return text


def _full_year(year: str) -> int:
    # two-digit years: 00-29 are 20xx, 30-99 are 19xx
    if len(year) == 2:
        return int(year) + (2000 if int(year) < 30 else 1900)
    return int(year)


def _as_iso(year: int, month: int, day: int) -> str | None:
    try:
        return date(year, month, day).isoformat()
    except ValueError:
        return None
