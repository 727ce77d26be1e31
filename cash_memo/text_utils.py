# cash_memo/text_utils.py
from __future__ import annotations

import math
import re
from datetime import date
from typing import Optional

import dateparser

# Leading decimal literal: sign, digits with optional fraction (or a bare
# fraction), optional exponent. Anything after it is ignored. ASCII digits
# only; other scripts read as 0.
NUMBER_PREFIX_RE = re.compile(r"^\s*([-+]?(?:[0-9]+(?:\.[0-9]*)?|\.[0-9]+)(?:[eE][-+]?[0-9]+)?)")


def parse_number(raw: Optional[str]) -> float:
    """Parse numeric form text the way a lenient number field does.

    ``"12abc"`` -> 12.0, ``"abc"`` / ``""`` -> 0.0, ``"-3"`` -> -3.0.
    """
    if not raw:
        return 0.0
    m = NUMBER_PREFIX_RE.match(raw)
    if not m:
        return 0.0
    try:
        return float(m.group(1))
    except (ValueError, OverflowError):
        return 0.0


def today_iso(today: Optional[date] = None) -> str:
    return (today or date.today()).isoformat()


def parse_date_any(text: Optional[str]) -> Optional[date]:
    if not text:
        return None
    dt = dateparser.parse(
        text.strip(),
        settings={"DATE_ORDER": "YMD", "PREFER_DAY_OF_MONTH": "first"},
    )
    if not dt:
        return None
    return dt.date()


def format_signature_date(bill_date: Optional[str], today: Optional[date] = None) -> str:
    """Render the bill date as DD/MM/YYYY, falling back to today when empty."""
    if not bill_date:
        return (today or date.today()).strftime("%d/%m/%Y")
    parsed = parse_date_any(bill_date)
    if parsed is None:
        return bill_date
    return parsed.strftime("%d/%m/%Y")


def format_amount(value: float) -> str:
    if not math.isfinite(value):
        return str(value)
    if value == int(value):
        return f"{int(value):,}"
    return f"{value:,.2f}"
