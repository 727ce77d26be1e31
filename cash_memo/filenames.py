# cash_memo/filenames.py
from __future__ import annotations

import re
from datetime import date
from typing import Optional

from .config_labels import FALLBACK_CUSTOMER_NAME, FILENAME_SUFFIX
from .models import CashMemo
from .text_utils import today_iso

_DISALLOWED_RE = re.compile(r"[^a-zA-Z0-9\s]")
_WHITESPACE_RE = re.compile(r"\s+")


def sanitize_customer_name(name: str) -> str:
    """Keep ASCII letters, digits and whitespace; whitespace runs become ``_``."""
    cleaned = _WHITESPACE_RE.sub("_", _DISALLOWED_RE.sub("", name or ""))
    return cleaned or FALLBACK_CUSTOMER_NAME


def generate_filename(memo: CashMemo, extension: str, today: Optional[date] = None) -> str:
    """``{customer}_{date}_Cash_Memo.{extension}``.

    Deterministic for a given memo; the current date is only used when the
    memo has no bill date. The bill date is used verbatim.
    """
    name = sanitize_customer_name(memo.customer_name)
    date_token = memo.bill_date or today_iso(today)
    return f"{name}_{date_token}_{FILENAME_SUFFIX}.{extension}"
