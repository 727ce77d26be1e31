# cash_memo/validator.py
from __future__ import annotations

from typing import List, Optional

from .config import PAYMENT_MODES
from .models import CashMemo, LineItem
from .text_utils import parse_number


def _safe_str(s: Optional[str]) -> str:
    return (s or "").strip()


def _is_valid_item(li: LineItem) -> bool:
    return (
        bool(_safe_str(li.description))
        and parse_number(li.quantity) > 0
        and parse_number(li.rate) > 0
    )


def _check_completeness(memo: CashMemo) -> List[str]:
    errors: List[str] = []

    if not _safe_str(memo.customer_name):
        errors.append("missing_field: customer_name")
    # bill date is checked as typed, not trimmed
    if not memo.bill_date:
        errors.append("missing_field: bill_date")
    if memo.payment_mode not in PAYMENT_MODES:
        errors.append("missing_field: payment_mode")

    return errors


def _check_business_rules(memo: CashMemo) -> List[str]:
    # Invalid rows are tolerated as long as one row is billable.
    if not any(_is_valid_item(li) for li in memo.line_items):
        return ["business_rule_failed: no_valid_line_item"]
    return []


def validation_errors(memo: CashMemo) -> List[str]:
    errors: List[str] = []
    errors.extend(_check_completeness(memo))
    errors.extend(_check_business_rules(memo))
    return errors


def is_export_ready(memo: CashMemo) -> bool:
    return not validation_errors(memo)
