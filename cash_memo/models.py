# cash_memo/models.py
from __future__ import annotations

from datetime import date
from enum import Enum
from pathlib import Path
from typing import Optional, Tuple

from pydantic import BaseModel, ConfigDict, computed_field, field_validator

from .config_labels import CAPTURE_FORMAT, CAPTURE_QUALITY, CAPTURE_RESULT
from .text_utils import format_signature_date, parse_number


class LineItem(BaseModel):
    model_config = ConfigDict(frozen=True)

    description: str = ""
    quantity: str = ""  # numeric text as typed
    rate: str = ""  # numeric text as typed

    @computed_field
    @property
    def amount(self) -> float:
        return parse_number(self.quantity) * parse_number(self.rate)


class CashMemo(BaseModel):
    """One cash memo being edited. Immutable; edits produce a new memo."""

    model_config = ConfigDict(frozen=True)

    customer_name: str = ""
    bill_date: str = ""  # YYYY-MM-DD as typed
    payment_mode: str = ""

    line_items: Tuple[LineItem, ...] = (LineItem(),)

    @field_validator("line_items")
    @classmethod
    def _at_least_one_item(cls, v: Tuple[LineItem, ...]) -> Tuple[LineItem, ...]:
        if len(v) < 1:
            raise ValueError("a cash memo needs at least one line item")
        return v

    def compute_total(self) -> float:
        return sum(
            (parse_number(li.quantity) * parse_number(li.rate) for li in self.line_items),
            0.0,
        )

    @computed_field
    @property
    def subtotal(self) -> float:
        return self.compute_total()

    @computed_field
    @property
    def total(self) -> float:
        # no tax or discount: total equals subtotal
        return self.compute_total()

    def signature_date(self, today: Optional[date] = None) -> str:
        return format_signature_date(self.bill_date, today)


class ExportFormat(str, Enum):
    IMAGE = "jpg"
    DOCUMENT = "pdf"


class ExportOutcome(str, Enum):
    SUCCESS = "success"
    BUSY = "busy"
    VALIDATION_FAILED = "validation_failed"
    PERMISSION_DENIED = "permission_denied"
    CAPTURE_FAILED = "capture_failed"
    EXPORT_FAILED = "export_failed"


class ExportResult(BaseModel):
    outcome: ExportOutcome
    format: ExportFormat
    path: Optional[Path] = None
    error: Optional[str] = None

    @property
    def ok(self) -> bool:
        return self.outcome is ExportOutcome.SUCCESS


class CaptureOptions(BaseModel):
    model_config = ConfigDict(frozen=True)

    format: str = CAPTURE_FORMAT
    quality: float = CAPTURE_QUALITY
    result: str = CAPTURE_RESULT

    @field_validator("quality")
    @classmethod
    def _quality_range(cls, v: float) -> float:
        if not (0.0 <= v <= 1.0):
            raise ValueError("quality must be between 0.0 and 1.0")
        return v


class PageDescriptor(BaseModel):
    model_config = ConfigDict(frozen=True)

    image_path: Path


class NoticeKind(str, Enum):
    TRANSIENT = "transient"
    MODAL = "modal"
    CONFIRM = "confirm"


class Notice(BaseModel):
    model_config = ConfigDict(frozen=True)

    kind: NoticeKind
    title: str = ""
    message: str
