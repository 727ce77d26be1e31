# cash_memo/config.py
# Re-exports the fixed labels and adds settings read from the environment.

from __future__ import annotations

import os
from dataclasses import dataclass
from typing import Optional

from .config_labels import (
    CAPTURE_QUALITY,
    DOCUMENT_EXTENSION,
    FALLBACK_CUSTOMER_NAME,
    FILENAME_SUFFIX,
    IMAGE_EXTENSION,
    NOTICE_SECONDS,
    PAYMENT_MODES,
)

__all__ = [
    "CAPTURE_QUALITY",
    "DOCUMENT_EXTENSION",
    "FALLBACK_CUSTOMER_NAME",
    "FILENAME_SUFFIX",
    "IMAGE_EXTENSION",
    "NOTICE_SECONDS",
    "PAYMENT_MODES",
    "Settings",
    "load_settings",
]


def _env_float(name: str) -> Optional[float]:
    raw = os.getenv(name)
    if not raw:
        return None
    try:
        return float(raw)
    except ValueError:
        return None


def _env_flag(name: str) -> bool:
    return (os.getenv(name) or "").strip().lower() in {"1", "true", "yes", "on"}


@dataclass(frozen=True)
class Settings:
    export_dir: Optional[str] = None
    capture_quality: float = CAPTURE_QUALITY
    step_timeout: Optional[float] = None
    app_private: bool = False
    log_level: str = "INFO"


def load_settings() -> Settings:
    """Build :class:`Settings` from ``CASH_MEMO_*`` environment variables."""
    quality = _env_float("CASH_MEMO_CAPTURE_QUALITY")
    if quality is None or not (0.0 <= quality <= 1.0):
        quality = CAPTURE_QUALITY

    return Settings(
        export_dir=os.getenv("CASH_MEMO_EXPORT_DIR") or None,
        capture_quality=quality,
        step_timeout=_env_float("CASH_MEMO_STEP_TIMEOUT"),
        app_private=_env_flag("CASH_MEMO_APP_PRIVATE"),
        log_level=(os.getenv("CASH_MEMO_LOG_LEVEL") or "INFO").upper(),
    )
