# cash_memo/notices.py
from __future__ import annotations

import time
from typing import Callable, List, Optional

from .config_labels import NOTICE_SECONDS
from .models import Notice, NoticeKind


class NoticeBoard:
    """User-facing messages.

    A flash message is the inline error banner; it disappears on its own once
    ``ttl`` seconds have passed. Modal notices queue up until the UI pops them.
    """

    def __init__(self, clock: Callable[[], float] = time.monotonic, ttl: float = NOTICE_SECONDS):
        self._clock = clock
        self.ttl = ttl
        self._flash: Optional[Notice] = None
        self._flash_expires = 0.0
        self.modals: List[Notice] = []

    def flash(self, message: str) -> Notice:
        notice = Notice(kind=NoticeKind.TRANSIENT, message=message)
        self._flash = notice
        self._flash_expires = self._clock() + self.ttl
        return notice

    @property
    def flash_message(self) -> Optional[str]:
        if self._flash is None:
            return None
        if self._clock() >= self._flash_expires:
            self._flash = None
            return None
        return self._flash.message

    def dismiss_flash(self) -> None:
        self._flash = None

    def alert(self, title: str, message: str) -> Notice:
        notice = Notice(kind=NoticeKind.MODAL, title=title, message=message)
        self.modals.append(notice)
        return notice

    def pop_modal(self) -> Optional[Notice]:
        if not self.modals:
            return None
        return self.modals.pop(0)
