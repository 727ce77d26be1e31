# cash_memo/session.py
from __future__ import annotations

import logging
from typing import List, Optional

from .config import Settings, load_settings
from .config_labels import MSG_CLEAR_PROMPT, MSG_CLEAR_TITLE, MSG_ERROR_TITLE
from .editor import Action, ClearAll, reduce
from .errors import MinimumItemsViolation
from .exporter import ExportCoordinator
from .models import CaptureOptions, CashMemo, ExportResult, Notice, NoticeKind
from .notices import NoticeBoard
from .render import PillowCapture, PillowDocumentAssembler
from .storage import LocalFileSystem, StoragePermissionBroker
from .validator import is_export_ready, validation_errors

logger = logging.getLogger(__name__)


class EditingSession:
    """Owns the memo for one editing session and everything that acts on it.

    The UI only dispatches actions and reads ``memo``, ``notices`` and
    ``can_export``; it never holds on to line items itself.
    """

    def __init__(self, coordinator: ExportCoordinator, memo: Optional[CashMemo] = None):
        self.coordinator = coordinator
        self.memo = memo or CashMemo()
        self.pending_clear = False

    @classmethod
    def with_defaults(cls, settings: Optional[Settings] = None) -> "EditingSession":
        settings = settings or load_settings()
        filesystem = LocalFileSystem(settings.export_dir)
        coordinator = ExportCoordinator(
            capture=PillowCapture(),
            assembler=PillowDocumentAssembler(),
            filesystem=filesystem,
            permissions=StoragePermissionBroker(
                filesystem.default_directory(), app_private=settings.app_private
            ),
            notices=NoticeBoard(),
            capture_options=CaptureOptions(quality=settings.capture_quality),
            step_timeout=settings.step_timeout,
        )
        return cls(coordinator)

    @property
    def notices(self) -> NoticeBoard:
        return self.coordinator.notices

    def dispatch(self, action: Action) -> CashMemo:
        try:
            self.memo = reduce(self.memo, action)
        except MinimumItemsViolation as exc:
            self.notices.alert(MSG_ERROR_TITLE, str(exc))
        return self.memo

    def request_clear(self) -> Notice:
        self.pending_clear = True
        return Notice(kind=NoticeKind.CONFIRM, title=MSG_CLEAR_TITLE, message=MSG_CLEAR_PROMPT)

    def resolve_clear(self, accept: bool) -> CashMemo:
        if self.pending_clear and accept:
            self.memo = reduce(self.memo, ClearAll(confirmed=True))
            logger.info("Cash memo cleared")
        self.pending_clear = False
        return self.memo

    @property
    def errors(self) -> List[str]:
        return validation_errors(self.memo)

    @property
    def can_export(self) -> bool:
        return is_export_ready(self.memo) and not self.coordinator.in_progress

    async def export_as_image(self) -> ExportResult:
        return await self.coordinator.export_as_image(self.memo)

    async def export_as_document(self) -> ExportResult:
        return await self.coordinator.export_as_document(self.memo)
