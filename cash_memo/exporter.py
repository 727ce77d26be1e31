# cash_memo/exporter.py
"""Export a cash memo as a JPEG image or a one-page PDF.

Each export runs the same steps in order and stops at the first failure:

1. gate on :func:`is_export_ready`
2. ask the permission broker for write access
3. capture the rendered memo to a temporary raster file
4. resolve ``<default directory>/<generated filename>``
5. copy the raster (image) or assemble a PDF around it (document)

Step failures are raised as :mod:`cash_memo.errors` exceptions and turned into
an :class:`ExportResult` by :meth:`ExportCoordinator._run`.
"""
from __future__ import annotations

import asyncio
import logging
from pathlib import Path
from typing import Awaitable, Optional, TypeVar

from .config_labels import (
    MSG_ERROR_TITLE,
    MSG_FAILED,
    MSG_FILL_REQUIRED,
    MSG_PERMISSION,
    MSG_PERMISSION_TITLE,
    MSG_SAVED,
    MSG_SUCCESS_TITLE,
)
from .errors import CaptureFailed, ExportFailed, PermissionDenied, ValidationFailed
from .filenames import generate_filename
from .models import (
    CaptureOptions,
    CashMemo,
    ExportFormat,
    ExportOutcome,
    ExportResult,
    PageDescriptor,
)
from .notices import NoticeBoard
from .render import CaptureService, DocumentAssembler
from .storage import FileSystem, PermissionBroker
from .validator import validation_errors

logger = logging.getLogger(__name__)

T = TypeVar("T")


class ExportCoordinator:
    def __init__(
        self,
        capture: CaptureService,
        assembler: DocumentAssembler,
        filesystem: FileSystem,
        permissions: PermissionBroker,
        notices: Optional[NoticeBoard] = None,
        capture_options: Optional[CaptureOptions] = None,
        step_timeout: Optional[float] = None,
    ):
        self.capture = capture
        self.assembler = assembler
        self.filesystem = filesystem
        self.permissions = permissions
        self.notices = notices or NoticeBoard()
        self.capture_options = capture_options or CaptureOptions()
        self.step_timeout = step_timeout
        self.in_progress = False

    async def export_as_image(self, memo: CashMemo) -> ExportResult:
        return await self._run(memo, ExportFormat.IMAGE)

    async def export_as_document(self, memo: CashMemo) -> ExportResult:
        return await self._run(memo, ExportFormat.DOCUMENT)

    async def _step(self, awaitable: Awaitable[T]) -> T:
        if self.step_timeout is None:
            return await awaitable
        return await asyncio.wait_for(awaitable, timeout=self.step_timeout)

    def _gate(self, memo: CashMemo) -> None:
        errors = validation_errors(memo)
        if errors:
            raise ValidationFailed(errors)

    async def _check_permission(self) -> None:
        try:
            granted = await self._step(self.permissions.request_write_access())
        except Exception as exc:
            logger.warning("Permission request failed: %s", exc)
            granted = False
        if not granted:
            raise PermissionDenied(MSG_PERMISSION)

    async def _capture(self, memo: CashMemo) -> Path:
        try:
            return Path(await self._step(self.capture.capture(memo, self.capture_options)))
        except Exception as exc:
            raise CaptureFailed(str(exc) or type(exc).__name__) from exc

    def _destination(self, memo: CashMemo, fmt: ExportFormat) -> Path:
        try:
            directory = Path(self.filesystem.default_directory())
        except Exception as exc:
            raise ExportFailed(str(exc) or type(exc).__name__) from exc
        return directory / generate_filename(memo, fmt.value)

    async def _write(self, fmt: ExportFormat, captured: Path, output_path: Path) -> None:
        try:
            if fmt is ExportFormat.IMAGE:
                await self._step(self.filesystem.copy(captured, output_path))
            else:
                pages = [PageDescriptor(image_path=captured)]
                await self._step(self.assembler.assemble(pages, output_path))
        except Exception as exc:
            raise ExportFailed(str(exc) or type(exc).__name__) from exc

    def _discard(self, captured: Path) -> None:
        try:
            captured.unlink(missing_ok=True)
        except OSError as exc:
            logger.warning("Could not remove temporary capture %s: %s", captured, exc)

    async def _run(self, memo: CashMemo, fmt: ExportFormat) -> ExportResult:
        if self.in_progress:
            logger.info("Export already in progress; ignoring %s export", fmt.value)
            return ExportResult(outcome=ExportOutcome.BUSY, format=fmt)

        try:
            self._gate(memo)
        except ValidationFailed as exc:
            logger.warning("Export blocked: %s", exc)
            self.notices.flash(MSG_FILL_REQUIRED)
            return ExportResult(outcome=ExportOutcome.VALIDATION_FAILED, format=fmt, error=str(exc))

        self.in_progress = True
        captured: Optional[Path] = None
        try:
            await self._check_permission()
            captured = await self._capture(memo)
            output_path = self._destination(memo, fmt)
            await self._write(fmt, captured, output_path)
        except PermissionDenied as exc:
            self.notices.alert(MSG_PERMISSION_TITLE, MSG_PERMISSION)
            return ExportResult(outcome=ExportOutcome.PERMISSION_DENIED, format=fmt, error=str(exc))
        except CaptureFailed as exc:
            logger.exception("Capture failed for %s export", fmt.value)
            self.notices.alert(MSG_ERROR_TITLE, MSG_FAILED[fmt.value])
            return ExportResult(outcome=ExportOutcome.CAPTURE_FAILED, format=fmt, error=str(exc))
        except ExportFailed as exc:
            logger.exception("Saving %s export failed", fmt.value)
            self.notices.alert(MSG_ERROR_TITLE, MSG_FAILED[fmt.value])
            return ExportResult(outcome=ExportOutcome.EXPORT_FAILED, format=fmt, error=str(exc))
        finally:
            self.in_progress = False
            if captured is not None:
                self._discard(captured)

        logger.info("Saved %s export to %s", fmt.value, output_path)
        self.notices.alert(MSG_SUCCESS_TITLE, f"{MSG_SAVED[fmt.value]}\nLocation: {output_path}")
        return ExportResult(outcome=ExportOutcome.SUCCESS, format=fmt, path=output_path)
