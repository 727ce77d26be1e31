# cash_memo/storage.py
"""Where exported files go and whether we may write there."""
from __future__ import annotations

import asyncio
import logging
import os
import shutil
import sys
from pathlib import Path
from typing import Optional, Protocol

logger = logging.getLogger(__name__)


class FileSystem(Protocol):
    def default_directory(self) -> Path: ...

    async def copy(self, src: Path, dst: Path) -> Path: ...


class PermissionBroker(Protocol):
    async def request_write_access(self) -> bool: ...


def platform_default_directory(platform: Optional[str] = None) -> Path:
    """Documents on macOS, Downloads everywhere else."""
    platform = platform or sys.platform
    if platform == "darwin":
        return Path.home() / "Documents"
    return Path.home() / "Downloads"


class LocalFileSystem:
    def __init__(self, directory: Optional[str | Path] = None):
        self._directory = Path(directory) if directory else None

    def default_directory(self) -> Path:
        return self._directory or platform_default_directory()

    def _copy(self, src: Path, dst: Path) -> Path:
        dst.parent.mkdir(parents=True, exist_ok=True)
        # an existing file with the same name is overwritten
        shutil.copyfile(src, dst)
        return dst

    async def copy(self, src: Path, dst: Path) -> Path:
        return await asyncio.to_thread(self._copy, Path(src), Path(dst))


class StoragePermissionBroker:
    """Grants write access when the export directory is writable.

    App-private directories need no grant, so the check is skipped.
    """

    def __init__(self, directory: str | Path, app_private: bool = False):
        self.directory = Path(directory)
        self.app_private = app_private

    def _nearest_existing(self) -> Optional[Path]:
        for candidate in (self.directory, *self.directory.parents):
            if candidate.exists():
                return candidate
        return None

    def _check(self) -> bool:
        existing = self._nearest_existing()
        if existing is None or not existing.is_dir():
            return False
        return os.access(existing, os.W_OK)

    async def request_write_access(self) -> bool:
        if self.app_private:
            return True
        granted = await asyncio.to_thread(self._check)
        if not granted:
            logger.warning("No write access to %s", self.directory)
        return granted
