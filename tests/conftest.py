from __future__ import annotations

import asyncio
import shutil
from pathlib import Path

import pytest

from cash_memo.exporter import ExportCoordinator
from cash_memo.models import CashMemo, LineItem
from cash_memo.notices import NoticeBoard


class FakeClock:
    def __init__(self, now: float = 100.0):
        self.now = now

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


class FakeCapture:
    def __init__(self, workdir: Path, fail: bool = False, delay: float = 0.0):
        self.workdir = workdir
        self.fail = fail
        self.delay = delay
        self.calls = []
        self.content = b"raster-v1"
        self.coordinator = None
        self.busy_during_call = None

    async def capture(self, memo, options):
        self.calls.append((memo, options))
        if self.coordinator is not None:
            self.busy_during_call = self.coordinator.in_progress
        if self.delay:
            await asyncio.sleep(self.delay)
        if self.fail:
            raise RuntimeError("rendering surface not ready")
        path = self.workdir / f"capture-{len(self.calls)}.jpg"
        path.write_bytes(self.content)
        return path


class FakeAssembler:
    def __init__(self, fail: bool = False):
        self.fail = fail
        self.calls = []

    async def assemble(self, pages, output_path):
        self.calls.append((list(pages), output_path))
        if self.fail:
            raise OSError("disk full")
        output_path.parent.mkdir(parents=True, exist_ok=True)
        output_path.write_bytes(b"%PDF-fake " + pages[0].image_path.read_bytes())
        return output_path


class FakeFileSystem:
    def __init__(self, directory: Path, fail: bool = False):
        self.directory = directory
        self.fail = fail
        self.copies = []

    def default_directory(self) -> Path:
        return self.directory

    async def copy(self, src, dst):
        self.copies.append((src, dst))
        if self.fail:
            raise OSError("read-only file system")
        dst.parent.mkdir(parents=True, exist_ok=True)
        shutil.copyfile(src, dst)
        return dst


class FakeBroker:
    def __init__(self, granted: bool = True, error: Exception = None):
        self.granted = granted
        self.error = error
        self.calls = 0

    async def request_write_access(self) -> bool:
        self.calls += 1
        if self.error is not None:
            raise self.error
        return self.granted


@pytest.fixture
def ready_memo() -> CashMemo:
    return CashMemo(
        customer_name="Ramesh Gupta",
        bill_date="2024-03-15",
        payment_mode="Cash",
        line_items=(LineItem(description="Tiffin", quantity="20", rate="80"),),
    )


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def fakes(tmp_path):
    workdir = tmp_path / "tmp"
    workdir.mkdir()
    return {
        "capture": FakeCapture(workdir),
        "assembler": FakeAssembler(),
        "filesystem": FakeFileSystem(tmp_path / "exports"),
        "permissions": FakeBroker(),
    }


@pytest.fixture
def coordinator(fakes, clock) -> ExportCoordinator:
    coord = ExportCoordinator(notices=NoticeBoard(clock=clock), **fakes)
    fakes["capture"].coordinator = coord
    return coord
