from __future__ import annotations

from pathlib import Path

import pytest

from cash_memo.storage import LocalFileSystem, StoragePermissionBroker, platform_default_directory


def test_platform_default_directory():
    assert platform_default_directory("darwin") == Path.home() / "Documents"
    assert platform_default_directory("linux") == Path.home() / "Downloads"
    assert platform_default_directory("win32") == Path.home() / "Downloads"


def test_configured_directory_wins(tmp_path):
    assert LocalFileSystem(tmp_path).default_directory() == tmp_path
    assert LocalFileSystem().default_directory() == platform_default_directory()


@pytest.mark.asyncio
async def test_copy_creates_directory_and_overwrites(tmp_path):
    src = tmp_path / "a.jpg"
    dst = tmp_path / "nested" / "dir" / "b.jpg"
    src.write_bytes(b"one")
    fs = LocalFileSystem(tmp_path)

    await fs.copy(src, dst)
    assert dst.read_bytes() == b"one"

    src.write_bytes(b"two")
    await fs.copy(src, dst)
    assert dst.read_bytes() == b"two"


@pytest.mark.asyncio
async def test_writable_directory_granted(tmp_path):
    broker = StoragePermissionBroker(tmp_path / "not" / "yet" / "created")
    assert await broker.request_write_access() is True


@pytest.mark.asyncio
async def test_directory_under_a_file_denied(tmp_path):
    blocker = tmp_path / "blocker"
    blocker.write_text("x")
    broker = StoragePermissionBroker(blocker / "sub")
    assert await broker.request_write_access() is False


@pytest.mark.asyncio
async def test_app_private_short_circuits(tmp_path):
    blocker = tmp_path / "blocker"
    blocker.write_text("x")
    broker = StoragePermissionBroker(blocker / "sub", app_private=True)
    assert await broker.request_write_access() is True
