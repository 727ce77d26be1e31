from __future__ import annotations

from datetime import date

import pdfplumber
import pytest
from PIL import Image

from cash_memo.config import Settings
from cash_memo.config_labels import CAPTURE_WIDTH
from cash_memo.models import CaptureOptions, CashMemo, LineItem, PageDescriptor
from cash_memo.render import MemoRenderer, PillowCapture, PillowDocumentAssembler
from cash_memo.session import EditingSession


def test_renderer_grows_with_items(ready_memo):
    renderer = MemoRenderer(today=date(2024, 3, 15))
    short = renderer.render(ready_memo)
    longer = renderer.render(
        ready_memo.model_copy(update={"line_items": ready_memo.line_items + (LineItem(),) * 5})
    )
    assert short.width == longer.width == CAPTURE_WIDTH
    assert longer.height > short.height


@pytest.mark.asyncio
async def test_capture_writes_temporary_jpeg(ready_memo):
    path = await PillowCapture().capture(ready_memo, CaptureOptions())
    try:
        assert path.suffix == ".jpg"
        with Image.open(path) as im:
            assert im.format == "JPEG"
            assert im.width == CAPTURE_WIDTH
    finally:
        path.unlink(missing_ok=True)


@pytest.mark.asyncio
async def test_capture_rejects_unknown_format(ready_memo):
    with pytest.raises(ValueError):
        await PillowCapture().capture(ready_memo, CaptureOptions(format="tiff"))


@pytest.mark.asyncio
async def test_assembler_makes_one_page_pdf(tmp_path):
    image_path = tmp_path / "page.jpg"
    Image.new("RGB", (300, 400), "white").save(image_path, "JPEG")
    output = tmp_path / "out" / "memo.pdf"

    result = await PillowDocumentAssembler().assemble([PageDescriptor(image_path=image_path)], output)

    assert result == output
    with pdfplumber.open(str(output)) as pdf:
        assert len(pdf.pages) == 1


@pytest.mark.asyncio
async def test_assembler_needs_a_page(tmp_path):
    with pytest.raises(ValueError):
        await PillowDocumentAssembler().assemble([], tmp_path / "empty.pdf")


@pytest.mark.asyncio
async def test_default_session_exports_both_formats(tmp_path, ready_memo):
    session = EditingSession.with_defaults(Settings(export_dir=str(tmp_path)))
    session.memo = ready_memo

    pdf_result = await session.export_as_document()
    jpg_result = await session.export_as_image()

    assert pdf_result.ok and jpg_result.ok
    assert pdf_result.path == tmp_path / "Ramesh_Gupta_2024-03-15_Cash_Memo.pdf"
    assert jpg_result.path == tmp_path / "Ramesh_Gupta_2024-03-15_Cash_Memo.jpg"
    with pdfplumber.open(str(pdf_result.path)) as pdf:
        assert len(pdf.pages) == 1
    with Image.open(jpg_result.path) as im:
        assert im.format == "JPEG"


@pytest.mark.asyncio
async def test_default_session_blank_memo_not_exported(tmp_path):
    session = EditingSession.with_defaults(Settings(export_dir=str(tmp_path)))
    result = await session.export_as_document()
    assert not result.ok
    assert list(tmp_path.iterdir()) == []
    assert session.memo == CashMemo()
