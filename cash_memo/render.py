# cash_memo/render.py
"""Default capture and document assembly, both built on Pillow.

``PillowCapture`` draws the memo the way the form shows it and writes a
temporary raster file. ``PillowDocumentAssembler`` wraps page images into a
PDF, one image per page.
"""
from __future__ import annotations

import asyncio
import tempfile
from datetime import date
from pathlib import Path
from typing import List, Optional, Protocol, Sequence

from PIL import Image, ImageDraw, ImageFont

from .config_labels import (
    BUSINESS_CONTACT,
    BUSINESS_NAME,
    CAPTURE_WIDTH,
    CURRENCY_PREFIX,
    FOOTER_SUBTITLE,
    FOOTER_TITLE,
    SIGNATORY,
    TABLE_HEADERS,
)
from .models import CaptureOptions, CashMemo, PageDescriptor
from .text_utils import format_amount

PIL_FORMATS = {"jpg": "JPEG", "jpeg": "JPEG", "png": "PNG"}

HEADER_BG = (44, 62, 80)
ACCENT = (52, 152, 219)
TEXT = (33, 37, 41)
MUTED = (108, 117, 125)
RULE = (222, 226, 230)
WHITE = (255, 255, 255)

MARGIN = 32
ROW_HEIGHT = 34
COLUMN_WEIGHTS = (2, 1, 1, 1)


class CaptureService(Protocol):
    async def capture(self, memo: CashMemo, options: CaptureOptions) -> Path: ...


class DocumentAssembler(Protocol):
    async def assemble(self, pages: Sequence[PageDescriptor], output_path: Path) -> Path: ...


def _font(size: int):
    return ImageFont.load_default(size=size)


class MemoRenderer:
    def __init__(self, width: int = CAPTURE_WIDTH, today: Optional[date] = None):
        self.width = width
        self.today = today
        self.fonts = {
            "title": _font(30),
            "section": _font(20),
            "body": _font(16),
            "small": _font(13),
        }

    def _height(self, memo: CashMemo) -> int:
        header = 130
        info = 150
        table = ROW_HEIGHT * (len(memo.line_items) + 1) + 50
        totals = 90
        signature = 100
        footer = 80
        return header + info + table + totals + signature + footer

    def _columns(self) -> List[int]:
        usable = self.width - 2 * MARGIN
        unit = usable / sum(COLUMN_WEIGHTS)
        xs, x = [], float(MARGIN)
        for w in COLUMN_WEIGHTS:
            xs.append(int(x))
            x += w * unit
        return xs

    def render(self, memo: CashMemo) -> Image.Image:
        f = self.fonts
        img = Image.new("RGB", (self.width, self._height(memo)), WHITE)
        draw = ImageDraw.Draw(img)

        # header
        draw.rectangle([0, 0, self.width, 120], fill=HEADER_BG)
        draw.text((self.width / 2, 36), BUSINESS_NAME, font=f["title"], fill=WHITE, anchor="mm")
        y = 70
        for line in BUSINESS_CONTACT:
            draw.text((self.width / 2, y), line, font=f["small"], fill=WHITE, anchor="mm")
            y += 20

        # bill to / bill details
        y = 140
        half = self.width / 2
        draw.text((MARGIN, y), "Bill To", font=f["section"], fill=ACCENT)
        draw.text((half, y), "Bill Details", font=f["section"], fill=ACCENT)
        y += 34
        draw.text((MARGIN, y), "Customer Name:", font=f["small"], fill=MUTED)
        draw.text((half, y), "Date:", font=f["small"], fill=MUTED)
        y += 20
        draw.text((MARGIN, y), memo.customer_name, font=f["body"], fill=TEXT)
        draw.text((half, y), memo.bill_date, font=f["body"], fill=TEXT)
        y += 32
        draw.text((half, y), "Payment Mode:", font=f["small"], fill=MUTED)
        y += 20
        draw.text((half, y), memo.payment_mode, font=f["body"], fill=TEXT)

        # items table
        y = 290
        draw.text((MARGIN, y), "Items", font=f["section"], fill=ACCENT)
        y += 34
        cols = self._columns()
        draw.rectangle([MARGIN, y, self.width - MARGIN, y + ROW_HEIGHT], fill=HEADER_BG)
        for x, label in zip(cols, TABLE_HEADERS):
            draw.text((x + 8, y + 9), label, font=f["body"], fill=WHITE)
        y += ROW_HEIGHT
        for li in memo.line_items:
            cells = (
                li.description,
                li.quantity,
                li.rate,
                CURRENCY_PREFIX + format_amount(li.amount),
            )
            for x, cell in zip(cols, cells):
                draw.text((x + 8, y + 9), cell, font=f["body"], fill=TEXT)
            y += ROW_HEIGHT
            draw.line([MARGIN, y, self.width - MARGIN, y], fill=RULE, width=1)

        # totals
        y += 20
        right = self.width - MARGIN
        total_text = CURRENCY_PREFIX + format_amount(memo.total)
        draw.text((right - 260, y), "Subtotal:", font=f["body"], fill=TEXT)
        draw.text((right, y), CURRENCY_PREFIX + format_amount(memo.subtotal), font=f["body"], fill=TEXT, anchor="ra")
        y += 30
        draw.line([right - 260, y, right, y], fill=RULE, width=2)
        y += 8
        draw.text((right - 260, y), "Total Amount:", font=f["section"], fill=TEXT)
        draw.text((right, y), total_text, font=f["section"], fill=ACCENT, anchor="ra")

        # signature
        y += 70
        draw.line([right - 200, y, right, y], fill=TEXT, width=1)
        draw.text((right - 100, y + 8), SIGNATORY, font=f["body"], fill=TEXT, anchor="ma")
        draw.text((right - 100, y + 30), memo.signature_date(self.today), font=f["small"], fill=MUTED, anchor="ma")

        # footer
        y += 80
        draw.text((self.width / 2, y), FOOTER_TITLE, font=f["body"], fill=TEXT, anchor="ma")
        draw.text((self.width / 2, y + 24), FOOTER_SUBTITLE, font=f["small"], fill=MUTED, anchor="ma")

        return img


class PillowCapture:
    def __init__(self, renderer: Optional[MemoRenderer] = None):
        self.renderer = renderer or MemoRenderer()

    def _write(self, memo: CashMemo, options: CaptureOptions) -> Path:
        pil_format = PIL_FORMATS.get(options.format.lower())
        if pil_format is None:
            raise ValueError(f"unsupported capture format: {options.format}")

        img = self.renderer.render(memo)
        save_kwargs = {}
        if pil_format == "JPEG":
            save_kwargs["quality"] = max(1, min(95, round(options.quality * 100)))

        with tempfile.NamedTemporaryFile(delete=False, suffix=f".{options.format}") as tmp:
            img.save(tmp, format=pil_format, **save_kwargs)
            return Path(tmp.name)

    async def capture(self, memo: CashMemo, options: CaptureOptions) -> Path:
        return await asyncio.to_thread(self._write, memo, options)


class PillowDocumentAssembler:
    def __init__(self, resolution: float = 150.0):
        self.resolution = resolution

    def _assemble(self, pages: Sequence[PageDescriptor], output_path: Path) -> Path:
        if not pages:
            raise ValueError("a document needs at least one page")

        images: List[Image.Image] = []
        for page in pages:
            with Image.open(page.image_path) as im:
                images.append(im.convert("RGB"))

        output_path.parent.mkdir(parents=True, exist_ok=True)
        first, rest = images[0], images[1:]
        first.save(
            output_path,
            format="PDF",
            resolution=self.resolution,
            save_all=True,
            append_images=rest,
        )
        return output_path

    async def assemble(self, pages: Sequence[PageDescriptor], output_path: Path) -> Path:
        return await asyncio.to_thread(self._assemble, list(pages), Path(output_path))
