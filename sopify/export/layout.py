# sopify/export/layout.py
"""
Vertical cursor + page-break bookkeeping for the PDF emitter.

All positions are millimetres measured down from the top edge of an A4
page. Heights are estimates (line count x font-derived line height), not
exact text metrics.
"""
from __future__ import annotations

from typing import Callable, List, Optional

from reportlab.lib.units import mm
from reportlab.lib.utils import simpleSplit

A4_WIDTH_MM = 210.0
A4_HEIGHT_MM = 297.0
MARGIN_MM = 20.0
FOOTER_RESERVATION_MM = 15.0
TOP_OFFSET_MM = 10.0  # extra space below the top margin on continuation pages


def line_height(font_size: float) -> float:
    return font_size * 0.4 + 2


class PageLayout:
    def __init__(
        self,
        page_width: float = A4_WIDTH_MM,
        page_height: float = A4_HEIGHT_MM,
        margin: float = MARGIN_MM,
        footer_reservation: float = FOOTER_RESERVATION_MM,
        on_page_break: Optional[Callable[[], None]] = None,
    ):
        self.page_width = page_width
        self.page_height = page_height
        self.margin = margin
        self.footer_reservation = footer_reservation
        self.on_page_break = on_page_break

        self.cursor = margin
        self.page_count = 1
        # (page, y) of every block that went through reserve()
        self.origins: List[tuple] = []

    # --------------------------------------------------------
    # Geometry
    # --------------------------------------------------------
    @property
    def content_width(self) -> float:
        return self.page_width - self.margin * 2

    @property
    def bottom_limit(self) -> float:
        return self.page_height - self.margin - self.footer_reservation

    @property
    def remaining(self) -> float:
        return self.bottom_limit - self.cursor

    # --------------------------------------------------------
    # Cursor movement
    # --------------------------------------------------------
    def reserve(self, height: float) -> bool:
        """
        Make room for a block of ``height`` mm. Starts a new page when the
        block would cross the footer band; returns True if it did.
        """
        broke = False
        if self.cursor + height > self.bottom_limit:
            self.page_break()
            broke = True
        self.origins.append((self.page_count, self.cursor))
        return broke

    def page_break(self) -> None:
        if self.on_page_break:
            self.on_page_break()
        self.page_count += 1
        self.cursor = self.margin + TOP_OFFSET_MM

    def advance(self, height: float) -> None:
        self.cursor += height

    # --------------------------------------------------------
    # Text measurement
    # --------------------------------------------------------
    def wrap(self, text: str, font_name: str, font_size: float, indent: float = 0) -> List[str]:
        width_pt = (self.content_width - indent) * mm
        return simpleSplit(text, font_name, font_size, width_pt) or [""]

    def text_height(self, line_count: int, font_size: float, spacing: float = 0) -> float:
        return line_count * line_height(font_size) + spacing

    # reportlab's origin is bottom-left, in points
    def to_pdf_y(self, y_mm: float) -> float:
        return (self.page_height - y_mm) * mm

    def to_pdf_x(self, x_mm: float) -> float:
        return x_mm * mm
