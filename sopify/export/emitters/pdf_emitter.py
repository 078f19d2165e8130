# sopify/export/emitters/pdf_emitter.py
# ============================================================
# 📄 PDF emitter: reportlab canvas, manual layout, A4
# ============================================================
from __future__ import annotations

import io
from typing import Callable, List, Optional

from reportlab.lib import colors
from reportlab.lib.pagesizes import A4
from reportlab.lib.units import mm
from reportlab.pdfbase.pdfmetrics import stringWidth
from reportlab.pdfgen import canvas

from sopify.export import blocks as b
from sopify.export.layout import PageLayout, line_height
from sopify.export.policy import format_date

from .base_emitter import Emitter

FONT = "Helvetica"
FONT_BOLD = "Helvetica-Bold"
FONT_ITALIC = "Helvetica-Oblique"
CHECK_FONT = "ZapfDingbats"
CHECK_GLYPH = "4"  # ✔ in ZapfDingbats

PALETTE = {
    b.PRIMARY: colors.HexColor("#3B82F6"),
    b.SECONDARY: colors.HexColor("#6366F1"),
    b.SUCCESS: colors.HexColor("#22C55E"),
    b.WARNING: colors.HexColor("#F59E0B"),
    b.DANGER: colors.HexColor("#EF4444"),
    b.DARK: colors.HexColor("#111827"),
    b.MUTED: colors.HexColor("#4B5563"),
}
LIGHT = colors.HexColor("#9CA3AF")

# (fill, stroke) for the shaded boxes
CARD_COLORS = {
    "classification": (colors.HexColor("#EFF6FF"), colors.HexColor("#93C5FD")),
    b.IMMEDIATE: (colors.HexColor("#FEF2F2"), colors.HexColor("#FCA5A5")),
    b.PREVENTIVE: (colors.HexColor("#FFFBEB"), colors.HexColor("#F59E0B")),
    "completed": (colors.HexColor("#F0FDF4"), colors.HexColor("#86EFAC")),
}

STEP_TEXT_INDENT = 20
BLOCK_INDENT = 8

# check glyph + gap + "COMPLETED", in points
COMPLETED_TAG_WIDTH = 4 * mm + stringWidth("COMPLETED", FONT_BOLD, 12)


def _pdf_safe(text: str) -> str:
    """Standard Type1 fonts only carry WinAnsi; anything else becomes '?'."""
    return (text or "").encode("cp1252", "replace").decode("cp1252")


class _StampedCanvas(canvas.Canvas):
    """
    Defers page output until save() so a footer with the final page count
    can be drawn on every page after all content is laid out.
    """

    def __init__(self, *args, stamp: Optional[Callable] = None, **kwargs):
        super().__init__(*args, **kwargs)
        self._stamp = stamp
        self._page_states: List[dict] = []

    def showPage(self):
        self._page_states.append(dict(self.__dict__))
        self._startPage()

    def save(self):
        total = len(self._page_states)
        for state in self._page_states:
            self.__dict__.update(state)
            if self._stamp:
                self._stamp(self, self._pageNumber, total)
            canvas.Canvas.showPage(self)
        canvas.Canvas.save(self)

    @property
    def page_total(self) -> int:
        return len(self._page_states)


class PdfEmitter(Emitter):
    format = "pdf"
    extension = "pdf"
    content_type = "application/pdf"

    def __init__(self):
        self.layout: Optional[PageLayout] = None
        self.page_count = 0

    # ------------------------------------------------------------------
    # Entry point
    # ------------------------------------------------------------------
    def render(self, plan: b.DocumentPlan) -> bytes:
        buffer = io.BytesIO()
        c = _StampedCanvas(
            buffer,
            pagesize=A4,
            invariant=1,
            stamp=lambda cv, page, total: self._draw_footer(cv, plan, page, total),
        )
        c.setTitle(plan.title)
        c.setAuthor(f"{plan.brand} {plan.tagline}")
        c.setSubject(plan.kicker.title())
        c.setCreator(plan.brand)

        self.c = c
        self.layout = PageLayout(
            page_width=A4[0] / mm,
            page_height=A4[1] / mm,
            on_page_break=c.showPage,
        )

        self._draw_header(plan)
        self._text(plan.kicker, 12, FONT, PALETTE[b.MUTED], spacing=4)
        self._text(plan.title, 18, FONT_BOLD, PALETTE[b.DARK], spacing=12)

        for section in plan.sections:
            if section.key == "classification":
                self._draw_classification(section)
            else:
                self._draw_section(section)

        c.showPage()
        self.page_count = c.page_total
        c.save()
        return buffer.getvalue()

    # ------------------------------------------------------------------
    # Primitives
    # ------------------------------------------------------------------
    def _x(self, x_mm: float) -> float:
        return self.layout.to_pdf_x(x_mm)

    def _y(self, y_mm: float) -> float:
        return self.layout.to_pdf_y(y_mm)

    def _text(self, text, size, font=FONT, color=None, indent=0.0, spacing=6.0) -> None:
        """Wrap, reserve space, draw, advance. The core of every text block."""
        layout = self.layout
        lines = layout.wrap(_pdf_safe(text), font, size, indent)
        lh = line_height(size)
        layout.reserve(layout.text_height(len(lines), size, spacing))

        self.c.setFont(font, size)
        self.c.setFillColor(color or PALETTE[b.DARK])
        for i, line in enumerate(lines):
            y = layout.cursor + i * lh + size * 0.3
            self.c.drawString(self._x(layout.margin + indent), self._y(y), line)

        layout.advance(len(lines) * lh + spacing)

    def _box(self, top: float, height: float, fill, stroke) -> None:
        layout = self.layout
        self.c.setFillColor(fill)
        self.c.setStrokeColor(stroke)
        self.c.roundRect(
            self._x(layout.margin),
            self._y(top + height),
            layout.content_width * mm,
            height * mm,
            2 * mm,
            stroke=1,
            fill=1,
        )

    # ------------------------------------------------------------------
    # Document parts
    # ------------------------------------------------------------------
    def _draw_header(self, plan: b.DocumentPlan) -> None:
        layout, c = self.layout, self.c
        top = layout.cursor
        c.setFillColor(PALETTE[b.PRIMARY])
        c.roundRect(self._x(layout.margin), self._y(top + 12), 12 * mm, 12 * mm, 2 * mm, stroke=0, fill=1)

        c.setFont(FONT_BOLD, 22)
        c.setFillColor(PALETTE[b.DARK])
        c.drawString(self._x(layout.margin + 18), self._y(top + 8), _pdf_safe(plan.brand))

        c.setFont(FONT, 9)
        c.setFillColor(PALETTE[b.MUTED])
        c.drawString(self._x(layout.margin + 18), self._y(top + 13), _pdf_safe(plan.tagline))

        layout.advance(25)

    def _draw_classification(self, section: b.Section) -> None:
        layout, c = self.layout, self.c
        fields = [blk for blk in section.blocks if isinstance(blk, b.LabeledField)]
        height = 12 + 6 * len(fields) + 4
        layout.reserve(height + 10)

        top = layout.cursor
        self._box(top, height, *CARD_COLORS["classification"])

        c.setFont(FONT_BOLD, 11)
        c.setFillColor(PALETTE[b.DARK])
        c.drawString(self._x(layout.margin + 8), self._y(top + 10), _pdf_safe(section.title))

        for i, field in enumerate(fields):
            c.setFont(FONT_BOLD if field.emphasis else FONT, 10)
            c.setFillColor(PALETTE.get(field.tone, PALETTE[b.DARK]))
            c.drawString(self._x(layout.margin + 8), self._y(top + 18 + i * 6), _pdf_safe(field.text))

        layout.advance(height + 10)

    def _draw_section(self, section: b.Section) -> None:
        layout, c = self.layout, self.c
        tone = PALETTE.get(section.tone, PALETTE[b.PRIMARY])

        layout.reserve(25)
        c.setStrokeColor(tone)
        c.setLineWidth(0.8 * mm / 2)
        c.line(self._x(layout.margin), self._y(layout.cursor),
               self._x(layout.page_width - layout.margin), self._y(layout.cursor))
        layout.advance(6)

        c.setFont(FONT_BOLD, 14)
        c.setFillColor(tone)
        c.drawString(self._x(layout.margin), self._y(layout.cursor + 4), _pdf_safe(section.title))
        layout.advance(12)

        if section.subtitle:
            self._text(section.subtitle, 10, FONT_ITALIC, PALETTE[b.MUTED], spacing=8)

        for block in section.blocks:
            self._draw_block(block)

        layout.advance(4)

    def _draw_block(self, block: b.Block) -> None:
        if isinstance(block, b.Heading):
            self._text(block.text, 11, FONT_BOLD, PALETTE.get(block.tone), spacing=4)
        elif isinstance(block, b.Paragraph):
            font = FONT_ITALIC if block.italic else FONT
            self._text(block.text, 10, font, PALETTE.get(block.tone), spacing=8)
        elif isinstance(block, b.LabeledField):
            if block.emphasis:
                self._text(block.text, 11, FONT_BOLD, PALETTE.get(block.tone), spacing=6)
            else:
                self._text(f"{block.label}:", 10, FONT_BOLD, PALETTE.get(block.tone), spacing=2)
                self._text(block.value, 10, FONT, PALETTE[b.DARK], spacing=8)
        elif isinstance(block, b.BulletList):
            indent = 0.0
            if block.title:
                self._text(f"{block.title}:", 11, FONT_BOLD, PALETTE[b.DARK], spacing=4)
                indent = BLOCK_INDENT
            body = "\n".join(f"• {item}" for item in block.items)
            self._text(body, 10, FONT, PALETTE[b.DARK], indent=indent, spacing=8)
        elif isinstance(block, b.StepCard):
            self._draw_step(block)
        else:
            raise TypeError(f"Unsupported block type: {type(block).__name__}")

    def _title_lines(self, card: b.StepCard, indent: float):
        """Wrapped title lines, plus whether the COMPLETED tag needs its own line."""
        layout = self.layout
        lines = layout.wrap(_pdf_safe(card.numbered_title), FONT_BOLD, 12, indent)
        if not card.completed:
            return lines, False
        used = self.c.stringWidth(lines[-1], FONT_BOLD, 12) + 2 * mm
        return lines, used + COMPLETED_TAG_WIDTH > (layout.content_width - indent) * mm

    def _draw_step(self, card: b.StepCard) -> None:
        layout, c = self.layout, self.c
        indent = STEP_TEXT_INDENT

        # Measure the whole card first so it is placed as one unit
        title_lines, tag_wraps = self._title_lines(card, indent)
        action_lines = layout.wrap(_pdf_safe(card.action_text), FONT, 10, indent)
        meta_lines = layout.wrap(_pdf_safe(card.meta_text), FONT, 9, indent)
        height = (
            6
            + layout.text_height(len(title_lines) + int(tag_wraps), 12, 4)
            + layout.text_height(len(action_lines), 10, 6)
            + layout.text_height(len(meta_lines), 9, 2)
        )
        layout.reserve(height + 6)

        top = layout.cursor
        fill, stroke = CARD_COLORS["completed" if card.completed else card.kind]
        self._box(top, height, fill, stroke)

        # Indicator: numbered circle for immediate steps, square for preventive
        accent = PALETTE[b.SUCCESS] if card.completed else (
            PALETTE[b.DANGER] if card.kind == b.IMMEDIATE else PALETTE[b.WARNING]
        )
        c.setFillColor(accent)
        cx, cy = self._x(layout.margin + 8), self._y(top + 8)
        if card.kind == b.IMMEDIATE:
            c.circle(cx, cy, 4 * mm, stroke=0, fill=1)
            c.setFont(FONT_BOLD, 10)
            c.setFillColor(colors.white)
            c.drawCentredString(cx, cy - 3.5, str(card.ordinal))
        else:
            c.roundRect(cx - 3 * mm, cy - 3 * mm, 6 * mm, 6 * mm, 1 * mm, stroke=0, fill=1)

        layout.advance(6)
        self._draw_step_title(card, title_lines, tag_wraps, indent)
        self._text(card.action_text, 10, FONT, PALETTE[b.DARK], indent=indent, spacing=6)
        self._text(card.meta_text, 9, FONT, PALETTE[b.MUTED], indent=indent, spacing=2)
        layout.advance(6)

    def _draw_step_title(self, card: b.StepCard, lines, tag_wraps: bool, indent: float) -> None:
        layout, c = self.layout, self.c
        size = 12
        lh = line_height(size)
        x = self._x(layout.margin + indent)

        c.setFont(FONT_BOLD, size)
        c.setFillColor(PALETTE[b.DARK])
        for i, line in enumerate(lines):
            c.drawString(x, self._y(layout.cursor + i * lh + size * 0.3), line)

        line_count = len(lines)
        if card.completed:
            # The check glyph is not in WinAnsi, so it comes from ZapfDingbats
            if tag_wraps:
                tag_x, tag_row = x, line_count
                line_count += 1
            else:
                tag_x = x + c.stringWidth(lines[-1], FONT_BOLD, size) + 2 * mm
                tag_row = line_count - 1
            tag_y = self._y(layout.cursor + tag_row * lh + size * 0.3)

            c.setFillColor(PALETTE[b.SUCCESS])
            c.setFont(CHECK_FONT, size - 2)
            c.drawString(tag_x, tag_y, CHECK_GLYPH)
            c.setFont(FONT_BOLD, size)
            c.drawString(tag_x + 4 * mm, tag_y, "COMPLETED")

        layout.advance(line_count * lh + 4)

    def _draw_footer(self, c, plan: b.DocumentPlan, page: int, total: int) -> None:
        layout = self.layout
        bottom = layout.page_height

        c.setStrokeColor(LIGHT)
        c.setLineWidth(0.3 * mm / 2)
        c.line(self._x(layout.margin), self._y(bottom - 18),
               self._x(layout.page_width - layout.margin), self._y(bottom - 18))

        c.setFont(FONT, 8)
        c.setFillColor(LIGHT)
        c.drawString(self._x(layout.margin), self._y(bottom - 12), _pdf_safe(plan.footer_text))
        right = self._x(layout.page_width - layout.margin)
        c.drawRightString(right, self._y(bottom - 12), f"Page {page} of {total}")
        c.drawRightString(
            right,
            self._y(bottom - 8),
            f"Generated: {format_date(plan.generated_at)} | Classification: {plan.classification}",
        )
