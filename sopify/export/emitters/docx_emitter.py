# sopify/export/emitters/docx_emitter.py
"""
Word document via python-docx. Pagination is left to the word processor.
"""
from __future__ import annotations

import io
import zipfile

from docx import Document
from docx.enum.text import WD_ALIGN_PARAGRAPH
from docx.shared import Pt, RGBColor

from sopify.export import blocks as b
from sopify.export.policy import DOCUMENT_VERSION, format_date

from .base_emitter import Emitter

PALETTE = {
    b.PRIMARY: RGBColor(0x3B, 0x82, 0xF6),
    b.SECONDARY: RGBColor(0x63, 0x66, 0xF1),
    b.SUCCESS: RGBColor(0x22, 0xC5, 0x5E),
    b.WARNING: RGBColor(0xF5, 0x9E, 0x0B),
    b.DANGER: RGBColor(0xEF, 0x44, 0x44),
    b.DARK: RGBColor(0x1F, 0x29, 0x37),
    b.MUTED: RGBColor(0x6B, 0x72, 0x80),
}
COMPLETED_COLOR = RGBColor(0x05, 0x96, 0x69)


def _run(paragraph, text, *, bold=False, italic=False, size=None, color=None):
    run = paragraph.add_run(text)
    run.bold = bold
    run.italic = italic
    if size:
        run.font.size = Pt(size)
    if color is not None:
        run.font.color.rgb = color
    return run


def _pin_timestamps(data: bytes, when) -> bytes:
    """Rewrite the package with every zip entry dated ``when``."""
    date_time = max(when.timetuple()[:6], (1980, 1, 1, 0, 0, 0))
    out = io.BytesIO()
    with zipfile.ZipFile(io.BytesIO(data)) as src, zipfile.ZipFile(out, "w") as dst:
        for info in src.infolist():
            pinned = zipfile.ZipInfo(info.filename, date_time=date_time)
            pinned.compress_type = info.compress_type
            pinned.external_attr = info.external_attr
            dst.writestr(pinned, src.read(info.filename))
    return out.getvalue()


class DocxEmitter(Emitter):
    format = "docx"
    extension = "docx"
    content_type = "application/vnd.openxmlformats-officedocument.wordprocessingml.document"

    def render(self, plan: b.DocumentPlan) -> bytes:
        doc = Document()
        self._set_properties(doc, plan)
        self._add_header(doc, plan)

        for section in plan.sections:
            self._add_section(doc, section)

        self._add_footer(doc, plan)

        buffer = io.BytesIO()
        doc.save(buffer)
        return _pin_timestamps(buffer.getvalue(), plan.generated_at)

    # ------------------------------------------------------------------
    # Document parts
    # ------------------------------------------------------------------
    def _set_properties(self, doc, plan: b.DocumentPlan) -> None:
        props = doc.core_properties
        props.title = plan.title
        props.subject = plan.kicker.title()
        props.author = f"{plan.brand} {plan.tagline}"
        props.created = plan.generated_at
        props.modified = plan.generated_at
        props.revision = 1

    def _add_header(self, doc, plan: b.DocumentPlan) -> None:
        brand = doc.add_paragraph()
        brand.alignment = WD_ALIGN_PARAGRAPH.LEFT
        _run(brand, plan.brand, bold=True, size=16, color=PALETTE[b.PRIMARY])

        tagline = doc.add_paragraph()
        _run(tagline, plan.tagline, size=9, color=PALETTE[b.MUTED])

        kicker = doc.add_paragraph()
        _run(kicker, plan.kicker, bold=True, size=10, color=PALETTE[b.MUTED])

        title = doc.add_heading(level=0)
        _run(title, plan.title, bold=True, size=20, color=PALETTE[b.DARK])

    def _add_section(self, doc, section: b.Section) -> None:
        heading = doc.add_heading(level=1)
        _run(heading, section.title, bold=True, size=12, color=PALETTE.get(section.tone))

        if section.subtitle:
            sub = doc.add_paragraph()
            _run(sub, section.subtitle, italic=True, color=PALETTE[b.MUTED])

        for block in section.blocks:
            self._add_block(doc, block)

    def _add_block(self, doc, block: b.Block) -> None:
        if isinstance(block, b.Heading):
            p = doc.add_heading(level=2)
            _run(p, block.text, bold=True, color=PALETTE.get(block.tone))
        elif isinstance(block, b.Paragraph):
            p = doc.add_paragraph()
            _run(p, block.text, italic=block.italic, color=PALETTE.get(block.tone))
        elif isinstance(block, b.LabeledField):
            p = doc.add_paragraph()
            color = PALETTE.get(block.tone)
            _run(p, f"{block.label}: ", bold=True, color=color)
            _run(p, block.value, bold=block.emphasis, color=color)
        elif isinstance(block, b.BulletList):
            if block.title:
                p = doc.add_paragraph()
                _run(p, f"{block.title}:", bold=True)
            for item in block.items:
                doc.add_paragraph(item, style="List Bullet")
        elif isinstance(block, b.StepCard):
            self._add_step(doc, block)
        else:
            raise TypeError(f"Unsupported block type: {type(block).__name__}")

    def _add_step(self, doc, card: b.StepCard) -> None:
        title = doc.add_paragraph()
        title.paragraph_format.space_before = Pt(10)
        _run(
            title,
            card.heading,
            bold=True,
            size=11,
            color=COMPLETED_COLOR if card.completed else PALETTE[b.DARK],
        )

        action = doc.add_paragraph()
        _run(action, "Action Required: ", bold=True)
        _run(action, card.description)

        meta = doc.add_paragraph()
        _run(meta, card.meta_text, italic=True, size=9, color=PALETTE[b.MUTED])

    def _add_footer(self, doc, plan: b.DocumentPlan) -> None:
        footer = doc.sections[0].footer.paragraphs[0]
        footer.alignment = WD_ALIGN_PARAGRAPH.CENTER
        _run(
            footer,
            f"{plan.footer_text} | Generated: {format_date(plan.generated_at)} | "
            f"Classification: {plan.classification} | Version: {DOCUMENT_VERSION}",
            size=8,
            color=PALETTE[b.MUTED],
        )
