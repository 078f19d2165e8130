# sopify/export/emitters/__init__.py

from __future__ import annotations

from typing import Dict, Type

from .base_emitter import Emitter, ExportPayload
from .docx_emitter import DocxEmitter
from .html_emitter import HtmlEmitter
from .pdf_emitter import PdfEmitter
from .text_emitter import TextEmitter, render_text

EMITTERS: Dict[str, Type[Emitter]] = {
    PdfEmitter.format: PdfEmitter,
    DocxEmitter.format: DocxEmitter,
    HtmlEmitter.format: HtmlEmitter,
    TextEmitter.format: TextEmitter,
}

SUPPORTED_FORMATS = tuple(EMITTERS)


def get_emitter(fmt: str) -> Emitter:
    """
    Factory for format emitters. Returns a fresh instance per call since
    the PDF emitter keeps per-render layout state.
    """
    try:
        return EMITTERS[fmt]()
    except KeyError:
        raise KeyError(f"No emitter registered for format {fmt!r}") from None


__all__ = [
    "EMITTERS",
    "SUPPORTED_FORMATS",
    "Emitter",
    "ExportPayload",
    "DocxEmitter",
    "HtmlEmitter",
    "PdfEmitter",
    "TextEmitter",
    "get_emitter",
    "render_text",
]
