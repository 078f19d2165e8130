# sopify/export/__init__.py
# ============================================================
#  SOP Export Engine
#    SOP + CompletedStepSet -> section plan -> pdf | docx | html | clipboard
# ============================================================

from .blocks import DocumentPlan
from .dispatcher import export_sop
from .emitters import SUPPORTED_FORMATS, ExportPayload, get_emitter
from .errors import ExportError, MissingField, RenderFailure, UnsupportedFormat
from .sections import build_plan

__all__ = [
    "DocumentPlan",
    "ExportError",
    "ExportPayload",
    "MissingField",
    "RenderFailure",
    "SUPPORTED_FORMATS",
    "UnsupportedFormat",
    "build_plan",
    "export_sop",
    "get_emitter",
]
