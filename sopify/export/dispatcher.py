# sopify/export/dispatcher.py
# ============================================================
# 📦 Export Dispatcher: request payload -> ExportPayload
# ============================================================
from __future__ import annotations

import logging
from datetime import datetime
from typing import Any, Dict, Optional

from sopify.models.sop import SOP, CompletedStepSet, SOPValidationError

from .emitters import SUPPORTED_FORMATS, ExportPayload, get_emitter
from .errors import ExportError, MissingField, RenderFailure, UnsupportedFormat
from .sections import DEFAULT_BRAND, DEFAULT_TAGLINE, build_plan

logger = logging.getLogger(__name__)


def export_sop(
    payload: Dict[str, Any],
    generated_at: Optional[datetime] = None,
    brand: str = DEFAULT_BRAND,
    tagline: str = DEFAULT_TAGLINE,
) -> ExportPayload:
    """
    Export request: ``{"sop": {...}, "format": "pdf", "completedSteps": [...]}``.

    Missing or unknown fields are rejected before anything is rendered.
    Anything that goes wrong after that surfaces as RenderFailure; a partial
    document is never returned.
    """
    if not isinstance(payload, dict):
        raise MissingField("Missing required fields: sop and format")

    raw_sop = payload.get("sop")
    fmt = payload.get("format")
    if not raw_sop or not fmt:
        raise MissingField("Missing required fields: sop and format")

    if fmt not in SUPPORTED_FORMATS:
        raise UnsupportedFormat(
            f"Unsupported format: {fmt}. Expected one of: {', '.join(SUPPORTED_FORMATS)}"
        )

    try:
        sop = SOP.from_dict(raw_sop)
        completed = CompletedStepSet.of(payload.get("completedSteps"))
    except SOPValidationError as e:
        logger.warning(f"[export] rejected malformed SOP: {e}")
        raise RenderFailure(f"Failed to export SOP: {e}") from e

    try:
        plan = build_plan(sop, completed, generated_at=generated_at, brand=brand, tagline=tagline)
        result = get_emitter(fmt).export(plan)
    except ExportError:
        raise
    except Exception as e:
        logger.exception(f"[export] {fmt} emitter failed for SOP {sop.id or sop.title!r}")
        raise RenderFailure(f"Failed to export SOP as {fmt}") from e

    logger.info(
        f"[export] {fmt} export ok: {result.filename} "
        f"({len(completed)} of {len(sop.all_steps)} steps completed: {completed.to_list()})"
    )
    return result
