# sopify/export/policy.py
"""
Severity-derived policy values and small formatting helpers shared by every
section renderer and emitter.
"""
from __future__ import annotations

import re
from datetime import datetime
from typing import Optional

from sopify.models.sop import CompletedStepSet, SOPStep

COMPLETION_MARKER = " ✓ COMPLETED"
DOCUMENT_VERSION = "1.0"

_RISK_LABELS = {"High": "CRITICAL", "Medium": "MODERATE", "Low": "LOW"}
_RESOLUTION_TARGETS = {"High": "< 30 minutes", "Medium": "< 60 minutes", "Low": "< 120 minutes"}
_AVAILABILITY_TARGETS = {"High": "99.9%", "Medium": "99.5%", "Low": "99.0%"}

_NON_ALNUM = re.compile(r"[^A-Za-z0-9]+")


def _lookup(table: dict, severity: str) -> str:
    try:
        return table[severity]
    except KeyError:
        raise ValueError(f"Unknown severity: {severity!r}") from None


def risk_label(severity: str) -> str:
    return _lookup(_RISK_LABELS, severity)


def resolution_target(severity: str) -> str:
    return _lookup(_RESOLUTION_TARGETS, severity)


def availability_target(severity: str) -> str:
    return _lookup(_AVAILABILITY_TARGETS, severity)


def step_label(step: SOPStep, completed: CompletedStepSet) -> str:
    """Step title, with the completion marker iff the step id is checked off."""
    if step.id in completed:
        return f"{step.title}{COMPLETION_MARKER}"
    return step.title


def sanitize_filename(title: str) -> str:
    """
    'SOP: Server Down Response Procedure!' -> 'sop_server_down_response_procedure'

    Runs of anything outside [A-Za-z0-9] collapse to a single underscore.
    """
    base = _NON_ALNUM.sub("_", title or "").strip("_").lower()
    return base or "sop"


def export_filename(title: str, extension: str) -> str:
    return f"{sanitize_filename(title)}.{extension.lstrip('.')}"


def parse_timestamp(value: str) -> Optional[datetime]:
    if not value:
        return None
    try:
        return datetime.fromisoformat(value.replace("Z", "+00:00"))
    except ValueError:
        return None


def format_datetime(value: str) -> str:
    """'2024-01-15T14:30:00Z' -> 'Jan 15, 2024 02:30 PM' (raw text if unparsable)."""
    ts = parse_timestamp(value)
    if ts is None:
        return value or "N/A"
    return ts.strftime("%b %d, %Y %I:%M %p")


def format_date(value) -> str:
    if isinstance(value, datetime):
        return value.strftime("%b %d, %Y")
    ts = parse_timestamp(value)
    if ts is None:
        return value or "N/A"
    return ts.strftime("%b %d, %Y")
