# sopify/export/sections.py
# ============================================================
# 🧱 Section Renderers: SOP + completion snapshot -> DocumentPlan
# ============================================================
from __future__ import annotations

from datetime import datetime, timezone
from typing import Iterable, Optional, Tuple

from sopify.models.sop import SOP, CompletedStepSet, SOPStep

from . import blocks as b
from .errors import RenderFailure
from .policy import (
    DOCUMENT_VERSION,
    availability_target,
    format_date,
    format_datetime,
    resolution_target,
    risk_label,
    step_label,
)

DEFAULT_BRAND = "sopify"
DEFAULT_TAGLINE = "Enterprise Operations Platform"

# Per-list defaults when the model leaves a field out
_STEP_DEFAULTS = {
    b.IMMEDIATE: {"responsible": "Operations Team", "priority": "HIGH"},
    b.PREVENTIVE: {"responsible": "DevOps Team", "priority": "MEDIUM"},
}

DETECTION_METHODS = (
    "Automated monitoring alerts and system health checks",
    "User reports and service desk notifications",
    "Performance degradation indicators",
    "System log analysis and error pattern recognition",
)

ESCALATION_LEVELS = (
    (
        "Level 1 Escalation (15 minutes)",
        (
            "Notify team lead and senior operations staff",
            "Activate backup systems if available",
            "Initiate customer communication protocols",
        ),
    ),
    (
        "Level 2 Escalation (30 minutes)",
        (
            "Contact executive leadership and incident commander",
            "Engage external vendor support if required",
            "Activate business continuity plans",
        ),
    ),
    (
        "Level 3 Escalation (60 minutes)",
        (
            "Invoke disaster recovery procedures",
            "Notify regulatory bodies if required",
            "Implement alternative service delivery methods",
        ),
    ),
)

SUCCESS_CRITERIA = (
    "Incident fully resolved within target timeframe",
    "No data loss or corruption occurred",
    "All affected services restored to normal operation",
    "Root cause identified and documented",
    "Preventive measures implemented and verified",
)

APPROVAL_MATRIX = (
    "Prepared by: Operations Team | Date: _______________",
    "Reviewed by: Team Lead | Date: _______________",
    "Approved by: Operations Manager | Date: _______________",
)

_RISK_TONES = {"High": b.DANGER, "Medium": b.WARNING, "Low": b.SUCCESS}


# ------------------------------------------------------------
# Step cards
# ------------------------------------------------------------
def step_card(step: SOPStep, ordinal: int, kind: str, completed: CompletedStepSet) -> b.StepCard:
    defaults = _STEP_DEFAULTS[kind]
    return b.StepCard(
        kind=kind,
        ordinal=ordinal,
        step_id=step.id,
        title=step.title,
        label=step_label(step, completed),
        description=step.description,
        responsible=step.responsible or defaults["responsible"],
        duration=step.estimated_time or "TBD",
        priority=(step.priority or defaults["priority"]).upper(),
        completed=step.id in completed,
    )


def step_cards(steps: Iterable[SOPStep], kind: str, completed: CompletedStepSet) -> Tuple[b.StepCard, ...]:
    # Numbering restarts at 1 for each list
    return tuple(step_card(s, i, kind, completed) for i, s in enumerate(steps, start=1))


# ------------------------------------------------------------
# Individual sections
# ------------------------------------------------------------
def classification_section(sop: SOP) -> b.Section:
    return b.Section(
        key="classification",
        title="INCIDENT CLASSIFICATION",
        tone=b.PRIMARY,
        blocks=(
            b.LabeledField("Incident Type", sop.incident_type or "N/A"),
            b.LabeledField("Severity Level", sop.severity),
            b.LabeledField("Status", "ACTIVE", tone=b.SUCCESS, emphasis=True),
            b.LabeledField("Primary Responsible Team", sop.responsible_team),
            b.LabeledField("Document Generated", format_datetime(sop.created_at)),
            b.LabeledField("Document Version", DOCUMENT_VERSION),
            b.LabeledField("Classification", sop.severity.upper(), tone=b.MUTED),
        ),
    )


def executive_summary_section(sop: SOP) -> b.Section:
    text = (
        "This Standard Operating Procedure (SOP) provides comprehensive guidelines for "
        f'responding to and preventing incidents of type "{sop.incident_type}" with '
        f"{sop.severity.lower()} severity impact. The procedures outlined below ensure "
        "systematic incident resolution, minimize operational disruption, and prevent "
        "future occurrences through structured preventive measures."
    )
    return b.Section(
        key="executive_summary",
        title="EXECUTIVE SUMMARY",
        tone=b.PRIMARY,
        blocks=(b.Paragraph(text),),
    )


def risk_section(sop: SOP) -> b.Section:
    impact = (
        f'{sop.severity} severity incidents of type "{sop.incident_type}" can significantly '
        "affect operational continuity, system availability, and business processes. "
        "Immediate response is critical to minimize downtime and prevent cascading failures."
    )
    affected = (
        "Primary systems and dependent services may experience degraded performance "
        "or complete unavailability during incident occurrence."
    )
    return b.Section(
        key="risk",
        title="RISK ASSESSMENT & IMPACT ANALYSIS",
        tone=b.WARNING,
        blocks=(
            b.LabeledField("Risk Level", risk_label(sop.severity), tone=_RISK_TONES[sop.severity], emphasis=True),
            b.LabeledField("Business Impact", impact),
            b.LabeledField("Affected Systems", affected),
        ),
    )


def trigger_section(sop: SOP) -> b.Section:
    return b.Section(
        key="trigger",
        title="INCIDENT TRIGGER & PROBLEM STATEMENT",
        tone=b.DANGER,
        blocks=(
            b.LabeledField("Primary Trigger", sop.trigger or "Not specified"),
            b.BulletList(DETECTION_METHODS, title="Detection Methods"),
        ),
    )


def immediate_section(sop: SOP, completed: CompletedStepSet) -> b.Section:
    return b.Section(
        key="immediate",
        title="IMMEDIATE RESPONSE ACTIONS (Phase 1)",
        tone=b.DANGER,
        subtitle=(
            "Execute these actions immediately upon incident detection. "
            f"Time is critical for {sop.severity.lower()} severity incidents."
        ),
        blocks=step_cards(sop.immediate_steps, b.IMMEDIATE, completed),
    )


def escalation_section() -> b.Section:
    blocks = [
        b.Paragraph(
            "If immediate actions fail to resolve the incident within the estimated "
            "timeframes, follow these escalation procedures:"
        )
    ]
    for title, items in ESCALATION_LEVELS:
        blocks.append(b.BulletList(items, title=title))
    return b.Section(
        key="escalation",
        title="ESCALATION PROCEDURES",
        tone=b.SECONDARY,
        blocks=tuple(blocks),
    )


def preventive_section(sop: SOP, completed: CompletedStepSet) -> b.Section:
    return b.Section(
        key="preventive",
        title="PREVENTIVE MEASURES & LONG-TERM MITIGATION (Phase 2)",
        tone=b.WARNING,
        subtitle="Implement these measures to prevent incident recurrence and strengthen system resilience.",
        blocks=step_cards(sop.preventive_actions, b.PREVENTIVE, completed),
    )


def metrics_section(sop: SOP) -> b.Section:
    kpis = (
        f"Incident Resolution Time: {resolution_target(sop.severity)}",
        f"System Availability Target: {availability_target(sop.severity)}",
        "Customer Impact: Minimize affected user count",
        "Communication Response: < 5 minutes initial notification",
    )
    return b.Section(
        key="metrics",
        title="PERFORMANCE METRICS & SUCCESS CRITERIA",
        tone=b.SUCCESS,
        blocks=(
            b.BulletList(kpis, title="Key Performance Indicators"),
            b.BulletList(SUCCESS_CRITERIA, title="Success Criteria"),
        ),
    )


def document_control_section(sop: SOP) -> b.Section:
    info = (
        f"Version: {DOCUMENT_VERSION} | Created: {format_date(sop.created_at)} | "
        f"Status: Active | Classification: {sop.severity.upper()}"
    )
    return b.Section(
        key="document_control",
        title="DOCUMENT CONTROL & APPROVALS",
        tone=b.SECONDARY,
        blocks=(
            b.LabeledField("Document Information", info),
            b.BulletList(APPROVAL_MATRIX, title="Review & Approval Matrix"),
            b.LabeledField("Next Review Date", "________________________", emphasis=True),
        ),
    )


# ------------------------------------------------------------
# Public entry point
# ------------------------------------------------------------
def build_plan(
    sop: SOP,
    completed: Optional[CompletedStepSet] = None,
    generated_at: Optional[datetime] = None,
    brand: str = DEFAULT_BRAND,
    tagline: str = DEFAULT_TAGLINE,
) -> b.DocumentPlan:
    """
    Render an SOP into the ordered, format-neutral section plan.

    Same (sop, completed) always yields the same plan. An SOP with an empty
    step list is rejected rather than rendered half-empty.
    """
    completed = completed or CompletedStepSet()

    if not sop.immediate_steps:
        raise RenderFailure("SOP has no immediate steps to render")
    if not sop.preventive_actions:
        raise RenderFailure("SOP has no preventive actions to render")

    sections = (
        classification_section(sop),
        executive_summary_section(sop),
        risk_section(sop),
        trigger_section(sop),
        immediate_section(sop, completed),
        escalation_section(),
        preventive_section(sop, completed),
        metrics_section(sop),
        document_control_section(sop),
    )

    return b.DocumentPlan(
        brand=brand,
        tagline=tagline,
        kicker="STANDARD OPERATING PROCEDURE",
        title=sop.title,
        severity=sop.severity,
        risk_label=risk_label(sop.severity),
        generated_at=generated_at or datetime.now(timezone.utc),
        sections=sections,
    )
