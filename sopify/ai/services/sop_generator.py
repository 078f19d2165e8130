# sopify/ai/services/sop_generator.py
# ============================================================
# 🧠 SOP Generator: Incident -> prompt -> Gemini -> SOP
# ============================================================
from __future__ import annotations

import json
import logging
import re
from datetime import datetime, timezone
from typing import Any, Dict, Optional

from sopify.models.incident import Incident
from sopify.models.sop import SOP, SOPValidationError

logger = logging.getLogger(__name__)

STEP_COUNTS = {"High": 5, "Medium": 4, "Low": 3}

REQUIRED_FIELDS = ("title", "immediateSteps", "preventiveActions")

# Example steps shown to the model; truncated to the severity's step count
EXAMPLE_IMMEDIATE = (
    {"id": "step_1", "title": "Incident Assessment", "description": "Assess impact scope, affected systems, and user count", "estimatedTime": "5 min", "responsible": "Operations Team", "priority": "high"},
    {"id": "step_2", "title": "Recovery Actions", "description": "Execute primary recovery procedures and system restoration", "estimatedTime": "15 min", "responsible": "Technical Team", "priority": "high"},
    {"id": "step_3", "title": "Verification", "description": "Verify system functionality and service restoration", "estimatedTime": "10 min", "responsible": "QA Team", "priority": "high"},
    {"id": "step_4", "title": "Communication", "description": "Notify stakeholders and provide status updates", "estimatedTime": "5 min", "responsible": "Communications", "priority": "medium"},
    {"id": "step_5", "title": "Documentation", "description": "Document actions taken and prepare incident report", "estimatedTime": "15 min", "responsible": "Documentation Team", "priority": "medium"},
)

EXAMPLE_PREVENTIVE = (
    {"id": "prev_1", "title": "System Enhancement", "description": "Implement redundancy and monitoring improvements", "estimatedTime": "2 weeks", "responsible": "DevOps Team", "priority": "high"},
    {"id": "prev_2", "title": "Process Training", "description": "Conduct team training and update procedures", "estimatedTime": "1 week", "responsible": "Training Team", "priority": "medium"},
    {"id": "prev_3", "title": "Monitoring Setup", "description": "Deploy enhanced alerting and detection systems", "estimatedTime": "1 week", "responsible": "Infrastructure Team", "priority": "medium"},
    {"id": "prev_4", "title": "Automation", "description": "Implement automated recovery and self-healing systems", "estimatedTime": "3 weeks", "responsible": "Automation Team", "priority": "medium"},
    {"id": "prev_5", "title": "Compliance Review", "description": "Audit procedures and ensure regulatory compliance", "estimatedTime": "2 weeks", "responsible": "Compliance Team", "priority": "low"},
)

_FENCE = re.compile(r"```(?:json)?\s*", re.IGNORECASE)
_OBJECT = re.compile(r"\{.*\}", re.DOTALL)


class SOPParseError(ValueError):
    """The model's reply could not be turned into SOP fields."""


def step_count(severity: str) -> int:
    return STEP_COUNTS.get(severity, 3)


# ------------------------------------------------------------
# Prompt
# ------------------------------------------------------------
def build_sop_prompt(incident: Incident) -> str:
    count = step_count(incident.severity)
    inc_type = incident.display_type

    lines = [
        f"Create detailed SOP for: {inc_type} ({incident.severity} severity)",
        f"Actions taken: {', '.join(incident.all_actions)}",
    ]
    if incident.description:
        lines.append(f"Context: {incident.description}")
    if incident.affected_systems:
        lines.append(f"Affected systems: {', '.join(incident.affected_systems)}")
    if incident.estimated_impact:
        lines.append(f"Estimated impact: {incident.estimated_impact}")

    example = {
        "title": f"SOP: {inc_type} Response Procedure",
        "trigger": f"When {inc_type.lower()} occurs affecting system operations and user experience",
        "immediateSteps": list(EXAMPLE_IMMEDIATE[:count]),
        "preventiveActions": list(EXAMPLE_PREVENTIVE[:count]),
        "responsibleTeam": "Operations Team",
    }

    lines.append("")
    lines.append(f"Generate {count} immediate + {count} preventive steps. Return ONLY JSON:")
    lines.append("")
    lines.append(json.dumps(example, indent=2))
    return "\n".join(lines)


# ------------------------------------------------------------
# Parse with fallback
# ------------------------------------------------------------
def parse_sop_response(text: str) -> Dict[str, Any]:
    """
    Strip markdown fences, pull out the embedded JSON object and decode it
    strictly. Raises SOPParseError if anything required is missing.
    """
    clean = _FENCE.sub("", (text or "").strip())
    match = _OBJECT.search(clean)
    if match:
        clean = match.group(0)

    try:
        data = json.loads(clean)
    except json.JSONDecodeError as e:
        raise SOPParseError(f"Response is not valid JSON: {e}") from e

    if not isinstance(data, dict):
        raise SOPParseError("Response JSON is not an object")

    missing = [k for k in REQUIRED_FIELDS if not data.get(k)]
    if missing:
        raise SOPParseError(f"Missing required SOP fields: {', '.join(missing)}")

    for key in ("immediateSteps", "preventiveActions"):
        if not isinstance(data[key], list):
            raise SOPParseError(f"{key} must be a list")

    return data


def fallback_sop_data(incident: Incident) -> Dict[str, Any]:
    """Fixed three-immediate / two-preventive skeleton used when the reply is unusable."""
    inc_type = incident.display_type
    return {
        "title": f"SOP: {inc_type} Response Procedure",
        "trigger": f"When {inc_type.lower()} occurs affecting system operations",
        "immediateSteps": [
            {
                "id": "step_1",
                "title": "Immediate Assessment",
                "description": f"Assess the scope and impact of the {inc_type.lower()}",
                "estimatedTime": "5 minutes",
                "responsible": "Operations Team",
                "priority": "high",
            },
            {
                "id": "step_2",
                "title": "Execute Actions",
                "description": f"Implement the following actions: {', '.join(incident.all_actions)}",
                "estimatedTime": "15 minutes",
                "responsible": "Technical Team",
                "priority": "high",
            },
            {
                "id": "step_3",
                "title": "Verify Resolution",
                "description": "Confirm that the incident has been resolved and systems are operational",
                "estimatedTime": "10 minutes",
                "responsible": "Operations Team",
                "priority": "high",
            },
        ],
        "preventiveActions": [
            {
                "id": "prev_1",
                "title": "System Monitoring",
                "description": "Implement enhanced monitoring to prevent similar incidents",
                "estimatedTime": "2 hours",
                "responsible": "DevOps Team",
                "priority": "medium",
            },
            {
                "id": "prev_2",
                "title": "Process Documentation",
                "description": "Document lessons learned and update procedures",
                "estimatedTime": "1 hour",
                "responsible": "Operations Team",
                "priority": "low",
            },
        ],
        "responsibleTeam": "Operations Team",
    }


def _now_iso() -> str:
    return datetime.now(timezone.utc).isoformat().replace("+00:00", "Z")


def assemble_sop(incident: Incident, data: Dict[str, Any], created_at: Optional[str] = None) -> SOP:
    """Stamp the incident's identity onto the parsed fields and decode the SOP."""
    return SOP.from_dict({
        "id": incident.id,
        "title": data.get("title"),
        "trigger": data.get("trigger"),
        "immediateSteps": data.get("immediateSteps"),
        "preventiveActions": data.get("preventiveActions"),
        "responsibleTeam": data.get("responsibleTeam"),
        "severity": incident.severity,
        "incidentType": incident.display_type,
        "createdAt": created_at or _now_iso(),
    })


def sop_from_response(incident: Incident, text: str, created_at: Optional[str] = None) -> SOP:
    """Always yields a complete SOP: the parsed reply if usable, else the fallback skeleton."""
    try:
        return assemble_sop(incident, parse_sop_response(text), created_at)
    except (SOPParseError, SOPValidationError) as e:
        logger.warning(f"[sop] unusable model reply, using fallback SOP: {e}")
        logger.debug(f"[sop] raw reply: {text!r}")
        return assemble_sop(incident, fallback_sop_data(incident), created_at)


def generate_sop(
    incident: Incident,
    service,
    temperature: float = 0.1,
    max_output_tokens: int = 2048,
    created_at: Optional[str] = None,
) -> SOP:
    """
    Ask the model for an SOP. GenerationError from the service propagates;
    a reply that does not parse falls back to the fixed skeleton.
    """
    prompt = build_sop_prompt(incident)
    logger.info(f"[sop] generating SOP for {incident.display_type} ({incident.severity}), prompt {len(prompt)} chars")

    text = service.generate(
        prompt,
        temperature=temperature,
        max_output_tokens=max_output_tokens,
        top_k=20,
        top_p=0.8,
    )
    sop = sop_from_response(incident, text, created_at)
    logger.info(
        f"[sop] SOP {sop.id} ready: {len(sop.immediate_steps)} immediate, "
        f"{len(sop.preventive_actions)} preventive steps"
    )
    return sop
