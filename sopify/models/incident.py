# ============================================================
# 🧩 Incident: user-submitted report (value object)
# ============================================================
from __future__ import annotations

import uuid
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any, Dict, List, Optional, Tuple

SEVERITIES: Tuple[str, ...] = ("Low", "Medium", "High")

CUSTOM_TYPE = "Custom"

INCIDENT_TYPES: Tuple[str, ...] = (
    "Server Down",
    "Network Issue",
    "UI Bug",
    "Customer Complaint",
    "Database Error",
    "Security Breach",
    "Performance Issue",
    "Integration Failure",
    "Authentication Issue",
    "Data Corruption",
    "Service Outage",
    "API Failure",
    "Storage Issue",
    "Backup Failure",
    "Monitoring Alert",
    "Configuration Error",
    "Deployment Issue",
    "Third-party Service Down",
    "Resource Exhaustion",
    "Compliance Violation",
    CUSTOM_TYPE,
)

ACTION_TYPES: Tuple[str, ...] = (
    "Restart Server",
    "Notify Team",
    "Escalate",
    "Monitor System",
    "Contact Vendor",
    "Update Documentation",
    "Inform Stakeholders",
    "Run Diagnostics",
    "Apply Hotfix",
    "Schedule Maintenance",
    "Check Logs",
    "Roll Back Deployment",
    "Scale Resources",
    "Create Backup",
    "Reset Password",
    "Clear Cache",
    "Update Configuration",
    "Block IP Address",
    "Enable Maintenance Mode",
    "Contact Customer",
    "Update Status Page",
    "Generate Report",
    "Custom Action",
)


class IncidentValidationError(ValueError):
    """Raised when an incident payload breaks the intake rules."""

    def __init__(self, errors: Dict[str, str]):
        self.errors = errors
        super().__init__("; ".join(f"{k}: {v}" for k, v in errors.items()))


def _now_iso() -> str:
    return datetime.now(timezone.utc).isoformat().replace("+00:00", "Z")


def _clean_list(values: Any) -> List[str]:
    if not values:
        return []
    if isinstance(values, str):
        values = [values]
    out = []
    for v in values:
        s = str(v).strip()
        if s and s not in out:
            out.append(s)
    return out


def _text_field(data: Dict[str, Any], key: str, errors: Dict[str, str]) -> str:
    value = data.get(key)
    if value is None:
        return ""
    if not isinstance(value, str):
        errors[key] = "Must be text"
        return ""
    return value.strip()


def _list_field(data: Dict[str, Any], key: str, errors: Dict[str, str]) -> List[str]:
    value = data.get(key)
    if value is None or isinstance(value, (str, list, tuple)):
        return _clean_list(value)
    errors[key] = "Must be a list of values"
    return []


@dataclass(frozen=True)
class Incident:
    type: str
    severity: str
    actions_taken: Tuple[str, ...]
    id: str = field(default_factory=lambda: uuid.uuid4().hex)
    custom_type: Optional[str] = None
    custom_actions: Tuple[str, ...] = ()
    description: Optional[str] = None
    affected_systems: Tuple[str, ...] = ()
    estimated_impact: Optional[str] = None
    timestamp: str = field(default_factory=_now_iso)

    @property
    def display_type(self) -> str:
        """Category shown to the model and in titles (custom text wins)."""
        if self.type == CUSTOM_TYPE and self.custom_type:
            return self.custom_type
        return self.type

    @property
    def all_actions(self) -> List[str]:
        return list(self.actions_taken) + list(self.custom_actions)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Incident":
        """
        Build an Incident from the intake JSON (camelCase keys, as sent by
        the incident form). Raises IncidentValidationError on bad input.
        """
        if not isinstance(data, dict):
            raise IncidentValidationError({"incident": "Incident payload must be an object"})

        errors: Dict[str, str] = {}

        inc_type = _text_field(data, "type", errors)
        custom_type = _text_field(data, "customType", errors) or None
        severity = _text_field(data, "severity", errors)
        actions = _list_field(data, "actionsTaken", errors)
        custom_actions = _list_field(data, "customActions", errors)
        description = _text_field(data, "description", errors) or None
        affected_systems = _list_field(data, "affectedSystems", errors)
        estimated_impact = _text_field(data, "estimatedImpact", errors) or None

        if errors:
            raise IncidentValidationError(errors)

        if not inc_type:
            errors["type"] = "Please select an incident type"
        elif inc_type not in INCIDENT_TYPES:
            errors["type"] = f"Unknown incident type: {inc_type}"
        elif inc_type == CUSTOM_TYPE and not custom_type:
            errors["customType"] = "Please specify the custom incident type"

        if severity not in SEVERITIES:
            errors["severity"] = "Please select a severity level"

        unknown = [a for a in actions if a not in ACTION_TYPES]
        if unknown:
            errors["actionsTaken"] = f"Unknown actions: {', '.join(unknown)}"
        elif not actions and not custom_actions:
            errors["actions"] = "Please select at least one action taken"

        if errors:
            raise IncidentValidationError(errors)

        kwargs: Dict[str, Any] = {}
        if data.get("id"):
            kwargs["id"] = str(data["id"])
        if data.get("timestamp"):
            kwargs["timestamp"] = str(data["timestamp"])

        return cls(
            type=inc_type,
            severity=severity,
            actions_taken=tuple(actions),
            custom_type=custom_type if inc_type == CUSTOM_TYPE else None,
            custom_actions=tuple(custom_actions),
            description=description,
            affected_systems=tuple(affected_systems),
            estimated_impact=estimated_impact,
            **kwargs,
        )

    def to_dict(self) -> Dict[str, Any]:
        out: Dict[str, Any] = {
            "id": self.id,
            "type": self.type,
            "severity": self.severity,
            "actionsTaken": list(self.actions_taken),
            "timestamp": self.timestamp,
        }
        if self.custom_type:
            out["customType"] = self.custom_type
        if self.custom_actions:
            out["customActions"] = list(self.custom_actions)
        if self.description:
            out["description"] = self.description
        if self.affected_systems:
            out["affectedSystems"] = list(self.affected_systems)
        if self.estimated_impact:
            out["estimatedImpact"] = self.estimated_impact
        return out
