# ============================================================
# 🧩 SOP, SOPStep, CompletedStepSet: generated procedure records
# ============================================================
from __future__ import annotations

from dataclasses import dataclass, field, replace
from typing import Any, Dict, FrozenSet, Iterable, List, Optional, Tuple

PRIORITIES = ("high", "medium", "low")


class SOPValidationError(ValueError):
    """Raised when an SOP payload does not have the expected shape."""


def _opt_str(value: Any) -> Optional[str]:
    if value is None:
        return None
    s = str(value).strip()
    return s or None


@dataclass(frozen=True)
class SOPStep:
    id: str
    title: str
    description: str = ""
    estimated_time: Optional[str] = None
    responsible: Optional[str] = None
    priority: Optional[str] = None
    completed: bool = False

    @classmethod
    def from_dict(cls, data: Dict[str, Any], default_id: str) -> "SOPStep":
        if not isinstance(data, dict):
            raise SOPValidationError(f"Step {default_id} must be an object")
        title = _opt_str(data.get("title"))
        if not title:
            raise SOPValidationError(f"Step {default_id} is missing a title")

        priority = _opt_str(data.get("priority"))
        if priority:
            priority = priority.lower()

        return cls(
            id=_opt_str(data.get("id")) or default_id,
            title=title,
            description=_opt_str(data.get("description")) or "",
            estimated_time=_opt_str(data.get("estimatedTime")),
            responsible=_opt_str(data.get("responsible")),
            priority=priority,
            completed=bool(data.get("completed", False)),
        )

    def to_dict(self) -> Dict[str, Any]:
        out: Dict[str, Any] = {
            "id": self.id,
            "title": self.title,
            "description": self.description,
            "priority": self.priority or "medium",
        }
        if self.estimated_time:
            out["estimatedTime"] = self.estimated_time
        if self.responsible:
            out["responsible"] = self.responsible
        if self.completed:
            out["completed"] = True
        return out


def _steps_from(raw: Any, prefix: str) -> Tuple[SOPStep, ...]:
    if raw is None:
        return ()
    if not isinstance(raw, list):
        raise SOPValidationError(f"{prefix} steps must be a list")

    steps: List[SOPStep] = []
    seen = set()
    for i, item in enumerate(raw):
        step = SOPStep.from_dict(item, default_id=f"{prefix}_{i + 1}")
        if step.id in seen:
            # ids stay unique within a list
            n = i + 1
            while f"{prefix}_{n}" in seen:
                n += 1
            step = replace(step, id=f"{prefix}_{n}")
        seen.add(step.id)
        steps.append(step)
    return tuple(steps)


@dataclass(frozen=True)
class SOP:
    id: str
    title: str
    trigger: str
    immediate_steps: Tuple[SOPStep, ...]
    preventive_actions: Tuple[SOPStep, ...]
    responsible_team: str
    severity: str
    incident_type: str
    created_at: str

    @property
    def all_steps(self) -> List[SOPStep]:
        return list(self.immediate_steps) + list(self.preventive_actions)

    @property
    def step_ids(self) -> FrozenSet[str]:
        return frozenset(s.id for s in self.all_steps)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "SOP":
        """Decode the camelCase SOP JSON used by the API and the UI."""
        if not isinstance(data, dict):
            raise SOPValidationError("SOP payload must be an object")

        title = _opt_str(data.get("title"))
        if not title:
            raise SOPValidationError("SOP is missing a title")

        severity = _opt_str(data.get("severity")) or ""
        if severity not in ("Low", "Medium", "High"):
            raise SOPValidationError(f"SOP has an invalid severity: {severity!r}")

        return cls(
            id=_opt_str(data.get("id")) or "",
            title=title,
            trigger=_opt_str(data.get("trigger")) or "",
            immediate_steps=_steps_from(data.get("immediateSteps"), "immediate"),
            preventive_actions=_steps_from(data.get("preventiveActions"), "preventive"),
            responsible_team=_opt_str(data.get("responsibleTeam")) or "Operations Team",
            severity=severity,
            incident_type=_opt_str(data.get("incidentType")) or "",
            created_at=_opt_str(data.get("createdAt")) or "",
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "title": self.title,
            "trigger": self.trigger,
            "immediateSteps": [s.to_dict() for s in self.immediate_steps],
            "preventiveActions": [s.to_dict() for s in self.preventive_actions],
            "responsibleTeam": self.responsible_team,
            "severity": self.severity,
            "incidentType": self.incident_type,
            "createdAt": self.created_at,
        }


@dataclass(frozen=True)
class CompletedStepSet:
    """
    Snapshot of step ids the user has checked off.

    Held by the presentation layer and handed to each export call; the SOP
    record itself is never mutated to track completion.
    """

    ids: FrozenSet[str] = field(default_factory=frozenset)

    @classmethod
    def of(cls, ids: Optional[Iterable[Any]] = None) -> "CompletedStepSet":
        if ids is None:
            return cls()
        if not isinstance(ids, (list, tuple, set, frozenset)):
            raise SOPValidationError("completedSteps must be a list of step ids")
        return cls(frozenset(str(i) for i in ids))

    def __contains__(self, step_id: object) -> bool:
        return step_id in self.ids

    def __len__(self) -> int:
        return len(self.ids)

    def completed_count(self, sop: SOP) -> int:
        return len(self.ids & sop.step_ids)

    def completion_percentage(self, sop: SOP) -> int:
        total = len(sop.all_steps)
        if not total:
            return 0
        return int(round(self.completed_count(sop) / total * 100))

    def to_list(self) -> List[str]:
        return sorted(self.ids)
