"""Shared fixtures for the test suite."""
from datetime import datetime, timezone

GENERATED_AT = datetime(2024, 1, 15, 15, 0, tzinfo=timezone.utc)


def sop_dict(**overrides):
    data = {
        "id": "inc-001",
        "title": "SOP: Server Down Response Procedure",
        "trigger": "When server down occurs affecting system operations",
        "immediateSteps": [
            {"id": "step_1", "title": "Assess Impact", "description": "Check which services are unreachable",
             "estimatedTime": "5 min", "responsible": "Operations Team", "priority": "high"},
            {"id": "step_2", "title": "Restart Server", "description": "Restart the affected host",
             "estimatedTime": "10 min", "responsible": "Technical Team", "priority": "high"},
            {"id": "step_3", "title": "Verify Recovery", "description": "Confirm health checks pass",
             "estimatedTime": "10 min", "responsible": "QA Team", "priority": "medium"},
        ],
        "preventiveActions": [
            {"id": "prev_1", "title": "Add Redundancy", "description": "Run a second instance behind the load balancer",
             "estimatedTime": "2 weeks", "responsible": "DevOps Team", "priority": "high"},
            {"id": "prev_2", "title": "Memory Alerts", "description": "Alert when memory use exceeds 85 percent",
             "estimatedTime": "1 week", "responsible": "Infrastructure Team", "priority": "medium"},
            {"id": "prev_3", "title": "Runbook Review", "description": "Review the restart runbook quarterly",
             "estimatedTime": "1 day", "responsible": "Operations Team", "priority": "low"},
        ],
        "responsibleTeam": "Operations Team",
        "severity": "High",
        "incidentType": "Server Down",
        "createdAt": "2024-01-15T14:30:00Z",
    }
    data.update(overrides)
    return data


def long_sop_dict(steps=12):
    """Enough long steps to spill the PDF over several pages."""
    text = "Coordinate with the on-call engineer and document every action taken. " * 6

    def make(prefix, n):
        return [
            {"id": f"{prefix}_{i}", "title": f"Long step {i}", "description": text,
             "estimatedTime": "15 min", "responsible": "Operations Team", "priority": "medium"}
            for i in range(1, n + 1)
        ]

    return sop_dict(immediateSteps=make("step", steps), preventiveActions=make("prev", steps))


def incident_dict(**overrides):
    data = {
        "id": "inc-001",
        "type": "Server Down",
        "severity": "High",
        "actionsTaken": ["Restart Server", "Notify Team"],
        "description": "Production server ran out of memory",
        "timestamp": "2024-01-15T14:30:00Z",
    }
    data.update(overrides)
    return data


class StubGemini:
    """Stands in for GeminiService; returns a canned reply or raises."""

    def __init__(self, reply="", error=None, configured=True):
        self.reply = reply
        self.error = error
        self.configured = configured
        self.calls = []
        self.api_key = "AIzaStubKey" if configured else None
        self.model_names = ["stub-model"]
        self.timeout = 30
        self.init_error = None

    @property
    def is_configured(self):
        return self.configured

    @property
    def key_format_ok(self):
        return self.configured

    def generate(self, prompt, **kwargs):
        self.calls.append((prompt, kwargs))
        if self.error:
            raise self.error
        return self.reply
