# sopify/models/__init__.py
# ============================================================
#  sopify: value objects passed between generation and export
# ============================================================

from .incident import (
    ACTION_TYPES,
    CUSTOM_TYPE,
    INCIDENT_TYPES,
    SEVERITIES,
    Incident,
    IncidentValidationError,
)
from .sop import SOP, CompletedStepSet, SOPStep, SOPValidationError

__all__ = [
    # Intake
    "Incident",
    "IncidentValidationError",
    "INCIDENT_TYPES",
    "ACTION_TYPES",
    "SEVERITIES",
    "CUSTOM_TYPE",

    # Procedure
    "SOP",
    "SOPStep",
    "CompletedStepSet",
    "SOPValidationError",
]
