# sopify/data/sample_data.py
"""
Canned dashboard data. Nothing here is computed from real incidents; the
time-range handling only rescales the sample figures.
"""
import copy
import math

TIME_RANGES = ("7d", "30d", "90d")
DEFAULT_TIME_RANGE = "30d"

SAMPLE_METRICS = {
    "incidentsByType": {
        "Server Down": 78,
        "Network Issue": 65,
        "UI Bug": 41,
        "Customer Complaint": 33,
        "Database Error": 52,
        "Security Breach": 12,
        "Performance Issue": 89,
        "Integration Failure": 27,
        "Authentication Issue": 19,
        "Data Corruption": 8,
        "Service Outage": 34,
        "API Failure": 45,
        "Storage Issue": 23,
        "Backup Failure": 15,
        "Monitoring Alert": 156,
        "Configuration Error": 38,
        "Deployment Issue": 29,
        "Third-party Service Down": 21,
        "Resource Exhaustion": 31,
        "Compliance Violation": 6,
        "Custom": 18,
    },
    "incidentsBySeverity": {
        "Low": 432,
        "Medium": 287,
        "High": 121,
    },
    "complianceRate": 94.2,
    "averageResolutionTime": 28,
    "efficiencyImprovement": 31.7,
    "totalSOPs": 840,
}

SAMPLE_INCIDENTS = [
    {
        "id": "1",
        "type": "Server Down",
        "severity": "High",
        "actionsTaken": ["Restart Server", "Notify Team", "Escalate"],
        "description": "Production server experienced unexpected downtime due to memory overload",
        "timestamp": "2024-01-15T14:30:00Z",
    },
    {
        "id": "2",
        "type": "Network Issue",
        "severity": "Medium",
        "actionsTaken": ["Monitor System", "Contact Vendor"],
        "description": "Intermittent connectivity issues affecting west coast users",
        "timestamp": "2024-01-15T09:15:00Z",
    },
    {
        "id": "3",
        "type": "UI Bug",
        "severity": "Low",
        "actionsTaken": ["Apply Hotfix", "Update Documentation"],
        "description": "Minor display issue on mobile checkout page",
        "timestamp": "2024-01-14T16:45:00Z",
    },
    {
        "id": "4",
        "type": "Customer Complaint",
        "severity": "Medium",
        "actionsTaken": ["Inform Stakeholders", "Monitor System"],
        "description": "Multiple users reporting slow loading times during peak hours",
        "timestamp": "2024-01-14T11:20:00Z",
    },
    {
        "id": "5",
        "type": "Database Error",
        "severity": "High",
        "actionsTaken": ["Run Diagnostics", "Notify Team", "Apply Hotfix"],
        "description": "Database connection timeout causing transaction failures",
        "timestamp": "2024-01-13T20:30:00Z",
    },
]

# Chart palette used by the dashboard page
SEVERITY_COLORS = {"Low": "#22c55e", "Medium": "#f59e0b", "High": "#ef4444"}
INCIDENT_TYPE_COLORS = [
    "#0ea5e9", "#0284c7", "#0369a1", "#075985", "#64748b", "#475569", "#374151",
    "#1f2937", "#111827", "#6366f1", "#8b5cf6", "#a855f7", "#d946ef", "#ec4899",
    "#f43f5e", "#ef4444", "#f97316", "#f59e0b", "#eab308", "#84cc16", "#22c55e",
]


def metrics_for(time_range: str = DEFAULT_TIME_RANGE, incident_type: str = None) -> dict:
    """
    Sample metrics for the dashboard.

    A specific ``incident_type`` replaces totalSOPs with the number of sample
    incidents of that type. ``7d`` shrinks the total to a fifth and nudges
    compliance up; ``90d`` scales it by 3.5 and nudges compliance down.
    Unknown ranges behave like 30d.
    """
    metrics = copy.deepcopy(SAMPLE_METRICS)

    if incident_type and incident_type != "all":
        metrics["totalSOPs"] = sum(1 for i in SAMPLE_INCIDENTS if i["type"] == incident_type)

    if time_range == "7d":
        metrics["totalSOPs"] = math.floor(metrics["totalSOPs"] * 0.2)
        metrics["complianceRate"] = round(min(metrics["complianceRate"] + 2, 100), 1)
    elif time_range == "90d":
        metrics["totalSOPs"] = math.floor(metrics["totalSOPs"] * 3.5)
        metrics["complianceRate"] = round(max(metrics["complianceRate"] - 3, 0), 1)

    return metrics


def incident_history(limit: int = 10, offset: int = 0) -> dict:
    """One page of the sample incident history."""
    limit = max(limit, 0)
    offset = max(offset, 0)
    total = len(SAMPLE_INCIDENTS)
    return {
        "incidents": copy.deepcopy(SAMPLE_INCIDENTS[offset:offset + limit]),
        "total": total,
        "hasMore": offset + limit < total,
    }
