# sopify/routes/api_metrics.py
# ============================================================
#  Dashboard metrics API (sample data only)
#  - GET /api/metrics?timeRange=&type=
#  - POST /api/metrics          "store" an incident (logged only)
#  - PUT /api/metrics?limit=&offset=   incident history page
# ============================================================

import logging

from flask import Blueprint, jsonify, request

from sopify.data.sample_data import DEFAULT_TIME_RANGE, incident_history, metrics_for

logger = logging.getLogger(__name__)

api_metrics_bp = Blueprint("api_metrics", __name__, url_prefix="/api")


@api_metrics_bp.get("/metrics")
def get_metrics():
    time_range = request.args.get("timeRange", DEFAULT_TIME_RANGE)
    incident_type = request.args.get("type")
    return jsonify(metrics_for(time_range, incident_type)), 200


@api_metrics_bp.post("/metrics")
def store_incident():
    data = request.get_json(silent=True) or {}
    incident = data.get("incident") if isinstance(data, dict) else None
    # Nothing is persisted
    logger.info(f"[metrics] storing incident: {incident}")
    return jsonify({"success": True, "message": "Incident stored successfully"}), 200


@api_metrics_bp.put("/metrics")
def history():
    try:
        limit = int(request.args.get("limit", 10))
        offset = int(request.args.get("offset", 0))
    except ValueError:
        return jsonify({"error": "limit and offset must be integers"}), 400

    return jsonify(incident_history(limit, offset)), 200
