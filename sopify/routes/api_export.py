# sopify/routes/api_export.py
# ============================================================
#  Export API
#  - POST /api/export   {sop, format, completedSteps} -> file | {text}
# ============================================================

import logging

from flask import Blueprint, Response, current_app, jsonify, request

from sopify.export import ExportError, export_sop

logger = logging.getLogger(__name__)

api_export_bp = Blueprint("api_export", __name__, url_prefix="/api")


@api_export_bp.post("/export")
def export_route():
    payload = request.get_json(silent=True) or {}

    try:
        result = export_sop(
            payload,
            brand=current_app.config.get("APP_NAME", "sopify"),
            tagline=current_app.config.get("APP_TAGLINE", "Enterprise Operations Platform"),
        )
    except ExportError as e:
        return jsonify({"error": e.message}), e.status_code

    if payload.get("format") == "clipboard":
        return jsonify({"text": result.body}), 200

    return Response(
        result.body,
        status=200,
        content_type=result.content_type,
        headers={"Content-Disposition": f'attachment; filename="{result.filename}"'},
    )
