# sopify/routes/api_sop.py
# ============================================================
#  SOP generation API
#  - GET  /api/generate-sop   status
#  - POST /api/generate-sop   Incident JSON -> SOP JSON
# ============================================================

import logging

from flask import Blueprint, current_app, jsonify, request

from sopify.ai.services.gemini_service import GenerationError
from sopify.ai.services.sop_generator import generate_sop
from sopify.models.incident import Incident, IncidentValidationError

logger = logging.getLogger(__name__)

api_sop_bp = Blueprint("api_sop", __name__, url_prefix="/api")


@api_sop_bp.get("/generate-sop")
def generate_sop_status():
    return jsonify({"message": "SOP Generator API is running"}), 200


@api_sop_bp.post("/generate-sop")
def generate_sop_route():
    data = request.get_json(silent=True)

    try:
        incident = Incident.from_dict(data)
    except IncidentValidationError as e:
        logger.info(f"[sop] rejected incident: {e}")
        return jsonify({"error": "Invalid incident report", "details": e.errors}), 400

    try:
        sop = generate_sop(
            incident,
            current_app.gemini_service,
            temperature=current_app.config.get("SOP_TEMPERATURE", 0.1),
            max_output_tokens=current_app.config.get("SOP_MAX_OUTPUT_TOKENS", 2048),
        )
    except GenerationError as e:
        logger.error(f"[sop] generation failed ({e.status}): {e.detail or e.message}")
        return jsonify({"error": e.message}), e.status
    except Exception:
        logger.exception("[sop] unexpected error while generating SOP")
        return jsonify({
            "error": "Failed to generate SOP. Please try again. "
                     "If the problem persists, check your API configuration."
        }), 500

    return jsonify(sop.to_dict()), 200
