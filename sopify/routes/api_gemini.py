# sopify/routes/api_gemini.py
# ============================================================
#  Gemini diagnostics
#  - GET /api/list-models    models that support generateContent
#  - GET /api/test-gemini    first model in the list that answers
#  - GET /api/debug-env      is a key configured (never the key itself)
# ============================================================

import logging

from flask import Blueprint, current_app, jsonify

from sopify.ai.services.gemini_service import KEY_PREFIX, GenerationError, generate_content_models

logger = logging.getLogger(__name__)

api_gemini_bp = Blueprint("api_gemini", __name__, url_prefix="/api")


@api_gemini_bp.get("/list-models")
def list_models():
    service = current_app.gemini_service
    try:
        data = service.list_models()
    except GenerationError as e:
        return jsonify({"error": e.message, "status": e.status, "message": e.detail}), e.status

    return jsonify({
        "status": "success",
        "totalModels": len(data.get("models") or []),
        "generateContentModels": generate_content_models(data),
    }), 200


@api_gemini_bp.get("/test-gemini")
def test_gemini():
    service = current_app.gemini_service

    if not service.is_configured:
        return jsonify({
            "status": "error",
            "message": "GEMINI_API_KEY not found in environment variables",
            "solution": "Add GEMINI_API_KEY to your environment or .env file",
        }), 500

    if not service.key_format_ok:
        return jsonify({
            "status": "error",
            "message": "Invalid API key format",
            "solution": f'Gemini API keys should start with "{KEY_PREFIX}".',
        }), 500

    try:
        result = service.probe_models()
    except GenerationError as e:
        return jsonify({"status": "error", "message": e.message}), e.status

    if not result["working_model"]:
        return jsonify({
            "status": "error",
            "message": "All Gemini models failed",
            "modelsAttempted": service.model_names,
            "modelErrors": result["errors"],
            "solution": (
                "Your API key may not have access to any of the configured models. "
                "Check Google AI Studio and the GEMINI_MODELS setting."
            ),
        }), 503

    return jsonify({
        "status": "success",
        "message": "Gemini API is working correctly",
        "workingModel": result["working_model"],
        "testResponse": result["response"],
        "apiKeyStatus": "valid",
    }), 200


@api_gemini_bp.get("/debug-env")
def debug_env():
    service = current_app.gemini_service
    has_key = service.is_configured

    body = {
        "status": "FOUND" if has_key else "MISSING",
        "message": "GEMINI_API_KEY is available" if has_key else "GEMINI_API_KEY is NOT available",
        "details": {
            "hasKey": has_key,
            "keyLength": len(service.api_key or ""),
            "keyValid": service.key_format_ok,
            "initError": service.init_error,
            "models": service.model_names,
            "timeout": service.timeout,
        },
    }
    return jsonify(body), 200 if has_key else 500
