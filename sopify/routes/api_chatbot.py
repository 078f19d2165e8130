# sopify/routes/api_chatbot.py

import logging

from flask import Blueprint, current_app, jsonify, request

from sopify.ai.services.chat_assistant import answer
from sopify.ai.services.gemini_service import GenerationError

logger = logging.getLogger(__name__)

api_chatbot_bp = Blueprint("api_chatbot", __name__, url_prefix="/api")


@api_chatbot_bp.get("/chatbot")
def chatbot_status():
    return jsonify({"message": "SOPify AI Assistant is ready"}), 200


@api_chatbot_bp.post("/chatbot")
def chatbot_ask():
    data = request.get_json(silent=True) or {}
    message = (data.get("message") or "").strip() if isinstance(data, dict) else ""
    if not message:
        return jsonify({"error": "Message is required"}), 400

    service = current_app.gemini_service
    if not service.is_configured:
        logger.error("[chat] GEMINI_API_KEY is not configured")
        return jsonify({"error": "AI service not configured. Please add GEMINI_API_KEY to your environment."}), 500

    try:
        reply = answer(
            message,
            service,
            temperature=current_app.config.get("CHAT_TEMPERATURE", 0.7),
            max_output_tokens=current_app.config.get("CHAT_MAX_OUTPUT_TOKENS", 1024),
        )
    except GenerationError as e:
        logger.error(f"[chat] model call failed ({e.status}): {e.detail or e.message}")
        return jsonify({"error": "Failed to process your question. Please try again."}), 500
    except Exception:
        logger.exception("[chat] unexpected error")
        return jsonify({"error": "Failed to process your question. Please try again."}), 500

    return jsonify({"response": reply}), 200
