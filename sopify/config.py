import os

# =========================================================
# ⚙️ Unified Configuration Class
# =========================================================
DEFAULT_GEMINI_MODELS = (
    "gemini-2.5-flash,"
    "gemini-2.0-flash,"
    "gemini-2.5-pro,"
    "gemini-2.0-flash-001,"
    "gemini-2.5-flash-lite,"
    "gemini-2.0-flash-lite"
)


def _split_csv(value: str) -> list:
    return [v.strip() for v in (value or "").split(",") if v.strip()]


class Config:
    # =========================================================
    # 🔹 Core Application
    # =========================================================
    SECRET_KEY = os.getenv("SECRET_KEY", "sopify-change-this")
    DEBUG = os.getenv("FLASK_DEBUG", "False").lower() in ("1", "true")
    MAX_CONTENT_LENGTH = 2 * 1024 * 1024  # SOP payloads are small JSON
    CORS_HEADERS = "Content-Type"
    CORS_ORIGINS = _split_csv(os.getenv("CORS_ORIGINS", "*"))

    # =========================================================
    # 🔹 Gemini (Google Generative AI)
    # =========================================================
    GEMINI_API_KEY = os.getenv("GEMINI_API_KEY") or os.getenv("GOOGLE_API_KEY", "")
    GEMINI_MODELS = _split_csv(os.getenv("GEMINI_MODELS", DEFAULT_GEMINI_MODELS))
    GEMINI_TIMEOUT = int(os.getenv("GEMINI_TIMEOUT", "30"))
    GEMINI_LIST_MODELS_URL = os.getenv(
        "GEMINI_LIST_MODELS_URL",
        "https://generativelanguage.googleapis.com/v1/models",
    )

    # SOP generation: low temperature for consistent JSON
    SOP_TEMPERATURE = float(os.getenv("SOP_TEMPERATURE", "0.1"))
    SOP_MAX_OUTPUT_TOKENS = int(os.getenv("SOP_MAX_OUTPUT_TOKENS", "2048"))

    # Chat assistant
    CHAT_TEMPERATURE = float(os.getenv("CHAT_TEMPERATURE", "0.7"))
    CHAT_MAX_OUTPUT_TOKENS = int(os.getenv("CHAT_MAX_OUTPUT_TOKENS", "1024"))

    # =========================================================
    # 🔹 Application Meta
    # =========================================================
    APP_NAME = "sopify"
    APP_TAGLINE = "Enterprise Operations Platform"


class TestConfig(Config):
    TESTING = True
    DEBUG = False
    GEMINI_API_KEY = ""
