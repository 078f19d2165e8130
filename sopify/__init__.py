# ============================================================
# 🧩 sopify App Factory
# ============================================================

from flask import Flask

from .config import Config
from .extensions import cors

# ============================================================
# 🎯 App Factory
# ============================================================


def create_app(config_object=Config):
    # --------------------------------------------------------
    # ✓ Initialize Flask
    # --------------------------------------------------------
    app = Flask(
        __name__,
        template_folder="templates",
        static_folder="static",
    )

    app.config.from_object(config_object)

    # --------------------------------------------------------
    # ✓ Initialize Extensions
    # --------------------------------------------------------
    cors.init_app(app, resources={r"/api/*": {"origins": app.config.get("CORS_ORIGINS", "*")}})

    # --------------------------------------------------------
    # ✓ Register Blueprints
    # --------------------------------------------------------
    from .routes.pages import pages_bp
    app.register_blueprint(pages_bp)
    app.logger.info("[init] loaded blueprint: pages_bp")

    from .routes.api_sop import api_sop_bp
    app.register_blueprint(api_sop_bp)
    app.logger.info("[init] loaded blueprint: api_sop_bp")

    from .routes.api_export import api_export_bp
    app.register_blueprint(api_export_bp)
    app.logger.info("[init] loaded blueprint: api_export_bp")

    from .routes.api_chatbot import api_chatbot_bp
    app.register_blueprint(api_chatbot_bp)
    app.logger.info("[init] loaded blueprint: api_chatbot_bp")

    from .routes.api_metrics import api_metrics_bp
    app.register_blueprint(api_metrics_bp)
    app.logger.info("[init] loaded blueprint: api_metrics_bp")

    from .routes.api_gemini import api_gemini_bp
    app.register_blueprint(api_gemini_bp)
    app.logger.info("[init] loaded blueprint: api_gemini_bp")

    # --------------------------------------------------------
    # 🤖 Initialize Gemini Service (Google AI)
    # --------------------------------------------------------
    from .ai.services.gemini_service import GeminiService
    app.gemini_service = GeminiService(app=app)
    app.logger.info("[ai] GeminiService initialized.")

    # --------------------------------------------------------
    # ✓ Health Check Endpoint
    # --------------------------------------------------------
    @app.route("/healthz")
    def healthz():
        return {"ok": True, "app": app.config.get("APP_NAME", "sopify")}, 200

    return app
