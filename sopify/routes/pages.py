# sopify/routes/pages.py

from flask import Blueprint, current_app, render_template

from sopify.models.incident import ACTION_TYPES, CUSTOM_TYPE, INCIDENT_TYPES, SEVERITIES
from sopify.data.sample_data import INCIDENT_TYPE_COLORS, SEVERITY_COLORS, TIME_RANGES

pages_bp = Blueprint("pages", __name__)


def _page_context(active: str) -> dict:
    return {
        "active_page": active,
        "app_name": current_app.config.get("APP_NAME", "sopify"),
        "app_tagline": current_app.config.get("APP_TAGLINE", ""),
    }


@pages_bp.get("/")
def index():
    return render_template(
        "index.html",
        incident_types=INCIDENT_TYPES,
        action_types=ACTION_TYPES,
        severities=SEVERITIES,
        custom_type=CUSTOM_TYPE,
        **_page_context("home"),
    )


@pages_bp.get("/dashboard")
def dashboard():
    return render_template(
        "dashboard.html",
        incident_types=INCIDENT_TYPES,
        time_ranges=TIME_RANGES,
        severity_colors=SEVERITY_COLORS,
        type_colors=INCIDENT_TYPE_COLORS,
        **_page_context("dashboard"),
    )


@pages_bp.get("/chatbot")
def chatbot():
    return render_template("chatbot.html", **_page_context("chatbot"))
