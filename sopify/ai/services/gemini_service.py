import logging
from typing import Any, Dict, List, Optional

import google.generativeai as genai
import requests

KEY_PREFIX = "AIza"
PROBE_PROMPT = 'Say "Hello SOPify!" if you can read this.'


class GenerationError(Exception):
    """
    Upstream AI failure, already classified into the HTTP status the API
    should answer with.
    """

    def __init__(self, status: int, message: str, detail: Optional[str] = None):
        super().__init__(message)
        self.status = status
        self.message = message
        self.detail = detail


NOT_CONFIGURED_MESSAGE = (
    "Gemini API key not configured. Please add GEMINI_API_KEY to your environment variables."
)
BAD_KEY_FORMAT_MESSAGE = "Invalid API key format. Please check your GEMINI_API_KEY."


def classify_error(exc: Exception) -> GenerationError:
    """
    Map a raw client exception onto the failure classes the API reports:
    unauthorized 401, quota 429, model unavailable 503, network 503, generic 500.
    """
    if isinstance(exc, GenerationError):
        return exc

    msg = str(exc).lower()

    if "api key" in msg or "unauthorized" in msg or "invalid key" in msg or "permission" in msg:
        return GenerationError(401, "Invalid API key. Please check your GEMINI_API_KEY configuration.", str(exc))

    if "quota" in msg or "limit" in msg or "exhausted" in msg:
        return GenerationError(
            429,
            "API quota exceeded. Please try again later or check your Gemini API usage limits.",
            str(exc),
        )

    if "model" in msg and "not found" in msg:
        return GenerationError(
            503, "AI model temporarily unavailable. Please try again in a few minutes.", str(exc)
        )

    if (
        isinstance(exc, (TimeoutError, ConnectionError, requests.exceptions.RequestException))
        or "network" in msg
        or "timeout" in msg
        or "deadline" in msg
    ):
        return GenerationError(
            503,
            "Network connection issue. Please check your internet connection and try again.",
            str(exc),
        )

    return GenerationError(
        500,
        "Failed to generate a response. Please try again. "
        "If the problem persists, check your API configuration.",
        str(exc),
    )


def _response_text(response) -> str:
    # .text raises when the candidate was blocked or came back empty
    try:
        return response.text or ""
    except ValueError:
        return ""


class GeminiService:
    def __init__(self, app=None):
        self.api_key = None
        self.model_names: List[str] = []
        self.timeout = 30
        self.list_models_url = None
        self.logger = logging.getLogger(__name__)
        self.init_error = None

        if app:
            self.init_app(app)

    def init_app(self, app):
        self.api_key = app.config.get("GEMINI_API_KEY") or None
        self.model_names = list(app.config.get("GEMINI_MODELS") or [])
        self.timeout = app.config.get("GEMINI_TIMEOUT", 30)
        self.list_models_url = app.config.get("GEMINI_LIST_MODELS_URL")

        if not self.api_key:
            self.logger.warning("[Gemini] No API key found. SOP generation and chat are disabled.")
            return

        try:
            genai.configure(api_key=self.api_key)
            self.logger.info(f"[Gemini] Service initialized with models: {', '.join(self.model_names)}")
        except Exception as e:
            # Keep the service around so the diagnostics endpoints can report it
            self.init_error = str(e)
            self.logger.error(f"[Gemini] Initialization failed: {e}")

    # ------------------------------------------------------------------
    # Status
    # ------------------------------------------------------------------
    @property
    def is_configured(self) -> bool:
        return bool(self.api_key)

    @property
    def key_format_ok(self) -> bool:
        return bool(self.api_key) and self.api_key.startswith(KEY_PREFIX)

    def ensure_ready(self) -> None:
        if not self.is_configured:
            raise GenerationError(500, NOT_CONFIGURED_MESSAGE)
        if not self.key_format_ok:
            raise GenerationError(500, BAD_KEY_FORMAT_MESSAGE)
        if self.init_error:
            raise GenerationError(500, f"Gemini client failed to initialize: {self.init_error}")

    # ------------------------------------------------------------------
    # Generation
    # ------------------------------------------------------------------
    def _call_model(self, model_name: str, prompt: str, generation_config: Optional[Dict[str, Any]] = None) -> str:
        model = genai.GenerativeModel(model_name, generation_config=generation_config)
        response = model.generate_content(prompt, request_options={"timeout": self.timeout})
        return _response_text(response)

    def generate(
        self,
        prompt: str,
        temperature: Optional[float] = None,
        max_output_tokens: Optional[int] = None,
        top_k: Optional[int] = None,
        top_p: Optional[float] = None,
    ) -> str:
        """
        Send ``prompt`` to the first model in the configured list that
        answers. Raises GenerationError once every model has failed.
        """
        self.ensure_ready()

        config = {
            "temperature": temperature,
            "max_output_tokens": max_output_tokens,
            "top_k": top_k,
            "top_p": top_p,
        }
        config = {k: v for k, v in config.items() if v is not None} or None

        last_error: Optional[GenerationError] = None
        for name in self.model_names:
            try:
                self.logger.info(f"[Gemini] Sending prompt ({len(prompt)} chars) to {name}")
                text = self._call_model(name, prompt, config)
                self.logger.info(f"[Gemini] {name} responded ({len(text)} chars)")
                return text
            except Exception as e:
                last_error = classify_error(e)
                self.logger.warning(f"[Gemini] {name} failed ({last_error.status}): {e}")
                if last_error.status == 401:
                    # Same key for every model
                    break

        if last_error is None:
            raise GenerationError(500, "No Gemini models configured. Set GEMINI_MODELS.")
        raise last_error

    def probe_models(self, prompt: str = PROBE_PROMPT) -> Dict[str, Any]:
        """Try each model in turn; report the first that works and why the others failed."""
        self.ensure_ready()

        errors = []
        for name in self.model_names:
            try:
                self.logger.info(f"[Gemini] Probing model: {name}")
                text = self._call_model(name, prompt)
                return {"working_model": name, "response": text, "errors": errors}
            except Exception as e:
                self.logger.warning(f"[Gemini] Probe of {name} failed: {e}")
                errors.append(f"{name}: {e}")

        return {"working_model": None, "response": None, "errors": errors}

    # ------------------------------------------------------------------
    # Model listing (plain REST)
    # ------------------------------------------------------------------
    def list_models(self) -> Dict[str, Any]:
        if not self.is_configured:
            raise GenerationError(500, "GEMINI_API_KEY not found")

        try:
            resp = requests.get(
                self.list_models_url,
                params={"key": self.api_key},
                timeout=self.timeout,
            )
        except requests.exceptions.RequestException as e:
            self.logger.error(f"[Gemini] list-models request failed: {e}")
            raise classify_error(e) from e

        if not resp.ok:
            self.logger.warning(f"[Gemini] list-models returned HTTP {resp.status_code}")
            raise GenerationError(resp.status_code, "Failed to list models", resp.text)

        return resp.json()


def generate_content_models(data: Dict[str, Any]) -> List[Dict[str, Any]]:
    """Models from a list-models response that support generateContent."""
    out = []
    for model in data.get("models") or []:
        methods = model.get("supportedGenerationMethods") or []
        if "generateContent" not in methods:
            continue
        out.append({
            "name": (model.get("name") or "").replace("models/", ""),
            "displayName": model.get("displayName"),
            "description": model.get("description"),
            "supportedMethods": methods,
        })
    return out
