# sopify/export/emitters/html_emitter.py
"""
Standalone, styled HTML document with an interactive checklist and a
copy-to-clipboard button.
"""
from __future__ import annotations

from jinja2 import Environment, PackageLoader, select_autoescape

from sopify.export import blocks as b
from sopify.export.policy import COMPLETION_MARKER, DOCUMENT_VERSION, format_date

from .base_emitter import Emitter
from .text_emitter import render_text

# Wraps a step key inside the embedded plain-text copy template
PLACEHOLDER = "\u0001"

_env = Environment(
    loader=PackageLoader("sopify", "templates"),
    autoescape=select_autoescape(["html"]),
    trim_blocks=True,
    lstrip_blocks=True,
)
_env.filters["block_type"] = lambda block: type(block).__name__


def _placeholder(card: b.StepCard) -> str:
    return f"{PLACEHOLDER}{card.key}{PLACEHOLDER}"


class HtmlEmitter(Emitter):
    format = "html"
    extension = "html"
    content_type = "text/html; charset=utf-8"
    template_name = "export/sop.html"

    def render(self, plan: b.DocumentPlan) -> str:
        step_titles = {card.key: card.numbered_title for card in plan.step_cards}
        template = _env.get_template(self.template_name)
        return template.render(
            plan=plan,
            classification=plan.section("classification"),
            body_sections=[s for s in plan.sections if s.key != "classification"],
            copy_template=render_text(plan, step_heading=_placeholder),
            step_titles=step_titles,
            marker=COMPLETION_MARKER,
            placeholder=PLACEHOLDER,
            version=DOCUMENT_VERSION,
            generated_on=format_date(plan.generated_at),
        )
