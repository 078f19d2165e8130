# sopify/export/emitters/text_emitter.py
"""
Fixed-width plain text. Used for the clipboard export and as the payload
behind the HTML document's copy button.
"""
from __future__ import annotations

from typing import Callable, List, Optional

from sopify.export import blocks as b

from .base_emitter import Emitter

DIVIDER = "━" * 80
INDENT = "   "


def _render_block(block: b.Block, step_heading: Callable[[b.StepCard], str]) -> List[str]:
    if isinstance(block, b.Heading):
        return [block.text.upper()]
    if isinstance(block, b.Paragraph):
        return [block.text]
    if isinstance(block, b.LabeledField):
        return [block.text]
    if isinstance(block, b.BulletList):
        lines = []
        prefix = ""
        if block.title:
            lines.append(f"{block.title}:")
            prefix = INDENT
        lines.extend(f"{prefix}• {item}" for item in block.items)
        return lines
    if isinstance(block, b.StepCard):
        return [
            step_heading(block),
            f"{INDENT}{block.action_text}",
            f"{INDENT}Responsible: {block.responsible}",
            f"{INDENT}Duration: {block.duration}",
            f"{INDENT}Priority: {block.priority}",
        ]
    raise TypeError(f"Unsupported block type: {type(block).__name__}")


def render_text(plan: b.DocumentPlan, step_heading: Optional[Callable[[b.StepCard], str]] = None) -> str:
    """
    ``step_heading`` lets a caller substitute the step title line (the HTML
    emitter swaps in placeholders so the copy button can re-mark steps).
    """
    step_heading = step_heading or (lambda card: card.heading)

    out: List[str] = [plan.kicker, plan.title, ""]

    for section in plan.sections:
        out.append(section.title)
        out.append(DIVIDER)
        if section.subtitle:
            out.append(section.subtitle)
            out.append("")

        previous = None
        for block in section.blocks:
            if previous is not None and not (
                isinstance(previous, b.LabeledField) and isinstance(block, b.LabeledField)
            ):
                out.append("")
            out.extend(_render_block(block, step_heading))
            previous = block
        out.append("")

    out.append(f"Generated by {plan.brand} {plan.tagline}")
    return "\n".join(out)


class TextEmitter(Emitter):
    format = "clipboard"
    extension = "txt"
    content_type = "text/plain; charset=utf-8"

    def render(self, plan: b.DocumentPlan) -> str:
        return render_text(plan)
