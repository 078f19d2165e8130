# sopify/export/blocks.py
"""
Format-neutral content blocks.

Section renderers produce these; every emitter walks the same list, so the
text of an SOP is decided once and only styling differs per format.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from typing import Optional, Tuple, Union

# Tones map to a palette inside each emitter
PRIMARY = "primary"
SECONDARY = "secondary"
SUCCESS = "success"
WARNING = "warning"
DANGER = "danger"
DARK = "dark"
MUTED = "muted"

IMMEDIATE = "immediate"
PREVENTIVE = "preventive"


@dataclass(frozen=True)
class Heading:
    text: str
    tone: str = DARK


@dataclass(frozen=True)
class Paragraph:
    text: str
    tone: str = DARK
    italic: bool = False


@dataclass(frozen=True)
class LabeledField:
    label: str
    value: str
    tone: str = DARK
    emphasis: bool = False

    @property
    def text(self) -> str:
        return f"{self.label}: {self.value}"


@dataclass(frozen=True)
class BulletList:
    items: Tuple[str, ...]
    title: Optional[str] = None


@dataclass(frozen=True)
class StepCard:
    kind: str
    ordinal: int
    step_id: str
    title: str
    label: str
    description: str
    responsible: str
    duration: str
    priority: str
    completed: bool

    @property
    def prefix(self) -> str:
        return "STEP" if self.kind == IMMEDIATE else "PREVENTION"

    @property
    def key(self) -> str:
        """Unique across both lists; step ids are only unique within one."""
        return f"{self.kind}-{self.ordinal}"

    @property
    def numbered_title(self) -> str:
        return f"{self.prefix} {self.ordinal}: {self.title}"

    @property
    def heading(self) -> str:
        return f"{self.prefix} {self.ordinal}: {self.label}"

    @property
    def action_text(self) -> str:
        return f"Action Required: {self.description}"

    @property
    def meta_text(self) -> str:
        return (
            f"Responsible: {self.responsible} | "
            f"Duration: {self.duration} | "
            f"Priority: {self.priority}"
        )


Block = Union[Heading, Paragraph, LabeledField, BulletList, StepCard]


@dataclass(frozen=True)
class Section:
    key: str
    title: str
    tone: str
    blocks: Tuple[Block, ...]
    subtitle: Optional[str] = None

    @property
    def step_cards(self) -> Tuple[StepCard, ...]:
        return tuple(b for b in self.blocks if isinstance(b, StepCard))


@dataclass(frozen=True)
class DocumentPlan:
    """Everything an emitter needs; built once per export call."""

    brand: str
    tagline: str
    kicker: str
    title: str
    severity: str
    risk_label: str
    generated_at: datetime
    sections: Tuple[Section, ...] = field(default_factory=tuple)

    @property
    def classification(self) -> str:
        return self.severity.upper()

    @property
    def footer_text(self) -> str:
        return f"{self.brand} {self.tagline} - Standard Operating Procedure"

    @property
    def step_cards(self) -> Tuple[StepCard, ...]:
        cards = []
        for section in self.sections:
            cards.extend(section.step_cards)
        return tuple(cards)

    def section(self, key: str) -> Section:
        for s in self.sections:
            if s.key == key:
                return s
        raise KeyError(key)
