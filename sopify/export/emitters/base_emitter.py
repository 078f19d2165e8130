# sopify/export/emitters/base_emitter.py

from __future__ import annotations

from dataclasses import dataclass
from typing import Union

from sopify.export.blocks import DocumentPlan
from sopify.export.policy import export_filename


@dataclass(frozen=True)
class ExportPayload:
    body: Union[bytes, str]
    content_type: str
    filename: str

    @property
    def is_text(self) -> bool:
        return isinstance(self.body, str)


class Emitter:
    """
    Base class for all format emitters.

    Subclasses override:
      - format (str)       request token, e.g. "pdf"
      - extension (str)    file extension for the download
      - content_type (str)
      - render(plan) -> bytes | str
    """

    format: str = ""
    extension: str = ""
    content_type: str = "application/octet-stream"

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------
    def render(self, plan: DocumentPlan) -> Union[bytes, str]:
        raise NotImplementedError

    def export(self, plan: DocumentPlan) -> ExportPayload:
        return ExportPayload(
            body=self.render(plan),
            content_type=self.content_type,
            filename=export_filename(plan.title, self.extension),
        )
