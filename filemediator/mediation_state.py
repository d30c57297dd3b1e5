"""
mediation_state.py — MediationState, the record each step reads and returns.

The mediator runs:

    default_mediation_steps = [
        source_resolution_step,     # config + properties → SourceLocation
        content_type_step,          # contentType → "text/plain" | "xml"
        content_conversion_step,    # SourceLocation → stream → Element
        insertion_step,             # Element → attached under body / xpath target
        outcome_step,               # error | None → READ_FILE_RESPONSE
    ]
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, TYPE_CHECKING

from filemediator.config import ReadFileConfig
from filemediator.errors import ReadFileError
from filemediator.message_context import MessageContext
from filemediator.sources import SourceLocation

if TYPE_CHECKING:
    from lxml.etree import _Element as Element
else:
    Element = Any


@dataclass
class MediationState:
    """Everything one invocation knows. Discarded when mediate() returns."""
    context: MessageContext
    config: ReadFileConfig

    location: SourceLocation | None = None
    content_kind: str | None = None
    element: Element | None = None
    attached: bool = False

    error: ReadFileError | None = None
    outcome: str | None = None

    @property
    def source_name(self) -> str | None:
        if self.location is not None:
            return self.location.name
        if self.config.file_name:
            return self.config.file_name
        if self.config.property_name:
            return f"${self.config.property_name}"
        return None
