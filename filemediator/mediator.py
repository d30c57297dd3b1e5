"""
mediator.py — ReadFileMediator, the entry point the routing engine calls.

    <readFile (fileName="uri" | property="propertyName")
              contentType="text/plain|xml"
              [attachXpath="expression"]/>

Reads a local, FTP or SFTP file and splices its content into the current
payload, either directly under the SOAP Body or under the element selected by
attachXpath. Mediation is never aborted: mediate() always returns True and the
result is reported through the READ_FILE_RESPONSE property.
"""

from __future__ import annotations

from functools import partial
from typing import Callable, List

from filemediator.config import ReadFileConfig
from filemediator.mediation_state import MediationState
from filemediator.message_context import MessageContext
from filemediator.sources import build_strategies
from filemediator.steps import (
    content_conversion_step,
    content_type_step,
    insertion_step,
    outcome_step,
    source_resolution_step,
)

Step = Callable[[MediationState], MediationState]


class ReadFileMediator:
    """Stateless between invocations; one instance can serve every message."""

    def __init__(self, config: ReadFileConfig):
        self.config = config
        self.strategies = build_strategies(config)
        self.steps: List[Step] = [
            source_resolution_step,
            content_type_step,
            partial(content_conversion_step, strategies=self.strategies),
            insertion_step,
            outcome_step,
        ]

    def run(self, context: MessageContext) -> MediationState:
        """Run every step and return the final state (mediate() minus logging)."""
        state = MediationState(context=context, config=self.config)
        for step in self.steps:
            state = step(state)
        return state

    def mediate(self, context: MessageContext) -> bool:
        """Mediate one message. Returns True: further mediation always continues."""
        log = context.log
        if log.trace_or_debug_enabled():
            log.trace_or_debug("Starting ReadFileMediator")

        self.run(context)

        if log.trace_or_debug_enabled():
            log.trace_or_debug("Ending ReadFileMediator")
        return True
