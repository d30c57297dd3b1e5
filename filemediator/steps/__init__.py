from filemediator.steps.source_resolution import source_resolution_step
from filemediator.steps.content_conversion import (
    content_type_step,
    content_conversion_step,
    text_to_element,
    xml_to_element,
    PAYLOAD_NS,
)
from filemediator.steps.insertion import insertion_step, resolve_target
from filemediator.steps.outcome import outcome_step, READ_FILE_RESPONSE, OK

__all__ = [
    "source_resolution_step",
    "content_type_step",
    "content_conversion_step",
    "insertion_step",
    "outcome_step",
    "resolve_target",
    "text_to_element",
    "xml_to_element",
    "PAYLOAD_NS",
    "READ_FILE_RESPONSE",
    "OK",
]
