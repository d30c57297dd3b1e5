"""
source_resolution.py — Decide which file this invocation reads.

fileName wins over property. A fileName literal is parsed as a URI; its scheme
must be one the mediator has a strategy for. A property is read from the
message and treated as a local filesystem path.

No I/O happens here; opening the source is content_conversion_step's job.
"""

from filemediator.errors import ReadFileError, SourceNotConfigured, SourceNotFound
from filemediator.mediation_state import MediationState
from filemediator.sources import location_for_path, parse_source_uri


def source_resolution_step(state: MediationState) -> MediationState:
    if state.error:
        return state

    config = state.config
    log = state.context.log

    try:
        if config.file_name:
            state.location = parse_source_uri(config.file_name)
        elif config.property_name:
            value = state.context.get_property(config.property_name)
            if value is None or not str(value).strip():
                raise SourceNotFound(
                    f"Property {config.property_name} holds no file path",
                    f"${config.property_name}",
                )
            state.location = location_for_path(str(value).strip())
        else:
            state.error = SourceNotConfigured()
            return state
    except ReadFileError as exc:
        state.error = exc
        return state

    if log.trace_or_debug_enabled():
        log.trace_or_debug(f"Reading {state.location.scheme} source {state.location.name}")
    return state
