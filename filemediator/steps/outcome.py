"""
outcome.py — Flatten the invocation's result into READ_FILE_RESPONSE.

Runs on every invocation, error or not. This is the only place a typed
ReadFileError turns into a string.
"""

from filemediator.errors import ContentParseFailed
from filemediator.mediation_state import MediationState

READ_FILE_RESPONSE = "READ_FILE_RESPONSE"
OK = "OK"


def outcome_step(state: MediationState) -> MediationState:
    log = state.context.log

    if state.error is None:
        state.outcome = OK
    else:
        state.outcome = state.error.describe()
        if isinstance(state.error, ContentParseFailed):
            log.error(state.outcome)
        elif log.trace_or_debug_enabled():
            log.trace_or_debug(state.outcome)

    state.context.set_property(READ_FILE_RESPONSE, state.outcome)
    return state
