"""
content_conversion.py — Read the source and turn its bytes into one XML element.

    text/plain  →  <ax:text xmlns:ax="http://ws.apache.org/commons/ns/payload">…</ax:text>
    xml         →  root element of the parsed document

The content type is settled by content_type_step before anything is opened,
so an undeclared type never costs a remote session.
"""

from typing import BinaryIO, Callable, Dict, Mapping

from lxml import etree

from filemediator.config import TEXT_PLAIN, XML
from filemediator.errors import (
    ContentParseFailed,
    ContentTypeUndeclared,
    ReadFileError,
    RemoteRetrievalFailed,
    SourceError,
    UnsupportedSourceScheme,
)
from filemediator.mediation_state import MediationState
from filemediator.sources import SourceStrategy

PAYLOAD_NS = "http://ws.apache.org/commons/ns/payload"
TEXT_TAG = f"{{{PAYLOAD_NS}}}text"


def text_to_element(stream: BinaryIO) -> etree._Element:
    data = stream.read()
    try:
        content = data.decode("utf-8")
    except UnicodeDecodeError as exc:
        raise ContentParseFailed(f"Content is not valid UTF-8: {exc}") from exc

    element = etree.Element(TEXT_TAG, nsmap={"ax": PAYLOAD_NS})
    try:
        element.text = content
    except ValueError as exc:
        # lxml refuses control characters XML 1.0 cannot carry
        raise ContentParseFailed(f"Content cannot be carried as XML text: {exc}") from exc
    return element


def xml_to_element(stream: BinaryIO) -> etree._Element:
    parser = etree.XMLParser(resolve_entities=False, no_network=True)
    try:
        return etree.parse(stream, parser).getroot()
    except etree.XMLSyntaxError as exc:
        raise ContentParseFailed(f"Malformed XML: {exc}") from exc


CONVERTERS: Dict[str, Callable[[BinaryIO], etree._Element]] = {
    TEXT_PLAIN: text_to_element,
    XML: xml_to_element,
}


def content_type_step(state: MediationState) -> MediationState:
    if state.error:
        return state

    kind = state.config.content_kind
    if kind is None:
        state.error = ContentTypeUndeclared(state.source_name, state.config.content_type)
        return state

    state.content_kind = kind
    return state


def content_conversion_step(
    state: MediationState,
    strategies: Mapping[str, SourceStrategy],
) -> MediationState:
    """Open state.location, convert it, and store the element on the state."""
    if state.error or state.location is None:
        return state

    log = state.context.log
    location = state.location
    strategy = strategies.get(location.scheme)
    if strategy is None:
        state.error = UnsupportedSourceScheme(location.name, location.scheme)
        return state

    convert = CONVERTERS[state.content_kind]
    try:
        with strategy.open(location) as stream:
            state.element = convert(stream)
    except ReadFileError as exc:
        exc.source = exc.source or location.name
        state.error = exc
    except OSError as exc:
        # Transfer broke off after the stream was opened
        error_type = SourceError if location.scheme == "file" else RemoteRetrievalFailed
        state.error = error_type(f"Read failed: {exc}", location.name)

    if state.element is not None and log.trace_or_debug_enabled():
        log.trace_or_debug("Element containing file content created")
    return state
