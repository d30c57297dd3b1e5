"""
message_context.py — The slice of an in-flight message the mediator touches.

The routing engine owns the message. The mediator only needs:
  - the SOAP envelope (and its Body)
  - a string-keyed property bag
  - a logger that knows whether trace/debug output is wanted
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any, Optional

from lxml import etree

SOAP11_NS = "http://schemas.xmlsoap.org/soap/envelope/"
SOAP12_NS = "http://www.w3.org/2003/05/soap-envelope"
_SOAP_NAMESPACES = (SOAP11_NS, SOAP12_NS)


class MediationLog:
    """Trace/debug-aware logger handed to mediators by the host."""

    def __init__(self, logger: logging.Logger | None = None):
        self.logger = logger or logging.getLogger("filemediator.mediator")

    def trace_or_debug_enabled(self) -> bool:
        return self.logger.isEnabledFor(logging.DEBUG)

    def trace_or_debug(self, msg: str) -> None:
        self.logger.debug(msg)

    def warning(self, msg: str) -> None:
        self.logger.warning(msg)

    def error(self, msg: str) -> None:
        self.logger.error(msg)


def build_envelope(payload: etree._Element | None = None, soap_ns: str = SOAP11_NS) -> etree._Element:
    """Create <Envelope><Body>payload</Body></Envelope> in the given SOAP namespace."""
    envelope = etree.Element(f"{{{soap_ns}}}Envelope", nsmap={"soapenv": soap_ns})
    body = etree.SubElement(envelope, f"{{{soap_ns}}}Body")
    if payload is not None:
        body.append(payload)
    return envelope


def _is_envelope(element: etree._Element) -> bool:
    return any(element.tag == f"{{{ns}}}Envelope" for ns in _SOAP_NAMESPACES)


@dataclass
class MessageContext:
    """One message in flight. Created and destroyed by the host engine."""
    envelope: etree._Element
    properties: dict[str, Any] = field(default_factory=dict)
    log: MediationLog = field(default_factory=MediationLog)

    @classmethod
    def from_bytes(cls, raw: bytes, **kwargs: Any) -> "MessageContext":
        """Parse raw XML; a non-envelope root becomes the Body payload."""
        root = etree.fromstring(raw, parser=etree.XMLParser(resolve_entities=False, no_network=True))
        if not _is_envelope(root):
            root = build_envelope(root)
        return cls(envelope=root, **kwargs)

    @property
    def body(self) -> etree._Element:
        for ns in _SOAP_NAMESPACES:
            body = self.envelope.find(f"{{{ns}}}Body")
            if body is not None:
                return body
        raise ValueError("SOAP envelope has no Body element")

    def get_property(self, name: str) -> Optional[Any]:
        return self.properties.get(name)

    def set_property(self, name: str, value: Any) -> None:
        self.properties[name] = value

    def to_bytes(self, pretty_print: bool = False) -> bytes:
        return etree.tostring(self.envelope, encoding="utf-8", pretty_print=pretty_print)
