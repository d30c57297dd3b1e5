"""
insertion.py — Attach the converted element to the message body.

Target:
  - attachXpath configured → the single element it selects
  - otherwise              → the SOAP Body itself

Plain-text content replaces the body's first element. The replaced element is
only detached once the text element exists and the target has been resolved,
so a failed read or a bad expression leaves the body exactly as it was.
"""

from __future__ import annotations

from typing import Mapping, Optional

from lxml import etree

from filemediator.config import TEXT_PLAIN
from filemediator.errors import InvalidTargetExpression
from filemediator.mediation_state import MediationState


def _is_element(node: object) -> bool:
    # Comments and PIs are _Element subclasses too, but their tag is not a str
    return isinstance(node, etree._Element) and isinstance(node.tag, str)


def first_element(parent: etree._Element) -> Optional[etree._Element]:
    return next((child for child in parent if _is_element(child)), None)


def resolve_target(
    body: etree._Element,
    expression: str,
    namespaces: Mapping[str, str] | None = None,
) -> etree._Element:
    """Evaluate expression against body; exactly one element must come back."""
    try:
        xpath = etree.XPath(expression, namespaces=dict(namespaces) if namespaces else None)
        result = xpath(body)
    except etree.XPathError as exc:
        raise InvalidTargetExpression(f"Invalid expression: {exc}", expression=expression) from exc

    if not isinstance(result, list):
        raise InvalidTargetExpression(
            f"Expression evaluated to a {type(result).__name__}, not an element",
            expression=expression,
        )
    if not result:
        raise InvalidTargetExpression("Expression selected no element", expression=expression)
    if len(result) > 1:
        raise InvalidTargetExpression(
            f"Expression selected {len(result)} nodes, expected exactly one",
            expression=expression,
        )
    if not _is_element(result[0]):
        raise InvalidTargetExpression("Expression selected a non-element node", expression=expression)
    return result[0]


def insertion_step(state: MediationState) -> MediationState:
    if state.error:
        return state

    log = state.context.log
    if state.element is None:
        if log.trace_or_debug_enabled():
            log.trace_or_debug("Element containing file content not created")
        return state

    body = state.context.body
    target = body
    expression = state.config.attach_xpath

    if expression:
        try:
            target = resolve_target(body, expression, state.config.namespaces)
        except InvalidTargetExpression as exc:
            exc.source = state.source_name
            state.error = exc
            return state

    if state.content_kind == TEXT_PLAIN:
        replaced = first_element(body)
        if replaced is not None:
            if target is replaced or replaced in target.iterancestors():
                state.error = InvalidTargetExpression(
                    "Target lies inside the body element replaced by plain-text content",
                    source=state.source_name,
                    expression=expression,
                )
                return state
            body.remove(replaced)

    if log.trace_or_debug_enabled():
        log.trace_or_debug("Adding to target element" if expression else "Adding to body")
    target.append(state.element)
    state.attached = True
    return state
