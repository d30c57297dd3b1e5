"""
conftest.py — Shared pytest configuration and fixtures

This file is automatically loaded by pytest.
"""

import pytest
import sys
from pathlib import Path

# Ensure the project root is in the path for imports
project_root = Path(__file__).parent.parent
if str(project_root) not in sys.path:
    sys.path.insert(0, str(project_root))

from filemediator.message_context import MessageContext


ORDERS_NS = "urn:example:orders"

SAMPLE_PAYLOAD = f"""<ord:orders xmlns:ord="{ORDERS_NS}">
  <ord:header customer="ACME"/>
  <ord:items>
    <ord:item sku="A-1" qty="2"/>
  </ord:items>
</ord:orders>""".encode("utf-8")

SAMPLE_TEXT = "Dear ACME,\nyour order <#42> ships today & arrives Tuesday.\nGrüße, Ünïcode ✓\n"

SAMPLE_XML = """<?xml version="1.0" encoding="UTF-8"?>
<inv:invoice xmlns:inv="urn:example:invoice" number="INV-7" currency="EUR">
  <inv:line sku="A-1" amount="19.90">Widget</inv:line>
  <inv:line sku="B-2" amount="5.00"><![CDATA[Gadget & co]]></inv:line>
  <!-- totals -->
  <inv:total>24.90</inv:total>
</inv:invoice>
"""


# ============================================================================
# Markers
# ============================================================================

def pytest_configure(config):
    """Register custom markers."""
    config.addinivalue_line(
        "markers", "slow: marks tests as slow (deselect with '-m \"not slow\"')"
    )
    config.addinivalue_line(
        "markers", "integration: marks tests as integration tests"
    )


# ============================================================================
# Fixtures available to all tests
# ============================================================================

@pytest.fixture
def make_context():
    """Factory for a message context wrapping SAMPLE_PAYLOAD (or a given payload)."""
    def _make(payload: bytes = SAMPLE_PAYLOAD, **properties):
        return MessageContext.from_bytes(payload, properties=dict(properties))
    return _make


@pytest.fixture
def text_file(tmp_path):
    path = tmp_path / "letter.txt"
    path.write_bytes(SAMPLE_TEXT.encode("utf-8"))
    return path


@pytest.fixture
def xml_file(tmp_path):
    path = tmp_path / "invoice.xml"
    path.write_bytes(SAMPLE_XML.encode("utf-8"))
    return path


def assert_same_tree(actual, expected):
    """Structural equality: tag, attributes, text, tail and children."""
    assert actual.tag == expected.tag
    assert dict(actual.attrib) == dict(expected.attrib)
    assert (actual.text or "") == (expected.text or "")
    assert (actual.tail or "").strip() == (expected.tail or "").strip()
    assert len(actual) == len(expected)
    for a, e in zip(actual, expected):
        assert_same_tree(a, e)
