"""
Unit tests for TokenStream primitives

Tests cover:
1. Text accumulation and MalformedLeaf
2. Scalar helpers
3. Subtree skipping and capture
4. Error propagation from the source
"""

from datetime import datetime, timezone
from pathlib import Path

import pytest

import sys
sys.path.insert(0, str(Path(__file__).parent.parent.parent.parent))

from gpxstream.core.errors import MalformedLeaf, TransportError, UnexpectedEndOfInput
from gpxstream.streaming.stream import TokenStream
from gpxstream.streaming.tokens import BufferTokenSource, CharData, EndElement, QName, StartElement


def S(local):
    return StartElement(QName("", local))


def E(local):
    return EndElement(QName("", local))


def stream(*tokens):
    return TokenStream(BufferTokenSource(tokens))


# ============================================================================
# Text Tests
# ============================================================================

def test_consume_text_joins_char_data():
    ts = stream(CharData("Morning "), CharData("run"), E("name"), S("next"))

    assert ts.consume_text() == "Morning run"
    # The stream is positioned after the end tag
    assert ts.next_token() == S("next")


def test_consume_text_empty_element():
    assert stream(E("name")).consume_text() == ""


def test_consume_text_nested_element():
    ts = stream(CharData("1"), S("b"), CharData("2"), E("b"), E("ele"))

    with pytest.raises(MalformedLeaf) as exc_info:
        ts.consume_text()

    assert exc_info.value.tag == "b"


# ============================================================================
# Scalar Tests
# ============================================================================

def test_consume_float():
    assert stream(CharData(" 346.5\n"), E("ele")).consume_float() == 346.5


def test_consume_float_invalid():
    with pytest.raises(ValueError):
        stream(CharData("not-a-number"), E("ele")).consume_float()


def test_consume_int():
    assert stream(CharData("2015"), E("year")).consume_int() == 2015


def test_consume_timestamp():
    ts = stream(CharData("2015-12-13T18:35:18Z"), E("time"))

    assert ts.consume_timestamp() == datetime(2015, 12, 13, 18, 35, 18, tzinfo=timezone.utc)


# ============================================================================
# Subtree Tests
# ============================================================================

def test_skip_subtree():
    ts = stream(S("a"), S("b"), CharData("x"), E("b"), E("a"), E("unknown"), S("after"))

    ts.skip_subtree()

    assert ts.next_token() == S("after")


def test_capture_subtree_excludes_own_end_tag():
    inner = (S("a"), CharData("1"), E("a"), S("b"), S("c"), E("c"), E("b"))
    ts = stream(*inner, E("extensions"), S("after"))

    assert ts.capture_subtree() == inner
    assert ts.next_token() == S("after")


def test_capture_empty_subtree():
    assert stream(E("extensions")).capture_subtree() == ()


def test_capture_unbalanced_buffer():
    with pytest.raises(UnexpectedEndOfInput):
        stream(S("a"), CharData("1")).capture_subtree()


# ============================================================================
# Error Propagation Tests
# ============================================================================

def test_source_errors_propagate_unchanged():
    error = TransportError("gpx: read failed: boom")

    class FailingSource:
        def next_token(self):
            raise error

    with pytest.raises(TransportError) as exc_info:
        TokenStream(FailingSource()).skip_subtree()

    assert exc_info.value is error


# ============================================================================
# Run Tests
# ============================================================================

if __name__ == '__main__':
    pytest.main([__file__, '-v'])
