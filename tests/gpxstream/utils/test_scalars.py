"""
Unit tests for scalar parsing (numbers, RFC 3339 timestamps)
"""

from datetime import datetime, timedelta, timezone
from pathlib import Path

import pytest

import sys
sys.path.insert(0, str(Path(__file__).parent.parent.parent.parent))

from gpxstream.utils.scalars import parse_float, parse_int, parse_timestamp, parse_uint


# ============================================================================
# Number Tests
# ============================================================================

def test_parse_float():
    assert parse_float("346.874267578125") == 346.874267578125
    assert parse_float("\n  -1.5e2 ") == -150.0


@pytest.mark.parametrize("text", ["", "abc", "1,5", "1_000", "\u0664\u0669", "0x1p3", "1e", "."])
def test_parse_float_invalid(text):
    """Test that only ASCII decimal numerals are accepted."""
    with pytest.raises(ValueError):
        parse_float(text)


@pytest.mark.parametrize("text,expected", [
    ("1.", 1.0),
    (".5", 0.5),
    ("+7", 7.0),
    ("2E3", 2000.0),
])
def test_parse_float_decimal_forms(text, expected):
    assert parse_float(text) == expected


def test_parse_float_special_values():
    assert parse_float("INF") == float("inf")
    assert parse_float("-Infinity") == float("-inf")
    assert parse_float("NaN") != parse_float("NaN")


@pytest.mark.parametrize("text", ["1_000", "\u0662\u0660\u0661\u0665", "12.0", "+", ""])
def test_parse_int_invalid(text):
    with pytest.raises(ValueError):
        parse_int(text)


def test_parse_int_and_uint():
    assert parse_int(" 2015 ") == 2015
    assert parse_int("-3") == -3
    assert parse_uint("90") == 90

    with pytest.raises(ValueError):
        parse_uint("-3")
    with pytest.raises(ValueError):
        parse_uint("1.5")


# ============================================================================
# Timestamp Tests
# ============================================================================

def test_parse_timestamp_utc():
    assert parse_timestamp("2015-12-13T18:35:18Z") == datetime(2015, 12, 13, 18, 35, 18, tzinfo=timezone.utc)


def test_parse_timestamp_offset():
    ts = parse_timestamp("2015-12-13T19:35:18+01:00")

    assert ts.utcoffset() == timedelta(hours=1)
    assert ts == datetime(2015, 12, 13, 18, 35, 18, tzinfo=timezone.utc)


def test_parse_timestamp_zero_offset_is_utc():
    assert parse_timestamp("2015-12-13T18:35:18+00:00").tzinfo is timezone.utc


def test_parse_timestamp_fraction_truncated():
    assert parse_timestamp("2015-12-13T18:35:18.123456789Z").microsecond == 123456
    assert parse_timestamp("2015-12-13T18:35:18.5Z").microsecond == 500000


@pytest.mark.parametrize("text", [
    "2015-12-13T18:35:18",
    "2015-12-13 18:35",
    "2015-13-13T18:35:18Z",
    "\u0662\u0660\u0661\u0665-12-13T18:35:18Z",
    "2015-12-13T18:35:18Z\n2015-12-13T18:35:18Z",
    "yesterday",
    "",
])
def test_parse_timestamp_invalid(text):
    with pytest.raises(ValueError):
        parse_timestamp(text)


# ============================================================================
# Run Tests
# ============================================================================

if __name__ == '__main__':
    pytest.main([__file__, '-v'])
