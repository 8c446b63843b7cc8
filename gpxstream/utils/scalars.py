"""
Scalar parsing for GPX leaf values and attributes.

All parsers raise ``ValueError`` on bad input; whether that is fatal is
decided by the caller (the decoder's strict/lenient policy, or the extension
codecs which always tolerate it).

Only ASCII numerals are accepted. Python's ``float()``/``int()`` also take
digit separators ("1_000") and non-ASCII digits, which are not valid
xsd:decimal / xsd:dateTime lexical forms, so input is matched first.
"""

import re
from datetime import datetime, timezone, timedelta

# xsd:decimal with optional exponent, plus the special values
_DECIMAL_RE = re.compile(
    r"[+-]?(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?|[+-]?(?:inf|infinity|nan)",
    re.ASCII | re.IGNORECASE,
)

_INTEGER_RE = re.compile(r"[+-]?\d+", re.ASCII)

# RFC 3339 date-time: fraction optional (any precision), offset mandatory
_RFC3339_RE = re.compile(
    r"(\d{4})-(\d{2})-(\d{2})[Tt](\d{2}):(\d{2}):(\d{2})"
    r"(?:\.(\d+))?"
    r"(?:([Zz])|([+-])(\d{2}):(\d{2}))",
    re.ASCII,
)


def parse_float(text: str) -> float:
    """
    Parse a decimal number, ignoring surrounding whitespace.

    Examples:
        >>> parse_float(" 346.874267578125 ")
        346.874267578125

        >>> parse_float("1_000")
        Traceback (most recent call last):
        ...
        ValueError: not a decimal number: '1_000'
    """
    value = text.strip()
    if _DECIMAL_RE.fullmatch(value) is None:
        raise ValueError(f"not a decimal number: {text!r}")
    return float(value)


def parse_int(text: str) -> int:
    value = text.strip()
    if _INTEGER_RE.fullmatch(value) is None:
        raise ValueError(f"not an integer: {text!r}")
    return int(value)


def parse_uint(text: str) -> int:
    """Parse a non-negative integer (heart rate, cadence)."""
    value = parse_int(text)
    if value < 0:
        raise ValueError(f"negative value: {text!r}")
    return value


def parse_timestamp(text: str) -> datetime:
    """
    Parse an RFC 3339 timestamp into an aware datetime.

    Fractions finer than microseconds are truncated. A missing UTC offset is
    an error, as RFC 3339 requires one.

    Examples:
        >>> parse_timestamp("2015-12-13T18:35:18Z")
        datetime.datetime(2015, 12, 13, 18, 35, 18, tzinfo=datetime.timezone.utc)

        >>> parse_timestamp("2015-12-13T19:35:18.123456789+01:00").microsecond
        123456
    """
    m = _RFC3339_RE.fullmatch(text.strip())
    if m is None:
        raise ValueError(f"not an RFC 3339 timestamp: {text!r}")

    year, month, day, hour, minute, second = (int(g) for g in m.group(1, 2, 3, 4, 5, 6))
    fraction = m.group(7) or ""
    microsecond = int(fraction[:6].ljust(6, "0")) if fraction else 0

    if m.group(8):
        tz = timezone.utc
    else:
        offset = timedelta(hours=int(m.group(10)), minutes=int(m.group(11)))
        if m.group(9) == "-":
            offset = -offset
        tz = timezone(offset) if offset else timezone.utc

    # datetime() raises ValueError for out-of-range fields (month 13, etc.)
    return datetime(year, month, day, hour, minute, second, microsecond, tzinfo=tz)
