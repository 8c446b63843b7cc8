"""
Error taxonomy for GPX decoding.

Every failure raised by the decoder or an extension codec is a ``GPXError``
carrying an ``ErrorKind``, so callers can either catch a specific class or
switch on ``err.kind``.

Fatal errors unwind straight to the ``decode()`` caller. The scalar errors
(``InvalidScalar`` subclasses) are only raised in strict mode; in lenient mode
the decoder records them as warnings and keeps the field at its zero value.
"""

from enum import Enum
from typing import Optional


class ErrorKind(Enum):
    """Closed set of decode failure kinds."""

    TRANSPORT = "transport"
    BAD_ROOT_TAG = "bad_root_tag"
    UNSUPPORTED_VERSION = "unsupported_version"
    MALFORMED_LEAF = "malformed_leaf"
    INVALID_COORDINATE = "invalid_coordinate"
    INVALID_ELEVATION = "invalid_elevation"
    INVALID_TIME = "invalid_time"
    INVALID_NUMBER = "invalid_number"
    EXTENSION_NOT_PRESENT = "extension_not_present"


class GPXError(Exception):
    """Base class of all gpxstream errors."""

    kind: ErrorKind


class TransportError(GPXError):
    """The byte stream or the XML tokenizer failed (I/O error, malformed XML)."""

    kind = ErrorKind.TRANSPORT


class UnexpectedEndOfInput(TransportError):
    """A token source ran out of tokens."""


class BadRootTag(GPXError):
    """The first element of the document is not <gpx>."""

    kind = ErrorKind.BAD_ROOT_TAG

    def __init__(self, tag: str):
        super().__init__(f"gpx: root element must be <gpx>, got <{tag}>")
        self.tag = tag


class UnsupportedVersion(GPXError):
    """The root element is not in the GPX 1.1 namespace."""

    kind = ErrorKind.UNSUPPORTED_VERSION

    def __init__(self, namespace: str):
        super().__init__(
            f"gpx: can only parse GPX 1.1 documents (root namespace {namespace!r})"
        )
        self.namespace = namespace


class MalformedLeaf(GPXError):
    """A text-only element contains a nested element."""

    kind = ErrorKind.MALFORMED_LEAF

    def __init__(self, tag: str):
        super().__init__(f"gpx: unexpected nested element <{tag}> while reading text")
        self.tag = tag


class InvalidScalar(GPXError):
    """Base class for unparsable scalar values."""

    element: str = ""

    def __init__(self, reason: Exception, element: Optional[str] = None):
        if element is not None:
            self.element = element
        self.reason = reason
        super().__init__(f"gpx: invalid {self._field()}: {reason}")

    def _field(self) -> str:
        return f"<{self.element}>"


class InvalidCoordinate(InvalidScalar):
    """A lat/lon style attribute could not be parsed as a float."""

    kind = ErrorKind.INVALID_COORDINATE

    def __init__(self, attribute: str, value: str, reason: Exception, element: str = "trkpt"):
        self.attribute = attribute
        self.value = value
        super().__init__(reason, element)

    def _field(self) -> str:
        return f"<{self.element}> {self.attribute}"


class InvalidElevation(InvalidScalar):
    kind = ErrorKind.INVALID_ELEVATION
    element = "ele"


class InvalidTime(InvalidScalar):
    kind = ErrorKind.INVALID_TIME
    element = "time"


class InvalidNumber(InvalidScalar):
    """An integer field (copyright year, track number) could not be parsed."""

    kind = ErrorKind.INVALID_NUMBER


class ExtensionNotPresent(GPXError):
    """
    The requested extension envelope is not in the token buffer.

    This is an expected outcome for points without the extension, not a
    structural failure of the buffer.
    """

    kind = ErrorKind.EXTENSION_NOT_PRESENT

    def __init__(self, namespace: str, envelope: str):
        super().__init__(f"gpx: no such extension {{{namespace}}}{envelope}")
        self.namespace = namespace
        self.envelope = envelope
