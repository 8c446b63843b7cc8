"""
XML token types and token sources.

A token source produces a flat sequence of structural tokens: element starts
(namespace, local name, attributes), element ends and character data.
Comments, processing instructions and the doctype are not structural and are
never emitted.

Two sources are provided:

1. ``PullParserTokenSource`` - live tokens from a byte stream, fed chunk by
   chunk into ``xml.etree.ElementTree.XMLParser`` with a collecting target
   (no element tree is built, memory stays O(chunk))
2. ``BufferTokenSource`` - replays a finite, previously captured buffer, used
   to re-parse extension content after the main decode pass

All tokens are frozen, so a captured buffer is a verbatim copy that the live
parser can never mutate afterwards.
"""

import xml.etree.ElementTree as ET
from collections import deque
from dataclasses import dataclass
from typing import IO, Deque, List, NamedTuple, Optional, Sequence, Tuple, Union

from ..core.constants import DEFAULT_CHUNK_SIZE
from ..core.errors import TransportError, UnexpectedEndOfInput


class QName(NamedTuple):
    """Namespace-qualified XML name ("" space = no namespace)."""
    space: str
    local: str

    def __str__(self) -> str:
        return f"{{{self.space}}}{self.local}" if self.space else self.local


def split_tag(tag: str) -> QName:
    """
    Split an ElementTree "{namespace}local" tag into a QName.

    Examples:
        >>> split_tag("{http://www.topografix.com/GPX/1/1}trkpt")
        QName(space='http://www.topografix.com/GPX/1/1', local='trkpt')

        >>> split_tag("lat")
        QName(space='', local='lat')
    """
    if tag.startswith("{"):
        space, local = tag[1:].split("}", 1)
        return QName(space, local)
    return QName("", tag)


@dataclass(frozen=True)
class StartElement:
    name: QName
    attrs: Tuple[Tuple[QName, str], ...] = ()

    def get(self, local: str, space: str = "", default: Optional[str] = None) -> Optional[str]:
        """Return the value of attribute ``{space}local``, or ``default``."""
        for name, value in self.attrs:
            if name.local == local and name.space == space:
                return value
        return default


@dataclass(frozen=True)
class EndElement:
    name: QName


@dataclass(frozen=True)
class CharData:
    data: str


Token = Union[StartElement, EndElement, CharData]

# Captured structural tokens of one subtree (wrapper element excluded)
TokenBuffer = Tuple[Token, ...]


class _TokenCollector:
    """
    XMLParser target queueing tokens in document order.

    Adjacent character data is merged into one CharData token, so the token
    sequence does not depend on where the input was split into chunks.
    """

    def __init__(self):
        self.tokens: Deque[Token] = deque()
        self._text: List[str] = []

    def _flush(self):
        if self._text:
            self.tokens.append(CharData("".join(self._text)))
            self._text = []

    def start(self, tag, attrib):
        self._flush()
        attrs = tuple((split_tag(k), v) for k, v in attrib.items())
        self.tokens.append(StartElement(split_tag(tag), attrs))

    def end(self, tag):
        self._flush()
        self.tokens.append(EndElement(split_tag(tag)))

    def data(self, data):
        self._text.append(data)

    def close(self):
        self._flush()
        return None


class PullParserTokenSource:
    """
    Token source backed by a live XML tokenizer over a byte stream.

    Args:
        stream: Readable binary (or text) file object
        chunk_size: Number of bytes read per tokenizer feed

    Raises (from next_token):
        TransportError: The stream failed or the XML is malformed
        UnexpectedEndOfInput: All tokens have been consumed
    """

    def __init__(self, stream: IO, chunk_size: int = DEFAULT_CHUNK_SIZE):
        self._stream = stream
        self._chunk_size = chunk_size
        self._collector = _TokenCollector()
        self._parser = ET.XMLParser(target=self._collector)
        self._closed = False

    def next_token(self) -> Token:
        tokens = self._collector.tokens
        while not tokens:
            if self._closed:
                raise UnexpectedEndOfInput("gpx: unexpected end of input")
            self._fill()
        return tokens.popleft()

    def _fill(self) -> None:
        try:
            chunk = self._stream.read(self._chunk_size)
        except OSError as e:
            raise TransportError(f"gpx: read failed: {e}") from e

        try:
            if chunk:
                self._parser.feed(chunk)
            else:
                self._closed = True
                self._parser.close()
        except ET.ParseError as e:
            self._closed = True
            raise TransportError(f"gpx: invalid XML: {e}") from e


class BufferTokenSource:
    """Token source replaying a captured token buffer."""

    def __init__(self, tokens: Sequence[Token]):
        self._tokens = tokens
        self._pos = 0

    def next_token(self) -> Token:
        if self._pos >= len(self._tokens):
            raise UnexpectedEndOfInput("gpx: end of token buffer")
        tok = self._tokens[self._pos]
        self._pos += 1
        return tok
