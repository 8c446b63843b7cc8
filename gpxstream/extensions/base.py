"""
Extension codec protocol.

A point's ``extensions`` field holds the raw tokens of its <extensions>
element. An ``ExtensionCodec`` re-parses such a buffer on demand:

1. Scan the buffer for its envelope element ({namespace}envelope), skipping
   sibling subtrees (other vendors' extensions)
2. Decode the envelope's known children, each a text leaf converted with the
   field's converter; conversion failures leave the field at None
3. Skip unknown children; the envelope's end tag ends the parse

Codecs are independent of each other and of the decoder: each one builds its
own token stream over the (immutable) buffer, so any number of them can read
the same point, at any time, from any thread.
"""

import logging
from typing import Any, Callable, Dict, Iterable, Mapping, Optional, Sequence, Tuple

from ..core.errors import ExtensionNotPresent, UnexpectedEndOfInput
from ..streaming.stream import TokenStream
from ..streaming.tokens import BufferTokenSource, EndElement, QName, StartElement, Token

logger = logging.getLogger(__name__)

# child local name -> (record attribute, converter)
FieldTable = Mapping[str, Tuple[str, Callable[[str], Any]]]


def find_envelope(ts: TokenStream, envelope: QName) -> bool:
    """
    Advance ``ts`` past the start tag of ``envelope``.

    Returns:
        True if the envelope was found (its start tag consumed), False if the
        buffer ended first
    """
    while True:
        try:
            tok = ts.next_token()
        except UnexpectedEndOfInput:
            return False
        if isinstance(tok, StartElement):
            if tok.name == envelope:
                return True
            ts.skip_subtree()
        elif isinstance(tok, EndElement):
            return False


class ExtensionCodec:
    """
    Decoder for one vendor extension envelope.

    Args:
        name: Registry key (e.g. "garmin_tpx_v1")
        namespace: Namespace URI of the envelope and its fields
        envelope: Local name of the envelope element
        fields: Field table mapping child local names to
            (record attribute, converter)
        factory: Record constructor, called with the decoded fields as
            keyword arguments

    Example:
        ```python
        codec = ExtensionCodec(
            "acme", "http://example.com/acme/v1", "PointExtension",
            {"power": ("power", parse_uint)}, AcmePointExtension,
        )
        record = codec.parse(point.extensions)
        ```
    """

    def __init__(self, name: str, namespace: str, envelope: str, fields: FieldTable, factory: Callable[..., Any]):
        self.name = name
        self.namespace = namespace
        self.envelope = envelope
        self.fields = fields
        self.factory = factory

    @property
    def qname(self) -> QName:
        return QName(self.namespace, self.envelope)

    def parse(self, tokens: Optional[Sequence[Token]]):
        """
        Decode the extension record from a point's extension tokens.

        Raises:
            ExtensionNotPresent: ``tokens`` is None/empty or has no envelope
            MalformedLeaf: A field element contains a nested element
        """
        if not tokens:
            raise ExtensionNotPresent(self.namespace, self.envelope)

        ts = TokenStream(BufferTokenSource(tokens))
        if not find_envelope(ts, self.qname):
            raise ExtensionNotPresent(self.namespace, self.envelope)

        values: Dict[str, Any] = {}
        while True:
            tok = ts.next_token()
            if isinstance(tok, StartElement):
                entry = self.fields.get(tok.name.local) if tok.name.space == self.namespace else None
                if entry is None:
                    ts.skip_subtree()
                    continue
                attr, convert = entry
                text = ts.consume_text()
                try:
                    values[attr] = convert(text)
                except ValueError:
                    # Extension content is best-effort
                    logger.debug("Ignoring unparsable %s %s: %r", self.name, tok.name.local, text)
            elif isinstance(tok, EndElement):
                return self.factory(**values)

    def __repr__(self) -> str:
        return f"ExtensionCodec({self.name!r}, {str(self.qname)!r})"


def parse_extension(tokens: Optional[Sequence[Token]], codec: ExtensionCodec):
    """Decode ``codec``'s record from an extension token buffer."""
    return codec.parse(tokens)


class ExtensionRegistry:
    """
    Named set of extension codecs.

    New vendor extensions plug in by registering a codec; the decoder itself
    never changes.
    """

    def __init__(self, codecs: Iterable[ExtensionCodec] = ()):
        self._codecs: Dict[str, ExtensionCodec] = {}
        for codec in codecs:
            self.register(codec)

    def register(self, codec: ExtensionCodec) -> None:
        if codec.name in self._codecs:
            raise ValueError(f"Extension codec {codec.name!r} is already registered")
        self._codecs[codec.name] = codec

    def get(self, name: str) -> ExtensionCodec:
        return self._codecs[name]

    def names(self):
        return list(self._codecs)

    def parse_all(self, tokens: Optional[Sequence[Token]]) -> Dict[str, Any]:
        """
        Run every registered codec over ``tokens``.

        Returns:
            Dictionary of {codec name: record} for the envelopes present
        """
        records: Dict[str, Any] = {}
        for name, codec in self._codecs.items():
            try:
                records[name] = codec.parse(tokens)
            except ExtensionNotPresent:
                continue
        return records

    def __contains__(self, name: str) -> bool:
        return name in self._codecs

    def __len__(self) -> int:
        return len(self._codecs)
