"""
Token stream with GPX-aware primitives.

``TokenStream`` wraps any token source (anything with ``next_token()``) and
adds the few derived operations the decoder and extension codecs need. It is
policy-free: scalar parse failures are raised as ``ValueError`` and the caller
decides whether they are fatal.
"""

from datetime import datetime
from typing import List

from ..core.errors import MalformedLeaf
from ..utils.scalars import parse_float, parse_int, parse_timestamp
from .tokens import CharData, EndElement, StartElement, Token, TokenBuffer


class TokenStream:
    """
    Derived token operations over a token source.

    All operations assume the start tag of the current element has already
    been consumed, and return once its matching end tag has been consumed.
    """

    def __init__(self, source):
        self._source = source

    def next_token(self) -> Token:
        # Source errors propagate unchanged
        return self._source.next_token()

    def consume_text(self) -> str:
        """
        Accumulate character data up to the current element's end tag.

        Raises:
            MalformedLeaf: A nested element was found (only leaf elements may
                be read as text)
        """
        parts: List[str] = []
        while True:
            tok = self.next_token()
            if isinstance(tok, CharData):
                parts.append(tok.data)
            elif isinstance(tok, EndElement):
                return "".join(parts)
            elif isinstance(tok, StartElement):
                raise MalformedLeaf(tok.name.local)

    def consume_float(self) -> float:
        """Read the current leaf as a float (ValueError on bad text)."""
        return parse_float(self.consume_text())

    def consume_int(self) -> int:
        return parse_int(self.consume_text())

    def consume_timestamp(self) -> datetime:
        """Read the current leaf as an RFC 3339 timestamp (ValueError on bad text)."""
        return parse_timestamp(self.consume_text())

    def skip_subtree(self) -> None:
        """Discard tokens up to and including the current element's end tag."""
        depth = 0
        while True:
            tok = self.next_token()
            if isinstance(tok, StartElement):
                depth += 1
            elif isinstance(tok, EndElement):
                if depth == 0:
                    return
                depth -= 1

    def capture_subtree(self) -> TokenBuffer:
        """
        Like ``skip_subtree`` but return the consumed tokens.

        The current element's own end tag is consumed but not included, so the
        result is the balanced token sequence of the element's children.
        """
        captured: List[Token] = []
        depth = 0
        while True:
            tok = self.next_token()
            if isinstance(tok, StartElement):
                depth += 1
            elif isinstance(tok, EndElement):
                if depth == 0:
                    return tuple(captured)
                depth -= 1
            captured.append(tok)
