"""
GPX Streaming Decoder Module

Single-pass GPX 1.1 decoder over an XML token stream; no element tree is
built.

Key Components:
- tokens.py: Token types, live pull-parser and captured-buffer token sources
- stream.py: TokenStream (text / scalar / skip / capture primitives)
- decoder.py: Recursive-descent GPXDecoder and decode() entry points
"""

from .tokens import (
    BufferTokenSource,
    CharData,
    EndElement,
    PullParserTokenSource,
    QName,
    StartElement,
    Token,
    TokenBuffer,
)
from .stream import TokenStream
from .decoder import DecodeWarning, DecoderConfig, GPXDecoder, decode, decode_bytes, decode_file

__all__ = [
    "BufferTokenSource",
    "CharData",
    "EndElement",
    "PullParserTokenSource",
    "QName",
    "StartElement",
    "Token",
    "TokenBuffer",
    "TokenStream",
    "DecodeWarning",
    "DecoderConfig",
    "GPXDecoder",
    "decode",
    "decode_bytes",
    "decode_file",
]
