"""
GPX 1.1 Streaming Decoder - Core Implementation

Recursive-descent decoder over a token stream. Each grammar level is one
"consume children until this element's end tag, dispatching on the child's
qualified name" loop; unknown children are skipped as balanced subtrees.

Architecture:
1. PullParserTokenSource - tokens straight from the byte stream, no tree
2. Find-root - root must be {GPX 1.1}gpx
3. Per-level handler tables - gpx / metadata / trk / trkseg / trkpt
4. Strict/lenient policy - applied only where scalars are parsed
5. Extensions capture - <extensions> of a point is stored as raw tokens and
   interpreted later by an extension codec
"""

import io
import logging
from dataclasses import dataclass
from typing import IO, Callable, Dict, List, Optional, TypeVar, Union

from ..core.constants import (
    BOUNDS_ATTRS,
    DEFAULT_CHUNK_SIZE,
    EXTENSIONS_TAG,
    LATITUDE_ATTR,
    LONGITUDE_ATTR,
    METADATA_TAG,
    NS_GPX11,
    POINT_TAG,
    ROOT_TAG,
    SEGMENT_TAG,
    TRACK_TAG,
)
from ..core.errors import (
    BadRootTag,
    ErrorKind,
    InvalidCoordinate,
    InvalidElevation,
    InvalidNumber,
    InvalidScalar,
    InvalidTime,
    UnsupportedVersion,
)
from ..core.types import (
    Bounds,
    Copyright,
    Document,
    Email,
    Link,
    Metadata,
    Person,
    Point,
    Segment,
    Track,
)
from ..utils.logging import log
from ..utils.scalars import parse_float
from .stream import TokenStream
from .tokens import EndElement, PullParserTokenSource, QName, StartElement

logger = logging.getLogger(__name__)

T = TypeVar("T")

Handler = Callable[[StartElement], None]


@dataclass
class DecoderConfig:
    """Configuration for the GPX decoder."""

    strict: bool = True
    """Abort on any unparsable scalar (False = keep the zero value and continue)"""

    debug: bool = False
    """Log decode progress at INFO instead of DEBUG"""

    chunk_size: int = DEFAULT_CHUNK_SIZE
    """Bytes read from the input stream per tokenizer feed"""


@dataclass(frozen=True)
class DecodeWarning:
    """A scalar failure absorbed in lenient mode."""
    kind: ErrorKind
    message: str


def _gpx(local: str) -> QName:
    return QName(NS_GPX11, local)


class GPXDecoder:
    """
    Decodes one GPX 1.1 document from a byte stream.

    A decoder is single-use: it owns its token stream and builds a fresh
    Document, so separate decoders can run concurrently in separate threads.

    Args:
        stream: Readable binary file object positioned at the document
        strict: Overrides ``config.strict`` when given
        config: Decoder configuration (defaults to strict mode)

    Example:
        ```python
        with open("run.gpx", "rb") as f:
            decoder = GPXDecoder(f, strict=False)
            doc = decoder.decode()
        for warning in decoder.warnings:
            print(warning.kind, warning.message)
        ```
    """

    def __init__(self, stream: IO, strict: Optional[bool] = None, config: Optional[DecoderConfig] = None):
        self.config = config or DecoderConfig()
        self.strict = self.config.strict if strict is None else strict
        self.warnings: List[DecodeWarning] = []
        self._stream = stream
        self._ts: Optional[TokenStream] = None
        self._used = False

    # ------------------------------------------------------------------
    # Entry point
    # ------------------------------------------------------------------

    def decode(self) -> Document:
        """
        Decode the whole document.

        Raises:
            TransportError: The stream or the XML tokenizer failed
            BadRootTag: The root element is not <gpx>
            UnsupportedVersion: The root is not in the GPX 1.1 namespace
            MalformedLeaf: A text element contains a nested element
            InvalidScalar: (strict mode only) an unparsable coordinate,
                elevation, time or number
        """
        if self._used:
            raise RuntimeError("GPXDecoder.decode() can only be called once")
        self._used = True

        self._ts = TokenStream(PullParserTokenSource(self._stream, self.config.chunk_size))
        self._log(f"Starting decode (strict={self.strict})")

        root = self._find_root()
        doc = self._consume_gpx(root)

        self._log(
            f"Decode complete: tracks={len(doc.tracks)}, "
            f"points={sum(1 for _ in doc.points())}, warnings={len(self.warnings)}"
        )
        return doc

    # ------------------------------------------------------------------
    # Shared machinery
    # ------------------------------------------------------------------

    def _log(self, message: str) -> None:
        log(message, debug=self.config.debug)

    def _consume_children(self, handlers: Dict[QName, Handler]) -> None:
        """
        Consume tokens up to the current element's end tag.

        Child start tags found in ``handlers`` are passed to their handler,
        which must consume the child through its end tag; any other child is
        skipped as a balanced subtree. Character data at this level is ignored.
        """
        while True:
            tok = self._ts.next_token()
            if isinstance(tok, StartElement):
                handler = handlers.get(tok.name)
                if handler is None:
                    self._ts.skip_subtree()
                else:
                    handler(tok)
            elif isinstance(tok, EndElement):
                return

    def _apply_policy(self, error: InvalidScalar) -> None:
        """Raise ``error`` in strict mode, otherwise record it as a warning."""
        if self.strict:
            raise error
        self.warnings.append(DecodeWarning(error.kind, str(error)))
        logger.debug("Ignoring %s (lenient mode)", error)

    def _scalar(self, consume: Callable[[], T], make_error: Callable[[ValueError], InvalidScalar]) -> Optional[T]:
        """
        Read a scalar leaf with one of the token stream's ``consume_*`` operations.

        Returns None if the text is unparsable and the policy is lenient.
        MalformedLeaf (a nested element) is never absorbed.
        """
        try:
            return consume()
        except ValueError as e:
            self._apply_policy(make_error(e))
            return None

    def _coordinate(self, se: StartElement, attr: str) -> Optional[float]:
        value = se.get(attr)
        if value is None:
            # Absent coordinate attributes decode as 0.0
            return None
        try:
            return parse_float(value)
        except ValueError as e:
            self._apply_policy(InvalidCoordinate(attr, value, e, element=se.name.local))
            return None

    def _text(self) -> str:
        return self._ts.consume_text().strip()

    # ------------------------------------------------------------------
    # Grammar levels
    # ------------------------------------------------------------------

    def _find_root(self) -> StartElement:
        while True:
            tok = self._ts.next_token()
            if not isinstance(tok, StartElement):
                continue
            if tok.name.local != ROOT_TAG:
                raise BadRootTag(tok.name.local)
            if tok.name.space != NS_GPX11:
                raise UnsupportedVersion(tok.name.space)
            return tok

    def _consume_gpx(self, se: StartElement) -> Document:
        doc = Document(
            version=se.get("version", default=""),
            creator=se.get("creator", default=""),
        )

        def on_metadata(child: StartElement) -> None:
            doc.metadata = self._consume_metadata()

        def on_track(child: StartElement) -> None:
            doc.tracks.append(self._consume_track())

        self._consume_children({
            _gpx(METADATA_TAG): on_metadata,
            _gpx(TRACK_TAG): on_track,
        })
        return doc

    def _consume_metadata(self) -> Metadata:
        metadata = Metadata()

        def on_name(child):
            metadata.name = self._text()

        def on_desc(child):
            metadata.description = self._text()

        def on_keywords(child):
            metadata.keywords = self._text()

        def on_author(child):
            metadata.author = self._consume_person()

        def on_copyright(child):
            metadata.copyright = self._consume_copyright(child)

        def on_link(child):
            metadata.links.append(self._consume_link(child))

        def on_time(child):
            metadata.time = self._scalar(self._ts.consume_timestamp, InvalidTime)

        def on_bounds(child):
            metadata.bounds = self._consume_bounds(child)

        self._consume_children({
            _gpx("name"): on_name,
            _gpx("desc"): on_desc,
            _gpx("keywords"): on_keywords,
            _gpx("author"): on_author,
            _gpx("copyright"): on_copyright,
            _gpx("link"): on_link,
            _gpx("time"): on_time,
            _gpx("bounds"): on_bounds,
        })
        return metadata

    def _consume_person(self) -> Person:
        person = Person()

        def on_name(child):
            person.name = self._text()

        def on_email(child):
            person.email = Email(id=child.get("id", default=""), domain=child.get("domain", default=""))
            self._ts.skip_subtree()

        def on_link(child):
            person.link = self._consume_link(child)

        self._consume_children({
            _gpx("name"): on_name,
            _gpx("email"): on_email,
            _gpx("link"): on_link,
        })
        return person

    def _consume_link(self, se: StartElement) -> Link:
        link = Link(href=se.get("href", default=""))

        def on_text(child):
            link.text = self._text()

        def on_type(child):
            link.type = self._text()

        self._consume_children({
            _gpx("text"): on_text,
            _gpx("type"): on_type,
        })
        return link

    def _consume_copyright(self, se: StartElement) -> Copyright:
        copyright = Copyright(author=se.get("author", default=""))

        def on_year(child):
            copyright.year = self._scalar(self._ts.consume_int, lambda e: InvalidNumber(e, element="year"))

        def on_license(child):
            copyright.license = self._text()

        self._consume_children({
            _gpx("year"): on_year,
            _gpx("license"): on_license,
        })
        return copyright

    def _consume_bounds(self, se: StartElement) -> Bounds:
        values = [self._coordinate(se, attr) for attr in BOUNDS_ATTRS]
        self._ts.skip_subtree()
        return Bounds(*(v if v is not None else 0.0 for v in values))

    def _consume_track(self) -> Track:
        track = Track()

        def on_name(child):
            track.name = self._text()

        def on_cmt(child):
            track.comment = self._text()

        def on_desc(child):
            track.description = self._text()

        def on_src(child):
            track.source = self._text()

        def on_link(child):
            track.links.append(self._consume_link(child))

        def on_number(child):
            track.number = self._scalar(self._ts.consume_int, lambda e: InvalidNumber(e, element="number"))

        def on_type(child):
            track.type = self._text()

        def on_segment(child):
            track.segments.append(self._consume_segment())

        self._consume_children({
            _gpx("name"): on_name,
            _gpx("cmt"): on_cmt,
            _gpx("desc"): on_desc,
            _gpx("src"): on_src,
            _gpx("link"): on_link,
            _gpx("number"): on_number,
            _gpx("type"): on_type,
            _gpx(SEGMENT_TAG): on_segment,
        })
        return track

    def _consume_segment(self) -> Segment:
        segment = Segment()

        def on_point(child):
            segment.points.append(self._consume_point(child))

        self._consume_children({_gpx(POINT_TAG): on_point})
        return segment

    def _consume_point(self, se: StartElement) -> Point:
        point = Point()

        lat = self._coordinate(se, LATITUDE_ATTR)
        if lat is not None:
            point.latitude = lat
        lon = self._coordinate(se, LONGITUDE_ATTR)
        if lon is not None:
            point.longitude = lon

        def on_ele(child):
            ele = self._scalar(self._ts.consume_float, InvalidElevation)
            if ele is not None:
                point.elevation = ele

        def on_time(child):
            point.time = self._scalar(self._ts.consume_timestamp, InvalidTime)

        def on_extensions(child):
            point.extensions = self._ts.capture_subtree()

        self._consume_children({
            _gpx("ele"): on_ele,
            _gpx("time"): on_time,
            _gpx(EXTENSIONS_TAG): on_extensions,
        })
        return point


# ============================================================================
# Module-level entry points
# ============================================================================

def decode(stream: IO, strict: Optional[bool] = None, config: Optional[DecoderConfig] = None) -> Document:
    """
    Decode a GPX 1.1 document from a readable stream.

    Args:
        stream: Binary file object (a text stream is accepted too)
        strict: Abort on unparsable scalars; overrides ``config.strict``
            when given (default: strict)
        config: Full decoder configuration

    Returns:
        The decoded Document
    """
    return GPXDecoder(stream, strict=strict, config=config).decode()


def decode_bytes(data: Union[bytes, str], strict: Optional[bool] = None, config: Optional[DecoderConfig] = None) -> Document:
    """
    Decode a GPX document held in memory.

    ``str`` input is fed to the tokenizer as text, so its XML ``encoding``
    declaration is not applied a second time.
    """
    if isinstance(data, str):
        return decode(io.StringIO(data), strict=strict, config=config)
    return decode(io.BytesIO(data), strict=strict, config=config)


def decode_file(path, strict: Optional[bool] = None, config: Optional[DecoderConfig] = None) -> Document:
    """Decode a GPX file from disk."""
    log(f"Decoding {path}", debug=config.debug if config else False)
    with open(path, "rb") as f:
        return decode(f, strict=strict, config=config)
