"""
Type definitions for the decoded GPX document model.

The decoder builds these dataclasses bottom-up and returns the finished
``Document``; nothing is shared between documents. A point's extension
content is kept as an immutable ``TokenBuffer`` and only interpreted on demand
by an extension codec (see ``gpxstream.extensions``).
"""

from dataclasses import dataclass, field
from datetime import datetime, timedelta
from typing import TYPE_CHECKING, List, Optional

from ..transforms import geodesy

if TYPE_CHECKING:
    from ..streaming.tokens import TokenBuffer


@dataclass
class Link:
    """A <link> element: ``href`` attribute plus optional text and MIME type."""
    href: str = ""
    text: str = ""
    type: str = ""


@dataclass
class Email:
    """An <email> element, split into id and domain attributes."""
    id: str = ""
    domain: str = ""

    @property
    def address(self) -> str:
        if not self.id and not self.domain:
            return ""
        return f"{self.id}@{self.domain}"


@dataclass
class Person:
    name: str = ""
    email: Email = field(default_factory=Email)
    link: Link = field(default_factory=Link)


@dataclass
class Copyright:
    author: str = ""
    year: Optional[int] = None
    license: str = ""


@dataclass
class Bounds:
    min_latitude: float = 0.0
    min_longitude: float = 0.0
    max_latitude: float = 0.0
    max_longitude: float = 0.0


@dataclass
class Metadata:
    """
    Descriptive information about a GPX document.

    Attributes:
        name: Document name
        description: <desc> text
        keywords: <keywords> text
        author: Author person
        copyright: Copyright holder, year and license
        links: <link> elements in document order
        time: Creation time (None if absent or unparsable in lenient mode)
        bounds: Declared bounding box
    """
    name: str = ""
    description: str = ""
    keywords: str = ""
    author: Person = field(default_factory=Person)
    copyright: Copyright = field(default_factory=Copyright)
    links: List[Link] = field(default_factory=list)
    time: Optional[datetime] = None
    bounds: Bounds = field(default_factory=Bounds)


@dataclass
class Point:
    """
    A track point.

    Attributes:
        latitude: ``lat`` attribute in degrees (0.0 if absent, or unparsable in lenient mode)
        longitude: ``lon`` attribute in degrees (0.0 if absent, or unparsable in lenient mode)
        elevation: <ele> in meters (0.0 if absent, or unparsable in lenient mode)
        time: <time> (None if absent, or unparsable in lenient mode)
        extensions: Raw tokens of the <extensions> child, or None if the point has none
    """
    latitude: float = 0.0
    longitude: float = 0.0
    elevation: float = 0.0
    time: Optional[datetime] = None
    extensions: Optional["TokenBuffer"] = None


@dataclass
class Segment:
    points: List[Point] = field(default_factory=list)


@dataclass
class Track:
    name: str = ""
    comment: str = ""
    description: str = ""
    source: str = ""
    links: List[Link] = field(default_factory=list)
    number: Optional[int] = None
    type: str = ""
    segments: List[Segment] = field(default_factory=list)


@dataclass
class Document:
    """
    A decoded GPX 1.1 document.

    Attributes:
        version: ``version`` attribute of <gpx>, verbatim ("" if absent)
        creator: ``creator`` attribute of <gpx>, verbatim ("" if absent)
        metadata: Document metadata
        tracks: Tracks in document order
    """
    version: str = ""
    creator: str = ""
    metadata: Metadata = field(default_factory=Metadata)
    tracks: List[Track] = field(default_factory=list)

    def points(self):
        """Iterate over every track point in document order."""
        for track in self.tracks:
            for segment in track.segments:
                yield from segment.points

    def start(self) -> Optional[datetime]:
        return geodesy.start_time(self)

    def end(self) -> Optional[datetime]:
        return geodesy.end_time(self)

    def duration(self) -> timedelta:
        return geodesy.duration(self)

    def distance(self) -> float:
        """Geodesic length of all segments in meters (WGS84)."""
        return geodesy.distance(self)
