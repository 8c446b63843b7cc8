"""
gpxstream - Streaming GPX 1.1 decoder

Decodes a GPX 1.1 document into typed tracks, segments and points in a single
pass over the XML token stream, with a strict or lenient policy for
unparsable values. Each point's <extensions> content is kept as raw tokens
and decoded on demand by extension codecs (Garmin TrackPointExtension
included).

Quick start:
    from gpxstream import ExtensionNotPresent, decode_file, parse_garmin_trackpoint_extension

    doc = decode_file("run.gpx", strict=False)
    for point in doc.points():
        try:
            tpx = parse_garmin_trackpoint_extension(point.extensions)
        except ExtensionNotPresent:
            continue
        print(point.time, tpx.heart_rate)
"""

from .core.errors import (
    BadRootTag,
    ErrorKind,
    ExtensionNotPresent,
    GPXError,
    InvalidCoordinate,
    InvalidElevation,
    InvalidNumber,
    InvalidScalar,
    InvalidTime,
    MalformedLeaf,
    TransportError,
    UnexpectedEndOfInput,
    UnsupportedVersion,
)
from .core.types import (
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
from .streaming import (
    DecodeWarning,
    DecoderConfig,
    GPXDecoder,
    decode,
    decode_bytes,
    decode_file,
)
from .extensions import (
    ExtensionCodec,
    ExtensionRegistry,
    GarminTrackPointExtension,
    GarminTrackPointExtensionV2,
    default_registry,
    parse_extension,
    parse_garmin_trackpoint_extension,
    parse_garmin_trackpoint_extension_v2,
)

__version__ = "1.0.0"
__all__ = [
    "decode", "decode_bytes", "decode_file", "GPXDecoder", "DecoderConfig", "DecodeWarning",
    "Document", "Metadata", "Person", "Email", "Link", "Copyright", "Bounds",
    "Track", "Segment", "Point",
    "GPXError", "ErrorKind", "TransportError", "UnexpectedEndOfInput", "BadRootTag",
    "UnsupportedVersion", "MalformedLeaf", "InvalidScalar", "InvalidCoordinate",
    "InvalidElevation", "InvalidTime", "InvalidNumber", "ExtensionNotPresent",
    "ExtensionCodec", "ExtensionRegistry", "default_registry", "parse_extension",
    "GarminTrackPointExtension", "GarminTrackPointExtensionV2",
    "parse_garmin_trackpoint_extension", "parse_garmin_trackpoint_extension_v2",
]
