"""
Constants for GPX 1.1 decoding.

This module defines the XML namespaces, element names and reader parameters
used throughout the decoder and the extension codecs.
"""

# ============================================================================
# XML Namespaces
# ============================================================================

NS = {
    "gpx": "http://www.topografix.com/GPX/1/1",
    "gpx10": "http://www.topografix.com/GPX/1/0",  # not supported
    "gpxtpx": "http://www.garmin.com/xmlschemas/TrackPointExtension/v1",
    "gpxtpx2": "http://www.garmin.com/xmlschemas/TrackPointExtension/v2",
}

NS_GPX11 = NS["gpx"]

# ============================================================================
# Element / Attribute Names
# ============================================================================

ROOT_TAG = "gpx"

# Children of <gpx> handled by the decoder; everything else (wpt, rte,
# gpx-level extensions) is skipped as an unknown subtree
METADATA_TAG = "metadata"
TRACK_TAG = "trk"
SEGMENT_TAG = "trkseg"
POINT_TAG = "trkpt"
EXTENSIONS_TAG = "extensions"

LATITUDE_ATTR = "lat"
LONGITUDE_ATTR = "lon"

# Attributes of <bounds>, in model order
BOUNDS_ATTRS = ("minlat", "minlon", "maxlat", "maxlon")

# Envelope element of Garmin's TrackPointExtension (v1 and v2)
GARMIN_TPX_ENVELOPE = "TrackPointExtension"

# ============================================================================
# Reader Parameters
# ============================================================================

# Bytes read from the input stream per tokenizer feed
DEFAULT_CHUNK_SIZE = 64 * 1024
