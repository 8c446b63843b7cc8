"""
Garmin TrackPointExtension codecs.

Schemas:
- v1: https://www8.garmin.com/xmlschemas/TrackPointExtensionv1.xsd
- v2: https://www8.garmin.com/xmlschemas/TrackPointExtensionv2.xsd

Typical point content:
    <extensions>
      <gpxtpx:TrackPointExtension>
        <gpxtpx:hr>142</gpxtpx:hr>
        <gpxtpx:cad>90</gpxtpx:cad>
      </gpxtpx:TrackPointExtension>
    </extensions>
"""

from dataclasses import dataclass
from typing import Optional, Sequence

from ..core.constants import GARMIN_TPX_ENVELOPE, NS
from ..streaming.tokens import Token
from ..utils.scalars import parse_float, parse_uint
from .base import ExtensionCodec

GARMIN_TPX_V1_NS = NS["gpxtpx"]
GARMIN_TPX_V2_NS = NS["gpxtpx2"]


@dataclass(frozen=True)
class GarminTrackPointExtension:
    """
    Garmin TrackPointExtension v1 record. Absent or unparsable fields are None.

    Attributes:
        air_temperature: <atemp> in degrees Celsius
        water_temperature: <wtemp> in degrees Celsius
        depth: <depth> diving depth in meters
        heart_rate: <hr> beats per minute
        cadence: <cad> revolutions per minute
    """
    air_temperature: Optional[float] = None
    water_temperature: Optional[float] = None
    depth: Optional[float] = None
    heart_rate: Optional[int] = None
    cadence: Optional[int] = None


@dataclass(frozen=True)
class GarminTrackPointExtensionV2(GarminTrackPointExtension):
    """v2 record: adds <speed> (m/s), <course> and <bearing> (degrees)."""
    speed: Optional[float] = None
    course: Optional[float] = None
    bearing: Optional[float] = None


_V1_FIELDS = {
    "atemp": ("air_temperature", parse_float),
    "wtemp": ("water_temperature", parse_float),
    "depth": ("depth", parse_float),
    "hr": ("heart_rate", parse_uint),
    "cad": ("cadence", parse_uint),
}

_V2_FIELDS = dict(
    _V1_FIELDS,
    speed=("speed", parse_float),
    course=("course", parse_float),
    bearing=("bearing", parse_float),
)

GARMIN_TPX_V1 = ExtensionCodec(
    "garmin_tpx_v1", GARMIN_TPX_V1_NS, GARMIN_TPX_ENVELOPE, _V1_FIELDS, GarminTrackPointExtension,
)

GARMIN_TPX_V2 = ExtensionCodec(
    "garmin_tpx_v2", GARMIN_TPX_V2_NS, GARMIN_TPX_ENVELOPE, _V2_FIELDS, GarminTrackPointExtensionV2,
)


def parse_garmin_trackpoint_extension(tokens: Optional[Sequence[Token]]) -> GarminTrackPointExtension:
    """
    Parse Garmin's TrackPointExtension v1 from a point's extension tokens.

    Raises:
        ExtensionNotPresent: The point has no v1 TrackPointExtension
    """
    return GARMIN_TPX_V1.parse(tokens)


def parse_garmin_trackpoint_extension_v2(tokens: Optional[Sequence[Token]]) -> GarminTrackPointExtensionV2:
    """Parse Garmin's TrackPointExtension v2 from a point's extension tokens."""
    return GARMIN_TPX_V2.parse(tokens)
