"""
GPX Extension Codecs

Deferred decoding of the raw <extensions> tokens captured on each point.

Key Components:
- base.py: ExtensionCodec protocol, envelope search, ExtensionRegistry
- garmin.py: Garmin TrackPointExtension v1/v2 records and codecs
"""

from .base import ExtensionCodec, ExtensionRegistry, find_envelope, parse_extension
from .garmin import (
    GARMIN_TPX_V1,
    GARMIN_TPX_V2,
    GarminTrackPointExtension,
    GarminTrackPointExtensionV2,
    parse_garmin_trackpoint_extension,
    parse_garmin_trackpoint_extension_v2,
)

# Codecs tried by ExtensionRegistry.parse_all() / the CLI
default_registry = ExtensionRegistry([GARMIN_TPX_V1, GARMIN_TPX_V2])

__all__ = [
    "ExtensionCodec",
    "ExtensionRegistry",
    "find_envelope",
    "parse_extension",
    "default_registry",
    "GARMIN_TPX_V1",
    "GARMIN_TPX_V2",
    "GarminTrackPointExtension",
    "GarminTrackPointExtensionV2",
    "parse_garmin_trackpoint_extension",
    "parse_garmin_trackpoint_extension_v2",
]
