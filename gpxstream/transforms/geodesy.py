"""
Derived computations over a decoded document.

Distances are geodesic lengths on the WGS84 ellipsoid computed with pyproj,
summed per segment (the gap between two segments is not travelled distance).
Start/end use the first and last timestamped points in document order.
"""

from datetime import datetime, timedelta
from typing import Optional


def _geod():
    try:
        from pyproj import Geod
    except Exception as e:
        raise RuntimeError("pyproj is required for distance computation but is not installed") from e
    return Geod(ellps="WGS84")


def segment_distance(segment) -> float:
    """
    Geodesic length of one segment in meters.

    Example:
        >>> seg = Segment(points=[Point(latitude=0.0, longitude=0.0),
        ...                       Point(latitude=1.0, longitude=0.0)])
        >>> round(segment_distance(seg))
        110574
    """
    if len(segment.points) < 2:
        return 0.0
    # pyproj expects (lon, lat) order
    lons = [p.longitude for p in segment.points]
    lats = [p.latitude for p in segment.points]
    return float(_geod().line_length(lons, lats))


def distance(document) -> float:
    """Total geodesic length of all track segments in meters."""
    return sum(
        segment_distance(segment)
        for track in document.tracks
        for segment in track.segments
    )


def start_time(document) -> Optional[datetime]:
    for point in document.points():
        if point.time is not None:
            return point.time
    return None


def end_time(document) -> Optional[datetime]:
    end = None
    for point in document.points():
        if point.time is not None:
            end = point.time
    return end


def duration(document) -> timedelta:
    """Time between the first and last timestamped points (zero if fewer than two)."""
    start = start_time(document)
    end = end_time(document)
    if start is None or end is None:
        return timedelta(0)
    return end - start
