"""
Direction-of-travel markers along a route path.
"""

from typing import List, Sequence

from constants import ARROW_MIN_SPACING_M
from geo_utils import LatLon, bearing_degrees, distance_meters, midpoint
from route_export.data_models import DirectionMarker


def sample_directions(path: Sequence[LatLon],
                      min_spacing_m: float = ARROW_MIN_SPACING_M) -> List[DirectionMarker]:
    """
    Place direction markers at a minimum spacing along the path.

    Segment lengths are accumulated; once the distance since the last marker
    reaches `min_spacing_m`, a marker is placed at the current segment's
    midpoint pointing along the segment. Spacing is measured against the
    running total, so many short segments do not drift.

    Args:
        path: Cleaned (lat, lon) path
        min_spacing_m: Minimum distance between markers in meters

    Returns:
        Markers in path order; empty for paths with fewer than 2 points.
    """
    if len(path) < 2:
        return []

    markers = []
    accumulated = 0.0
    last_marker_distance = 0.0

    for i in range(len(path) - 1):
        current, nxt = path[i], path[i + 1]
        accumulated += distance_meters(current, nxt)

        if accumulated - last_marker_distance >= min_spacing_m:
            markers.append(DirectionMarker(
                location=midpoint(current, nxt),
                bearing_deg=bearing_degrees(current, nxt),
                segment_index=i,
                distance_along_m=accumulated,
            ))
            last_marker_distance = accumulated

    return markers
