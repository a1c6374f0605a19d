"""
Spherical geometry helpers for route paths.

All coordinates are (lat, lon) tuples in decimal degrees.
"""

import math
from typing import Sequence, Tuple

from constants import EARTH_RADIUS_M

LatLon = Tuple[float, float]


def distance_meters(a: LatLon, b: LatLon) -> float:
    """Great-circle (haversine) distance between two points in meters."""
    lat1 = math.radians(a[0])
    lat2 = math.radians(b[0])
    d_lat = math.radians(b[0] - a[0])
    d_lon = math.radians(b[1] - a[1])
    h = (math.sin(d_lat / 2) ** 2
         + math.cos(lat1) * math.cos(lat2) * math.sin(d_lon / 2) ** 2)
    return EARTH_RADIUS_M * 2 * math.atan2(math.sqrt(h), math.sqrt(1 - h))


def bearing_degrees(a: LatLon, b: LatLon) -> float:
    """Initial compass bearing from a to b in degrees [0, 360).

    0 is north, 90 is east. Coincident points give 0; callers are expected
    to avoid degenerate segments.
    """
    lat1 = math.radians(a[0])
    lat2 = math.radians(b[0])
    d_lon = math.radians(b[1] - a[1])

    y = math.sin(d_lon) * math.cos(lat2)
    x = math.cos(lat1) * math.sin(lat2) - math.sin(lat1) * math.cos(lat2) * math.cos(d_lon)

    return (math.degrees(math.atan2(y, x)) + 360) % 360


def signed_angle_difference(from_bearing: float, to_bearing: float) -> float:
    """Signed change from one bearing to another, normalized to (-180, 180].

    Positive values are clockwise (a right turn).
    """
    diff = (to_bearing - from_bearing) % 360
    if diff > 180:
        diff -= 360
    return diff


def angle_difference_degrees(b1: float, b2: float) -> float:
    """Smallest absolute difference between two bearings, in [0, 180].

    Handles the 360/0 wraparound, so diff(350, 10) == 20.
    """
    return abs(signed_angle_difference(b1, b2))


def midpoint(a: LatLon, b: LatLon) -> LatLon:
    """Arithmetic mean of two coordinates.

    Only valid at local scale; segments on a route are short enough that the
    difference from the geodesic midpoint is negligible.
    """
    return ((a[0] + b[0]) / 2, (a[1] + b[1]) / 2)


def path_length_meters(path: Sequence[LatLon]) -> float:
    """Sum of consecutive great-circle distances along a path."""
    total = 0.0
    for i in range(1, len(path)):
        total += distance_meters(path[i - 1], path[i])
    return total


def path_length_km(path: Sequence[LatLon]) -> float:
    """Path length in kilometers."""
    return path_length_meters(path) / 1000.0
