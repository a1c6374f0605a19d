"""
Pytest configuration and fixtures for route solution visualizer tests.

Provides reusable path geometries (straight runs, corners, roundabouts)
built in meters around a fixed origin, plus sample lookups and solutions.
"""

import math
from typing import List, Sequence, Tuple

import pytest

import sys
import os
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from constants import EARTH_RADIUS_M


ORIGIN = (51.505, -0.09)
METERS_PER_DEG_LAT = EARTH_RADIUS_M * math.pi / 180

# Unit vectors (north_m, east_m) per compass direction
HEADINGS = {
    "N": (1.0, 0.0),
    "E": (0.0, 1.0),
    "S": (-1.0, 0.0),
    "W": (0.0, -1.0),
}


def offset(origin: Tuple[float, float], north_m: float, east_m: float) -> Tuple[float, float]:
    """Move a (lat, lon) point by a local north/east offset in meters."""
    lat = origin[0] + north_m / METERS_PER_DEG_LAT
    lon = origin[1] + east_m / (METERS_PER_DEG_LAT * math.cos(math.radians(origin[0])))
    return (lat, lon)


def polyline(legs: Sequence[Tuple[str, int]], step_m: float = 20.0,
             origin: Tuple[float, float] = ORIGIN) -> List[Tuple[float, float]]:
    """Build a path from legs of (heading, step count), each step `step_m` long."""
    north = 0.0
    east = 0.0
    path = [offset(origin, north, east)]
    for heading, count in legs:
        dn, de = HEADINGS[heading]
        for _ in range(count):
            north += dn * step_m
            east += de * step_m
            path.append(offset(origin, north, east))
    return path


def arc(radius_m: float, step_deg: float, count: int,
        origin: Tuple[float, float] = ORIGIN) -> List[Tuple[float, float]]:
    """Points on a circle, travelling clockwise, `step_deg` apart."""
    path = []
    for k in range(count):
        theta = math.radians(k * step_deg)
        path.append(offset(origin, radius_m * math.cos(theta), radius_m * math.sin(theta)))
    return path


@pytest.fixture
def straight_path():
    """Ten collinear points heading north, 20 m apart."""
    return polyline([("N", 9)])


@pytest.fixture
def corner_path():
    """East for 180 m, then a single 90 degree left turn north for 180 m.

    The corner vertex is index 9.
    """
    return polyline([("E", 9), ("N", 9)])


@pytest.fixture
def two_corner_path():
    """East, north, east: a left turn near index 9, a right turn near index 18."""
    return polyline([("E", 9), ("N", 9), ("E", 9)])


@pytest.fixture
def roundabout_path():
    """A full loop of radius 25 m sampled every 10 degrees."""
    return arc(radius_m=25.0, step_deg=10.0, count=37)


@pytest.fixture
def sample_lookup():
    """Coordinate lookup stored as (lon, lat)."""
    return {
        1: (-0.09, 51.505),
        2: (-0.091, 51.506),
        3: (-0.092, 51.507),
        4: (-0.093, 51.508),
    }


@pytest.fixture
def grid_lookup():
    """Lookup for vertices 1-19 laid out on the corner path (east then north)."""
    path = polyline([("E", 9), ("N", 9)])
    return {i + 1: (lon, lat) for i, (lat, lon) in enumerate(path)}


@pytest.fixture
def bracketed_solution():
    """Solver output with a bracketed route line."""
    return "Solution cost: 1234\nRoute: [1-2-3-4]\nVehicles: 1\n"


@pytest.fixture
def line_solution():
    """Legacy one-ID-per-line solver output."""
    return "28\n29\n28\n27\n"
