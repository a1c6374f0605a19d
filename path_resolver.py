"""
Maps vertex sequences to geographic paths.

The coordinate lookup stores (longitude, latitude) pairs, as road features are
fetched in GeoJSON order; every path produced here is (latitude, longitude).
When no vertex can be mapped, a deterministic demonstration path is generated
so the route can still be displayed and animated.
"""

import logging
import math
from dataclasses import dataclass, field
from typing import List, Mapping, Optional, Sequence, Tuple

from constants import (
    DUPLICATE_TOLERANCE_DEG,
    SYNTHETIC_CENTER_LAT, SYNTHETIC_CENTER_LON, SYNTHETIC_RADIUS_DEG,
    SYNTHETIC_MIN_STEPS, SYNTHETIC_ANGLE_BASE, SYNTHETIC_RADIUS_BASE,
)
from geo_utils import LatLon

logger = logging.getLogger(__name__)

CoordinateLookup = Mapping[int, Tuple[float, float]]


@dataclass(frozen=True)
class ResolvedPath:
    """Coordinates for a vertex sequence.

    Attributes:
        points: (lat, lon) points in sequence order
        synthetic: True when no vertex could be mapped and the points are a
            generated demonstration path
        unresolved_ids: Vertex IDs that had no coordinate (in sequence order)
    """
    points: List[LatLon]
    synthetic: bool = False
    unresolved_ids: List[int] = field(default_factory=list)


def _lookup_coordinate(lookup: Optional[CoordinateLookup], vertex_id: int) -> Optional[LatLon]:
    """Return (lat, lon) for a vertex, or None if the lookup has no usable entry."""
    if not lookup:
        return None
    coord = lookup.get(vertex_id)
    if not coord or len(coord) < 2:
        return None
    lon, lat = coord[0], coord[1]
    return (float(lat), float(lon))


def resolve(sequence: Sequence[int], lookup: Optional[CoordinateLookup]) -> ResolvedPath:
    """
    Resolve a vertex sequence to a (lat, lon) path.

    Vertices missing from the lookup are skipped, so the path may be shorter
    than the sequence. If nothing resolves, a synthetic path is returned.

    Args:
        sequence: Vertex IDs in route order
        lookup: Mapping of vertex ID to (lon, lat); may be partial or empty

    Returns:
        ResolvedPath with raw (uncleaned) points
    """
    if not sequence:
        return ResolvedPath(points=[])

    points = []
    unresolved = []
    for vertex_id in sequence:
        coord = _lookup_coordinate(lookup, vertex_id)
        if coord is None:
            unresolved.append(vertex_id)
            continue
        points.append(coord)

    if not points:
        logger.warning(
            "No coordinate mappings found for vertex path; "
            "using a demonstration path (load a coordinate lookup for real mapping)"
        )
        return ResolvedPath(
            points=synthetic_path(sequence),
            synthetic=True,
            unresolved_ids=unresolved,
        )

    if unresolved:
        logger.debug(f"Skipped {len(unresolved)} unmapped vertices: {unresolved[:20]}")

    return ResolvedPath(points=points, unresolved_ids=unresolved)


def synthetic_path(sequence: Sequence[int]) -> List[LatLon]:
    """
    Generate a deterministic demonstration path for a vertex sequence.

    Walks outward from a fixed reference point, bending the heading and
    varying the step length by each vertex ID, then smooths the result.
    The output has one more point than the sequence (the start point).
    """
    lat = SYNTHETIC_CENTER_LAT
    lon = SYNTHETIC_CENTER_LON
    path = [(lat, lon)]

    angle = 0.0
    angle_step = (2 * math.pi) / max(len(sequence), SYNTHETIC_MIN_STEPS)

    for vertex_id in sequence:
        step_scale = SYNTHETIC_RADIUS_BASE + (vertex_id % 10) / 100
        lat += SYNTHETIC_RADIUS_DEG * math.cos(angle) * step_scale
        lon += SYNTHETIC_RADIUS_DEG * math.sin(angle) * step_scale
        path.append((lat, lon))

        angle += angle_step * (SYNTHETIC_ANGLE_BASE + (vertex_id % 5) / 50)

    return smooth_path(path)


def smooth_path(path: Sequence[LatLon]) -> List[LatLon]:
    """3-point moving average over interior points; endpoints are kept as-is."""
    if len(path) < 3:
        return list(path)

    smoothed = [path[0]]
    for i in range(1, len(path) - 1):
        prev, curr, nxt = path[i - 1], path[i], path[i + 1]
        smoothed.append((
            (prev[0] + curr[0] + nxt[0]) / 3,
            (prev[1] + curr[1] + nxt[1]) / 3,
        ))
    smoothed.append(path[-1])
    return smoothed


def clean_path(path: Sequence[LatLon], tolerance: float = DUPLICATE_TOLERANCE_DEG) -> List[LatLon]:
    """
    Drop consecutive near-duplicate points.

    A point is kept only if it differs from the last kept point by more than
    `tolerance` degrees on either axis. The first point is always kept.
    """
    if len(path) <= 1:
        return list(path)

    cleaned = [path[0]]
    for current in path[1:]:
        previous = cleaned[-1]
        if abs(current[0] - previous[0]) > tolerance or abs(current[1] - previous[1]) > tolerance:
            cleaned.append(current)

    return cleaned
