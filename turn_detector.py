"""
Turn detection on cleaned route paths.

Surfaces only the sharp, discrete turns a driver would be told about
("turn left here"). Roundabouts and sweeping bends show up as many small
same-direction bearing changes and are skipped via a lookahead window.

Bearings into and out of each vertex are measured against points two steps
away rather than the immediate neighbours, so single-point jitter does not
register as a turn.
"""

import logging
from typing import List, Optional, Sequence

from constants import (
    TURN_MIN_PATH_POINTS, TURN_ANGLE_THRESHOLD_DEG, TURN_MIN_SPACING_M,
    TURN_BEARING_OFFSET,
    CURVE_MAX_AVG_CHANGE_DEG, CURVE_MIN_ARC_M, CURVE_LOOKAHEAD_M,
    CURVE_WINDOW_SEGMENTS, CURVE_MIN_SEGMENTS,
)
from geo_utils import (
    LatLon,
    angle_difference_degrees,
    bearing_degrees,
    distance_meters,
    signed_angle_difference,
)
from route_export.data_models import TurnDirection, TurnEvent

logger = logging.getLogger(__name__)


def gradual_curve_end(path: Sequence[LatLon], index: int) -> Optional[int]:
    """
    Check whether `index` sits inside a gradual curve.

    The window starts at the segment entering `index` and extends forward
    until it holds CURVE_WINDOW_SEGMENTS segments or CURVE_LOOKAHEAD_M of arc.

    Returns:
        Last path index covered by the curve window, or None if the window is
        not a gradual curve.
    """
    start = index - 1
    if start < 0:
        return None

    bearings = []
    arc_m = 0.0
    j = start
    while (j < len(path) - 1
           and len(bearings) < CURVE_WINDOW_SEGMENTS
           and arc_m < CURVE_LOOKAHEAD_M):
        bearings.append(bearing_degrees(path[j], path[j + 1]))
        arc_m += distance_meters(path[j], path[j + 1])
        j += 1

    if len(bearings) < CURVE_MIN_SEGMENTS:
        return None

    changes = [
        abs(signed_angle_difference(bearings[k - 1], bearings[k]))
        for k in range(1, len(bearings))
    ]
    avg_change = sum(changes) / len(changes)

    # A single sharp change is a turn, however gentle the rest of the window
    if max(changes) >= TURN_ANGLE_THRESHOLD_DEG:
        return None

    if avg_change < CURVE_MAX_AVG_CHANGE_DEG and arc_m > CURVE_MIN_ARC_M:
        return j
    return None


def detect_turns(path: Sequence[LatLon]) -> List[TurnEvent]:
    """
    Detect sharp turns along a cleaned path.

    Args:
        path: Cleaned (lat, lon) path

    Returns:
        TurnEvents ordered by path index, numbered by emission order. Paths
        shorter than TURN_MIN_PATH_POINTS yield an empty list.
    """
    if len(path) < TURN_MIN_PATH_POINTS:
        return []

    offset = TURN_BEARING_OFFSET
    turns: List[TurnEvent] = []
    last_turn_location: Optional[LatLon] = None

    i = offset
    last_index = len(path) - 1 - offset
    while i <= last_index:
        curve_end = gradual_curve_end(path, i)
        if curve_end is not None:
            logger.debug(f"Gradual curve from index {i} to {curve_end}, skipping")
            i = max(curve_end, i + 1)
            continue

        bearing_in = bearing_degrees(path[i - offset], path[i])
        bearing_out = bearing_degrees(path[i], path[i + offset])
        turn_angle = angle_difference_degrees(bearing_in, bearing_out)

        if turn_angle >= TURN_ANGLE_THRESHOLD_DEG:
            far_enough = (
                last_turn_location is None
                or distance_meters(last_turn_location, path[i]) >= TURN_MIN_SPACING_M
            )
            if far_enough:
                signed = signed_angle_difference(bearing_in, bearing_out)
                turn = TurnEvent(
                    sequence=len(turns) + 1,
                    location=path[i],
                    path_index=i,
                    turn_angle_deg=turn_angle,
                    post_turn_bearing_deg=bearing_out,
                    direction=TurnDirection.RIGHT if signed > 0 else TurnDirection.LEFT,
                )
                turns.append(turn)
                last_turn_location = path[i]
                logger.debug(
                    f"Turn {turn.sequence} at index {i}: {turn.instruction} "
                    f"({turn_angle:.1f} deg, leaving at {bearing_out:.1f} deg)"
                )

        i += 1

    return turns
