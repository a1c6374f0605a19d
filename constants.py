"""
Constants for the route solution visualizer.

Centralized definitions for geometry thresholds, synthetic path parameters,
and preview rendering settings.
"""

from typing import Tuple
from dataclasses import dataclass


# =============================================================================
# Geometry
# =============================================================================

EARTH_RADIUS_M = 6_371_000.0
KM_TO_MILES = 0.621371


# =============================================================================
# Path Cleaning
# =============================================================================

# Absolute per-axis tolerance in degrees (not distance based)
DUPLICATE_TOLERANCE_DEG = 0.000001


# =============================================================================
# Synthetic Fallback Path
# =============================================================================

SYNTHETIC_CENTER_LAT = 51.505
SYNTHETIC_CENTER_LON = -0.09
SYNTHETIC_RADIUS_DEG = 0.05
SYNTHETIC_MIN_STEPS = 10        # Angle step is 2*pi / max(len, this)
SYNTHETIC_ANGLE_BASE = 0.7      # Per-step angle scale: base + (id % 5) / 50
SYNTHETIC_RADIUS_BASE = 0.3     # Per-step radius scale: base + (id % 10) / 100


# =============================================================================
# Turn Detection
# =============================================================================

TURN_MIN_PATH_POINTS = 5
TURN_ANGLE_THRESHOLD_DEG = 30.0     # Minimum stabilized bearing change
TURN_MIN_SPACING_M = 30.0           # Minimum distance between emitted turns
TURN_BEARING_OFFSET = 2             # Points behind/ahead for stabilized bearings
TURN_SHARP_ANGLE_DEG = 100.0        # Above this a turn is reported as "sharp"

# Gradual curve (roundabout / sweeping bend) lookahead
CURVE_MAX_AVG_CHANGE_DEG = 10.0
CURVE_MIN_ARC_M = 20.0
CURVE_LOOKAHEAD_M = 50.0
CURVE_WINDOW_SEGMENTS = 6
CURVE_MIN_SEGMENTS = 3


# =============================================================================
# Direction Markers
# =============================================================================

ARROW_MIN_SPACING_M = 40.0


# =============================================================================
# Navigation
# =============================================================================

NAV_SIMULATION_DIVISOR = 40     # Simulation advances len(route) // this points


# =============================================================================
# Preview Colors (RGB format for Pillow)
# =============================================================================

@dataclass(frozen=True)
class Colors:
    """Preview colors in RGB format."""
    WHITE: Tuple[int, int, int] = (255, 255, 255)
    BLACK: Tuple[int, int, int] = (0, 0, 0)
    BACKGROUND: Tuple[int, int, int] = (245, 246, 248)
    GRID: Tuple[int, int, int] = (225, 228, 232)

    ROUTE: Tuple[int, int, int] = (13, 71, 161)           # Solution polyline
    ROUTE_SYNTHETIC: Tuple[int, int, int] = (255, 152, 0) # Demonstration path
    ARROW_FILL: Tuple[int, int, int] = (255, 255, 255)
    ARROW_OUTLINE: Tuple[int, int, int] = (13, 71, 161)

    TURN_BADGE: Tuple[int, int, int] = (211, 47, 47)
    TURN_TEXT: Tuple[int, int, int] = (255, 255, 255)

    START: Tuple[int, int, int] = (46, 125, 50)
    END: Tuple[int, int, int] = (198, 40, 40)


COLORS = Colors()


# =============================================================================
# Preview Layout
# =============================================================================

PREVIEW_SIZE = (1024, 768)
PREVIEW_PADDING = 0.08          # Fraction of each axis left empty around the route
PREVIEW_LINE_WIDTH = 5
PREVIEW_ARROW_SIZE = 9
PREVIEW_TURN_RADIUS = 11
PREVIEW_ENDPOINT_RADIUS = 7
