"""
Data models for visualized route solutions.

Pydantic models for the annotation sequences handed to rendering layers
and exporters: turn events, direction markers, and the assembled route.
"""

from enum import Enum
from typing import List, Optional, Tuple

from pydantic import BaseModel, Field

from constants import KM_TO_MILES, TURN_SHARP_ANGLE_DEG


class TurnDirection(str, Enum):
    """Side the route turns towards."""
    LEFT = "left"
    RIGHT = "right"


class TurnEvent(BaseModel):
    """
    A sharp, discrete turn along the cleaned path.

    Gradual curves and roundabouts never produce turn events.
    """
    sequence: int = Field(ge=1, description="Emission order, starting at 1")
    location: Tuple[float, float] = Field(description="(lat, lon) of the turning vertex")
    path_index: int = Field(ge=0, description="Index of the vertex in the cleaned path")
    turn_angle_deg: float = Field(ge=0.0, le=180.0, description="Stabilized bearing change in degrees")
    post_turn_bearing_deg: float = Field(ge=0.0, lt=360.0, description="Bearing leaving the turn (0=North)")
    direction: TurnDirection = Field(description="Left or right relative to the approach")

    @property
    def is_sharp(self) -> bool:
        """Whether the bearing change exceeds the sharp-turn threshold."""
        return self.turn_angle_deg > TURN_SHARP_ANGLE_DEG

    @property
    def instruction(self) -> str:
        """Human-readable instruction, e.g. 'Turn sharp left'."""
        side = self.direction.value
        if self.is_sharp:
            return f"Turn sharp {side}"
        return f"Turn {side}"


class DirectionMarker(BaseModel):
    """Direction-of-travel indicator placed at a segment midpoint."""
    location: Tuple[float, float] = Field(description="(lat, lon) midpoint of the segment")
    bearing_deg: float = Field(ge=0.0, lt=360.0, description="Segment bearing (0=North, 90=East)")
    segment_index: int = Field(ge=0, description="Index of the segment start point in the path")
    distance_along_m: float = Field(ge=0.0, description="Path distance at the end of the segment")


class ReferenceLengths(BaseModel):
    """
    Road-network lengths used as the efficiency baseline.

    The first available of largest-component required length, required length,
    and total road length is used.
    """
    largest_component_required_km: Optional[float] = Field(default=None, ge=0.0)
    required_km: Optional[float] = Field(default=None, ge=0.0)
    total_road_km: Optional[float] = Field(default=None, ge=0.0)

    @property
    def base_length_km(self) -> Optional[float]:
        """Baseline length for efficiency, or None if no figure was supplied."""
        if self.largest_component_required_km is not None:
            return self.largest_component_required_km
        if self.required_km is not None:
            return self.required_km
        return self.total_road_km


class SolutionRoute(BaseModel):
    """
    Fully annotated route solution.

    Represents one visualization request: the parsed vertex sequence, the
    cleaned path, both annotation sequences and derived statistics.
    """
    vertex_ids: List[int] = Field(description="Vertex sequence in solution order")
    notation: str = Field(description="Notation the sequence was parsed from")
    path: List[Tuple[float, float]] = Field(default_factory=list, description="Cleaned (lat, lon) path")
    turns: List[TurnEvent] = Field(default_factory=list)
    markers: List[DirectionMarker] = Field(default_factory=list)
    synthetic: bool = Field(default=False, description="True for a demonstration path")
    unresolved_ids: List[int] = Field(default_factory=list)
    total_km: float = Field(default=0.0, ge=0.0, description="Sum of great-circle segment lengths")
    reference: ReferenceLengths = Field(default_factory=ReferenceLengths)

    @property
    def total_miles(self) -> float:
        """Route length in miles."""
        return self.total_km * KM_TO_MILES

    @property
    def efficiency_pct(self) -> Optional[float]:
        """
        Baseline road length as a percentage of route length.

        None when no baseline is known or the route has zero length.
        """
        base = self.reference.base_length_km
        if not base or self.total_km <= 0:
            return None
        return base / self.total_km * 100

    @property
    def mapped(self) -> bool:
        """Whether the path comes from real coordinate mappings."""
        return not self.synthetic


class VisualizationResult(BaseModel):
    """Outcome of one visualization request, reported to the host instead of raising."""
    success: bool
    message: str
    route: Optional[SolutionRoute] = None
