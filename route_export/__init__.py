"""
Route export module for visualized solver routes.

Holds the annotated route models and exports routes to GPX and JSON for use
with GPS devices, mapping tools, and animation front ends.
"""

from route_export.data_models import (
    TurnDirection,
    TurnEvent,
    DirectionMarker,
    ReferenceLengths,
    SolutionRoute,
    VisualizationResult,
)
from route_export.exporter import RouteExporter

__all__ = [
    "TurnDirection",
    "TurnEvent",
    "DirectionMarker",
    "ReferenceLengths",
    "SolutionRoute",
    "VisualizationResult",
    "RouteExporter",
]
