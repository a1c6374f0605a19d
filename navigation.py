"""
Navigation helpers for a visualized route.

Measures how far a position is from the current route and steps through the
route to simulate travel when no live position source is available.
"""

import logging
from typing import List, Optional, Sequence, Tuple

from constants import NAV_SIMULATION_DIVISOR
from geo_utils import LatLon, distance_meters
from route_export.data_models import DirectionMarker, TurnEvent
from route_layers import RouteLayer

logger = logging.getLogger(__name__)


class NoRouteError(RuntimeError):
    """Navigation was requested before any route was published."""


def format_distance(distance_km: Optional[float]) -> str:
    """Format a distance for display: '1.23 km', '456 m', or an em dash when unknown."""
    if distance_km is None or distance_km != distance_km or distance_km == float("inf"):
        return "—"
    if distance_km >= 1:
        return f"{distance_km:.2f} km"
    return f"{round(distance_km * 1000)} m"


class NavigationTracker(RouteLayer):
    """
    Tracks proximity to the most recently published route.

    Registered as a layer, it receives every new route from the visualizer
    and resets its simulation cursor.
    """

    def __init__(self, route: Optional[Sequence[LatLon]] = None):
        super().__init__()
        self.route: List[LatLon] = list(route) if route else []
        self.simulation_index = 0

    def show(self, path: Sequence[Tuple[float, float]],
             turns: Sequence[TurnEvent],
             markers: Sequence[DirectionMarker],
             synthetic: bool = False) -> None:
        self.handle_route_change(path)

    def clear(self) -> None:
        self.handle_route_change([])

    def handle_route_change(self, points: Optional[Sequence[LatLon]]) -> None:
        """Replace the cached route and restart the simulation."""
        self.route = list(points) if points else []
        self.simulation_index = 0

    @property
    def has_route(self) -> bool:
        return bool(self.route)

    def distance_to_route_km(self, position: LatLon) -> Optional[float]:
        """
        Distance from a position to the closest route vertex, in km.

        Returns:
            Distance in kilometers, or None without a route or position.
        """
        if not self.route or position is None:
            return None
        closest_m = min(distance_meters(position, point) for point in self.route)
        return closest_m / 1000.0

    def advance_simulation(self) -> LatLon:
        """
        Return the current simulated position and step forward.

        The cursor advances by 1/NAV_SIMULATION_DIVISOR of the route (at least
        one point) and wraps around at the end.

        Raises:
            NoRouteError: If no route has been published
        """
        if not self.route:
            raise NoRouteError("Generate or apply a route before using navigation mode.")

        point = self.route[self.simulation_index]
        step = max(1, len(self.route) // NAV_SIMULATION_DIVISOR)
        self.simulation_index = (self.simulation_index + step) % len(self.route)
        logger.debug(f"Simulated position {point}, next index {self.simulation_index}")
        return point
