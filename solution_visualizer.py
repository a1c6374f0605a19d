"""
Route solution visualizer.

Coordinates the pipeline from solver output text to an annotated route:
parse -> resolve -> clean -> detect turns / sample directions -> layers.

The visualizer keeps the most recently produced path so direction markers
can be toggled without recomputing it.
"""

import logging
import threading
from typing import List, Optional, Sequence

from direction_sampler import sample_directions
from geo_utils import LatLon, path_length_km
from path_resolver import CoordinateLookup, clean_path, resolve
from route_export.data_models import (
    ReferenceLengths,
    SolutionRoute,
    VisualizationResult,
)
from route_layers import LayerRegistry
from solution_parser import EXPECTED_FORMATS, ParseError, SolutionNotation, parse_solution
from turn_detector import detect_turns

logger = logging.getLogger(__name__)


class SolutionVisualizer:
    """
    Turns route solver output into an annotated, display-ready route.

    Usage:
        visualizer = SolutionVisualizer(layers=registry)
        result = visualizer.handle_solution_text(text, lookup)
        if result.success:
            print(result.route.total_km)
        visualizer.set_arrows_enabled(True)  # re-annotates the last path

    Args:
        layers: Registry of output consumers; an empty one is created if None
        reference_lengths: Road-network lengths for the efficiency figure
        arrows_enabled: Whether direction markers are sampled and published
    """

    def __init__(self, layers: Optional[LayerRegistry] = None,
                 reference_lengths: Optional[ReferenceLengths] = None,
                 arrows_enabled: bool = False):
        self.layers = layers if layers is not None else LayerRegistry()
        self.reference_lengths = reference_lengths or ReferenceLengths()
        self._arrows_enabled = bool(arrows_enabled)

        # Last cleaned path and its turns; replaced by whichever call finishes last
        self._lock = threading.Lock()
        self._last_route: Optional[SolutionRoute] = None

    @property
    def last_path(self) -> Optional[List[LatLon]]:
        """Most recently visualized path, or None."""
        with self._lock:
            return list(self._last_route.path) if self._last_route else None

    @property
    def last_route(self) -> Optional[SolutionRoute]:
        """Most recently visualized route, or None."""
        with self._lock:
            return self._last_route

    def handle_solution_text(self, text: str,
                             lookup: Optional[CoordinateLookup]) -> VisualizationResult:
        """
        Parse solver output and visualize it.

        Never raises: parse failures and unexpected errors are reported as an
        unsuccessful result with a message suitable for the user.

        Args:
            text: Raw solution text
            lookup: Mapping of vertex ID to (lon, lat)

        Returns:
            VisualizationResult with the route on success
        """
        try:
            parsed = parse_solution(text)
        except ParseError as e:
            logger.warning(f"Could not parse solution: {e}")
            return VisualizationResult(success=False, message=str(e))

        try:
            route = self.visualize(parsed.vertex_ids, lookup, notation=parsed.notation)
        except Exception as e:
            logger.exception("Error visualizing solution")
            return VisualizationResult(
                success=False,
                message=f"Error visualizing solution: {e}. {EXPECTED_FORMATS}",
            )

        if route.synthetic:
            note = "Demonstration path (load a coordinate lookup for real mapping)"
        else:
            note = "Mapped to actual road coordinates"
        message = (
            f"Visualized {len(route.vertex_ids)} vertices as {len(route.path)} points "
            f"({route.total_km:.2f} km). {note}"
        )
        return VisualizationResult(success=True, message=message, route=route)

    def visualize(self, vertex_ids: Sequence[int],
                  lookup: Optional[CoordinateLookup],
                  notation: SolutionNotation = SolutionNotation.BRACKETED) -> SolutionRoute:
        """
        Build the annotated route for a vertex sequence and publish it.

        Args:
            vertex_ids: Vertex IDs in solution order
            lookup: Mapping of vertex ID to (lon, lat); may be partial or empty
            notation: Notation the IDs were parsed from

        Returns:
            SolutionRoute with cleaned path, turns and (if enabled) markers

        Raises:
            ValueError: If the vertex sequence is empty
        """
        if not vertex_ids:
            raise ValueError("No valid vertex path to visualize")

        resolved = resolve(vertex_ids, lookup)
        path = clean_path(resolved.points)
        turns = detect_turns(path)
        markers = sample_directions(path) if self.arrows_enabled else []

        route = SolutionRoute(
            vertex_ids=list(vertex_ids),
            notation=notation.value,
            path=path,
            turns=turns,
            markers=markers,
            synthetic=resolved.synthetic,
            unresolved_ids=resolved.unresolved_ids,
            total_km=path_length_km(path),
            reference=self.reference_lengths,
        )

        with self._lock:
            self._last_route = route

        self.layers.show_all(route.path, route.turns, route.markers, synthetic=route.synthetic)

        logger.info(
            f"Visualized solution: {len(vertex_ids)} vertices, {len(path)} points, "
            f"{len(turns)} turns, {len(markers)} markers"
        )
        return route

    @property
    def arrows_enabled(self) -> bool:
        """Whether direction markers are currently shown."""
        return self._arrows_enabled

    def toggle_arrows_enabled(self) -> bool:
        """Flip direction marker visibility. Returns the new state."""
        return self.set_arrows_enabled(not self._arrows_enabled)

    def set_arrows_enabled(self, enabled: bool) -> bool:
        """
        Show or hide direction markers for the last route.

        Markers are re-sampled from the cached path; the path itself is not
        recomputed. Returns the resulting state.
        """
        enabled = bool(enabled)
        if enabled == self._arrows_enabled:
            return self._arrows_enabled
        self._arrows_enabled = enabled

        with self._lock:
            route = self._last_route
            if route is None:
                return self._arrows_enabled
            markers = sample_directions(route.path) if enabled else []
            route = route.model_copy(update={"markers": markers})
            self._last_route = route

        self.layers.show_all(route.path, route.turns, route.markers, synthetic=route.synthetic)
        return self._arrows_enabled

    def clear(self) -> None:
        """Clear all layers and forget the last route."""
        self.layers.clear_all()
        with self._lock:
            self._last_route = None
