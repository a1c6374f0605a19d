"""
Tests for the solution visualizer pipeline and its cached route.
"""

import threading
from unittest.mock import MagicMock, patch

import pytest

import sys
import os
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from route_export.data_models import ReferenceLengths, SolutionRoute
from route_layers import LayerRegistry, RouteLayer
from solution_parser import SolutionNotation
from solution_visualizer import SolutionVisualizer


def _registry_with_mock():
    """Registry holding one mock layer."""
    layer = MagicMock(spec=RouteLayer)
    layer.visible = True
    registry = LayerRegistry()
    registry.register("mock", layer)
    return registry, layer


# ============================================================================
# handle_solution_text
# ============================================================================

class TestHandleSolutionText:
    """Tests for the never-raising text entry point."""

    def test_mapped_route(self, bracketed_solution, sample_lookup):
        """A fully mapped solution succeeds with the real coordinates."""
        visualizer = SolutionVisualizer()
        result = visualizer.handle_solution_text(bracketed_solution, sample_lookup)

        assert result.success
        assert result.message.startswith("Visualized 4 vertices")
        assert "Mapped to actual road coordinates" in result.message
        route = result.route
        assert route.vertex_ids == [1, 2, 3, 4]
        assert route.notation == "bracketed"
        assert route.synthetic is False
        assert route.path[0] == (51.505, -0.09)
        assert len(route.path) == 4

    def test_synthetic_route(self, line_solution):
        """Without a lookup, a demonstration path is produced and flagged."""
        visualizer = SolutionVisualizer()
        result = visualizer.handle_solution_text(line_solution, {})

        assert result.success
        assert "Demonstration path" in result.message
        assert result.route.synthetic is True
        assert result.route.notation == "line_per_id"
        assert len(result.route.path) >= 2

    def test_parse_failure(self):
        """Unparsable text returns a failure instead of raising."""
        visualizer = SolutionVisualizer()
        result = visualizer.handle_solution_text("no ids here", {})

        assert not result.success
        assert result.route is None
        assert "[1-22-21-20-...]" in result.message

    def test_empty_text(self):
        """Empty text is reported as a failure."""
        result = SolutionVisualizer().handle_solution_text("", {})
        assert not result.success

    def test_unexpected_error_reported(self, bracketed_solution, sample_lookup):
        """Errors raised inside the pipeline become a failure result."""
        visualizer = SolutionVisualizer()
        with patch("solution_visualizer.detect_turns", side_effect=RuntimeError("boom")):
            result = visualizer.handle_solution_text(bracketed_solution, sample_lookup)

        assert not result.success
        assert "boom" in result.message

    def test_layer_receives_route(self, bracketed_solution, sample_lookup):
        """Registered layers get the cleaned path, turns and markers."""
        registry, layer = _registry_with_mock()
        visualizer = SolutionVisualizer(layers=registry)
        result = visualizer.handle_solution_text(bracketed_solution, sample_lookup)

        layer.show.assert_called_once()
        path, turns, markers = layer.show.call_args[0]
        assert path == result.route.path
        assert turns == result.route.turns
        assert markers == []
        assert layer.show.call_args[1] == {"synthetic": False}

    def test_layer_told_route_is_synthetic(self, line_solution):
        """Layers are told up front when the path is a demonstration path."""
        registry, layer = _registry_with_mock()
        visualizer = SolutionVisualizer(layers=registry)
        visualizer.handle_solution_text(line_solution, {})

        layer.show.assert_called_once()
        assert layer.show.call_args[1] == {"synthetic": True}


# ============================================================================
# visualize
# ============================================================================

class TestVisualize:
    """Tests for the pipeline core."""

    def test_empty_sequence_raises(self):
        """An empty sequence is rejected."""
        with pytest.raises(ValueError):
            SolutionVisualizer().visualize([], {})

    def test_duplicates_cleaned(self, sample_lookup):
        """Consecutive repeated vertices collapse in the cleaned path."""
        route = SolutionVisualizer().visualize([1, 1, 2, 2, 3], sample_lookup)
        assert len(route.path) == 3
        assert route.vertex_ids == [1, 1, 2, 2, 3]

    def test_partial_lookup(self, sample_lookup):
        """Unmapped vertices are skipped and recorded."""
        route = SolutionVisualizer().visualize([1, 50, 2], sample_lookup)
        assert route.synthetic is False
        assert route.unresolved_ids == [50]
        assert len(route.path) == 2

    def test_turns_detected(self, grid_lookup):
        """A cornering route produces a turn."""
        route = SolutionVisualizer().visualize(list(range(1, 20)), grid_lookup)
        assert len(route.turns) == 1
        assert route.turns[0].instruction == "Turn left"

    def test_total_length(self, grid_lookup):
        """Route length is the sum of segment lengths."""
        route = SolutionVisualizer().visualize(list(range(1, 20)), grid_lookup)
        assert route.total_km == pytest.approx(0.36, abs=1e-3)
        assert route.total_miles == pytest.approx(0.36 * 0.621371, abs=1e-3)

    def test_markers_when_arrows_enabled(self, grid_lookup):
        """Markers are sampled only when arrows are on."""
        off = SolutionVisualizer().visualize(list(range(1, 20)), grid_lookup)
        on = SolutionVisualizer(arrows_enabled=True).visualize(list(range(1, 20)), grid_lookup)
        assert off.markers == []
        assert len(on.markers) > 0

    def test_notation_recorded(self, sample_lookup):
        """The notation value is stored on the route."""
        route = SolutionVisualizer().visualize([1, 2], sample_lookup, notation=SolutionNotation.LINE_PER_ID)
        assert route.notation == "line_per_id"

    def test_last_route_cached(self, sample_lookup):
        """The most recent route and a copy of its path are retained."""
        visualizer = SolutionVisualizer()
        assert visualizer.last_path is None
        route = visualizer.visualize([1, 2, 3], sample_lookup)

        assert visualizer.last_route is route
        last_path = visualizer.last_path
        assert last_path == route.path
        last_path.append((0.0, 0.0))
        assert len(visualizer.last_path) == 3

    def test_concurrent_calls_last_writer_wins(self, sample_lookup):
        """Concurrent requests leave one complete route cached."""
        visualizer = SolutionVisualizer()
        sequences = [[1, 2], [1, 2, 3], [1, 2, 3, 4]]
        threads = [
            threading.Thread(target=visualizer.visualize, args=(seq, sample_lookup))
            for seq in sequences
        ]
        for t in threads:
            t.start()
        for t in threads:
            t.join()

        route = visualizer.last_route
        assert route.vertex_ids in sequences
        assert len(route.path) == len(route.vertex_ids)


# ============================================================================
# Arrow toggling
# ============================================================================

class TestArrowToggle:
    """Tests for showing and hiding direction markers."""

    def test_toggle_returns_state(self):
        """Toggling flips and returns the state."""
        visualizer = SolutionVisualizer()
        assert visualizer.arrows_enabled is False
        assert visualizer.toggle_arrows_enabled() is True
        assert visualizer.toggle_arrows_enabled() is False

    def test_toggle_without_route(self):
        """Toggling before any route only changes the flag."""
        registry, layer = _registry_with_mock()
        visualizer = SolutionVisualizer(layers=registry)
        visualizer.set_arrows_enabled(True)
        assert visualizer.arrows_enabled
        layer.show.assert_not_called()

    def test_toggle_reuses_cached_path(self, grid_lookup):
        """Turning arrows on re-samples markers without recomputing the path."""
        registry, layer = _registry_with_mock()
        visualizer = SolutionVisualizer(layers=registry)
        route = visualizer.visualize(list(range(1, 20)), grid_lookup)

        with patch("solution_visualizer.resolve") as mock_resolve, \
                patch("solution_visualizer.detect_turns") as mock_detect:
            visualizer.set_arrows_enabled(True)
            mock_resolve.assert_not_called()
            mock_detect.assert_not_called()

        updated = visualizer.last_route
        assert updated.path == route.path
        assert updated.turns == route.turns
        assert len(updated.markers) > 0
        assert layer.show.call_count == 2

    def test_disable_clears_markers(self, grid_lookup):
        """Turning arrows off republishes the route without markers."""
        registry, layer = _registry_with_mock()
        visualizer = SolutionVisualizer(layers=registry, arrows_enabled=True)
        visualizer.visualize(list(range(1, 20)), grid_lookup)

        visualizer.set_arrows_enabled(False)
        assert visualizer.last_route.markers == []
        assert layer.show.call_args[0][2] == []

    def test_same_state_is_noop(self, grid_lookup):
        """Setting the current state does not republish."""
        registry, layer = _registry_with_mock()
        visualizer = SolutionVisualizer(layers=registry)
        visualizer.visualize(list(range(1, 20)), grid_lookup)

        visualizer.set_arrows_enabled(False)
        assert layer.show.call_count == 1


# ============================================================================
# Efficiency and clearing
# ============================================================================

class TestEfficiencyAndClear:
    """Tests for reference lengths and clear()."""

    def test_efficiency_from_reference(self, grid_lookup):
        """Efficiency divides the baseline by the route length."""
        visualizer = SolutionVisualizer(reference_lengths=ReferenceLengths(required_km=0.18))
        route = visualizer.visualize(list(range(1, 20)), grid_lookup)
        assert route.efficiency_pct == pytest.approx(50.0, abs=0.2)

    def test_no_reference(self, grid_lookup):
        """Without a baseline there is no efficiency."""
        route = SolutionVisualizer().visualize(list(range(1, 20)), grid_lookup)
        assert route.efficiency_pct is None

    def test_clear(self, sample_lookup):
        """clear() forgets the route and clears the layers."""
        registry, layer = _registry_with_mock()
        visualizer = SolutionVisualizer(layers=registry)
        visualizer.visualize([1, 2], sample_lookup)

        visualizer.clear()
        assert visualizer.last_route is None
        layer.clear.assert_called_once()
