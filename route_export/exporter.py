"""
Route exporter for visualized solutions.

Writes an annotated route to GPX and JSON for use with GPS devices,
mapping tools, and downstream animation.
"""

import json
import logging
from pathlib import Path
from typing import List, Union

from route_export.data_models import SolutionRoute
from route_export.gpx_writer import write_gpx

logger = logging.getLogger(__name__)

EXPORT_FORMATS = ("gpx", "json", "all")


class RouteExporter:
    """
    Exports an annotated route to various formats.

    Usage:
        result = visualizer.handle_solution_text(text, lookup)
        exporter = RouteExporter(result.route, name='district-7')
        exporter.export_gpx('output.gpx')
        exporter.export_json('output.json')
    """

    def __init__(self, route: SolutionRoute, name: str = "Route Solution"):
        self.route = route
        self.name = name

    def export_gpx(self, output_path: Union[str, Path]) -> str:
        """
        Export the route to GPX format.

        Args:
            output_path: Path for output .gpx file

        Returns:
            Path to the created file
        """
        output_path = Path(output_path)
        if not output_path.suffix:
            output_path = output_path.with_suffix('.gpx')

        with open(output_path, 'w', encoding='utf-8') as f:
            write_gpx(self.route, f, name=self.name)

        logger.info(f"Exported GPX to {output_path}")
        return str(output_path)

    def to_dict(self) -> dict:
        """JSON-ready representation including derived statistics."""
        route = self.route
        return {
            "name": self.name,
            "notation": route.notation,
            "synthetic": route.synthetic,
            "vertex_count": len(route.vertex_ids),
            "vertex_ids": route.vertex_ids,
            "unresolved_ids": route.unresolved_ids,
            "total_km": route.total_km,
            "total_miles": route.total_miles,
            "efficiency_pct": route.efficiency_pct,
            "path": [[lat, lon] for lat, lon in route.path],
            "turns": [
                {
                    "sequence": t.sequence,
                    "lat": t.location[0],
                    "lon": t.location[1],
                    "path_index": t.path_index,
                    "turn_angle_deg": t.turn_angle_deg,
                    "post_turn_bearing_deg": t.post_turn_bearing_deg,
                    "direction": t.direction.value,
                    "instruction": t.instruction,
                }
                for t in route.turns
            ],
            "markers": [
                {
                    "lat": m.location[0],
                    "lon": m.location[1],
                    "bearing_deg": m.bearing_deg,
                    "segment_index": m.segment_index,
                    "distance_along_m": m.distance_along_m,
                }
                for m in route.markers
            ],
        }

    def export_json(self, output_path: Union[str, Path]) -> str:
        """
        Export the route to JSON format (all fields).

        Args:
            output_path: Path for output .json file

        Returns:
            Path to the created file
        """
        output_path = Path(output_path)
        if not output_path.suffix:
            output_path = output_path.with_suffix('.json')

        with open(output_path, 'w', encoding='utf-8') as f:
            json.dump(self.to_dict(), f, indent=2)

        logger.info(f"Exported JSON to {output_path}")
        return str(output_path)

    def export_all(self, output_base: Union[str, Path]) -> List[str]:
        """
        Export to every supported format.

        Args:
            output_base: Base path without extension (e.g., 'solution_2026-10-19')

        Returns:
            List of paths to created files
        """
        output_base = Path(output_base)
        return [
            self.export_gpx(output_base.with_suffix('.gpx')),
            self.export_json(output_base.with_suffix('.json')),
        ]

    def export(self, output_base: Union[str, Path], export_format: str = "gpx") -> List[str]:
        """
        Export in the named format.

        Raises:
            ValueError: If the format is not one of EXPORT_FORMATS
        """
        export_format = export_format.lower()
        output_base = Path(output_base)
        if export_format == "all":
            return self.export_all(output_base)
        if export_format == "gpx":
            return [self.export_gpx(output_base.with_suffix('.gpx'))]
        if export_format == "json":
            return [self.export_json(output_base.with_suffix('.json'))]
        raise ValueError(f"Unknown export format: {export_format}. Use 'gpx', 'json', or 'all'")
