#!/usr/bin/env python3
"""
Command-line entry point for the route solution visualizer.

Reads route solver output, maps it onto coordinates, detects turns and
direction markers, then prints a summary and optionally exports GPX/JSON
and a PNG preview.
"""

import argparse
import logging
import sys
from pathlib import Path
from typing import List, Optional, Tuple

from pydantic import BaseModel, Field, ValidationError, field_validator

from coordinate_lookup import LookupLoadError, load_lookup
from map_renderer import RoutePreviewRenderer
from navigation import NavigationTracker
from rich_console import (
    console,
    setup_rich_logging,
    print_banner,
    print_route_summary,
    print_turn_table,
    print_distance,
    print_error,
)
from route_export.data_models import ReferenceLengths
from route_export.exporter import EXPORT_FORMATS, RouteExporter
from route_layers import LayerRegistry
from solution_parser import EXPECTED_FORMATS
from solution_visualizer import SolutionVisualizer

logger = logging.getLogger(__name__)

__version__ = "1.0.0"


class VisualizerConfig(BaseModel):
    solution_file: Path
    lookup_file: Optional[Path] = None
    arrows: bool = False
    reference: ReferenceLengths = Field(default_factory=ReferenceLengths)
    export_format: Optional[str] = None
    output_base: Optional[Path] = None
    preview_file: Optional[Path] = None
    position: Optional[Tuple[float, float]] = None
    verbose: bool = False

    @field_validator("export_format")
    @classmethod
    def _check_format(cls, value: Optional[str]) -> Optional[str]:
        if value is None:
            return value
        value = value.lower()
        if value not in EXPORT_FORMATS:
            raise ValueError(f"Unknown export format: {value}. Use 'gpx', 'json', or 'all'")
        return value

    @field_validator("position")
    @classmethod
    def _check_position(cls, value: Optional[Tuple[float, float]]) -> Optional[Tuple[float, float]]:
        if value is None:
            return value
        lat, lon = value
        if not (-90 <= lat <= 90 and -180 <= lon <= 180):
            raise ValueError("Position must be a valid latitude,longitude pair")
        return value


def parse_position(value: Optional[str]) -> Optional[Tuple[float, float]]:
    """Parse a 'lat,lon' string."""
    if value is None:
        return None
    parts = value.split(",")
    if len(parts) != 2:
        raise ValueError(f"Expected 'lat,lon', got {value!r}")
    return (float(parts[0]), float(parts[1]))


def build_arg_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Plot a route solver's vertex sequence and annotate its turns and direction.",
    )
    parser.add_argument("solution_file", help="Solver output: a [1-22-21-...] route line or one vertex ID per line")
    parser.add_argument("--lookup", dest="lookup_file",
                        help="Vertex coordinate lookup (.json or .csv, stored as lon,lat)")
    parser.add_argument("--arrows", action="store_true", help="Place direction arrows along the route")
    parser.add_argument("--largest-component-km", type=float, default=None,
                        help="Required road length of the largest component (efficiency baseline)")
    parser.add_argument("--required-km", type=float, default=None,
                        help="Required road length (efficiency baseline)")
    parser.add_argument("--reference-km", type=float, default=None,
                        help="Total road length (efficiency baseline)")
    parser.add_argument("--export", dest="export_format", choices=EXPORT_FORMATS,
                        help="Export the annotated route")
    parser.add_argument("--output", dest="output_base",
                        help="Output base path for exports (default: next to the solution file)")
    parser.add_argument("--preview", dest="preview_file", help="Write a PNG preview of the route")
    parser.add_argument("--position", help="Report distance from 'lat,lon' to the route")
    parser.add_argument("-v", "--verbose", action="store_true", help="Verbose logging")
    return parser


def parse_args(argv: Optional[List[str]] = None) -> VisualizerConfig:
    args = build_arg_parser().parse_args(argv)

    try:
        return VisualizerConfig(
            solution_file=args.solution_file,
            lookup_file=args.lookup_file,
            arrows=args.arrows,
            reference=ReferenceLengths(
                largest_component_required_km=args.largest_component_km,
                required_km=args.required_km,
                total_road_km=args.reference_km,
            ),
            export_format=args.export_format,
            output_base=args.output_base,
            preview_file=args.preview_file,
            position=parse_position(args.position),
            verbose=args.verbose,
        )
    except (ValidationError, ValueError) as e:
        print_error(f"Configuration error: {e}")
        sys.exit(1)


def run(config: VisualizerConfig) -> int:
    """
    Run the visualizer for a validated configuration.

    Returns:
        Process exit code (0 on success, 1 on failure)
    """
    try:
        text = config.solution_file.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as e:
        print_error(f"Could not read solution file: {e}")
        return 1

    lookup = {}
    if config.lookup_file is not None:
        try:
            lookup = load_lookup(config.lookup_file)
        except LookupLoadError as e:
            print_error(str(e), hint="Lookup files are .json ({\"id\": [lon, lat]}) or .csv with an id,lon,lat header")
            return 1

    registry = LayerRegistry()
    tracker = NavigationTracker()
    registry.register("navigation", tracker)

    preview = None
    if config.preview_file is not None:
        preview = RoutePreviewRenderer()
        registry.register("preview", preview)

    visualizer = SolutionVisualizer(
        layers=registry,
        reference_lengths=config.reference,
        arrows_enabled=config.arrows,
    )

    result = visualizer.handle_solution_text(text, lookup)
    if not result.success:
        print_error(result.message, hint=EXPECTED_FORMATS)
        return 1

    route = result.route
    created = []

    try:
        if config.export_format:
            output_base = config.output_base or config.solution_file.with_suffix("")
            exporter = RouteExporter(route, name=config.solution_file.stem)
            created.extend(exporter.export(output_base, config.export_format))

        if preview is not None:
            created.append(preview.save(config.preview_file))
    except OSError as e:
        print_error(f"Could not write output: {e}", hint="Check that the output directory exists and is writable")
        return 1

    print_route_summary(route, created)
    print_turn_table(route)

    if config.position is not None:
        print_distance("Distance to route", tracker.distance_to_route_km(config.position))

    return 0


def main(argv: Optional[List[str]] = None) -> int:
    config = parse_args(argv)
    setup_rich_logging(verbose=config.verbose)
    if config.verbose:
        print_banner(__version__)

    try:
        return run(config)
    except KeyboardInterrupt:
        console.print("\n[warning]Interrupted[/]")
        return 130


if __name__ == "__main__":
    sys.exit(main())
