"""
Rich console configuration for the route solution visualizer.

Provides styled logging, a route summary panel, a turn table and error output.
"""

import logging
from typing import Optional

from rich.console import Console
from rich.markup import escape
from rich.logging import RichHandler
from rich.theme import Theme
from rich.panel import Panel
from rich.table import Table

from navigation import format_distance
from route_export.data_models import SolutionRoute

# Custom theme for route output
ROUTE_THEME = Theme({
    "info": "cyan",
    "warning": "yellow",
    "error": "bold red",
    "success": "bold green",
    "highlight": "bold magenta",
    "muted": "dim",
    "route": "bold blue",
    "turn": "bold red",
    "gps": "green",
})

# Global console instance
console = Console(theme=ROUTE_THEME)


def setup_rich_logging(verbose: bool = False) -> None:
    """
    Configure logging to use Rich handler.

    Args:
        verbose: Enable DEBUG level logging with full details
    """
    level = logging.DEBUG if verbose else logging.WARNING

    logging.basicConfig(
        level=level,
        format="%(message)s",
        datefmt="[%X]",
        handlers=[
            RichHandler(
                console=console,
                show_time=verbose,
                show_path=verbose,
                rich_tracebacks=True,
                tracebacks_show_locals=verbose,
                markup=False,
            )
        ],
        force=True,  # Override any existing configuration
    )


def print_banner(version: str = "1.0.0") -> None:
    """Print a short startup banner."""
    console.print("[bold cyan]Route Solution Visualizer[/]")
    console.print(f"[muted]Version {version}[/]\n")


def print_route_summary(route: SolutionRoute, output_files: Optional[list] = None) -> None:
    """
    Print a styled summary panel for a visualized route.

    Args:
        route: Visualized route
        output_files: Paths written during this run (optional)
    """
    table = Table(show_header=False, box=None, padding=(0, 2))
    table.add_column("Metric", style="dim")
    table.add_column("Value", style="bold")

    table.add_row("Vertices", f"[highlight]{len(route.vertex_ids):,}[/]")
    table.add_row("Notation", route.notation.replace("_", " "))
    table.add_row("Path Points", f"{len(route.path):,}")
    if route.unresolved_ids:
        table.add_row("Unmapped Vertices", f"[warning]{len(route.unresolved_ids):,}[/]")
    table.add_row("Route Length", f"[route]{route.total_km:.2f} km[/] ({route.total_miles:.2f} mi)")

    efficiency = route.efficiency_pct
    if efficiency is not None:
        table.add_row("Efficiency", f"{efficiency:.1f}%")
    elif route.reference.base_length_km:
        table.add_row("Efficiency", "[muted]N/A[/]")

    table.add_row("Turns", f"[turn]{len(route.turns)}[/]")
    if route.markers:
        table.add_row("Direction Arrows", str(len(route.markers)))

    if route.synthetic:
        table.add_row("Mapping", "[warning]Demonstration path[/] (load a lookup for real mapping)")
    else:
        table.add_row("Mapping", "[success]Mapped to actual road coordinates[/]")

    for path in output_files or []:
        table.add_row("Output", f"[green]{escape(str(path))}[/]")

    panel = Panel(
        table,
        title="[bold green]Route[/]" if not route.synthetic else "[bold yellow]Route (demo)[/]",
        border_style="green" if not route.synthetic else "yellow",
        padding=(1, 2),
    )
    console.print(panel)


def print_turn_table(route: SolutionRoute, limit: int = 50) -> None:
    """
    Print the detected turns as a table.

    Args:
        route: Visualized route
        limit: Maximum rows to show
    """
    if not route.turns:
        console.print("[muted]No sharp turns detected.[/]")
        return

    table = Table(title="Turns", header_style="bold cyan")
    table.add_column("#", justify="right")
    table.add_column("Instruction")
    table.add_column("Angle", justify="right")
    table.add_column("Heading", justify="right")
    table.add_column("Location", style="gps")

    for turn in route.turns[:limit]:
        lat, lon = turn.location
        table.add_row(
            str(turn.sequence),
            turn.instruction,
            f"{turn.turn_angle_deg:.0f}°",
            f"{turn.post_turn_bearing_deg:.0f}°",
            f"{lat:.5f}, {lon:.5f}",
        )

    console.print(table)
    if len(route.turns) > limit:
        console.print(f"[muted]... {len(route.turns) - limit} more[/]")


def print_distance(label: str, distance_km: Optional[float]) -> None:
    """Print a labelled distance, e.g. the distance from a position to the route."""
    console.print(f"[bold]{label}:[/] {format_distance(distance_km)}")


def print_error(message: str, hint: Optional[str] = None) -> None:
    """
    Print a styled error message.

    Args:
        message: Error message
        hint: Optional hint for resolution
    """
    console.print(f"\n[error]Error:[/] {escape(message)}", highlight=False)
    if hint:
        console.print(f"[muted]Hint: {escape(hint)}[/]")
