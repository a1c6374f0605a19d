"""
Parser for route solver output.

Extracts an ordered vertex sequence from free-form solution text. Two
notations are accepted:

- Bracketed route line, e.g. ``Route: [1-22-21-20-1]``
- One vertex ID per line (legacy CSV export)
"""

import logging
import re
from dataclasses import dataclass, field
from enum import Enum
from typing import List, Optional

logger = logging.getLogger(__name__)

_ROUTE_PATTERN = re.compile(r"\[([^\]]+)\]")
_INT_PREFIX = re.compile(r"^[+-]?\d+")

EXPECTED_FORMATS = (
    "Expected format: a route with vertex IDs like [1-22-21-20-...] "
    "or one vertex ID per line."
)


class ParseError(ValueError):
    """No valid vertex IDs were found in either supported notation."""

    def __init__(self, message: Optional[str] = None):
        super().__init__(message or f"No valid path found in the solution text. {EXPECTED_FORMATS}")


class SolutionNotation(Enum):
    """Notation the vertex sequence was read from."""
    BRACKETED = "bracketed"
    LINE_PER_ID = "line_per_id"


@dataclass(frozen=True)
class ParsedSolution:
    """Result of a successful parse.

    Attributes:
        notation: Which notation produced the sequence
        vertex_ids: Vertex IDs in solution order (may repeat)
        skipped_lines: Lines dropped as unparsable (line-per-ID notation only)
    """
    notation: SolutionNotation
    vertex_ids: List[int]
    skipped_lines: List[str] = field(default_factory=list)


def parse_int_prefix(token: str) -> Optional[int]:
    """Parse the leading integer of a token, or None if it has none.

    ``"12"`` and ``" 12abc"`` both read as 12; ``"abc"`` is rejected.
    """
    match = _INT_PREFIX.match(token.strip())
    if not match:
        return None
    return int(match.group(0))


def parse_bracketed(text: str) -> List[int]:
    """Read the first bracketed route line.

    Only the first line holding a non-empty ``[...]`` pair is honored; tokens
    between the brackets are split on ``-`` and non-numeric ones are dropped.
    """
    for line in text.strip().splitlines():
        stripped = line.strip()
        if not stripped:
            continue
        if "[" not in stripped or "]" not in stripped:
            continue

        match = _ROUTE_PATTERN.search(stripped)
        if not match:
            continue

        vertex_ids = []
        for token in match.group(1).split("-"):
            vertex = parse_int_prefix(token)
            if vertex is not None:
                vertex_ids.append(vertex)
        return vertex_ids

    return []


def parse_line_per_id(text: str):
    """Read one vertex ID per non-blank line.

    Returns:
        Tuple of (vertex_ids, skipped_lines)
    """
    vertex_ids = []
    skipped = []
    for line in text.strip().splitlines():
        stripped = line.strip()
        if not stripped:
            continue

        vertex = parse_int_prefix(stripped)
        if vertex is None:
            logger.warning(f"Skipping invalid vertex ID: {stripped!r}")
            skipped.append(stripped)
            continue

        vertex_ids.append(vertex)

    return vertex_ids, skipped


def parse_solution(text: str) -> ParsedSolution:
    """
    Parse solver output into a vertex sequence.

    The bracketed notation is tried first; if it yields no IDs the whole text
    is reread as one ID per line.

    Args:
        text: Raw solution text

    Returns:
        ParsedSolution tagged with the notation that succeeded

    Raises:
        ParseError: If neither notation yields at least one vertex ID
    """
    if text is None or not text.strip():
        raise ParseError()

    vertex_ids = parse_bracketed(text)
    if vertex_ids:
        logger.info(f"Parsed bracketed solution path with {len(vertex_ids)} vertices")
        return ParsedSolution(SolutionNotation.BRACKETED, vertex_ids)

    vertex_ids, skipped = parse_line_per_id(text)
    if not vertex_ids:
        raise ParseError()

    logger.info(f"Parsed line-per-ID solution path with {len(vertex_ids)} vertices")
    return ParsedSolution(SolutionNotation.LINE_PER_ID, vertex_ids, skipped)


def parse(text: str) -> List[int]:
    """Parse solver output and return only the vertex IDs."""
    return parse_solution(text).vertex_ids
