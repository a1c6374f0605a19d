"""
Static route preview renderer.

Provides RoutePreviewRenderer, a RouteLayer that draws a whole solution route
into a still image: the path polyline, start/end points, direction arrowheads
rotated to each marker's bearing, and numbered turn badges.

The route is projected equirectangularly around its mean latitude, which is
accurate enough at city scale.
"""

import logging
import math
from pathlib import Path
from typing import Optional, Sequence, Tuple, Union

import numpy as np
from PIL import Image, ImageDraw, ImageFont

from constants import (
    COLORS,
    PREVIEW_SIZE, PREVIEW_PADDING, PREVIEW_LINE_WIDTH,
    PREVIEW_ARROW_SIZE, PREVIEW_TURN_RADIUS, PREVIEW_ENDPOINT_RADIUS,
)
from route_export.data_models import DirectionMarker, TurnEvent
from route_layers import RouteLayer

logger = logging.getLogger(__name__)


# Font cache
_font_cache: dict = {}
_font_path: Optional[str] = None


def _get_font(size: float = 12) -> ImageFont.ImageFont:
    """Get a cached font instance."""
    global _font_path

    int_size = int(size)

    if int_size in _font_cache:
        return _font_cache[int_size]

    if _font_path is None:
        for font_name in ["DejaVuSans-Bold.ttf", "DejaVuSans.ttf", "Arial.ttf",
                          "/System/Library/Fonts/Helvetica.ttc"]:
            try:
                ImageFont.truetype(font_name, 12)
                _font_path = font_name
                break
            except (OSError, IOError):
                continue

    if _font_path:
        font = ImageFont.truetype(_font_path, int_size)
    else:
        font = ImageFont.load_default()

    _font_cache[int_size] = font
    return font


class RoutePreviewRenderer(RouteLayer):
    """Renders a route and its annotations to an RGB image.

    Args:
        size: Output (width, height) in pixels
        output_path: If set, every shown route is also saved there as PNG
        synthetic: Draw the path in the demonstration color; updated by show()
    """

    def __init__(self, size: Tuple[int, int] = PREVIEW_SIZE,
                 output_path: Optional[Union[str, Path]] = None,
                 synthetic: bool = False):
        super().__init__()
        self.width, self.height = size
        self.output_path = Path(output_path) if output_path else None
        self.synthetic = synthetic
        self.last_image: Optional[Image.Image] = None
        self._font = _get_font(PREVIEW_TURN_RADIUS * 1.3)

    def show(self, path: Sequence[Tuple[float, float]],
             turns: Sequence[TurnEvent],
             markers: Sequence[DirectionMarker],
             synthetic: bool = False) -> None:
        self.synthetic = synthetic
        self.last_image = self.render_image(path, turns, markers)
        if self.output_path is not None:
            self.save(self.output_path)

    def clear(self) -> None:
        self.last_image = None

    def save(self, output_path: Union[str, Path]) -> str:
        """Write the last rendered image as PNG and return its path."""
        if self.last_image is None:
            raise RuntimeError("Nothing rendered yet")
        output_path = Path(output_path)
        if not output_path.suffix:
            output_path = output_path.with_suffix('.png')
        self.last_image.save(output_path, format="PNG")
        logger.info(f"Saved route preview to {output_path}")
        return str(output_path)

    def project(self, path: Sequence[Tuple[float, float]]) -> np.ndarray:
        """Project (lat, lon) points to pixel (x, y), fitted with padding.

        Returns:
            Float array of shape (n, 2)
        """
        points = np.asarray(path, dtype=np.float64).reshape(-1, 2)
        if len(points) == 0:
            return np.empty((0, 2))

        lat = points[:, 0]
        lon = points[:, 1]
        lon_scale = math.cos(math.radians(float(np.mean(lat))))

        x = (lon - lon.min()) * lon_scale
        y = lat.max() - lat  # Screen y grows downward

        span_x = float(x.max())
        span_y = float(y.max())
        usable_w = self.width * (1 - 2 * PREVIEW_PADDING)
        usable_h = self.height * (1 - 2 * PREVIEW_PADDING)

        if span_x <= 0 and span_y <= 0:
            return np.column_stack([
                np.full(len(points), self.width / 2),
                np.full(len(points), self.height / 2),
            ])

        scale = min(
            usable_w / span_x if span_x > 0 else float("inf"),
            usable_h / span_y if span_y > 0 else float("inf"),
        )
        offset_x = (self.width - span_x * scale) / 2
        offset_y = (self.height - span_y * scale) / 2
        return np.column_stack([x * scale + offset_x, y * scale + offset_y])

    def render_image(self, path: Sequence[Tuple[float, float]],
                     turns: Sequence[TurnEvent] = (),
                     markers: Sequence[DirectionMarker] = ()) -> Image.Image:
        """Draw the route onto a fresh PIL image."""
        img = Image.new("RGB", (self.width, self.height), COLORS.BACKGROUND)
        draw = ImageDraw.Draw(img)
        self._draw_grid(draw)

        if not path:
            return img

        # Markers and turns are projected in the same frame as the path
        anchor_count = len(path)
        everything = list(path) + [m.location for m in markers] + [t.location for t in turns]
        screen = self.project(everything)
        path_px = [tuple(p) for p in screen[:anchor_count]]
        marker_px = screen[anchor_count:anchor_count + len(markers)]
        turn_px = screen[anchor_count + len(markers):]

        route_color = COLORS.ROUTE_SYNTHETIC if self.synthetic else COLORS.ROUTE
        if len(path_px) > 1:
            draw.line(path_px, fill=route_color, width=PREVIEW_LINE_WIDTH, joint="curve")

        for marker, (mx, my) in zip(markers, marker_px):
            self._draw_arrow(draw, (mx, my), marker.bearing_deg)

        self._draw_endpoint(draw, path_px[0], COLORS.START)
        if len(path_px) > 1:
            self._draw_endpoint(draw, path_px[-1], COLORS.END)

        for turn, (tx, ty) in zip(turns, turn_px):
            self._draw_turn_badge(draw, (tx, ty), turn.sequence)

        return img

    def render(self, path: Sequence[Tuple[float, float]],
               turns: Sequence[TurnEvent] = (),
               markers: Sequence[DirectionMarker] = ()) -> np.ndarray:
        """Draw the route and return it as an RGB array of shape (height, width, 3)."""
        return np.array(self.render_image(path, turns, markers))

    def _draw_grid(self, draw: ImageDraw.ImageDraw, spacing: int = 64) -> None:
        for x in range(0, self.width, spacing):
            draw.line([(x, 0), (x, self.height)], fill=COLORS.GRID, width=1)
        for y in range(0, self.height, spacing):
            draw.line([(0, y), (self.width, y)], fill=COLORS.GRID, width=1)

    def _draw_endpoint(self, draw: ImageDraw.ImageDraw, center, color) -> None:
        r = PREVIEW_ENDPOINT_RADIUS
        cx, cy = center
        draw.ellipse([cx - r, cy - r, cx + r, cy + r], fill=color, outline=COLORS.WHITE, width=2)

    def _draw_arrow(self, draw: ImageDraw.ImageDraw, center, bearing_deg: float) -> None:
        """Draw an arrowhead centred on `center` pointing along `bearing_deg`.

        Bearing 0 points up (north); screen y grows downward.
        """
        size = PREVIEW_ARROW_SIZE
        rad = math.radians(bearing_deg)
        cx, cy = center

        tip = (cx + size * math.sin(rad), cy - size * math.cos(rad))
        angle_left = rad + math.pi * 0.8
        angle_right = rad - math.pi * 0.8
        left = (cx + size * math.sin(angle_left), cy - size * math.cos(angle_left))
        right = (cx + size * math.sin(angle_right), cy - size * math.cos(angle_right))

        draw.polygon([tip, left, right], fill=COLORS.ARROW_FILL, outline=COLORS.ARROW_OUTLINE)

    def _draw_turn_badge(self, draw: ImageDraw.ImageDraw, center, number: int) -> None:
        r = PREVIEW_TURN_RADIUS
        cx, cy = center
        draw.ellipse([cx - r, cy - r, cx + r, cy + r], fill=COLORS.TURN_BADGE, outline=COLORS.WHITE, width=2)
        label = str(number)
        left, top, right, bottom = draw.textbbox((0, 0), label, font=self._font)
        text_pos = (cx - (left + right) / 2, cy - (top + bottom) / 2)
        draw.text(text_pos, label, fill=COLORS.TURN_TEXT, font=self._font)
