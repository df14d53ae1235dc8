"""SVG date-time axis renderer.

Produces a self-contained HTML string with one inline SVG. Coordinates are
the axis band's pixel space (viewBox in pixels), so no scaling is involved:

  horizontal  axis line at y=0, labels below, band height = breadth
  vertical    axis line at x=breadth, labels to its left, rotated -90°

Text widths are estimated from glyph counts since there is no font engine
at render time.
"""

from __future__ import annotations

import html
import unicodedata
from datetime import datetime

from dateaxis.axis import DateTimeAxis, build_geometry
from dateaxis.config import AxisStyle
from dateaxis.i18n import Localizer
from dateaxis.models import Orientation

_BG = "#0d1b35"
_TEXT_COLOR = "#f0e0b0"
_LINE_COLOR = "#c9a96e"
_MARGIN = 40

# Average advance per glyph as a fraction of font height
_NARROW_GLYPH = 0.6
_WIDE_GLYPH = 1.0


def estimate_text_width(text: str, font_height: float) -> float:
    """Approximate pixel width of text; East Asian wide glyphs count double."""
    width = 0.0
    for ch in text:
        wide = unicodedata.east_asian_width(ch) in ("W", "F")
        width += _WIDE_GLYPH if wide else _NARROW_GLYPH
    return width * font_height


class SvgSurface:
    """TextSurface that accumulates SVG element strings."""

    def __init__(self, style: AxisStyle) -> None:
        self._font_height = style.font_height
        self.elements: list[str] = []

    def measure_text(self, text: str) -> float:
        return estimate_text_width(text, self._font_height)

    def draw_line(self, x0: float, y0: float, x1: float, y1: float) -> None:
        self.elements.append(
            f'<line x1="{x0:.1f}" y1="{y0:.1f}" x2="{x1:.1f}" y2="{y1:.1f}"'
            f' stroke="{_LINE_COLOR}" stroke-width="1"/>'
        )

    def draw_text(
        self, x: float, y: float, text: str, anchor: str, rotation: float
    ) -> None:
        transform = (
            f' transform="rotate({rotation:g} {x:.1f} {y:.1f})"' if rotation else ""
        )
        self.elements.append(
            f'<text x="{x:.1f}" y="{y:.1f}" text-anchor="{anchor}"'
            f' dominant-baseline="middle"{transform}>{html.escape(text)}</text>'
        )

    def clear(self) -> None:
        self.elements.clear()


def render_svg_axis(
    start: datetime,
    end: datetime,
    length: int = 800,
    orientation: Orientation = Orientation.HORIZONTAL,
    style: AxisStyle | None = None,
    locale: Localizer | None = None,
) -> str:
    """Return a self-contained HTML page with an SVG date-time axis.

    Args:
        start: Lower bound; naive values are read in the style's zone.
        end: Upper bound.
        length: Axis length in pixels.
        orientation: Horizontal (labels below) or vertical (labels left).
        style: Pixel constants and locale. Defaults to AxisStyle().
        locale: Month names overriding the style's language table.

    Returns:
        HTML string.
    """
    style = style or AxisStyle()
    geometry = build_geometry(start, end, length, orientation, style, margin=_MARGIN)
    surface = SvgSurface(style)
    DateTimeAxis(geometry, surface, style, locale).render()

    pad = style.font_height
    along = length + 2 * _MARGIN
    across = geometry.breadth + pad
    if orientation is Orientation.HORIZONTAL:
        top = -pad
        view_box = f"0 {top:g} {along:g} {across:g}"
        width, height = along, across
        axis_line = (
            f'<line x1="{geometry.pixel_min:g}" y1="0" x2="{geometry.pixel_max:g}"'
            f' y2="0" stroke="{_LINE_COLOR}" stroke-width="1"/>'
        )
    else:
        top = 0
        view_box = f"0 0 {across:g} {along:g}"
        width, height = across, along
        axis_line = (
            f'<line x1="{geometry.breadth:g}" y1="{geometry.pixel_min:g}"'
            f' x2="{geometry.breadth:g}" y2="{geometry.pixel_max:g}"'
            f' stroke="{_LINE_COLOR}" stroke-width="1"/>'
        )

    elements_svg = "\n    ".join(surface.elements)

    return f"""<!DOCTYPE html>
<html>
<head>
<meta charset="utf-8">
<style>
html, body {{ margin: 0; padding: 0; background: {_BG}; }}
svg#axis text {{
    fill: {_TEXT_COLOR};
    font-family: {style.font_family};
    font-size: {style.font_height:g}px;
}}
</style>
</head>
<body>
<svg id="axis" xmlns="http://www.w3.org/2000/svg" viewBox="{view_box}"
     width="{width:g}" height="{height:g}">
  <rect x="0" y="{top:g}"
        width="{width:g}" height="{height:g}" fill="{_BG}"/>
  {axis_line}
  <g id="ticks">
    {elements_svg}
  </g>
</svg>
</body>
</html>
"""
