"""Plotly interactive date-time axis renderer.

Draws the axis band in pixel coordinates next to an empty plot area that
carries one gridline per inner-level tick.
"""

from datetime import datetime

import numpy as np
import plotly.graph_objects as go

from dateaxis.axis import DateTimeAxis, build_geometry
from dateaxis.config import AxisStyle
from dateaxis.i18n import Localizer
from dateaxis.models import Orientation
from dateaxis.renderers.svg_2d import estimate_text_width

_BG = "#0d1b35"
_TEXT_COLOR = "#f0e0b0"
_LINE_COLOR = "#c9a96e"
_GRID_COLOR = "#334466"
_MARGIN = 40


class PlotlySurface:
    """TextSurface collecting line segments and annotation dicts."""

    def __init__(self, style: AxisStyle) -> None:
        self._style = style
        self.lines: list[tuple[float, float, float, float]] = []
        self.annotations: list[dict] = []

    def measure_text(self, text: str) -> float:
        return estimate_text_width(text, self._style.font_height)

    def draw_line(self, x0: float, y0: float, x1: float, y1: float) -> None:
        self.lines.append((x0, y0, x1, y1))

    def draw_text(
        self, x: float, y: float, text: str, anchor: str, rotation: float
    ) -> None:
        self.annotations.append(
            dict(
                x=x,
                y=y,
                text=text,
                showarrow=False,
                xanchor="left" if anchor == "start" else "center",
                yanchor="middle",
                textangle=rotation,
                font=dict(
                    color=_TEXT_COLOR,
                    size=self._style.font_height,
                    family=self._style.font_family,
                ),
            )
        )

    def clear(self) -> None:
        self.lines.clear()
        self.annotations.clear()


def _segments(lines: np.ndarray) -> tuple[np.ndarray, np.ndarray]:
    """Flatten (n, 4) segments into x/y arrays with NaN gaps between them."""
    if len(lines) == 0:
        return np.array([]), np.array([])
    gap = np.full(len(lines), np.nan)
    xs = np.column_stack([lines[:, 0], lines[:, 2], gap]).ravel()
    ys = np.column_stack([lines[:, 1], lines[:, 3], gap]).ravel()
    return xs, ys


def render_plotly_axis(
    start: datetime,
    end: datetime,
    length: int = 800,
    orientation: Orientation = Orientation.HORIZONTAL,
    style: AxisStyle | None = None,
    plot_extent: int = 200,
    locale: Localizer | None = None,
) -> go.Figure:
    """Render a date-time axis with gridlines as a Plotly figure.

    Args:
        start: Lower bound; naive values are read in the style's zone.
        end: Upper bound.
        length: Axis length in pixels.
        orientation: Horizontal (labels below) or vertical (labels left).
        style: Pixel constants and locale. Defaults to AxisStyle().
        plot_extent: Depth in pixels of the gridded plot area.
        locale: Month names overriding the style's language table.

    Returns:
        Plotly Figure object.
    """
    style = style or AxisStyle()
    geometry = build_geometry(start, end, length, orientation, style, margin=_MARGIN)
    surface = PlotlySurface(style)
    axis = DateTimeAxis(geometry, surface, style, locale)
    axis.render()

    tick_pixels: list[float] = []
    axis.for_each_tick_do(lambda _value, pixel: tick_pixels.append(pixel))
    px = np.asarray(tick_pixels, dtype=float)

    horizontal = orientation is Orientation.HORIZONTAL
    along = length + 2 * _MARGIN
    breadth = geometry.breadth
    if horizontal:
        grid = np.column_stack(
            [px, np.full_like(px, -plot_extent), px, np.zeros_like(px)]
        )
        axis_line = np.array([[geometry.pixel_min, 0, geometry.pixel_max, 0]])
        x_range, y_range = [0, along], [breadth, -plot_extent]
        width, height = along, breadth + plot_extent
    else:
        grid = np.column_stack(
            [np.full_like(px, breadth), px, np.full_like(px, breadth + plot_extent), px]
        )
        axis_line = np.array(
            [[breadth, geometry.pixel_min, breadth, geometry.pixel_max]]
        )
        x_range, y_range = [0, breadth + plot_extent], [along, 0]
        width, height = breadth + plot_extent, along

    grid_x, grid_y = _segments(grid.reshape(-1, 4))
    tick_x, tick_y = _segments(
        np.vstack([axis_line, np.asarray(surface.lines, dtype=float).reshape(-1, 4)])
    )

    grid_trace = go.Scatter(
        x=grid_x,
        y=grid_y,
        mode="lines",
        line=dict(color=_GRID_COLOR, width=1, dash="dot"),
        hoverinfo="skip",
        name="gridlines",
    )
    tick_trace = go.Scatter(
        x=tick_x,
        y=tick_y,
        mode="lines",
        line=dict(color=_LINE_COLOR, width=1),
        hoverinfo="skip",
        name="ticks",
    )

    fig = go.Figure(data=[grid_trace, tick_trace])
    fig.update_layout(
        paper_bgcolor=_BG,
        plot_bgcolor=_BG,
        showlegend=False,
        margin=dict(l=0, r=0, t=0, b=0),
        width=width,
        height=height,
        xaxis=dict(visible=False, range=x_range, autorange=False, fixedrange=True),
        yaxis=dict(visible=False, range=y_range, autorange=False, fixedrange=True),
        annotations=surface.annotations,
    )
    return fig
