"""Matplotlib static PNG renderer."""

from datetime import datetime
from pathlib import Path

import matplotlib.pyplot as plt
from matplotlib.artist import Artist
from matplotlib.axes import Axes
from matplotlib.figure import Figure

from dateaxis.axis import DateTimeAxis, build_geometry
from dateaxis.config import AxisStyle
from dateaxis.i18n import Localizer
from dateaxis.models import Orientation

_ROOT = Path(__file__).parent.parent.parent.parent
_BG = "#0d1b35"
_TEXT_COLOR = "#f0e0b0"
_LINE_COLOR = "#c9a96e"
_MARGIN = 40
_DPI = 100


class MatplotlibSurface:
    """TextSurface drawing onto a matplotlib Axes laid out in figure pixels."""

    def __init__(self, fig: Figure, ax: Axes, style: AxisStyle) -> None:
        self._fig = fig
        self._ax = ax
        self._fontsize = style.font_height * 72 / fig.dpi  # px -> pt
        self._family = style.font_family
        self._artists: list[Artist] = []

    def measure_text(self, text: str) -> float:
        artist = self._ax.text(0, 0, text, fontsize=self._fontsize, family=self._family)
        renderer = self._fig.canvas.get_renderer()  # type: ignore[attr-defined]
        width = artist.get_window_extent(renderer=renderer).width
        artist.remove()
        return float(width)

    def draw_line(self, x0: float, y0: float, x1: float, y1: float) -> None:
        (line,) = self._ax.plot([x0, x1], [y0, y1], color=_LINE_COLOR, linewidth=1)
        self._artists.append(line)

    def draw_text(
        self, x: float, y: float, text: str, anchor: str, rotation: float
    ) -> None:
        # matplotlib rotates counter-clockwise; surface angles follow SVG
        artist = self._ax.text(
            x,
            y,
            text,
            ha="left" if anchor == "start" else "center",
            va="center",
            rotation=-rotation,
            rotation_mode="anchor",
            fontsize=self._fontsize,
            family=self._family,
            color=_TEXT_COLOR,
        )
        self._artists.append(artist)

    def clear(self) -> None:
        for artist in self._artists:
            artist.remove()
        self._artists.clear()


def render_static_axis(
    start: datetime,
    end: datetime,
    length: int = 800,
    orientation: Orientation = Orientation.HORIZONTAL,
    style: AxisStyle | None = None,
    locale: Localizer | None = None,
) -> Figure:
    """Render a date-time axis between two datetimes as a matplotlib figure.

    Args:
        start: Lower bound; naive values are read in the style's zone.
        end: Upper bound.
        length: Axis length in pixels.
        orientation: Horizontal (labels below) or vertical (labels left).
        style: Pixel constants and locale. Defaults to AxisStyle().
        locale: Month names overriding the style's language table.

    Returns:
        matplotlib Figure object.
    """
    style = style or AxisStyle()
    geometry = build_geometry(start, end, length, orientation, style, margin=_MARGIN)
    pad = style.font_height
    along = length + 2 * _MARGIN
    across = geometry.breadth + pad
    horizontal = orientation is Orientation.HORIZONTAL
    width_px, height_px = (along, across) if horizontal else (across, along)

    fig, ax = plt.subplots(figsize=(width_px / _DPI, height_px / _DPI), dpi=_DPI)
    ax.set_position((0, 0, 1, 1))
    fig.patch.set_facecolor(_BG)
    ax.set_facecolor(_BG)

    # Axis-band pixel space, y growing downward
    if horizontal:
        ax.set_xlim(0, width_px)
        ax.set_ylim(geometry.breadth, -pad)
        ax.plot(
            [geometry.pixel_min, geometry.pixel_max], [0, 0], color=_LINE_COLOR, linewidth=1
        )
    else:
        ax.set_xlim(0, width_px)
        ax.set_ylim(height_px, 0)
        ax.plot(
            [geometry.breadth, geometry.breadth],
            [geometry.pixel_min, geometry.pixel_max],
            color=_LINE_COLOR,
            linewidth=1,
        )
    ax.axis("off")

    DateTimeAxis(geometry, MatplotlibSurface(fig, ax, style), style, locale).render()
    return fig


def save_static_axis(
    start: datetime,
    end: datetime,
    output_path: Path | None = None,
    **kwargs: object,
) -> Path:
    """Save a rendered axis as a PNG file.

    Args:
        start: Lower bound.
        end: Upper bound.
        output_path: Destination path. Auto-generated under results/ if None.
        **kwargs: Passed to render_static_axis.

    Returns:
        Path to the saved file.
    """
    if output_path is None:
        filename = f"axis__{start:%Y_%m_%d_%H_%M_%S}__{end:%Y_%m_%d_%H_%M_%S}.png"
        output_path = _ROOT / "results" / filename

    output_path.parent.mkdir(parents=True, exist_ok=True)
    fig = render_static_axis(start, end, **kwargs)  # type: ignore[arg-type]
    fig.savefig(output_path, facecolor=_BG)
    plt.close(fig)
    return output_path
