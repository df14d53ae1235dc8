"""Date-time axis helper: draws two-tier calendar labels on a rendering surface."""

from __future__ import annotations

import logging
from datetime import datetime
from typing import Callable, Protocol

from dateaxis.config import AxisStyle
from dateaxis.i18n import Localizer
from dateaxis.labels import instant_from_datetime
from dateaxis.layout import iter_ticks, layout_inner, layout_outer
from dateaxis.levels import determine_levels
from dateaxis.models import AxisGeometry, Granularity, Orientation

logger = logging.getLogger(__name__)


class TextSurface(Protocol):
    """What the axis needs from a canvas.

    Coordinates are in the axis band's own pixel space: for a horizontal axis
    the axis line is y=0 and labels go below it; for a vertical axis the axis
    line is x=geometry.breadth and labels go to its left.
    """

    def measure_text(self, text: str) -> float:
        """Pixel width of text at the label font."""
        ...

    def draw_line(self, x0: float, y0: float, x1: float, y1: float) -> None: ...

    def draw_text(
        self, x: float, y: float, text: str, anchor: str, rotation: float
    ) -> None:
        """Draw text at (x, y); anchor is 'start' or 'middle', rotation in degrees."""
        ...

    def clear(self) -> None:
        """Remove every element drawn so far."""
        ...


class DateTimeAxis:
    """Draws calendar-aligned ticks and labels for a time axis.

    The host supplies fresh geometry before each redraw and calls
    ``draw_ticks`` once per redraw cycle. A ``locale`` built from
    already-localized month names overrides the style's language table.
    """

    def __init__(
        self,
        geometry: AxisGeometry,
        surface: TextSurface,
        style: AxisStyle | None = None,
        locale: Localizer | None = None,
    ) -> None:
        self.geometry = geometry
        self.surface = surface
        self.style = style or AxisStyle()
        self.max_number_extent: float | None = None
        self._tz = self.style.tz
        self._locale = locale or self.style.locale

    def draw_ticks(self) -> bool:
        """Resolve levels and draw one or two label tiers.

        Returns:
            True when labels were drawn. False when the bounds are not ready,
            or when the label band height changed: the new height is stored
            in ``max_number_extent`` and the host should reserve the space
            and call again.
        """
        geometry = self.geometry
        if not geometry.is_ready:
            return False
        assert geometry.lower_bound is not None and geometry.upper_bound is not None
        levels = determine_levels(
            geometry.lower_bound * 1000, geometry.upper_bound * 1000
        )
        extent = levels.num_levels * self.style.font_height
        if extent != self.max_number_extent:
            logger.debug(
                "label band extent %s -> %s; waiting for host relayout",
                self.max_number_extent,
                extent,
            )
            self.max_number_extent = extent
            return False
        if not levels.is_single:
            self.draw_outer_labels(levels.outer)
        self.draw_inner_labels(levels.inner)
        return True

    def draw_outer_labels(self, level: Granularity) -> None:
        style = self.style
        horizontal = self.geometry.orientation is Orientation.HORIZONTAL
        if horizontal:
            offset = 1.5 * style.font_height + style.tick_length + style.axis_gap
            rotation = 0.0
        else:
            offset = (
                self.geometry.breadth
                - style.axis_gap
                - style.tick_length
                - 1.5 * style.font_height
            )
            rotation = -90.0

        for label in layout_outer(
            level,
            self.geometry,
            self.surface.measure_text,
            tz=self._tz,
            locale=self._locale,
        ):
            if horizontal:
                x, y = label.pixel, offset
            else:
                x, y = offset, label.pixel
            self.surface.draw_text(x, y, label.text, label.anchor, rotation)

    def draw_inner_labels(self, level: Granularity) -> None:
        style = self.style
        horizontal = self.geometry.orientation is Orientation.HORIZONTAL
        label_offset = style.tick_length + style.axis_gap + style.font_height / 2
        breadth = self.geometry.breadth

        layout = layout_inner(
            level,
            self.geometry,
            self.surface.measure_text,
            tz=self._tz,
            locale=self._locale,
        )
        for tick in layout.ticks:
            if horizontal:
                self.surface.draw_line(tick.pixel, 0, tick.pixel, style.tick_length)
                x, y, rotation = tick.pixel, label_offset, 0.0
            else:
                self.surface.draw_line(
                    breadth, tick.pixel, breadth - style.tick_length, tick.pixel
                )
                x, y, rotation = breadth - label_offset, tick.pixel, -90.0
            if tick.labeled:
                self.surface.draw_text(x, y, tick.text, "middle", rotation)

    def for_each_tick_do(self, visitor: Callable[[float, float], object]) -> None:
        """Call visitor(value_seconds, pixel) for each inner-level tick."""
        for value, pixel in iter_ticks(
            self.geometry, tz=self._tz, locale=self._locale
        ):
            visitor(value, pixel)

    def clear(self) -> None:
        self.surface.clear()

    def render(self) -> bool:
        """Clear the surface and draw, repeating once after a band relayout."""
        self.clear()
        if self.draw_ticks():
            return True
        return self.draw_ticks()


def label_band_breadth(style: AxisStyle) -> float:
    """Pixel thickness that fits both label tiers beside the axis line."""
    return style.tick_length + 2 * style.axis_gap + 2 * style.font_height


def build_geometry(
    start: datetime,
    end: datetime,
    length: float,
    orientation: Orientation = Orientation.HORIZONTAL,
    style: AxisStyle | None = None,
    margin: float = 40,
) -> AxisGeometry:
    """Linear geometry for an axis of ``length`` pixels between two datetimes.

    Naive datetimes are read in the style's zone.
    """
    style = style or AxisStyle()
    tz = style.tz
    return AxisGeometry.linear(
        lower_bound=instant_from_datetime(start, tz) / 1000,
        upper_bound=instant_from_datetime(end, tz) / 1000,
        pixel_min=margin,
        pixel_max=margin + length,
        orientation=orientation,
        breadth=label_band_breadth(style),
    )
