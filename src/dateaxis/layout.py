"""Tick layout: places outer run labels and thinned inner tick labels.

Both passes walk forward in time with the label engine and only need a
value-to-pixel mapping plus a text-width measure; painting is left to the
caller (see dateaxis.axis).
"""

from __future__ import annotations

import logging
from datetime import tzinfo
from typing import Callable, Iterator, Sequence

from pytz import utc

from dateaxis.i18n import DEFAULT_LOCALE, Localizer
from dateaxis.labels import (
    first_aligned_at_or_after,
    incremented_aligned,
    label_at,
    next_aligned,
)
from dateaxis.levels import determine_levels
from dateaxis.models import (
    AxisGeometry,
    Granularity,
    InnerLayout,
    LabeledInstant,
    Orientation,
    PlacedLabel,
    PlacedTick,
)

logger = logging.getLogger(__name__)

Measure = Callable[[str], float]

# A leading run that starts off-axis keeps its label only when the text fits
# in this fraction of the gap to the next run.
_OUTER_FIT = 7 / 8
# Half-width estimate for inner labels; above 1/2 so neighbours keep a gap.
_HALF_WIDTH = 5 / 8
_MAX_TICKS = 100_000


def layout_outer(
    level: Granularity,
    geometry: AxisGeometry,
    measure: Measure,
    *,
    tz: tzinfo = utc,
    locale: Localizer = DEFAULT_LOCALE,
) -> list[PlacedLabel]:
    """Place one label per run of the outer level.

    Each run's label sits at the run start (clamped to the lower bound). When
    a single run covers the whole axis its label is centred instead.

    Args:
        level: Outer granularity.
        geometry: Axis bounds and pixel mapping.
        measure: Returns the pixel width of a string.
        tz: Zone whose wall-clock fields are used.
        locale: Month names and date templates.

    Returns:
        Placed labels in increasing time order.
    """
    if not geometry.is_ready:
        return []
    assert geometry.lower_bound is not None and geometry.upper_bound is not None
    lower_s, upper_s = geometry.lower_bound, geometry.upper_bound
    lower_ms, upper_ms = lower_s * 1000, upper_s * 1000
    to_pixel = geometry.data_to_coordinate

    this = label_at(level, lower_ms, tz=tz, locale=locale)
    if not this.is_valid:
        return []
    first = this
    placed: list[PlacedLabel] = []
    something_drawn = False

    while True:
        nxt = next_aligned(level, this.instant, tz=tz, locale=locale)
        if not nxt.is_valid or nxt.instant <= this.instant:
            logger.debug("outer walk stopped at %s", this.text)
            break

        if this.instant > upper_ms:
            if not something_drawn:
                placed.append(
                    PlacedLabel(
                        pixel=to_pixel((lower_s + upper_s) / 2),
                        text=first.text,
                        instant=first.instant,
                        anchor="middle",
                    )
                )
            break

        if something_drawn or nxt.instant < upper_ms:
            pixel = to_pixel(max(this.seconds, lower_s))
            fits = True
            if this.instant < lower_ms:
                gap = abs(to_pixel(nxt.seconds) - pixel)
                fits = measure(this.text) < _OUTER_FIT * gap
            if fits:
                placed.append(
                    PlacedLabel(
                        pixel=pixel, text=this.text, instant=this.instant, anchor="start"
                    )
                )
            # Counted as drawn even when suppressed
            something_drawn = True
        this = nxt

    return placed


def _walk(
    level: Granularity,
    lower_ms: float,
    upper_ms: float,
    tz: tzinfo,
    locale: Localizer,
) -> Iterator[LabeledInstant]:
    """Yield every aligned instant at level in [lower_ms, upper_ms)."""
    start = first_aligned_at_or_after(level, lower_ms, tz=tz, locale=locale)
    if not start.is_valid:
        return
    label = incremented_aligned(level, start.instant, 0, tz=tz, locale=locale)
    count = 0
    while label.is_valid and label.instant < upper_ms:
        yield label
        count += 1
        if count >= _MAX_TICKS:
            logger.warning(
                "stopped after %d %s ticks; span too wide for this level",
                count,
                level.value,
            )
            return
        nxt = incremented_aligned(level, label.instant, 1, tz=tz, locale=locale)
        if nxt.is_valid and nxt.instant <= label.instant:
            return
        label = nxt


def _collides(
    labels: Sequence[LabeledInstant], geometry: AxisGeometry, measure: Measure
) -> bool:
    horizontal = geometry.orientation is Orientation.HORIZONTAL
    last_used: float | None = None
    for label in labels:
        pixel = geometry.data_to_coordinate(label.seconds)
        half = _HALF_WIDTH * measure(label.tick_text)
        if last_used is not None:
            overlapped = (
                pixel - half < last_used if horizontal else pixel + half > last_used
            )
            if overlapped:
                return True
        last_used = pixel + half if horizontal else pixel - half
    return False


def find_label_stride(
    ticks: Sequence[LabeledInstant], geometry: AxisGeometry, measure: Measure
) -> int:
    """Return the smallest stride whose labels do not overlap.

    Labels are simulated at ticks[0], ticks[stride], ... A stride equal to
    the tick count leaves a single label, so the search always ends there.
    """
    if geometry.pixel_span <= 0 or not ticks:
        return 1
    stride = 1
    while stride < len(ticks) and _collides(ticks[::stride], geometry, measure):
        stride += 1
    return stride


def layout_inner(
    level: Granularity,
    geometry: AxisGeometry,
    measure: Measure,
    *,
    tz: tzinfo = utc,
    locale: Localizer = DEFAULT_LOCALE,
) -> InnerLayout:
    """Place a tick at every inner-level instant and label every stride-th one.

    Args:
        level: Inner granularity.
        geometry: Axis bounds and pixel mapping.
        measure: Returns the pixel width of a string.
        tz: Zone whose wall-clock fields are used.
        locale: Month names and date templates.

    Returns:
        InnerLayout with ticks in increasing time order and the chosen stride.
    """
    if not geometry.is_ready or geometry.pixel_span <= 0:
        return InnerLayout(ticks=(), stride=1)
    assert geometry.lower_bound is not None and geometry.upper_bound is not None
    labels = list(
        _walk(
            level,
            geometry.lower_bound * 1000,
            geometry.upper_bound * 1000,
            tz,
            locale,
        )
    )
    stride = find_label_stride(labels, geometry, measure)
    logger.debug("%d %s ticks, label stride %d", len(labels), level.value, stride)
    ticks = tuple(
        PlacedTick(
            pixel=geometry.data_to_coordinate(label.seconds),
            instant=label.instant,
            text=label.tick_text,
            labeled=i % stride == 0,
        )
        for i, label in enumerate(labels)
    )
    return InnerLayout(ticks=ticks, stride=stride)


def iter_ticks(
    geometry: AxisGeometry,
    *,
    tz: tzinfo = utc,
    locale: Localizer = DEFAULT_LOCALE,
) -> Iterator[tuple[float, float]]:
    """Yield (value in seconds, pixel) for every inner-level tick.

    Uses only the inner level chosen for the axis span; no measuring and no
    collision handling. Yields nothing until both bounds are set and differ.
    """
    if not geometry.is_ready:
        return
    assert geometry.lower_bound is not None and geometry.upper_bound is not None
    lower_ms = geometry.lower_bound * 1000
    upper_ms = geometry.upper_bound * 1000
    levels = determine_levels(lower_ms, upper_ms)
    for label in _walk(levels.inner, lower_ms, upper_ms, tz, locale):
        yield label.seconds, geometry.data_to_coordinate(label.seconds)
