"""Level resolution: picks the outer and inner calendar levels for a time span."""

import logging

from dateaxis.models import (
    DAY_MS,
    HOUR_MS,
    MINUTE_MS,
    MONTH_MS,
    YEAR_MS,
    Granularity,
    LevelPair,
)

logger = logging.getLogger(__name__)

# (span upper limit in ms, levels); first matching row wins.
_THRESHOLDS: tuple[tuple[float, LevelPair], ...] = (
    (3 * MINUTE_MS, LevelPair(Granularity.DAY, Granularity.SECOND)),
    (3 * HOUR_MS, LevelPair(Granularity.DAY, Granularity.MINUTE)),
    (3 * DAY_MS, LevelPair(Granularity.DAY, Granularity.HOUR)),
    (3 * MONTH_MS, LevelPair(Granularity.MONTH, Granularity.DAY)),
    (3 * YEAR_MS, LevelPair(Granularity.YEAR, Granularity.MONTH)),
)
_WIDEST = LevelPair(Granularity.YEAR, Granularity.YEAR)


def determine_levels(min_ms: float, max_ms: float) -> LevelPair:
    """Choose the outer and inner levels for the span between two instants.

    Each threshold allows roughly three units of the next coarser level, so
    the inner level keeps a legible number of ticks. The outer level is never
    finer than the inner one; when they are equal only one tier is drawn.

    Args:
        min_ms: Lower instant in epoch milliseconds.
        max_ms: Upper instant in epoch milliseconds.

    Returns:
        LevelPair for the span.
    """
    span = abs(max_ms - min_ms)
    levels = _WIDEST
    for limit, pair in _THRESHOLDS:
        if span < limit:
            levels = pair
            break
    logger.debug(
        "span %.0f ms -> outer=%s inner=%s",
        span,
        levels.outer.value,
        levels.inner.value,
    )
    return levels
