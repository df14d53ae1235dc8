"""Calendar label engine: alignment, stepping, and label text per granularity.

Every instant is epoch milliseconds. Fields are read in one fixed zone
(a pytz timezone, UTC unless the caller passes another) and all arithmetic
happens on those wall-clock fields:

  year            add to the year field, aligned to Jan 1
  month           add with a divmod carry into the year
  day .. second   add a timedelta and re-read every field from the result

Wall-clock fields resolve back to an instant through the zone: a time
skipped by a DST gap moves past the gap, and a repeated time in a fold takes
the occurrence on the side the caller is moving toward.

Each level's alignment and increment rule is its own small function over an
immutable CalendarFields record; the public functions dispatch on the level.
"""

from __future__ import annotations

import logging
import math
from dataclasses import replace
from datetime import datetime, timedelta, tzinfo
from typing import Callable

from pytz import AmbiguousTimeError, NonExistentTimeError, utc

from dateaxis.i18n import DEFAULT_LOCALE, Localizer
from dateaxis.models import INVALID, CalendarFields, Granularity, LabeledInstant

logger = logging.getLogger(__name__)


class InvalidInstantError(Exception):
    """Raw value cannot be turned into a well-formed calendar date."""


def _to_fields(instant: float, tz: tzinfo) -> CalendarFields:
    if not math.isfinite(instant):
        raise InvalidInstantError(f"not a finite instant: {instant!r}")
    try:
        dt = datetime.fromtimestamp(instant / 1000, tz)
    except (OverflowError, OSError, ValueError) as exc:
        raise InvalidInstantError(f"instant out of range: {instant!r}") from exc
    return _fields_of(dt)


def _fields_of(dt: datetime) -> CalendarFields:
    return CalendarFields(
        year=dt.year,
        month=dt.month - 1,
        day=dt.day,
        hour=dt.hour,
        minute=dt.minute,
        second=dt.second,
    )


def _naive(fields: CalendarFields) -> datetime:
    try:
        return datetime(
            fields.year,
            fields.month + 1,
            fields.day,
            fields.hour,
            fields.minute,
            fields.second,
        )
    except ValueError as exc:
        raise InvalidInstantError(str(exc)) from exc


def _ms(dt: datetime) -> float:
    return dt.timestamp() * 1000


def _occurrences(fields: CalendarFields, tz: tzinfo) -> list[datetime]:
    """Real instants that show these wall-clock fields, earliest first.

    A time skipped by a forward DST transition maps to the first real time
    after the gap; a repeated time during a fold maps to both occurrences.
    """
    naive = _naive(fields)
    try:
        return [tz.localize(naive, is_dst=None)]  # type: ignore[attr-defined]
    except NonExistentTimeError:
        return [tz.normalize(tz.localize(naive, is_dst=False))]  # type: ignore[attr-defined]
    except AmbiguousTimeError:
        return [
            tz.localize(naive, is_dst=True),  # type: ignore[attr-defined]
            tz.localize(naive, is_dst=False),  # type: ignore[attr-defined]
        ]


def _resolve(
    fields: CalendarFields, tz: tzinfo, reference: float, n: int
) -> datetime:
    """Pick the occurrence of fields that lies on the n side of reference.

    n > 0 takes the earliest occurrence after reference, n == 0 the latest
    at or before it, n < 0 the latest strictly before it.
    """
    occurrences = _occurrences(fields, tz)
    if n > 0:
        after = [dt for dt in occurrences if _ms(dt) > reference]
        return after[0] if after else occurrences[0]
    if n == 0:
        before = [dt for dt in occurrences if _ms(dt) <= reference]
    else:
        before = [dt for dt in occurrences if _ms(dt) < reference]
    return before[-1] if before else occurrences[0]


# --- Alignment (round down) -------------------------------------------------


def _align_year(f: CalendarFields) -> CalendarFields:
    return CalendarFields(year=f.year)


def _align_month(f: CalendarFields) -> CalendarFields:
    return CalendarFields(year=f.year, month=f.month)


def _align_day(f: CalendarFields) -> CalendarFields:
    return CalendarFields(year=f.year, month=f.month, day=f.day)


def _align_hour(f: CalendarFields) -> CalendarFields:
    return replace(f, minute=0, second=0)


def _align_minute(f: CalendarFields) -> CalendarFields:
    return replace(f, second=0)


def _align_second(f: CalendarFields) -> CalendarFields:
    return f


_ALIGN: dict[Granularity, Callable[[CalendarFields], CalendarFields]] = {
    Granularity.YEAR: _align_year,
    Granularity.MONTH: _align_month,
    Granularity.DAY: _align_day,
    Granularity.HOUR: _align_hour,
    Granularity.MINUTE: _align_minute,
    Granularity.SECOND: _align_second,
}


# --- Increment (aligned fields in, aligned fields out) ----------------------


def _add_years(f: CalendarFields, n: int) -> CalendarFields:
    return CalendarFields(year=f.year + n)


def _add_months(f: CalendarFields, n: int) -> CalendarFields:
    carry, month = divmod(f.month + n, 12)
    return CalendarFields(year=f.year + carry, month=month)


def _shift(f: CalendarFields, delta: timedelta) -> CalendarFields:
    try:
        return _fields_of(_naive(f) + delta)
    except OverflowError as exc:
        raise InvalidInstantError(str(exc)) from exc


def _add_days(f: CalendarFields, n: int) -> CalendarFields:
    return _shift(f, timedelta(days=n))


def _add_hours(f: CalendarFields, n: int) -> CalendarFields:
    return _shift(f, timedelta(hours=n))


def _add_minutes(f: CalendarFields, n: int) -> CalendarFields:
    return _shift(f, timedelta(minutes=n))


def _add_seconds(f: CalendarFields, n: int) -> CalendarFields:
    return _shift(f, timedelta(seconds=n))


_ADD: dict[Granularity, Callable[[CalendarFields, int], CalendarFields]] = {
    Granularity.YEAR: _add_years,
    Granularity.MONTH: _add_months,
    Granularity.DAY: _add_days,
    Granularity.HOUR: _add_hours,
    Granularity.MINUTE: _add_minutes,
    Granularity.SECOND: _add_seconds,
}


# --- Label text --------------------------------------------------------------


def _time_text(level: Granularity, f: CalendarFields) -> str:
    if level is Granularity.HOUR:
        return f"{f.hour}:00"
    if level is Granularity.MINUTE:
        return f"{f.hour}:{f.minute:02d}"
    return f"{f.hour}:{f.minute:02d}:{f.second:02d}"


def _label_text(level: Granularity, f: CalendarFields, locale: Localizer) -> str:
    if level is Granularity.YEAR:
        return str(f.year)
    month = locale.month_name(f.month)
    if level is Granularity.MONTH:
        return locale.format("fmt_month", month=month, year=f.year)
    date = locale.format("fmt_date", month=month, day=f.day, year=f.year)
    if level is Granularity.DAY:
        return date
    return f"{date} {_time_text(level, f)}"


def _tick_text(level: Granularity, f: CalendarFields, locale: Localizer) -> str:
    if level is Granularity.YEAR:
        return str(f.year)
    if level is Granularity.MONTH:
        return locale.month_name(f.month)
    if level is Granularity.DAY:
        return locale.format("fmt_day_tick", day=f.day)
    return _time_text(level, f)


def _labeled(level: Granularity, dt: datetime, locale: Localizer) -> LabeledInstant:
    # Re-read: a skipped wall time resolves to a later one.
    fields = _fields_of(dt)
    return LabeledInstant(
        text=_label_text(level, fields, locale),
        instant=_ms(dt),
        tick_text=_tick_text(level, fields, locale),
    )


# --- Public API ----------------------------------------------------------------


def label_at(
    level: Granularity,
    instant: float,
    *,
    tz: tzinfo = utc,
    locale: Localizer = DEFAULT_LOCALE,
) -> LabeledInstant:
    """Round instant down to the level's alignment and label it.

    Args:
        level: Granularity to align to.
        instant: Epoch milliseconds.
        tz: Zone whose wall-clock fields are used.
        locale: Month names and date templates.

    Returns:
        The aligned LabeledInstant, or INVALID if the instant is not a
        representable date.
    """
    try:
        fields = _ALIGN[level](_to_fields(instant, tz))
        return _labeled(level, _resolve(fields, tz, instant, 0), locale)
    except InvalidInstantError as exc:
        logger.debug("label_at(%s): %s", level.value, exc)
        return INVALID


def next_aligned(
    level: Granularity,
    instant: float,
    *,
    tz: tzinfo = utc,
    locale: Localizer = DEFAULT_LOCALE,
) -> LabeledInstant:
    """Return the aligned instant exactly one unit after instant's run start."""
    try:
        fields = _ALIGN[level](_to_fields(instant, tz))
        later = _resolve(_ADD[level](fields, 1), tz, instant, 1)
        return _labeled(level, later, locale)
    except InvalidInstantError as exc:
        logger.debug("next_aligned(%s): %s", level.value, exc)
        return INVALID


def first_aligned_at_or_after(
    level: Granularity,
    instant: float,
    *,
    tz: tzinfo = utc,
    locale: Localizer = DEFAULT_LOCALE,
) -> LabeledInstant:
    """Return the smallest aligned instant at level that is >= instant.

    Sub-second input at the second level rounds up to the next whole second.
    """
    try:
        fields = _ALIGN[level](_to_fields(instant, tz))
        # Inside a fold the later occurrence of the run start may still
        # be at or after instant.
        at_or_after = [
            dt for dt in _occurrences(fields, tz) if _ms(dt) >= instant
        ]
        if at_or_after:
            return _labeled(level, at_or_after[0], locale)
        later = _resolve(_ADD[level](fields, 1), tz, instant, 1)
        return _labeled(level, later, locale)
    except InvalidInstantError as exc:
        logger.debug("first_aligned_at_or_after(%s): %s", level.value, exc)
        return INVALID


def incremented_aligned(
    level: Granularity,
    aligned: float,
    n: int,
    *,
    tz: tzinfo = utc,
    locale: Localizer = DEFAULT_LOCALE,
) -> LabeledInstant:
    """Add n whole units of level to an aligned instant and relabel it.

    ``n = 0`` re-derives the labels without moving the instant. Unaligned
    input is rounded down first.
    """
    try:
        fields = _ALIGN[level](_to_fields(aligned, tz))
        moved = _resolve(_ADD[level](fields, n), tz, aligned, n)
        return _labeled(level, moved, locale)
    except InvalidInstantError as exc:
        logger.debug("incremented_aligned(%s, %d): %s", level.value, n, exc)
        return INVALID


def instant_from_datetime(dt: datetime, tz: tzinfo = utc) -> float:
    """Epoch milliseconds for dt; naive values are read in tz."""
    if dt.tzinfo is None:
        dt = tz.localize(dt, is_dst=False)  # type: ignore[attr-defined]
    return dt.timestamp() * 1000
