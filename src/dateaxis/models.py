"""Data model definitions: calendar levels, labeled instants, and axis geometry."""

from __future__ import annotations

import enum
import functools
import math
from dataclasses import dataclass, field
from typing import Callable

SECOND_MS = 1000
MINUTE_MS = SECOND_MS * 60
HOUR_MS = MINUTE_MS * 60
DAY_MS = HOUR_MS * 24
MONTH_MS = DAY_MS * 30  # Approximate; only used for span thresholds
YEAR_MS = DAY_MS * 365


@functools.total_ordering
class Granularity(enum.Enum):
    """Calendar level, ordered from finest (SECOND) to coarsest (YEAR)."""

    SECOND = "second"
    MINUTE = "minute"
    HOUR = "hour"
    DAY = "day"
    MONTH = "month"
    YEAR = "year"

    @property
    def rank(self) -> int:
        return _RANK[self]

    @property
    def unit_ms(self) -> int:
        """Nominal length of one unit in milliseconds."""
        return _UNIT_MS[self]

    def __lt__(self, other: object) -> bool:
        if not isinstance(other, Granularity):
            return NotImplemented
        return self.rank < other.rank


_RANK: dict[Granularity, int] = {g: i for i, g in enumerate(Granularity)}
_UNIT_MS: dict[Granularity, int] = {
    Granularity.SECOND: SECOND_MS,
    Granularity.MINUTE: MINUTE_MS,
    Granularity.HOUR: HOUR_MS,
    Granularity.DAY: DAY_MS,
    Granularity.MONTH: MONTH_MS,
    Granularity.YEAR: YEAR_MS,
}


class Orientation(enum.Enum):
    HORIZONTAL = "horizontal"
    VERTICAL = "vertical"


@dataclass(frozen=True)
class CalendarFields:
    """Wall-clock fields of an instant. Month is zero-based (0=January)."""

    year: int
    month: int = 0
    day: int = 1
    hour: int = 0
    minute: int = 0
    second: int = 0

    def __post_init__(self) -> None:
        if not 0 <= self.month <= 11:
            raise ValueError(f"month out of range: {self.month}")
        if not 1 <= self.day <= 31:
            raise ValueError(f"day out of range: {self.day}")
        if not 0 <= self.hour <= 23:
            raise ValueError(f"hour out of range: {self.hour}")
        if not 0 <= self.minute <= 59:
            raise ValueError(f"minute out of range: {self.minute}")
        if not 0 <= self.second <= 59:
            raise ValueError(f"second out of range: {self.second}")


@dataclass(frozen=True)
class LabeledInstant:
    """An aligned instant with its labels at one granularity."""

    text: str  # Canonical label ("Jan, 2023", "Jan 15, 2023 9:05")
    instant: float  # Epoch milliseconds, aligned to the granularity
    tick_text: str = ""  # Compact inner-tier label ("15", "9:05")

    @property
    def is_valid(self) -> bool:
        return not math.isnan(self.instant)

    @property
    def seconds(self) -> float:
        return self.instant / 1000


INVALID = LabeledInstant(text="", instant=math.nan)


@dataclass(frozen=True)
class LevelPair:
    """Outer (coarse) and inner (fine) granularity for a span."""

    outer: Granularity
    inner: Granularity

    @property
    def is_single(self) -> bool:
        return self.outer == self.inner

    @property
    def num_levels(self) -> int:
        return 1 if self.is_single else 2


@dataclass(frozen=True)
class AxisGeometry:
    """Read-only view of an axis supplied by the host on every draw.

    Bounds are in seconds. ``data_to_coordinate`` returns the absolute pixel
    position along the axis for a value in seconds.
    """

    lower_bound: float | None
    upper_bound: float | None
    pixel_min: float
    pixel_max: float
    orientation: Orientation
    data_to_coordinate: Callable[[float], float] = field(compare=False)
    breadth: float = 0.0  # Pixel thickness of the label band

    @property
    def is_ready(self) -> bool:
        return (
            self.lower_bound is not None
            and self.upper_bound is not None
            and self.upper_bound != self.lower_bound
        )

    @property
    def pixel_span(self) -> float:
        return self.pixel_max - self.pixel_min

    @classmethod
    def linear(
        cls,
        lower_bound: float,
        upper_bound: float,
        pixel_min: float,
        pixel_max: float,
        orientation: Orientation = Orientation.HORIZONTAL,
        breadth: float = 0.0,
    ) -> AxisGeometry:
        """Build geometry with a linear value-to-pixel mapping.

        Horizontal axes map the lower bound to ``pixel_min``. Vertical axes
        map it to ``pixel_max`` since screen y grows downward.
        """
        span = upper_bound - lower_bound

        def to_pixel(value: float) -> float:
            frac = (value - lower_bound) / span if span else 0.0
            if orientation is Orientation.HORIZONTAL:
                return pixel_min + frac * (pixel_max - pixel_min)
            return pixel_max - frac * (pixel_max - pixel_min)

        return cls(
            lower_bound=lower_bound,
            upper_bound=upper_bound,
            pixel_min=pixel_min,
            pixel_max=pixel_max,
            orientation=orientation,
            data_to_coordinate=to_pixel,
            breadth=breadth,
        )


@dataclass(frozen=True)
class PlacedLabel:
    """An outer-tier label positioned along the axis."""

    pixel: float
    text: str
    instant: float  # Epoch milliseconds of the run start
    anchor: str  # "start" or "middle"


@dataclass(frozen=True)
class PlacedTick:
    """An inner-tier tick; ``labeled`` ticks also carry visible text."""

    pixel: float
    instant: float
    text: str
    labeled: bool


@dataclass(frozen=True)
class InnerLayout:
    ticks: tuple[PlacedTick, ...]
    stride: int

    @property
    def labeled(self) -> tuple[PlacedTick, ...]:
        return tuple(tick for tick in self.ticks if tick.labeled)
