"""Shared fixtures for date-axis tests."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime

import matplotlib
import pytest

matplotlib.use("Agg")

from dateaxis.labels import instant_from_datetime  # noqa: E402
from dateaxis.models import AxisGeometry, Orientation  # noqa: E402


def ms(*args: int) -> float:
    """Epoch milliseconds for a naive UTC datetime(*args)."""
    return instant_from_datetime(datetime(*args))


def seconds(*args: int) -> float:
    return ms(*args) / 1000


@dataclass
class FakeSurface:
    """TextSurface with a fixed per-character width that records draw calls."""

    char_width: float = 7.0
    lines: list[tuple[float, float, float, float]] = field(default_factory=list)
    texts: list[tuple[float, float, str, str, float]] = field(default_factory=list)

    def measure_text(self, text: str) -> float:
        return len(text) * self.char_width

    def draw_line(self, x0: float, y0: float, x1: float, y1: float) -> None:
        self.lines.append((x0, y0, x1, y1))

    def draw_text(
        self, x: float, y: float, text: str, anchor: str, rotation: float
    ) -> None:
        self.texts.append((x, y, text, anchor, rotation))

    def clear(self) -> None:
        self.lines.clear()
        self.texts.clear()

    @property
    def strings(self) -> list[str]:
        return [entry[2] for entry in self.texts]


@pytest.fixture
def surface() -> FakeSurface:
    return FakeSurface()


def make_geometry(
    start: datetime,
    end: datetime,
    length: float = 800,
    orientation: Orientation = Orientation.HORIZONTAL,
    breadth: float = 32,
) -> AxisGeometry:
    return AxisGeometry.linear(
        lower_bound=instant_from_datetime(start) / 1000,
        upper_bound=instant_from_datetime(end) / 1000,
        pixel_min=0,
        pixel_max=length,
        orientation=orientation,
        breadth=breadth,
    )
