"""Integration tests for the matplotlib, SVG and Plotly renderers."""

from __future__ import annotations

from datetime import datetime
from pathlib import Path

import matplotlib.pyplot as plt
import pytest

from dateaxis.config import AxisStyle
from dateaxis.i18n import Localizer
from dateaxis.models import Orientation
from dateaxis.renderers.plotly_2d import PlotlySurface, render_plotly_axis
from dateaxis.renderers.static import render_static_axis, save_static_axis
from dateaxis.renderers.svg_2d import SvgSurface, estimate_text_width, render_svg_axis

pytestmark = pytest.mark.integration

_START = datetime(2023, 1, 1)
_END = datetime(2025, 6, 1)


def test_estimate_text_width_counts_wide_glyphs_double() -> None:
    """Hangul glyphs are wider than Latin ones."""

    assert estimate_text_width("Jan", 10) == pytest.approx(18)
    assert estimate_text_width("1월", 10) == pytest.approx(16)


def test_svg_surface_escapes_and_rotates() -> None:
    """Text is HTML-escaped and rotated about its anchor point."""

    surface = SvgSurface(AxisStyle())
    surface.draw_text(10, 20, "<Q1>", "middle", -90)
    assert "&lt;Q1&gt;" in surface.elements[0]
    assert 'transform="rotate(-90 10.0 20.0)"' in surface.elements[0]
    surface.clear()
    assert surface.elements == []


def test_render_svg_axis_contains_both_tiers() -> None:
    """The page embeds an SVG with year and month labels."""

    page = render_svg_axis(_START, _END)
    assert page.startswith("<!DOCTYPE html>")
    assert '<svg id="axis"' in page
    for year in ("2023", "2024", "2025"):
        assert f">{year}</text>" in page
    assert ">Jan</text>" in page


def test_render_svg_axis_vertical_korean() -> None:
    """Vertical Korean axes rotate labels and use Korean month names."""

    page = render_svg_axis(
        _START, _END, length=600, orientation=Orientation.VERTICAL, style=AxisStyle(lang="ko")
    )
    assert "rotate(-90" in page
    assert ">1월</text>" in page


def test_render_svg_axis_with_custom_month_names() -> None:
    """A host-supplied Localizer replaces the built-in month table."""

    names = tuple(f"M{index + 1}" for index in range(12))
    page = render_svg_axis(_START, _END, locale=Localizer(month_names=names))
    assert ">M1</text>" in page
    assert ">Jan</text>" not in page


def test_render_plotly_axis_builds_traces_and_annotations() -> None:
    """Ticks and gridlines become line traces; labels become annotations."""

    fig = render_plotly_axis(_START, _END)
    names = [trace.name for trace in fig.data]
    assert names == ["gridlines", "ticks"]
    texts = [annotation.text for annotation in fig.layout.annotations]
    assert {"2023", "2024", "2025"} <= set(texts)
    # 29 monthly gridlines, each two points plus a gap
    assert len(fig.data[0].x) == 29 * 3


def test_plotly_surface_maps_anchor() -> None:
    """Start anchors align left; others centre."""

    surface = PlotlySurface(AxisStyle())
    surface.draw_text(0, 0, "2023", "start", 0)
    surface.draw_text(0, 0, "Jan", "middle", -90)
    assert surface.annotations[0]["xanchor"] == "left"
    assert surface.annotations[1]["xanchor"] == "center"
    assert surface.annotations[1]["textangle"] == -90


def test_render_static_axis_draws_text_artists() -> None:
    """The matplotlib figure carries the year labels."""

    fig = render_static_axis(_START, _END)
    try:
        texts = [text.get_text() for text in fig.axes[0].texts]
        assert {"2023", "2024", "2025"} <= set(texts)
        assert "Jan" in texts
    finally:
        plt.close(fig)


def test_render_static_axis_vertical() -> None:
    """Vertical figures are taller than wide."""

    fig = render_static_axis(_START, _END, length=500, orientation=Orientation.VERTICAL)
    try:
        width, height = fig.get_size_inches()
        assert height > width
    finally:
        plt.close(fig)


def test_save_static_axis_writes_png(tmp_path: Path) -> None:
    """The PNG lands at the requested path."""

    output = save_static_axis(_START, _END, output_path=tmp_path / "axis.png")
    assert output == tmp_path / "axis.png"
    assert output.read_bytes()[:8] == b"\x89PNG\r\n\x1a\n"
