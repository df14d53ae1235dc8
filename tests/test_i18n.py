"""Unit tests for the translation helper and month-name localizer."""

from __future__ import annotations

import pytest

from dateaxis.i18n import Localizer, t

pytestmark = pytest.mark.unit


def test_t_falls_back_to_english_then_key() -> None:
    """Unknown languages use English; unknown keys echo back."""

    assert t("month_0", "ko") == "1월"
    assert t("month_0", "fr") == "Jan"
    assert t("no_such_key", "en") == "no_such_key"


def test_localizer_formats_templates() -> None:
    """Templates are filled with keyword values."""

    assert Localizer("en").format("fmt_month", month="May", year=2024) == "May, 2024"
    assert Localizer("ko").format("fmt_day_tick", day=3) == "3일"


def test_custom_month_names_need_twelve_entries() -> None:
    """A partial month table is rejected up front."""

    with pytest.raises(ValueError):
        Localizer(month_names=("Jan", "Feb"))
    names = tuple("janv févr mars avr mai juin juil août sept oct nov déc".split())
    assert Localizer(month_names=names).month_name(7) == "août"
