"""Unit tests for environment-driven axis configuration."""

from __future__ import annotations

import pytest
from pytz import UnknownTimeZoneError

from dateaxis.config import AxisStyle, ConfigError

pytestmark = pytest.mark.unit


def test_defaults_without_environment() -> None:
    """An empty environment yields the built-in style."""

    style = AxisStyle.from_env({})
    assert style == AxisStyle()
    assert style.font_height == 12
    assert style.tick_length == 4
    assert style.axis_gap == 2
    assert style.tz.zone == "UTC"


def test_environment_overrides() -> None:
    """DATEAXIS_* variables override pixel constants, language and zone."""

    style = AxisStyle.from_env(
        {
            "DATEAXIS_FONT_HEIGHT": "14",
            "DATEAXIS_TICK_LENGTH": "6",
            "DATEAXIS_LANG": "ko",
            "DATEAXIS_TZ": "Asia/Seoul",
        }
    )
    assert style.font_height == 14.0
    assert style.tick_length == 6.0
    assert style.lang == "ko"
    assert style.locale.month_name(0) == "1월"
    assert style.tz.zone == "Asia/Seoul"


def test_non_numeric_pixel_value_is_rejected() -> None:
    """Malformed numbers raise ConfigError naming the variable."""

    with pytest.raises(ConfigError, match="DATEAXIS_AXIS_GAP"):
        AxisStyle.from_env({"DATEAXIS_AXIS_GAP": "wide"})


def test_unsupported_language_is_rejected() -> None:
    """Only bundled languages are accepted."""

    with pytest.raises(ConfigError):
        AxisStyle(lang="fr")


def test_negative_pixel_value_is_rejected() -> None:
    """Pixel constants cannot be negative."""

    with pytest.raises(ConfigError):
        AxisStyle(tick_length=-1)


def test_unknown_timezone_surfaces_pytz_error() -> None:
    """Zone names are resolved lazily through pytz."""

    style = AxisStyle(timezone="Mars/Olympus_Mons")
    with pytest.raises(UnknownTimeZoneError):
        style.tz
