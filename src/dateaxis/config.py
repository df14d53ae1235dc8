"""Axis style and zone configuration, overridable from environment variables."""

from __future__ import annotations

import os
from dataclasses import dataclass, fields
from datetime import tzinfo

from pytz import timezone

from dateaxis.i18n import SUPPORTED_LANGS, Localizer

_ENV_PREFIX = "DATEAXIS_"


class ConfigError(Exception):
    """Malformed configuration value."""


@dataclass(frozen=True)
class AxisStyle:
    """Pixel constants and locale used when painting an axis."""

    font_height: float = 12  # Label row height in pixels
    tick_length: float = 4
    axis_gap: float = 2  # Gap between tick end and label
    lang: str = "en"  # 'en' or 'ko'
    timezone: str = "UTC"  # IANA name; wall-clock fields are read here
    font_family: str = "sans-serif"

    def __post_init__(self) -> None:
        if self.lang not in SUPPORTED_LANGS:
            raise ConfigError(f"unsupported lang: {self.lang!r}")
        for name in ("font_height", "tick_length", "axis_gap"):
            if getattr(self, name) < 0:
                raise ConfigError(f"{name} must not be negative")

    @property
    def tz(self) -> tzinfo:
        """pytz zone for ``timezone``; raises pytz.UnknownTimeZoneError."""
        return timezone(self.timezone)

    @property
    def locale(self) -> Localizer:
        return Localizer(lang=self.lang)

    @classmethod
    def from_env(cls, environ: dict[str, str] | None = None) -> AxisStyle:
        """Build a style from DATEAXIS_* variables, defaults for the rest.

        Args:
            environ: Mapping to read instead of os.environ.

        Raises:
            ConfigError: On a non-numeric pixel value or unsupported lang.
        """
        env = os.environ if environ is None else environ
        values: dict[str, object] = {}
        for f in fields(cls):
            raw = env.get(_ENV_PREFIX + f.name.upper())
            if raw is None and f.name == "timezone":
                raw = env.get(_ENV_PREFIX + "TZ")
            if raw is None:
                continue
            if f.name in ("font_height", "tick_length", "axis_gap"):
                try:
                    values[f.name] = float(raw)
                except ValueError as exc:
                    raise ConfigError(
                        f"{_ENV_PREFIX}{f.name.upper()} is not a number: {raw!r}"
                    ) from exc
            else:
                values[f.name] = raw.strip()
        return cls(**values)  # type: ignore[arg-type]
