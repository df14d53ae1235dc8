"""CLI entry point for date-time axis previews.

    uv run dateaxis "2023-01-01" "2025-06-01" --format html
"""

from __future__ import annotations

import argparse
import logging
import sys
from dataclasses import replace
from datetime import datetime
from pathlib import Path

from dotenv import load_dotenv
from pytz import UnknownTimeZoneError

from dateaxis.config import AxisStyle, ConfigError
from dateaxis.i18n import SUPPORTED_LANGS, t
from dateaxis.models import Orientation

_DATE_FORMATS = ("%Y-%m-%d %H:%M:%S", "%Y-%m-%d %H:%M", "%Y-%m-%d")


def parse_when(value: str) -> datetime:
    """Parse 'YYYY-MM-DD[ HH:MM[:SS]]' (a 'T' separator is accepted)."""
    text = value.strip().replace("T", " ")
    for fmt in _DATE_FORMATS:
        try:
            return datetime.strptime(text, fmt)
        except ValueError:
            continue
    raise ValueError(value)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="dateaxis",
        description="Render a calendar-aware date-time axis preview.",
    )
    parser.add_argument("start", help="lower bound, YYYY-MM-DD[ HH:MM[:SS]]")
    parser.add_argument("end", help="upper bound, YYYY-MM-DD[ HH:MM[:SS]]")
    parser.add_argument("--length", type=int, default=800, help="axis length in px")
    parser.add_argument(
        "--format", choices=("png", "html"), default="png", dest="fmt"
    )
    parser.add_argument("--vertical", action="store_true")
    parser.add_argument("--lang", choices=SUPPORTED_LANGS)
    parser.add_argument("--tz", help="IANA timezone for wall-clock fields")
    parser.add_argument("--output", type=Path)
    parser.add_argument("-v", "--verbose", action="store_true")
    return parser


def main(argv: list[str] | None = None) -> int:
    load_dotenv()
    args = build_parser().parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    try:
        style = AxisStyle.from_env()
        if args.lang:
            style = replace(style, lang=args.lang)
        if args.tz:
            style = replace(style, timezone=args.tz)
    except ConfigError as exc:
        print(exc, file=sys.stderr)
        return 2
    lang = style.lang

    try:
        style.tz  # resolve the zone name before rendering
    except UnknownTimeZoneError:
        print(t("cli_bad_tz", lang).format(name=style.timezone), file=sys.stderr)
        return 2

    try:
        start = parse_when(args.start)
        end = parse_when(args.end)
    except ValueError as exc:
        print(t("cli_bad_date", lang).format(value=exc), file=sys.stderr)
        return 2
    if start == end:
        print(t("cli_empty_range", lang), file=sys.stderr)
        return 2

    orientation = Orientation.VERTICAL if args.vertical else Orientation.HORIZONTAL
    if args.fmt == "png":
        from dateaxis.renderers.static import save_static_axis

        path = save_static_axis(
            start,
            end,
            output_path=args.output,
            length=args.length,
            orientation=orientation,
            style=style,
        )
    else:
        from dateaxis.renderers.svg_2d import render_svg_axis

        path = args.output or Path(
            f"axis__{start:%Y_%m_%d_%H_%M_%S}__{end:%Y_%m_%d_%H_%M_%S}.{args.fmt}"
        )
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(
            render_svg_axis(start, end, args.length, orientation, style),
            encoding="utf-8",
        )

    print(t("cli_saved", lang).format(path=path))
    return 0


if __name__ == "__main__":
    sys.exit(main())
