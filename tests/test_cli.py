"""Integration tests for the dateaxis command line."""

from __future__ import annotations

from datetime import datetime
from pathlib import Path

import pytest

from dateaxis.cli import main, parse_when

pytestmark = pytest.mark.integration


@pytest.fixture(autouse=True)
def _isolated_env(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
    monkeypatch.chdir(tmp_path)
    for name in ("DATEAXIS_LANG", "DATEAXIS_TZ", "DATEAXIS_TIMEZONE", "DATEAXIS_FONT_HEIGHT"):
        monkeypatch.delenv(name, raising=False)


@pytest.mark.parametrize(
    ("value", "expected"),
    [
        ("2023-01-05", datetime(2023, 1, 5)),
        ("2023-01-05 10:30", datetime(2023, 1, 5, 10, 30)),
        ("2023-01-05T10:30:15", datetime(2023, 1, 5, 10, 30, 15)),
    ],
)
def test_parse_when_accepts_supported_forms(value: str, expected: datetime) -> None:
    """Dates with optional minutes and seconds parse."""

    assert parse_when(value) == expected


def test_main_writes_html(tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
    """--format html saves the SVG page and prints its path."""

    output = tmp_path / "out" / "axis.html"
    code = main(["2023-01-01", "2025-06-01", "--format", "html", "--output", str(output)])
    assert code == 0
    assert "<svg" in output.read_text(encoding="utf-8")
    assert f"Saved: {output}" in capsys.readouterr().out


def test_main_writes_png_in_korean(tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
    """PNG output honours --lang for messages."""

    output = tmp_path / "axis.png"
    code = main(["2023-01-01 00:00", "2023-01-01 02:00", "--output", str(output), "--lang", "ko"])
    assert code == 0
    assert output.exists()
    assert "저장됨" in capsys.readouterr().out


def test_main_rejects_bad_date(capsys: pytest.CaptureFixture[str]) -> None:
    """Unparseable bounds exit with status 2."""

    assert main(["yesterday", "2023-01-01"]) == 2
    assert "Invalid date: yesterday" in capsys.readouterr().err


def test_main_rejects_empty_range(capsys: pytest.CaptureFixture[str]) -> None:
    """Equal bounds are refused before rendering."""

    assert main(["2023-01-01", "2023-01-01"]) == 2
    assert "Start and end are equal" in capsys.readouterr().err


def test_main_rejects_unknown_timezone(capsys: pytest.CaptureFixture[str]) -> None:
    """An unknown --tz name exits with status 2 instead of a traceback."""

    assert main(["2023-01-01", "2023-02-01", "--tz", "Mars/Olympus"]) == 2
    assert "Unknown timezone: Mars/Olympus" in capsys.readouterr().err
