"""Simple two-language (ko/en) translation helper for axis labels."""

from __future__ import annotations

from dataclasses import dataclass

_STRINGS: dict[str, dict[str, str]] = {
    "month_0": {"ko": "1월", "en": "Jan"},
    "month_1": {"ko": "2월", "en": "Feb"},
    "month_2": {"ko": "3월", "en": "Mar"},
    "month_3": {"ko": "4월", "en": "Apr"},
    "month_4": {"ko": "5월", "en": "May"},
    "month_5": {"ko": "6월", "en": "Jun"},
    "month_6": {"ko": "7월", "en": "Jul"},
    "month_7": {"ko": "8월", "en": "Aug"},
    "month_8": {"ko": "9월", "en": "Sep"},
    "month_9": {"ko": "10월", "en": "Oct"},
    "month_10": {"ko": "11월", "en": "Nov"},
    "month_11": {"ko": "12월", "en": "Dec"},
    # Month-level outer label
    "fmt_month": {
        "ko": "{year}년 {month}",
        "en": "{month}, {year}",
    },
    # Day-level date; time of day is appended for finer levels
    "fmt_date": {
        "ko": "{year}년 {month} {day}일",
        "en": "{month} {day}, {year}",
    },
    "fmt_day_tick": {
        "ko": "{day}일",
        "en": "{day}",
    },
    "cli_saved": {
        "ko": "저장됨: {path}",
        "en": "Saved: {path}",
    },
    "cli_bad_date": {
        "ko": "날짜 형식이 올바르지 않아요: {value} (YYYY-MM-DD[ HH:MM[:SS]])",
        "en": "Invalid date: {value} (expected YYYY-MM-DD[ HH:MM[:SS]])",
    },
    "cli_empty_range": {
        "ko": "시작과 끝이 같아요. 서로 다른 시각을 입력하세요.",
        "en": "Start and end are equal. Enter two different instants.",
    },
    "cli_bad_tz": {
        "ko": "알 수 없는 시간대예요: {name}",
        "en": "Unknown timezone: {name}",
    },
}

SUPPORTED_LANGS = ("en", "ko")


def t(key: str, lang: str) -> str:
    """Return the translated string for key in lang.

    Falls back to 'en', then to the key itself if not found.
    """
    entry = _STRINGS.get(key)
    if entry is None:
        return key
    return entry.get(lang) or entry.get("en") or key


@dataclass(frozen=True)
class Localizer:
    """Month names and label templates for one language.

    ``month_names`` overrides the built-in table with twelve already-localized
    strings (index 0 = January).
    """

    lang: str = "en"
    month_names: tuple[str, ...] | None = None

    def __post_init__(self) -> None:
        if self.month_names is not None and len(self.month_names) != 12:
            raise ValueError(
                f"month_names needs 12 entries, got {len(self.month_names)}"
            )

    def month_name(self, index: int) -> str:
        if self.month_names is not None:
            return self.month_names[index]
        return t(f"month_{index}", self.lang)

    def format(self, key: str, **values: object) -> str:
        return t(key, self.lang).format(**values)


DEFAULT_LOCALE = Localizer()
