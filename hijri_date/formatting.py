# hijri_date/formatting.py
"""
String rendering for HijriDate.

``format()`` understands a subset of PHP's ``date()`` letters:

    d  day, 2 digits            j  day, no padding
    D  weekday, short           l  weekday, full
    F  month name, full         M  month name, short
    m  month, 2 digits          n  month, no padding
    Y  year                     y  year, 2 digits

A backslash makes the next character literal; anything else is copied as is.
"""
from __future__ import annotations

from functools import lru_cache
from typing import Callable

from django.utils.module_loading import import_string

from .conf import get_config

NUMERIC_TOKENS = frozenset("djmnYy")
NAME_TOKENS = frozenset("DlFM")
ESCAPE = "\\"


@lru_cache(maxsize=None)
def _load_translator(path: str) -> Callable[[str, str], str]:
    return import_string(path)


class FormattingMixin:
    __slots__ = ()

    def translate(self, key: str) -> str:
        """Return the translation of ``key`` in this date's locale."""
        translator = _load_translator(get_config().translator)
        return translator(self.locale, key)

    def format(self, pattern: str, transliterate: bool | None = None) -> str:
        if transliterate is None:
            transliterate = get_config().transliterate_numerals

        out: list[str] = []
        chars = iter(pattern)
        for ch in chars:
            if ch == ESCAPE:
                out.append(next(chars, ESCAPE))
            elif ch in NUMERIC_TOKENS:
                value = self._numeric_token(ch)
                out.append(self.transliterate(value) if transliterate else value)
            elif ch in NAME_TOKENS:
                out.append(self._name_token(ch))
            else:
                out.append(ch)
        return "".join(out)

    def transliterate(self, value: str) -> str:
        """Swap ASCII digits for the locale's numerals."""
        digits = self.translate("formatting.digits")
        return value.translate(str.maketrans("0123456789", digits))

    def _numeric_token(self, token: str) -> str:
        if token == "d":
            return f"{self.day:02d}"
        if token == "j":
            return str(self.day)
        if token == "m":
            return f"{self.month:02d}"
        if token == "n":
            return str(self.month)
        if token == "y":
            return f"{self.year % 100:02d}"
        return str(self.year)

    def _name_token(self, token: str) -> str:
        if token == "F":
            return self.translate(f"formatting.months.{self.month}")
        if token == "M":
            return self.translate(f"formatting.months_short.{self.month}")

        # weekday needs the actual Gregorian day
        weekday = self.to_gregorian().weekday()
        if token == "l":
            return self.translate(f"formatting.weekdays.{weekday}")
        return self.translate(f"formatting.weekdays_short.{weekday}")

    def to_date_string(self) -> str:
        """The date as ``Y-MM-DD``; this is also the storage format."""
        return f"{self.year}-{self.month:02d}-{self.day:02d}"

    def to_full_date(self) -> str:
        """Day, full month name in the date's locale, and year."""
        return self.format("j F Y")

    def __str__(self) -> str:
        return self.to_date_string()
