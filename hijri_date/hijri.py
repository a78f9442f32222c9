# hijri_date/hijri.py
from __future__ import annotations

import re
from datetime import date, datetime, timedelta
from functools import total_ordering
from typing import TYPE_CHECKING, Any, Union

from django.utils import timezone

from . import calendar_math
from .conf import get_config
from .exceptions import InvalidHijriDate
from .formatting import FormattingMixin

if TYPE_CHECKING:
    from .converters import Converter

PARSABLE_REGEX = re.compile(r"^\d{1,4}-(0[1-9]|1[0-2])-(0[1-9]|[12]\d|30)$")

Provenance = Union[date, datetime, None]


@total_ordering
class HijriDate(FormattingMixin):
    """
    A day in the Maldivian Hijri calendar.

    Instances never change. ``add_days()`` and friends return a new
    ``HijriDate``. The 30-day arithmetic drops ``estimated_from``; the
    ``*_exact`` variants carry whatever the converter reports for the new day.

    Equality, ordering and hashing only look at (year, month, day).
    """

    __slots__ = ("_year", "_month", "_day", "_locale", "_estimated_from")

    MUHARRAM = 1
    SAFAR = 2
    RABI_I = 3
    RABI_II = 4
    JUMAD_I = 5
    JUMAD_II = 6
    RAJAB = 7
    SHABAN = 8
    RAMADAN = 9
    SHAWWAL = 10
    DHUL_QADA = 11
    DHUL_HIJJA = 12

    def __init__(
        self,
        year: int,
        month: int,
        day: int,
        locale: str | None = None,
        *,
        estimated_from: Provenance = None,
    ):
        config = get_config()
        self._year, self._month, self._day = calendar_math.validate(
            year, month, day, config.year_min, config.year_max
        )
        self._locale = self._check_locale(locale)
        self._estimated_from = estimated_from

    @staticmethod
    def _check_locale(locale: str | None) -> str:
        config = get_config()
        checked = config.check_locale(locale)
        if checked is None:
            raise InvalidHijriDate(f"Invalid locale. Supported values: {', '.join(config.supported_locales)}")
        return checked

    # =========================================================================
    # Construction
    # =========================================================================
    @staticmethod
    def is_parsable(value: Any) -> bool:
        """True if ``value`` is a ``Y-MM-DD`` string. Year bounds are not checked."""
        if not isinstance(value, str):
            return False
        return PARSABLE_REGEX.match(value) is not None

    @classmethod
    def parse(cls, value: str, locale: str | None = None) -> "HijriDate":
        if not cls.is_parsable(value):
            raise InvalidHijriDate(f"This date cannot be parsed as a Hijri date: {value}")
        year, month, day = (int(x) for x in value.split("-"))
        return cls(year, month, day, locale)

    @classmethod
    def create_from_hijri(cls, year: int, month: int, day: int, locale: str | None = None) -> "HijriDate":
        return cls(year, month, day, locale)

    @classmethod
    def create_from_gregorian(
        cls,
        gregorian: date | datetime | None = None,
        converter: "Converter | None" = None,
        locale: str | None = None,
    ) -> "HijriDate":
        """Convert a Gregorian date (now, if omitted) with the configured converter."""
        if gregorian is None:
            gregorian = timezone.now()
        hijri = _converter(converter).gregorian_to_hijri(gregorian)
        return hijri.with_locale(locale) if locale else hijri

    @classmethod
    def get_estimate_from_gregorian(
        cls, gregorian: date | datetime | None = None, locale: str | None = None
    ) -> "HijriDate":
        """Like ``create_from_gregorian`` but always estimated, never from the table."""
        from .converters import EstimateConverter

        return cls.create_from_gregorian(gregorian, converter=EstimateConverter(), locale=locale)

    # =========================================================================
    # Accessors
    # =========================================================================
    @property
    def year(self) -> int:
        return self._year

    @property
    def month(self) -> int:
        return self._month

    @property
    def day(self) -> int:
        return self._day

    @property
    def locale(self) -> str:
        return self._locale

    @property
    def estimated_from(self) -> Provenance:
        return self._estimated_from

    @property
    def is_estimate(self) -> bool:
        return self._estimated_from is not None

    def as_tuple(self) -> calendar_math.YMD:
        return self._year, self._month, self._day

    def with_locale(self, locale: str | None) -> "HijriDate":
        return HijriDate(*self.as_tuple(), locale=locale, estimated_from=self._estimated_from)

    def to_gregorian(self, converter: "Converter | None" = None) -> date:
        return _converter(converter).hijri_to_gregorian(self)

    # =========================================================================
    # Arithmetic on the 30-day-month calendar
    # =========================================================================
    def add_days(self, days: int = 1) -> "HijriDate":
        """
        Add ``days``, assuming every month has 30 days.

        Good enough for small steps; use ``add_days_exact`` when the real
        month lengths matter. Negative values subtract.
        """
        config = get_config()
        ymd = calendar_math.add_days(self.as_tuple(), days, year_min=config.year_min, year_max=config.year_max)
        return HijriDate(*ymd, locale=self._locale)

    def sub_days(self, days: int = 1) -> "HijriDate":
        config = get_config()
        ymd = calendar_math.sub_days(self.as_tuple(), days, year_min=config.year_min, year_max=config.year_max)
        return HijriDate(*ymd, locale=self._locale)

    def diff_in_days(self, other: "HijriDate", absolute: bool = True) -> int:
        diff = calendar_math.days_between(self.as_tuple(), other.as_tuple())
        return abs(diff) if absolute else diff

    # =========================================================================
    # Arithmetic through the Gregorian calendar
    # =========================================================================
    def add_days_exact(self, days: int = 1, converter: "Converter | None" = None) -> "HijriDate":
        """
        Add ``days`` by converting to Gregorian and back.

        The result reports whatever provenance the converter gives the new day.
        """
        calendar_math.check_days(days)
        converter = _converter(converter)
        gregorian = self.to_gregorian(converter) + timedelta(days=days)
        return converter.gregorian_to_hijri(gregorian).with_locale(self._locale)

    def sub_days_exact(self, days: int = 1, converter: "Converter | None" = None) -> "HijriDate":
        return self.add_days_exact(-days, converter)

    def diff_in_days_exact(
        self, other: "HijriDate", absolute: bool = True, converter: "Converter | None" = None
    ) -> int:
        converter = _converter(converter)
        diff = (other.to_gregorian(converter) - self.to_gregorian(converter)).days
        return abs(diff) if absolute else diff

    # =========================================================================
    # Comparison
    # =========================================================================
    def compare_with(self, other: "HijriDate") -> int:
        """-1 if this is earlier, 1 if later, 0 if both are the same day."""
        return calendar_math.compare(self.as_tuple(), other.as_tuple())

    def equal_to(self, other: "HijriDate") -> bool:
        return self.compare_with(other) == 0

    def greater_than(self, other: "HijriDate") -> bool:
        return self.compare_with(other) == 1

    def less_than(self, other: "HijriDate") -> bool:
        return self.compare_with(other) == -1

    def greater_than_or_equal_to(self, other: "HijriDate") -> bool:
        return self.compare_with(other) >= 0

    def less_than_or_equal_to(self, other: "HijriDate") -> bool:
        return self.compare_with(other) <= 0

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, HijriDate):
            return NotImplemented
        return self.equal_to(other)

    def __lt__(self, other: object) -> bool:
        if not isinstance(other, HijriDate):
            return NotImplemented
        return self.less_than(other)

    def __hash__(self) -> int:
        return hash(self.as_tuple())

    def __repr__(self) -> str:
        extra = f", estimated from {self._estimated_from.isoformat()}" if self.is_estimate else ""
        return f"<HijriDate {self.to_date_string()} ({self._locale}{extra})>"


def _converter(converter: "Converter | None") -> "Converter":
    if converter is not None:
        return converter
    from .converters import get_converter

    return get_converter()
