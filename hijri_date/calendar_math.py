# hijri_date/calendar_math.py
"""
Arithmetic over a simplified Hijri calendar.

Every month has 30 days and every year 360 days. That is not how the real
calendar works, so anything computed here is an approximation; the exact
equivalents round-trip through a Gregorian date (see ``converters``).
"""
from __future__ import annotations

from .exceptions import HijriRangeError, InvalidHijriDate

YMD = tuple[int, int, int]

DAYS_PER_MONTH = 30
MONTHS_PER_YEAR = 12
DAYS_PER_YEAR = DAYS_PER_MONTH * MONTHS_PER_YEAR

# inclusive
MONTH_MIN, MONTH_MAX = 1, MONTHS_PER_YEAR
DAY_MIN, DAY_MAX = 1, DAYS_PER_MONTH


# =============================================================================
# Validation
# =============================================================================
def _is_int(v) -> bool:
    return isinstance(v, int) and not isinstance(v, bool)


def validate(year: int, month: int, day: int, year_min: int, year_max: int) -> YMD:
    for name, v in (("year", year), ("month", month), ("day", day)):
        if not _is_int(v):
            raise InvalidHijriDate(f"Invalid {name}. Expected an integer, got {v!r}.")
    if not year_min <= year <= year_max:
        raise InvalidHijriDate(f"Invalid year. Supported values: {year_min}-{year_max}.")
    if not MONTH_MIN <= month <= MONTH_MAX:
        raise InvalidHijriDate(f"Invalid month. Supported values: {MONTH_MIN}-{MONTH_MAX}.")
    if not DAY_MIN <= day <= DAY_MAX:
        raise InvalidHijriDate(f"Invalid day. Supported values: {DAY_MIN}-{DAY_MAX}.")
    return year, month, day


# =============================================================================
# Add / subtract
# =============================================================================
def check_days(days) -> int:
    if not _is_int(days):
        raise TypeError(f"days must be an integer, got {type(days).__name__}.")
    return days


def add_days(ymd: YMD, days: int, *, year_min: int, year_max: int) -> YMD:
    """
    Add ``days`` to ``ymd``.

    ``days`` is split into whole years, whole months and leftover days, and each
    part is applied with a single carry. Negative values subtract instead.
    """
    check_days(days)
    if days < 0:
        return sub_days(ymd, -days, year_min=year_min, year_max=year_max)

    year, month, day = ymd
    years, rest = divmod(days, DAYS_PER_YEAR)
    months, rest = divmod(rest, DAYS_PER_MONTH)

    day += rest
    if day > DAY_MAX:
        day -= DAY_MAX
        month += 1
    month += months
    if month > MONTH_MAX:
        month -= MONTH_MAX
        year += 1
    year += years

    if year > year_max:
        raise HijriRangeError("Date value out of acceptable range.")
    return year, month, day


def sub_days(ymd: YMD, days: int, *, year_min: int, year_max: int) -> YMD:
    """Subtract ``days`` from ``ymd``, borrowing instead of carrying."""
    check_days(days)
    if days < 0:
        return add_days(ymd, -days, year_min=year_min, year_max=year_max)

    year, month, day = ymd
    years, rest = divmod(days, DAYS_PER_YEAR)
    months, rest = divmod(rest, DAYS_PER_MONTH)

    day -= rest
    if day < DAY_MIN:
        day += DAY_MAX
        month -= 1
    month -= months
    if month < MONTH_MIN:
        month += MONTH_MAX
        year -= 1
    year -= years

    if year < year_min:
        raise HijriRangeError("Date value out of acceptable range.")
    return year, month, day


# =============================================================================
# Ordering / distance
# =============================================================================
def compare(a: YMD, b: YMD) -> int:
    """-1 if ``a`` is earlier, 1 if later, 0 if both are the same day."""
    if a < b:
        return -1
    if a > b:
        return 1
    return 0


def to_ordinal(ymd: YMD) -> int:
    year, month, day = ymd
    return year * DAYS_PER_YEAR + (month - 1) * DAYS_PER_MONTH + (day - 1)


def days_between(a: YMD, b: YMD) -> int:
    """Signed day count from ``a`` to ``b``; positive when ``b`` is later."""
    return to_ordinal(b) - to_ordinal(a)
