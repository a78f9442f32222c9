# hijri_date/converters.py
"""
Gregorian ⇄ Hijri conversion for the Maldivian calendar.

* ``TableConverter``    exact, day-level, limited to the table's coverage.
* ``EstimateConverter`` formula/library based, works for any date, may be off
                        by a day or two against the official calendar.
* ``FallbackConverter`` tries one and falls back to the other.

Gregorian days are always taken in Maldives time (UTC+5).
"""
from __future__ import annotations

import logging
import math
from datetime import date, datetime, timedelta, timezone as dt_timezone
from typing import Protocol, Union

from django.core.exceptions import ImproperlyConfigured
from django.utils import timezone
from hijridate import Gregorian

from . import calendar_math
from .conf import CONVERTER_ESTIMATE, CONVERTER_EXACT, CONVERTER_FALLBACK, HijriConfig, get_config
from .exceptions import ConversionRangeError, DataSourceError
from .hijri import HijriDate
from .table import ConversionTable

logger = logging.getLogger(__name__)

MALDIVES_TZ = dt_timezone(timedelta(hours=5), "MVT")

# Gregorian reform: first JDN counted in the Gregorian calendar
GREGORIAN_CUTOVER_JDN = 2299161
ISLAMIC_EPOCH_JDN = 1948440 - 386
# proleptic Gregorian ordinal 1 (0001-01-01) is JDN 1721426
ORDINAL_TO_JDN = 1721425

GregorianValue = Union[date, datetime]


class Converter(Protocol):
    def gregorian_to_hijri(self, gregorian: GregorianValue) -> HijriDate: ...

    def hijri_to_gregorian(self, hijri: HijriDate) -> date: ...


# =============================================================================
# Helpers
# =============================================================================
def to_maldives(value: GregorianValue) -> GregorianValue:
    """Aware datetime in Maldives time; plain dates are returned unchanged."""
    if isinstance(value, datetime):
        if timezone.is_naive(value):
            value = timezone.make_aware(value)
        return value.astimezone(MALDIVES_TZ)
    if isinstance(value, date):
        return value
    raise TypeError(f"Expected a date or datetime, got {type(value).__name__}.")


def to_maldives_date(value: GregorianValue) -> date:
    value = to_maldives(value)
    return value.date() if isinstance(value, datetime) else value


def _ymd(key: str) -> calendar_math.YMD:
    y, m, d = key.split("-")
    return int(y), int(m), int(d)


# =============================================================================
# Julian day arithmetic
# =============================================================================
def hijri_to_jdn(year: int, month: int, day: int) -> int:
    """Tabular Islamic calendar → Julian Day Number."""
    return (
        math.floor((11 * year + 3) / 30)
        + 354 * year
        + 30 * month
        - math.floor((month - 1) / 2)
        + day
        + ISLAMIC_EPOCH_JDN
    )


def jdn_to_hijri(jdn: int) -> calendar_math.YMD:
    """Inverse of ``hijri_to_jdn``."""
    year = math.floor((30 * (jdn - ISLAMIC_EPOCH_JDN - 384) + 10646) / 10631)
    month = min(12, math.ceil((jdn - (29 + hijri_to_jdn(year, 1, 1))) / 29.5) + 1)
    day = jdn - hijri_to_jdn(year, month, 1) + 1
    return year, month, day


def jdn_to_gregorian(jdn: int) -> date:
    """
    Julian Day Number → civil date.

    Days before the 1582 reform come out in the Julian calendar; the
    century-leap correction is only applied from the cutover onwards.
    """
    b = 0
    if jdn >= GREGORIAN_CUTOVER_JDN:
        a = math.floor((jdn - 1867216.25) / 36524.25)
        b = 1 + a - math.floor(a / 4.0)

    bb = jdn + b + 1524
    cc = math.floor((bb - 122.1) / 365.25)
    dd = math.floor(365.25 * cc)
    ee = math.floor((bb - dd) / 30.6001)

    day = bb - dd - math.floor(30.6001 * ee)
    month = ee - 1
    if ee > 13:
        cc += 1
        month = ee - 13
    year = cc - 4716
    return date(year, month, day)


def gregorian_to_jdn(value: date) -> int:
    return value.toordinal() + ORDINAL_TO_JDN


# =============================================================================
# Table converter (exact)
# =============================================================================
class TableConverter:
    def __init__(self, table: ConversionTable):
        self.table = table

    def gregorian_to_hijri(self, gregorian: GregorianValue) -> HijriDate:
        day = to_maldives_date(gregorian)

        # Walk forward while month starts are on/before ``day``. The answer is
        # counted from the latest such start, never back from the next one:
        # months can be 29 days long.
        closest: str | None = None
        closest_diff: int | None = None
        for hijri_key, gregorian_value in self.table.load().items():
            diff = (day - date.fromisoformat(gregorian_value)).days
            if diff < 0:
                break
            if closest_diff is None or diff < closest_diff:
                closest, closest_diff = hijri_key, diff

        if closest is None:
            raise ConversionRangeError(f"{day} is before the first month in the conversion table.")
        if closest_diff >= calendar_math.DAYS_PER_MONTH:
            raise ConversionRangeError(f"{day} is after the last month in the conversion table.")
        return HijriDate(*_ymd(closest)).add_days(closest_diff)

    def hijri_to_gregorian(self, hijri: HijriDate) -> date:
        target = (hijri.year, hijri.month, hijri.day)

        closest: str | None = None
        closest_diff: int | None = None
        for hijri_key, gregorian_value in self.table.load().items():
            diff = calendar_math.days_between(_ymd(hijri_key), target)
            if diff < 0:
                break
            if closest_diff is None or diff < closest_diff:
                closest, closest_diff = gregorian_value, diff

        if closest is None:
            raise ConversionRangeError(f"{hijri} is before the first month in the conversion table.")
        if closest_diff >= calendar_math.DAYS_PER_MONTH:
            raise ConversionRangeError(f"{hijri} is after the last month in the conversion table.")
        return date.fromisoformat(closest) + timedelta(days=closest_diff)


# =============================================================================
# Estimate converter
# =============================================================================
class EstimateConverter:
    def gregorian_to_hijri(self, gregorian: GregorianValue) -> HijriDate:
        origin = to_maldives(gregorian)
        day = to_maldives_date(origin)
        try:
            h = Gregorian.fromdate(day).to_hijri()
            ymd = (h.year, h.month, h.day)
        except OverflowError:
            # outside the library's Umm al-Qura range
            ymd = jdn_to_hijri(gregorian_to_jdn(day))
        return HijriDate(*ymd, estimated_from=origin)

    def hijri_to_gregorian(self, hijri: HijriDate) -> date:
        return jdn_to_gregorian(hijri_to_jdn(hijri.year, hijri.month, hijri.day))


# =============================================================================
# Composition
# =============================================================================
class FallbackConverter:
    """Use ``primary``; when it cannot answer, ask ``fallback``."""

    def __init__(self, primary: Converter, fallback: Converter):
        self.primary = primary
        self.fallback = fallback

    def gregorian_to_hijri(self, gregorian: GregorianValue) -> HijriDate:
        try:
            return self.primary.gregorian_to_hijri(gregorian)
        except (ConversionRangeError, DataSourceError) as e:
            self._log_fallback(e)
            return self.fallback.gregorian_to_hijri(gregorian)

    def hijri_to_gregorian(self, hijri: HijriDate) -> date:
        try:
            return self.primary.hijri_to_gregorian(hijri)
        except (ConversionRangeError, DataSourceError) as e:
            self._log_fallback(e)
            return self.fallback.hijri_to_gregorian(hijri)

    @staticmethod
    def _log_fallback(error: Exception) -> None:
        if isinstance(error, DataSourceError):
            logger.warning("Conversion table unavailable, using estimate: %s", error)
        else:
            logger.info("Outside conversion table, using estimate: %s", error)


def get_converter(name: str | None = None, config: HijriConfig | None = None) -> Converter:
    config = config or get_config()
    name = name or config.conversion.converter

    if name == CONVERTER_ESTIMATE:
        return EstimateConverter()
    if name == CONVERTER_EXACT:
        return TableConverter(ConversionTable.from_config(config))
    if name == CONVERTER_FALLBACK:
        return FallbackConverter(TableConverter(ConversionTable.from_config(config)), EstimateConverter())
    raise ImproperlyConfigured(f"Unknown Hijri converter: {name!r}")
