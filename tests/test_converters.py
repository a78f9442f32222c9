import logging
from datetime import date, datetime, timedelta, timezone

import pytest
from django.core.exceptions import ImproperlyConfigured

from hijri_date import HijriDate
from hijri_date.converters import (
    EstimateConverter,
    FallbackConverter,
    TableConverter,
    gregorian_to_jdn,
    get_converter,
    hijri_to_jdn,
    jdn_to_gregorian,
    jdn_to_hijri,
)
from hijri_date.exceptions import ConversionRangeError, DataSourceError
from hijri_date.table import ConversionTable

from .conftest import FIRST_DAY, LAST_DAY, CountingFetch


def _days(start: date, end: date):
    d = start
    while d <= end:
        yield d
        d += timedelta(days=1)


# --------------------------- TableConverter: Gregorian → Hijri ---------------------------

@pytest.mark.parametrize(
    "gregorian, expected",
    [
        (date(2023, 7, 19), "1445-01-01"),
        (date(2024, 3, 11), "1445-09-01"),
        (date(2024, 4, 9), "1445-09-30"),
        (date(2024, 4, 10), "1445-10-01"),
        (date(2024, 3, 10), "1445-08-29"),
        (LAST_DAY, "1446-01-30"),
    ],
)
def test_table_gregorian_to_hijri(table_converter, gregorian, expected):
    assert table_converter.gregorian_to_hijri(gregorian).to_date_string() == expected


def test_table_counts_from_month_start_not_back_from_next(table_converter):
    # Safar 1445 has 29 days: the day before 1 Rabi al-Awwal is 29 Safar, not 30
    assert table_converter.gregorian_to_hijri(date(2023, 9, 15)) == HijriDate(1445, 2, 29)


def test_table_result_is_not_an_estimate(table_converter):
    assert not table_converter.gregorian_to_hijri(date(2024, 3, 11)).is_estimate


def test_table_uses_maldives_day(table_converter):
    utc = timezone.utc
    # 20:00 UTC is already the next day in Malé
    assert table_converter.gregorian_to_hijri(datetime(2024, 3, 10, 20, 0, tzinfo=utc)) == HijriDate(1445, 9, 1)
    assert table_converter.gregorian_to_hijri(datetime(2024, 3, 10, 18, 59, tzinfo=utc)) == HijriDate(1445, 8, 29)


def test_table_time_of_day_does_not_matter(table_converter):
    mvt = timezone(timedelta(hours=5))
    morning = datetime(2024, 3, 11, 0, 1, tzinfo=mvt)
    night = datetime(2024, 3, 11, 23, 59, tzinfo=mvt)
    assert table_converter.gregorian_to_hijri(morning) == table_converter.gregorian_to_hijri(night)


def test_table_naive_datetime_uses_current_timezone(table_converter):
    # TIME_ZONE is UTC in the test settings
    assert table_converter.gregorian_to_hijri(datetime(2024, 3, 10, 19, 30)) == HijriDate(1445, 9, 1)


def test_table_before_coverage(table_converter):
    with pytest.raises(ConversionRangeError, match="before"):
        table_converter.gregorian_to_hijri(FIRST_DAY - timedelta(days=1))


def test_table_after_coverage(table_converter):
    with pytest.raises(ConversionRangeError, match="after"):
        table_converter.gregorian_to_hijri(LAST_DAY + timedelta(days=1))


def test_table_gregorian_to_hijri_is_monotonic(table_converter):
    previous = None
    for day in _days(FIRST_DAY, LAST_DAY):
        current = table_converter.gregorian_to_hijri(day)
        if previous is not None:
            assert previous < current
        previous = current


def test_table_rejects_non_dates(table_converter):
    with pytest.raises(TypeError):
        table_converter.gregorian_to_hijri("2024-03-11")


# --------------------------- TableConverter: Hijri → Gregorian ---------------------------

@pytest.mark.parametrize(
    "hijri, expected",
    [
        ((1445, 1, 1), date(2023, 7, 19)),
        ((1445, 9, 1), date(2024, 3, 11)),
        ((1445, 9, 30), date(2024, 4, 9)),
        ((1446, 1, 30), LAST_DAY),
    ],
)
def test_table_hijri_to_gregorian(table_converter, hijri, expected):
    assert table_converter.hijri_to_gregorian(HijriDate(*hijri)) == expected


def test_table_day_30_of_short_month_spills_into_next(table_converter):
    assert table_converter.hijri_to_gregorian(HijriDate(1445, 2, 30)) == date(2023, 9, 16)


def test_table_hijri_before_coverage(table_converter):
    with pytest.raises(ConversionRangeError):
        table_converter.hijri_to_gregorian(HijriDate(1444, 12, 30))


def test_table_hijri_after_coverage(table_converter):
    with pytest.raises(ConversionRangeError):
        table_converter.hijri_to_gregorian(HijriDate(1446, 2, 1))


def test_table_round_trip_every_covered_day(table_converter):
    for day in _days(FIRST_DAY, LAST_DAY):
        assert table_converter.hijri_to_gregorian(table_converter.gregorian_to_hijri(day)) == day


def test_table_is_loaded_once(table_converter, fetch):
    for day in _days(date(2024, 3, 1), date(2024, 3, 31)):
        table_converter.gregorian_to_hijri(day)
    assert fetch.calls == 1


# --------------------------- Julian day arithmetic ---------------------------

def test_hijri_to_jdn_golden_values():
    assert hijri_to_jdn(1000, 1, 1) == 2302451
    assert hijri_to_jdn(1445, 9, 1) == 2460380


def test_jdn_to_gregorian_golden_values():
    assert jdn_to_gregorian(2302451) == date(1591, 10, 18)
    assert jdn_to_gregorian(2460380) == date(2024, 3, 10)
    assert jdn_to_gregorian(2451545) == date(2000, 1, 1)


def test_jdn_to_gregorian_reform_cutover():
    assert jdn_to_gregorian(2299161) == date(1582, 10, 15)
    # the day before is 4 October in the Julian calendar
    assert jdn_to_gregorian(2299160) == date(1582, 10, 4)


def test_gregorian_to_jdn():
    assert gregorian_to_jdn(date(2000, 1, 1)) == 2451545
    assert gregorian_to_jdn(date(1582, 10, 15)) == 2299161


@pytest.mark.parametrize("ymd", [(1000, 1, 1), (1200, 6, 15), (1445, 9, 1), (1445, 12, 29), (1999, 12, 1)])
def test_jdn_to_hijri_inverts_hijri_to_jdn(ymd):
    assert jdn_to_hijri(hijri_to_jdn(*ymd)) == ymd


# --------------------------- EstimateConverter ---------------------------

def test_estimate_hijri_to_gregorian_golden(estimate_converter):
    assert estimate_converter.hijri_to_gregorian(HijriDate(1000, 1, 1)) == date(1591, 10, 18)


def test_estimate_gregorian_to_hijri_uses_calendar_library(estimate_converter):
    hijri = estimate_converter.gregorian_to_hijri(date(2024, 3, 11))
    assert hijri == HijriDate(1445, 9, 1)
    assert hijri.is_estimate
    assert hijri.estimated_from == date(2024, 3, 11)


def test_estimate_records_maldives_time_provenance(estimate_converter):
    origin = datetime(2024, 3, 10, 20, 0, tzinfo=timezone.utc)
    hijri = estimate_converter.gregorian_to_hijri(origin)
    assert hijri.estimated_from == origin
    assert hijri.estimated_from.utcoffset() == timedelta(hours=5)
    assert hijri == HijriDate(1445, 9, 1)


def test_estimate_outside_library_range_uses_formula(estimate_converter):
    hijri = estimate_converter.gregorian_to_hijri(date(1700, 1, 1))
    assert hijri.is_estimate
    assert 1111 <= hijri.year <= 1112
    assert estimate_converter.hijri_to_gregorian(hijri) == date(1700, 1, 1)


# --------------------------- FallbackConverter ---------------------------

def test_fallback_prefers_table(fallback_converter):
    hijri = fallback_converter.gregorian_to_hijri(date(2023, 9, 15))
    assert hijri == HijriDate(1445, 2, 29)
    assert not hijri.is_estimate


def test_fallback_outside_coverage_estimates(fallback_converter, caplog):
    caplog.set_level(logging.INFO, logger="hijri_date")
    hijri = fallback_converter.gregorian_to_hijri(date(2020, 1, 1))
    assert hijri.is_estimate
    assert hijri.year == 1441
    assert "using estimate" in caplog.text


def test_fallback_hijri_to_gregorian_outside_coverage(fallback_converter):
    assert fallback_converter.hijri_to_gregorian(HijriDate(1000, 1, 1)) == date(1591, 10, 18)


def test_fallback_when_table_unavailable(fake_cache, estimate_converter):
    def broken():
        raise DataSourceError("offline")

    converter = FallbackConverter(TableConverter(ConversionTable(fake_cache, broken)), estimate_converter)
    assert converter.gregorian_to_hijri(date(2024, 3, 11)).is_estimate


def test_fallback_when_table_is_malformed(fake_cache, estimate_converter):
    bad = CountingFetch("hijri_y,hijri_m,gregorian_y,gregorian_m,gregorian_d\n1445,\u00b2,2023,7,19\n")
    converter = FallbackConverter(TableConverter(ConversionTable(fake_cache, bad)), estimate_converter)
    assert converter.gregorian_to_hijri(date(2024, 3, 11)).is_estimate
    assert fake_cache.get("hijri_to_gregorian_map") is None


def test_exact_converter_surfaces_data_source_errors(fake_cache):
    def broken():
        raise DataSourceError("offline")

    with pytest.raises(DataSourceError):
        TableConverter(ConversionTable(fake_cache, broken)).gregorian_to_hijri(date(2024, 3, 11))


# --------------------------- selection ---------------------------

def test_get_converter_default_is_fallback():
    converter = get_converter()
    assert isinstance(converter, FallbackConverter)
    assert isinstance(converter.primary, TableConverter)
    assert isinstance(converter.fallback, EstimateConverter)


@pytest.mark.parametrize("name, cls", [("exact", TableConverter), ("estimate", EstimateConverter)])
def test_get_converter_by_name(name, cls):
    assert isinstance(get_converter(name), cls)


def test_get_converter_from_settings(settings):
    settings.HIJRI = {"conversion": {"converter": "estimate"}}
    assert isinstance(get_converter(), EstimateConverter)


def test_get_converter_unknown():
    with pytest.raises(ImproperlyConfigured):
        get_converter("astronomical")


def test_unknown_converter_setting(settings):
    settings.HIJRI = {"conversion": {"converter": "astronomical"}}
    with pytest.raises(ImproperlyConfigured):
        get_converter()


def test_configured_exact_converter_reads_table_through_django_cache(http_calls):
    converter = get_converter("exact")
    assert converter.gregorian_to_hijri(date(2024, 3, 11)) == HijriDate(1445, 9, 1)
    assert converter.gregorian_to_hijri(date(2024, 3, 12)) == HijriDate(1445, 9, 2)
    assert len(http_calls) == 1
