from __future__ import annotations

from datetime import date, datetime

from django import template

from ..exceptions import InvalidHijriDate
from ..hijri import HijriDate

register = template.Library()


def _as_hijri(value) -> HijriDate | None:
    if isinstance(value, HijriDate):
        return value
    if isinstance(value, (date, datetime)):
        return HijriDate.create_from_gregorian(value)
    if HijriDate.is_parsable(value):
        try:
            return HijriDate.parse(value)
        except InvalidHijriDate:
            return None
    return None


@register.filter(name="to_hijri")
def to_hijri(value):
    """
    Gregorian date/datetime → Hijri date string, e.g. 1447-07-28.

        {{ obj.created_at|to_hijri }}
    """
    if not value:
        return ""
    if isinstance(value, HijriDate):
        return value.to_date_string()
    if not isinstance(value, (date, datetime)):
        return str(value)
    return HijriDate.create_from_gregorian(value).to_date_string()


@register.filter(name="hijri_format")
def hijri_format(value, pattern: str = "Y-m-d"):
    """
    Format a HijriDate, a ``Y-MM-DD`` string or a Gregorian date:

        {{ obj.starts_on|hijri_format:"l j F Y" }}
    """
    if not value:
        return ""
    hijri = _as_hijri(value)
    if hijri is None:
        return str(value)
    return hijri.format(pattern)


@register.filter(name="hijri_full")
def hijri_full(value, locale: str | None = None):
    """Day, month name and year: ``{{ value|hijri_full:"en" }}`` → 9 Ramadan 1445"""
    if not value:
        return ""
    hijri = _as_hijri(value)
    if hijri is None:
        return str(value)
    if locale:
        hijri = hijri.with_locale(locale)
    return hijri.to_full_date()
