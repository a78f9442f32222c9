# hijri_date/helpers.py
from __future__ import annotations

from django.utils import timezone

from .hijri import HijriDate


def today_hijri(locale: str | None = None) -> HijriDate:
    """Today's Hijri date, in Maldives time, via the configured converter."""
    return HijriDate.create_from_gregorian(timezone.now(), locale=locale)
