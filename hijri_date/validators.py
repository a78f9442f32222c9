# hijri_date/validators.py
from __future__ import annotations

from typing import Any

from django.core.exceptions import ValidationError
from django.utils.translation import gettext_lazy as _

from .exceptions import InvalidHijriDate
from .hijri import HijriDate


def validate_hijri_date(value: Any) -> None:
    """
    Reject anything that is not a ``Y-MM-DD`` Hijri date within the
    configured year range. ``HijriDate`` instances are always valid.
    """
    if isinstance(value, HijriDate):
        return
    try:
        HijriDate.parse(value)
    except (InvalidHijriDate, TypeError):
        raise ValidationError(
            _("%(value)s is not a valid Hijri date."),
            code="invalid_hijri_date",
            params={"value": value},
        )
