# hijri_date/forms.py
from __future__ import annotations

from django import forms
from django.utils.translation import gettext_lazy as _

from .exceptions import InvalidHijriDate
from .hijri import HijriDate


class HijriDateFormField(forms.CharField):
    """Text input that cleans to a ``HijriDate`` (``Y-MM-DD``)."""

    default_error_messages = {
        "invalid_hijri_date": _("Enter a valid Hijri date (YYYY-MM-DD)."),
    }

    def __init__(self, *, locale: str | None = None, **kwargs):
        kwargs.setdefault("max_length", 10)
        kwargs.setdefault("help_text", _("Hijri date, e.g. 1445-09-01"))
        super().__init__(**kwargs)
        self.locale = locale

    def prepare_value(self, value):
        if isinstance(value, HijriDate):
            return value.to_date_string()
        return value

    def run_validators(self, value):
        # length/null-character validators expect the string form
        if isinstance(value, HijriDate):
            value = value.to_date_string()
        super().run_validators(value)

    def to_python(self, value):
        if isinstance(value, HijriDate):
            return value
        value = super().to_python(value)
        if value in self.empty_values:
            return None
        try:
            return HijriDate.parse(value, locale=self.locale)
        except InvalidHijriDate:
            raise forms.ValidationError(self.error_messages["invalid_hijri_date"], code="invalid_hijri_date")
