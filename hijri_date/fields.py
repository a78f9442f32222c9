# hijri_date/fields.py
from __future__ import annotations

from django.core.exceptions import ValidationError
from django.db import models
from django.utils.translation import gettext_lazy as _

from .exceptions import InvalidHijriDate
from .forms import HijriDateFormField
from .hijri import HijriDate


class HijriDateField(models.CharField):
    """
    Stores a ``HijriDate`` as its ``Y-MM-DD`` string::

        class Event(models.Model):
            starts_on = HijriDateField("starts on", null=True, blank=True)

    Reading the attribute gives a ``HijriDate`` (or ``None``).
    """

    description = _("Hijri date (YYYY-MM-DD)")
    default_error_messages = {
        "invalid_hijri_date": _("“%(value)s” is not a valid Hijri date."),
    }

    def __init__(self, *args, **kwargs):
        kwargs.setdefault("max_length", 10)
        super().__init__(*args, **kwargs)

    def deconstruct(self):
        name, path, args, kwargs = super().deconstruct()
        if kwargs.get("max_length") == 10:
            del kwargs["max_length"]
        return name, path, args, kwargs

    def from_db_value(self, value, expression, connection):
        if value is None:
            return None
        return HijriDate.parse(value)

    def to_python(self, value):
        if value is None or isinstance(value, HijriDate):
            return value
        try:
            return HijriDate.parse(value)
        except InvalidHijriDate:
            raise ValidationError(
                self.error_messages["invalid_hijri_date"],
                code="invalid_hijri_date",
                params={"value": value},
            )

    def run_validators(self, value):
        if isinstance(value, HijriDate):
            value = value.to_date_string()
        super().run_validators(value)

    def get_prep_value(self, value):
        value = self.to_python(value)
        if value is None:
            return None
        return value.to_date_string()

    def value_to_string(self, obj):
        value = self.value_from_object(obj)
        return "" if value is None else self.get_prep_value(value)

    def formfield(self, **kwargs):
        return super().formfield(**{"form_class": HijriDateFormField, **kwargs})
