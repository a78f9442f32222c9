from __future__ import annotations

from django.apps import AppConfig


class HijriDateConfig(AppConfig):
    name = "hijri_date"
    verbose_name = "Hijri Date"
