# hijri_date/conf.py
"""
App settings.

Configuration lives in a single ``HIJRI`` mapping in the Django settings, e.g.::

    HIJRI = {
        "default_locale": "en",
        "year_min": 1300,
        "conversion": {
            "cache_period": 60,
            "converter": "exact",
        },
    }

Missing keys fall back to ``DEFAULTS``.
"""
from __future__ import annotations

from dataclasses import dataclass
from functools import lru_cache
from typing import Any, Mapping

from django.conf import settings
from django.core.exceptions import ImproperlyConfigured
from django.core.signals import setting_changed
from django.dispatch import receiver

CONVERTER_EXACT = "exact"
CONVERTER_ESTIMATE = "estimate"
CONVERTER_FALLBACK = "fallback"
CONVERTER_CHOICES = (CONVERTER_EXACT, CONVERTER_ESTIMATE, CONVERTER_FALLBACK)

DEFAULTS: dict[str, Any] = {
    "supported_locales": ["ar", "bn", "dv", "en"],
    "default_locale": "dv",
    # inclusive
    "year_max": 1999,
    "year_min": 1000,
    "transliterate_numerals": False,
    "translator": "hijri_date.translations.lookup",
    "conversion": {
        "data_url": "https://gist.githubusercontent.com/Remls/b0ebba53bb2a8670f333f8a88de4aae3/raw",
        "cache_key": "hijri_to_gregorian_map",
        "cache_alias": "default",
        # minutes
        "cache_period": 60 * 24,
        # seconds, passed to the HTTP client
        "timeout": 30,
        "converter": CONVERTER_FALLBACK,
    },
}


@dataclass(frozen=True)
class ConversionConfig:
    data_url: str
    cache_key: str
    cache_alias: str
    cache_period: int
    timeout: float
    converter: str


@dataclass(frozen=True)
class HijriConfig:
    supported_locales: tuple[str, ...]
    default_locale: str
    year_max: int
    year_min: int
    transliterate_numerals: bool
    translator: str
    conversion: ConversionConfig

    def check_locale(self, locale: str | None) -> str | None:
        """Normalized locale, or None when it is not supported."""
        locale = (locale or self.default_locale).strip().lower()
        return locale if locale in self.supported_locales else None


def build_config(overrides: Mapping[str, Any] | None = None) -> HijriConfig:
    raw = dict(DEFAULTS)
    conversion = dict(DEFAULTS["conversion"])
    for key, value in (overrides or {}).items():
        if key == "conversion":
            conversion.update(value or {})
        elif key in DEFAULTS:
            raw[key] = value
        else:
            raise ImproperlyConfigured(f"Unknown HIJRI setting: {key!r}")

    unknown = set(conversion) - set(DEFAULTS["conversion"])
    if unknown:
        raise ImproperlyConfigured(f"Unknown HIJRI['conversion'] settings: {sorted(unknown)}")

    locales = tuple(str(x).strip().lower() for x in raw["supported_locales"])
    default_locale = str(raw["default_locale"]).strip().lower()
    if not locales:
        raise ImproperlyConfigured("HIJRI['supported_locales'] must not be empty.")
    if default_locale not in locales:
        raise ImproperlyConfigured(
            f"HIJRI['default_locale'] ({default_locale}) is not one of {', '.join(locales)}."
        )

    year_min, year_max = int(raw["year_min"]), int(raw["year_max"])
    if year_min > year_max:
        raise ImproperlyConfigured(f"HIJRI['year_min'] ({year_min}) is greater than 'year_max' ({year_max}).")

    if conversion["converter"] not in CONVERTER_CHOICES:
        raise ImproperlyConfigured(
            f"HIJRI['conversion']['converter'] must be one of {', '.join(CONVERTER_CHOICES)}, "
            f"got {conversion['converter']!r}."
        )

    return HijriConfig(
        supported_locales=locales,
        default_locale=default_locale,
        year_max=year_max,
        year_min=year_min,
        transliterate_numerals=bool(raw["transliterate_numerals"]),
        translator=str(raw["translator"]),
        conversion=ConversionConfig(
            data_url=str(conversion["data_url"] or ""),
            cache_key=str(conversion["cache_key"]),
            cache_alias=str(conversion["cache_alias"]),
            cache_period=int(conversion["cache_period"]),
            timeout=float(conversion["timeout"]),
            converter=conversion["converter"],
        ),
    )


@lru_cache(maxsize=None)
def get_config() -> HijriConfig:
    return build_config(getattr(settings, "HIJRI", None))


@receiver(setting_changed)
def _reset_config(*, setting: str, **kwargs) -> None:
    if setting == "HIJRI":
        get_config.cache_clear()
