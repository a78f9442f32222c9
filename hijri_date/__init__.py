from __future__ import annotations

from .exceptions import (
    ConversionRangeError,
    DataSourceError,
    HijriDateError,
    HijriRangeError,
    InvalidHijriDate,
    TableParseError,
)
from .hijri import HijriDate

__all__ = [
    "ConversionRangeError",
    "DataSourceError",
    "HijriDate",
    "HijriDateError",
    "HijriRangeError",
    "InvalidHijriDate",
    "TableParseError",
]
