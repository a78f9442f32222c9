# hijri_date/exceptions.py
from __future__ import annotations


class HijriDateError(Exception):
    """Base class for every error raised by this app."""


class InvalidHijriDate(HijriDateError, ValueError):
    """Year, month, day or locale out of bounds, or an unparsable string."""


class HijriRangeError(HijriDateError, OverflowError):
    """Arithmetic would move the date outside the configured year bounds."""


class DataSourceError(HijriDateError):
    """The conversion dataset could not be fetched."""


class TableParseError(DataSourceError):
    """The conversion dataset was fetched but is malformed."""

    def __init__(self, message: str, line: int | None = None):
        if line is not None:
            message = f"line {line}: {message}"
        super().__init__(message)
        self.line = line


class ConversionRangeError(HijriDateError):
    """
    The requested date is not covered by the conversion table.

    Raised separately so callers (and FallbackConverter) can switch to an
    estimate instead of treating it as fatal.
    """
