# hijri_date/table.py
"""
Hijri month-start → Gregorian date table.

The source is a CSV file with a header row naming (at least) the columns
``hijri_y, hijri_m, gregorian_y, gregorian_m, gregorian_d``. Each data row marks
the Gregorian day on which a Hijri month began. Parsed into::

    {"1445-09-01": "2024-03-11", "1445-10-01": "2024-04-10", ...}

sorted ascending by key. The parsed table is kept in the Django cache.
"""
from __future__ import annotations

import csv
import io
import logging
from datetime import date
from typing import Any, Callable, Protocol

import requests
from django.core.cache import caches
from django.core.exceptions import ImproperlyConfigured

from .conf import HijriConfig, get_config
from .exceptions import DataSourceError, TableParseError

logger = logging.getLogger(__name__)

REQUIRED_COLUMNS = ("hijri_y", "hijri_m", "gregorian_y", "gregorian_m", "gregorian_d")

Table = dict[str, str]


class CacheBackend(Protocol):
    def get(self, key: str, default: Any = None) -> Any: ...

    def set(self, key: str, value: Any, timeout: float | None = None) -> None: ...

    def delete(self, key: str) -> Any: ...


# =============================================================================
# Helpers
# =============================================================================
def _cell(v: Any) -> str:
    if v is None:
        return ""
    return str(v).strip()


def _canon_header(h: str) -> str:
    return _cell(h).lstrip("\ufeff").lower().replace(" ", "_")


def _int(v: Any, column: str, line: int) -> int:
    s = _cell(v)
    if not (s.isascii() and s.isdigit()):
        raise TableParseError(f"column {column} is not a whole number: {s!r}", line)
    return int(s)


def month_start_key(year: int, month: int) -> str:
    return f"{year}-{month:02d}-01"


def gregorian_key(year: int, month: int, day: int) -> str:
    return f"{year}-{month:02d}-{day:02d}"


# =============================================================================
# Parsing
# =============================================================================
def parse_table(text: str) -> Table:
    """
    Parse the CSV source into a sorted table.

    Strict: a short/long row, a missing column, a non-numeric cell, a repeated
    month or out-of-order Gregorian dates all raise ``TableParseError``.
    Blank lines are ignored.
    """
    reader = csv.reader(io.StringIO(text))
    header: list[str] | None = None
    result: Table = {}

    for row in reader:
        line = reader.line_num
        if not any(_cell(x) for x in row):
            continue

        if header is None:
            header = [_canon_header(h) for h in row]
            missing = [c for c in REQUIRED_COLUMNS if c not in header]
            if missing:
                raise TableParseError(f"missing column(s): {', '.join(missing)}", line)
            idx = {c: header.index(c) for c in REQUIRED_COLUMNS}
            continue

        if len(row) != len(header):
            raise TableParseError(f"expected {len(header)} values, got {len(row)}", line)

        v = {c: _int(row[idx[c]], c, line) for c in REQUIRED_COLUMNS}
        if not 1 <= v["hijri_m"] <= 12:
            raise TableParseError(f"hijri_m out of range: {v['hijri_m']}", line)
        try:
            date(v["gregorian_y"], v["gregorian_m"], v["gregorian_d"])
        except ValueError as e:
            raise TableParseError(f"invalid Gregorian date: {e}", line) from e

        h = month_start_key(v["hijri_y"], v["hijri_m"])
        g = gregorian_key(v["gregorian_y"], v["gregorian_m"], v["gregorian_d"])
        if h in result:
            raise TableParseError(f"duplicate month {h}", line)
        result[h] = g

    if header is None:
        raise TableParseError("source is empty")

    table = dict(sorted(result.items(), key=lambda kv: _sort_key(kv[0])))

    previous = None
    for h, g in table.items():
        g_sort = _sort_key(g)
        if previous is not None and g_sort <= previous[1]:
            raise TableParseError(f"{h} starts on {g}, not after {previous[0]}")
        previous = (g, g_sort)
    return table


def _sort_key(iso: str) -> tuple[int, ...]:
    return tuple(int(p) for p in iso.split("-"))


# =============================================================================
# Fetching
# =============================================================================
def fetch_table_source(url: str, timeout: float = 30) -> str:
    """Download the raw CSV. Any failure is reported as ``DataSourceError``."""
    if not url:
        raise ImproperlyConfigured("Cannot load conversion table: HIJRI['conversion']['data_url'] is empty.")
    try:
        response = requests.get(url, timeout=timeout)
        response.raise_for_status()
    except requests.RequestException as e:
        raise DataSourceError(f"Could not fetch conversion table from {url}: {e}") from e

    text = response.text
    if not text or not text.strip():
        raise DataSourceError(f"Conversion table at {url} is empty.")
    return text


# =============================================================================
# Cached table
# =============================================================================
class ConversionTable:
    """
    Lazily fetched, cached conversion table.

    ``cache`` is anything with Django's cache ``get/set/delete`` API and
    ``fetch`` a zero-argument callable returning the raw CSV text.
    """

    def __init__(
        self,
        cache: CacheBackend,
        fetch: Callable[[], str],
        cache_key: str = "hijri_to_gregorian_map",
        cache_period: int = 60 * 24,
    ):
        self.cache = cache
        self.fetch = fetch
        self.cache_key = cache_key
        # minutes
        self.cache_period = cache_period

    @classmethod
    def from_config(cls, config: HijriConfig | None = None, data_url: str | None = None) -> "ConversionTable":
        conv = (config or get_config()).conversion
        url = data_url if data_url is not None else conv.data_url

        def fetch() -> str:
            return fetch_table_source(url, timeout=conv.timeout)

        return cls(
            cache=caches[conv.cache_alias],
            fetch=fetch,
            cache_key=conv.cache_key,
            cache_period=conv.cache_period,
        )

    def load(self, force_refresh: bool = False) -> Table:
        if not force_refresh:
            cached = self.cache.get(self.cache_key)
            if cached is not None:
                logger.debug("Conversion table served from cache (%s)", self.cache_key)
                return cached

        logger.info("Fetching conversion table (%s)", self.cache_key)
        table = parse_table(self.fetch())
        self.cache.set(self.cache_key, table, self.cache_period * 60)
        logger.info("Conversion table cached: %d months", len(table))
        return table

    def forget(self) -> None:
        self.cache.delete(self.cache_key)
