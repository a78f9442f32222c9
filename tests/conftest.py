from __future__ import annotations

from datetime import date

import pytest
import requests
from django.core.cache import cache

from hijri_date.conf import get_config
from hijri_date.converters import EstimateConverter, FallbackConverter, TableConverter
from hijri_date.table import ConversionTable

# 1445 AH plus the first month of 1446. Month lengths alternate 29/30 so that
# counting back from the next month start would give wrong answers.
SAMPLE_CSV = """hijri_y,hijri_m,gregorian_y,gregorian_m,gregorian_d
1445,1,2023,7,19
1445,2,2023,8,18
1445,3,2023,9,16
1445,4,2023,10,16
1445,5,2023,11,15
1445,6,2023,12,14
1445,7,2024,1,13
1445,8,2024,2,11
1445,9,2024,3,11
1445,10,2024,4,10
1445,11,2024,5,9
1445,12,2024,6,8
1446,1,2024,7,7
"""

FIRST_DAY = date(2023, 7, 19)
# 1446-01-30
LAST_DAY = date(2024, 8, 5)


class FakeResponse:
    def __init__(self, text: str = "", status_code: int = 200):
        self.text = text
        self.status_code = status_code

    def raise_for_status(self) -> None:
        if self.status_code >= 400:
            raise requests.HTTPError(f"{self.status_code} Error", response=self)


class FakeClock:
    def __init__(self, now: float = 0.0):
        self.now = now

    def advance(self, seconds: float) -> None:
        self.now += seconds


class FakeCache:
    """Django-cache-shaped dict with expiry driven by a FakeClock."""

    def __init__(self, clock: FakeClock):
        self.clock = clock
        self.store: dict[str, tuple[object, float | None]] = {}

    def get(self, key, default=None):
        item = self.store.get(key)
        if item is None:
            return default
        value, expires = item
        if expires is not None and self.clock.now >= expires:
            del self.store[key]
            return default
        return value

    def set(self, key, value, timeout=None):
        expires = None if timeout is None else self.clock.now + timeout
        self.store[key] = (value, expires)

    def delete(self, key):
        return self.store.pop(key, None) is not None


class CountingFetch:
    def __init__(self, text: str = SAMPLE_CSV):
        self.text = text
        self.calls = 0

    def __call__(self) -> str:
        self.calls += 1
        return self.text


@pytest.fixture(autouse=True)
def _isolate(monkeypatch):
    """No network, no state shared between tests."""
    calls: list[str] = []

    def fake_get(url, timeout=None, **kwargs):
        calls.append(url)
        return FakeResponse(SAMPLE_CSV)

    monkeypatch.setattr("hijri_date.table.requests.get", fake_get)
    cache.clear()
    get_config.cache_clear()
    yield calls
    cache.clear()
    get_config.cache_clear()


@pytest.fixture
def http_calls(_isolate):
    return _isolate


@pytest.fixture
def clock():
    return FakeClock(now=1_000.0)


@pytest.fixture
def fake_cache(clock):
    return FakeCache(clock)


@pytest.fixture
def fetch():
    return CountingFetch()


@pytest.fixture
def table(fake_cache, fetch):
    return ConversionTable(fake_cache, fetch, cache_key="test_map", cache_period=60)


@pytest.fixture
def table_converter(table):
    return TableConverter(table)


@pytest.fixture
def estimate_converter():
    return EstimateConverter()


@pytest.fixture
def fallback_converter(table_converter, estimate_converter):
    return FallbackConverter(table_converter, estimate_converter)
