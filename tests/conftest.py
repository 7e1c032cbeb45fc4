from __future__ import annotations

import pytest
from django.core.cache import cache

from weatherboard.api.views import get_weather_service


@pytest.fixture(autouse=True)
def _reset_service_and_cache():
    cache.clear()
    get_weather_service.cache_clear()
    yield
    cache.clear()
    get_weather_service.cache_clear()


@pytest.fixture
def api_key(monkeypatch) -> str:
    key = "abcd1234secretvalue"
    monkeypatch.setenv("OPENWEATHER_API_KEY", key)
    return key


@pytest.fixture
def no_api_key(monkeypatch) -> None:
    monkeypatch.delenv("OPENWEATHER_API_KEY", raising=False)
