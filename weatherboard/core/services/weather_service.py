"""Weather aggregation service that turns two provider calls into one document."""
from __future__ import annotations

from concurrent.futures import FIRST_EXCEPTION, Future, ThreadPoolExecutor, wait
from datetime import datetime, timezone
from typing import Any, Callable, Dict, Optional, Tuple
from urllib.parse import quote

import logging
import os

from django.core.cache.backends.base import BaseCache

from ..abstractions import NormalizedWeatherDocument, WeatherProvider
from ..cities import DEFAULT_CITY, display_city_name, normalize_city_name
from ..providers.base import TransportError
from ..providers.openweather import CURRENT, FORECAST, key_prefix
from .series import build_current, build_daily, build_hourly


logger = logging.getLogger(__name__)


def utc_now() -> datetime:
    return datetime.now(tz=timezone.utc)


class WeatherAggregator:
    """Fetch current conditions and forecast concurrently and normalize them.

    Both upstream legs share one deadline. Raw provider payloads are cached per
    leg and city so the series are always rebuilt against the current clock.
    """

    cache_key_template = "weather:{leg}:{city}"

    def __init__(
        self,
        provider: WeatherProvider,
        cache: Optional[BaseCache] = None,
        ttl: int = 300,
        timeout: float = 15.0,
        clock: Callable[[], datetime] = utc_now,
    ) -> None:
        self.provider = provider
        self._cache = cache
        self._ttl = ttl
        self._timeout = timeout
        self._clock = clock
        self._testing_mode = os.environ.get("TESTING_MODE", "0") == "1"

    def fetch_weather(self, requested_city: Optional[str]) -> NormalizedWeatherDocument:
        requested = (requested_city or "").strip() or DEFAULT_CITY
        city = normalize_city_name(requested)
        logger.info("Input city: %s -> normalized: %s", requested, city)

        api_key = self.provider.get_api_key()
        logger.info("Using API key %s", key_prefix(api_key))

        current, forecast = self._fetch_both(city, requested, api_key)
        return self._build_document(requested, city, current, forecast)

    # Helpers ------------------------------------------------------------
    def _fetch_both(self, city: str, requested: str, api_key: str) -> Tuple[Dict[str, Any], Dict[str, Any]]:
        cached_current = self._cache_get(CURRENT, city)
        cached_forecast = self._cache_get(FORECAST, city)
        if cached_current is not None and cached_forecast is not None:
            if self._testing_mode:
                logger.info("Serving %s from cache", city)
            return cached_current, cached_forecast

        executor = ThreadPoolExecutor(max_workers=2, thread_name_prefix="weather-upstream")
        try:
            futures = {
                CURRENT: self._submit(executor, CURRENT, cached_current, city, requested, api_key),
                FORECAST: self._submit(executor, FORECAST, cached_forecast, city, requested, api_key),
            }
            # Returns as soon as either leg raises, otherwise once both finish
            # or the shared deadline passes.
            done, pending = wait(futures.values(), timeout=self._timeout, return_when=FIRST_EXCEPTION)
            # When both legs have already failed the current-conditions error wins.
            for leg in (CURRENT, FORECAST):
                future = futures[leg]
                if future in done and future.exception() is not None:
                    raise future.exception()
            if pending:
                logger.error("Upstream requests for %s exceeded %ss", city, self._timeout)
                raise TransportError(
                    f"Weather provider did not respond within {self._timeout:g} seconds",
                    timed_out=True,
                )
            current = futures[CURRENT].result()
            forecast = futures[FORECAST].result()
        finally:
            executor.shutdown(wait=False, cancel_futures=True)

        if cached_current is None:
            self._cache_set(CURRENT, city, current)
        if cached_forecast is None:
            self._cache_set(FORECAST, city, forecast)
        return current, forecast

    def _submit(
        self,
        executor: ThreadPoolExecutor,
        leg: str,
        cached: Optional[Dict[str, Any]],
        city: str,
        requested: str,
        api_key: str,
    ) -> Future:
        if cached is not None:
            future: Future = Future()
            future.set_result(cached)
            return future
        fetch = self.provider.current if leg == CURRENT else self.provider.forecast
        return executor.submit(fetch, city, api_key=api_key, timeout=self._timeout, requested_city=requested)

    def _build_document(
        self,
        requested: str,
        city: str,
        current: Dict[str, Any],
        forecast: Dict[str, Any],
    ) -> NormalizedWeatherDocument:
        now = self._clock()
        samples = forecast.get("list") or []
        coord = current.get("coord") or {}
        return NormalizedWeatherDocument(
            city=display_city_name(requested, city, current.get("name")),
            latitude=coord.get("lat"),
            longitude=coord.get("lon"),
            current_weather=build_current(current),
            daily=build_daily(current, samples, now),
            hourly=build_hourly(current, samples, now),
        )

    def _cache_key(self, leg: str, city: str) -> str:
        return self.cache_key_template.format(leg=leg, city=quote(city.casefold()))

    def _cache_get(self, leg: str, city: str) -> Optional[Dict[str, Any]]:
        if self._cache is None:
            return None
        return self._cache.get(self._cache_key(leg, city))

    def _cache_set(self, leg: str, city: str, payload: Dict[str, Any]) -> None:
        if self._cache is None:
            return
        self._cache.set(self._cache_key(leg, city), payload, self._ttl)


__all__ = ["WeatherAggregator", "utc_now"]
