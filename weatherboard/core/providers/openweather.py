"""OpenWeather weather provider."""
from __future__ import annotations

import logging
import os
from typing import Any, Dict, Optional

import requests
from requests import Response

from .base import (
    ConfigurationError,
    NotFoundError,
    RateLimitError,
    UpstreamAuthError,
    UpstreamError,
    UpstreamGenericError,
    WeatherProvider,
)


logger = logging.getLogger(__name__)

API_KEY_ENV = "OPENWEATHER_API_KEY"
KEY_MANAGEMENT_URL = "https://openweathermap.org/api_keys"

CURRENT = "current"
FORECAST = "forecast"

_ENDPOINTS = {CURRENT: "weather", FORECAST: "forecast"}
_LEG_LABELS = {CURRENT: "weather", FORECAST: "forecast"}

MISSING_KEY_MESSAGE = (
    f"{API_KEY_ENV} environment variable is not set. Make sure that:\n"
    "1. a .env file exists in the project root\n"
    f"2. it contains {API_KEY_ENV}=<your API key>\n"
    "3. the server was restarted after editing it"
)


def read_api_key() -> str:
    """Read the credential from the environment on every call."""
    api_key = os.environ.get(API_KEY_ENV)
    if not api_key:
        logger.error(
            "Missing weather provider credential",
            extra={"variable": API_KEY_ENV, "present": sorted(k for k in os.environ if "WEATHER" in k)},
        )
        raise ConfigurationError(MISSING_KEY_MESSAGE)
    return api_key


def key_prefix(api_key: str) -> str:
    return f"{api_key[:4]}..."


class OpenWeatherProvider(WeatherProvider):
    """Integration with the OpenWeather current weather and 5 day forecast endpoints."""

    name = "openweather"
    base_url = "https://api.openweathermap.org/data/2.5"

    def __init__(
        self,
        *,
        api_key: Optional[str] = None,
        base_url: Optional[str] = None,
        lang: str = "zh_cn",
        **kwargs,
    ) -> None:
        super().__init__(**kwargs)
        self._api_key = api_key
        self.base_url = (base_url or self.base_url).rstrip("/")
        self.lang = lang

    def get_api_key(self) -> str:
        if self._api_key:
            return self._api_key
        return read_api_key()

    # Public API ---------------------------------------------------------
    def current(
        self,
        city: str,
        *,
        api_key: Optional[str] = None,
        timeout: Optional[float] = None,
        requested_city: Optional[str] = None,
    ) -> Dict[str, Any]:
        return self._fetch(CURRENT, city, api_key=api_key, timeout=timeout, requested_city=requested_city)

    def forecast(
        self,
        city: str,
        *,
        api_key: Optional[str] = None,
        timeout: Optional[float] = None,
        requested_city: Optional[str] = None,
    ) -> Dict[str, Any]:
        return self._fetch(FORECAST, city, api_key=api_key, timeout=timeout, requested_city=requested_city)

    # Helpers ------------------------------------------------------------
    def _fetch(
        self,
        leg: str,
        city: str,
        *,
        api_key: Optional[str],
        timeout: Optional[float],
        requested_city: Optional[str],
    ) -> Dict[str, Any]:
        api_key = api_key or self.get_api_key()
        url = f"{self.base_url}/{_ENDPOINTS[leg]}"
        params = {"q": city, "appid": api_key, "units": "metric", "lang": self.lang}
        logger.info("OpenWeather %s request: %s", leg, self._redacted_url(url, params))

        response = self._request("GET", url, params=params, timeout=timeout)
        if not response.ok:
            raise self._classify_error(
                leg,
                response,
                city=city,
                requested_city=requested_city or city,
                api_key=api_key,
            )
        return self._json(response)

    def _classify_error(
        self,
        leg: str,
        response: Response,
        *,
        city: str,
        requested_city: str,
        api_key: str,
    ) -> UpstreamError:
        details = self._error_body(response)
        logger.error(
            "OpenWeather %s API error",
            leg,
            extra={"status": response.status_code, "reason": response.reason, "body": details},
        )
        message = str(details.get("message") or "")
        code = _provider_code(details.get("cod"), response.status_code)
        label = _LEG_LABELS[leg]
        context = {"status": response.status_code, "error": f"Failed to fetch {label} data", "details": details}

        if response.status_code == 401 or code == 401:
            if "invalid api key" in message.lower():
                text = (
                    "Invalid API key. Please check:\n"
                    f"1. that the API key is correct (current: {key_prefix(api_key)})\n"
                    "2. that the API key is activated (activation can take up to 2 hours after sign-up)\n"
                    f"3. the key status at {KEY_MANAGEMENT_URL}"
                )
            else:
                text = (
                    "API key authentication failed (401). Possible causes:\n"
                    "1. the API key is not activated yet (activation can take up to 2 hours after sign-up)\n"
                    f"2. the API key is wrong (check {API_KEY_ENV} in your .env file)\n"
                    "3. a different API key is being used\n"
                    f"Check your API key status at {KEY_MANAGEMENT_URL}"
                )
            return UpstreamAuthError(text, **context)
        if code == 404:
            text = f"City not found: {requested_city}"
            if requested_city != city:
                text += f" (tried: {city})"
            return NotFoundError(text, **context)
        if code == 429:
            return RateLimitError("API rate limit exceeded, please try again later", **context)
        if not message:
            message = f"Failed to fetch {label} data: {response.status_code} {response.reason or ''}".rstrip()
        return UpstreamGenericError(message, **context)

    def _error_body(self, response: Response) -> Dict[str, Any]:
        try:
            body = response.json()
        except ValueError:
            return {}
        return body if isinstance(body, dict) else {}

    def _redacted_url(self, url: str, params: Dict[str, Any]) -> str:
        redacted = dict(params, appid="***")
        return requests.Request("GET", url, params=redacted).prepare().url


def _provider_code(value: Any, fallback: int) -> int:
    """OpenWeather reports ``cod`` either as an int or a numeric string."""
    if value is None:
        return fallback
    try:
        return int(value)
    except (TypeError, ValueError):
        return fallback


__all__ = ["OpenWeatherProvider", "read_api_key", "key_prefix", "CURRENT", "FORECAST"]
