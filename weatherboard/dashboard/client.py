"""Clients the dashboard uses to obtain the ``GET /api/weather`` document."""
from __future__ import annotations

import logging
from typing import Any, Callable, Dict, Optional

import requests

from weatherboard.core.abstractions import WeatherService
from weatherboard.core.providers.base import WeatherError


logger = logging.getLogger(__name__)

TIMEOUT_MESSAGE = "Request timeout, please check your network connection"

REQUIRED_SECTIONS = (
    ("current_weather", "current weather"),
    ("daily", "daily"),
    ("hourly", "hourly"),
)


class DisplayError(RuntimeError):
    """A fetch failed; the message is shown to the user as-is."""


class FormatError(DisplayError):
    """The API answered 200 but a required section is missing."""


def validate_document(data: Any) -> Dict[str, Any]:
    if not isinstance(data, dict):
        raise FormatError("Data format error: Expected a JSON object")
    for key, label in REQUIRED_SECTIONS:
        if not data.get(key):
            logger.error("Missing %s in weather document", key)
            raise FormatError(f"Data format error: Missing {label} data")
    return data


class WeatherClient:
    def __init__(
        self,
        base_url: str,
        *,
        timeout: float = 10.0,
        session: Optional[requests.Session] = None,
    ) -> None:
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self.session = session or requests.Session()

    def fetch(self, city: str) -> Dict[str, Any]:
        logger.info("Fetching weather data for city: %s", city)
        try:
            response = self.session.get(f"{self.base_url}/weather", params={"city": city}, timeout=self.timeout)
        except requests.Timeout as exc:
            raise DisplayError(TIMEOUT_MESSAGE) from exc
        except requests.RequestException as exc:
            logger.error("Weather API unreachable", exc_info=exc)
            raise DisplayError(f"Failed to fetch weather data: {exc}") from exc

        logger.info("API response status: %s", response.status_code)
        if not response.ok:
            body = self._error_body(response)
            logger.error("API error: %s", body)
            raise DisplayError(
                body.get("message") or body.get("error") or f"Failed to fetch weather data: {response.status_code}"
            )

        try:
            data = response.json()
        except ValueError as exc:
            raise FormatError("Data format error: Response is not valid JSON") from exc
        return validate_document(data)

    @staticmethod
    def _error_body(response: requests.Response) -> Dict[str, Any]:
        try:
            body = response.json()
        except ValueError:
            return {"error": f"HTTP {response.status_code}"}
        return body if isinstance(body, dict) else {"error": f"HTTP {response.status_code}"}


class LocalWeatherClient:
    """Run the aggregation in-process, for deployments that serve both apps."""

    def __init__(self, service_factory: Callable[[], WeatherService]) -> None:
        self._service_factory = service_factory

    def fetch(self, city: str) -> Dict[str, Any]:
        logger.info("Fetching weather data in-process for city: %s", city)
        try:
            document = self._service_factory().fetch_weather(city)
        except WeatherError as exc:
            logger.error("Weather service error: %s", exc.message)
            raise DisplayError(exc.message) from exc
        return validate_document(document.as_dict())


__all__ = ["DisplayError", "FormatError", "LocalWeatherClient", "WeatherClient", "validate_document"]
