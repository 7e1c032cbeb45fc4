"""Core abstractions for the weather domain."""
from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Any, Dict, Protocol, Tuple


def isoformat_utc(value: datetime) -> str:
    """Render a datetime as a millisecond precision UTC ISO-8601 string."""
    if value.tzinfo is None:
        value = value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc).isoformat(timespec="milliseconds").replace("+00:00", "Z")


@dataclass(frozen=True, slots=True)
class CurrentWeather:
    """Current conditions as shown on the dashboard card.

    Wind speed is stored in km/h, direction in whole degrees.
    """

    temperature: float
    weathercode: int
    windspeed: float
    winddirection: int
    time: datetime

    def as_dict(self) -> Dict[str, Any]:
        return {
            "temperature": self.temperature,
            "weathercode": self.weathercode,
            "windspeed": self.windspeed,
            "winddirection": self.winddirection,
            "time": isoformat_utc(self.time),
        }


@dataclass(frozen=True, slots=True)
class DailySeries:
    """Seven aligned day slots; index 0 is today."""

    time: Tuple[datetime, ...]
    weathercode: Tuple[int, ...]
    temperature_2m_max: Tuple[float, ...]
    temperature_2m_min: Tuple[float, ...]

    def as_dict(self) -> Dict[str, Any]:
        return {
            "time": [isoformat_utc(value) for value in self.time],
            "weathercode": list(self.weathercode),
            "temperature_2m_max": list(self.temperature_2m_max),
            "temperature_2m_min": list(self.temperature_2m_min),
        }


@dataclass(frozen=True, slots=True)
class HourlySeries:
    """Twenty-four aligned hour slots; index 0 is now."""

    time: Tuple[datetime, ...]
    temperature_2m: Tuple[float, ...]
    relative_humidity_2m: Tuple[int, ...]
    weathercode: Tuple[int, ...]

    def as_dict(self) -> Dict[str, Any]:
        return {
            "time": [isoformat_utc(value) for value in self.time],
            "temperature_2m": list(self.temperature_2m),
            "relative_humidity_2m": list(self.relative_humidity_2m),
            "weathercode": list(self.weathercode),
        }


@dataclass(frozen=True, slots=True)
class NormalizedWeatherDocument:
    """Normalized weather document returned by ``GET /api/weather``."""

    city: str
    latitude: float
    longitude: float
    current_weather: CurrentWeather
    daily: DailySeries
    hourly: HourlySeries

    def as_dict(self) -> Dict[str, Any]:
        return {
            "city": self.city,
            "latitude": self.latitude,
            "longitude": self.longitude,
            "current_weather": self.current_weather.as_dict(),
            "daily": self.daily.as_dict(),
            "hourly": self.hourly.as_dict(),
        }


class WeatherProvider(Protocol):
    """A data source returning raw current-conditions and forecast payloads."""

    name: str

    def get_api_key(self) -> str:
        """Return the credential, raising when none is configured."""
        ...

    def current(
        self,
        city: str,
        *,
        api_key: str | None = None,
        timeout: float | None = None,
        requested_city: str | None = None,
    ) -> Dict[str, Any]:
        """Fetch the current-conditions payload for ``city``."""
        ...

    def forecast(
        self,
        city: str,
        *,
        api_key: str | None = None,
        timeout: float | None = None,
        requested_city: str | None = None,
    ) -> Dict[str, Any]:
        """Fetch the multi-day 3-hour forecast payload for ``city``."""
        ...


class WeatherService(Protocol):
    """High level service that exposes weather information to the API layer."""

    def fetch_weather(self, requested_city: str) -> NormalizedWeatherDocument:
        """Return the normalized document for the requested city."""
        ...
