"""Weather condition codes.

OpenWeatherMap reports conditions as grouped integer ids (2xx thunderstorm,
3xx drizzle, 5xx rain, 6xx snow, 7xx atmosphere, 800 clear, 80x clouds). The
dashboard works with a compact WMO-style code set instead, so every provider
id is translated through :data:`WEATHER_CODE_MAP` before it reaches a series.
"""
from __future__ import annotations

from dataclasses import dataclass
from types import MappingProxyType
from typing import Mapping

CLEAR_SKY = 0

WEATHER_CODE_MAP: Mapping[int, int] = MappingProxyType(
    {
        # thunderstorm
        200: 95, 201: 95, 202: 95, 210: 95, 211: 95, 212: 95, 221: 95,
        230: 96, 231: 96, 232: 96,
        # drizzle
        300: 51, 301: 51, 302: 53, 310: 53, 311: 53,
        312: 55, 313: 55, 314: 55, 321: 55,
        # rain
        500: 61, 501: 63, 502: 65, 503: 65, 504: 65, 511: 66,
        520: 80, 521: 81, 522: 82, 531: 82,
        # snow
        600: 71, 601: 73, 602: 75, 611: 66, 612: 66, 613: 66, 615: 66, 616: 66,
        620: 85, 621: 86, 622: 86,
        # atmosphere
        701: 45, 711: 45, 721: 45, 731: 45, 741: 45, 751: 45, 761: 45, 762: 45, 771: 45, 781: 45,
        # clear / clouds
        800: CLEAR_SKY,
        801: 1, 802: 2, 803: 3, 804: 3,
    }
)


@dataclass(frozen=True)
class WeatherInfo:
    description: str
    emoji: str


UNKNOWN_WEATHER = WeatherInfo("Unknown", "❓")

WEATHER_DESCRIPTIONS: Mapping[int, WeatherInfo] = MappingProxyType(
    {
        0: WeatherInfo("Clear sky", "☀️"),
        1: WeatherInfo("Mainly clear", "🌤️"),
        2: WeatherInfo("Partly cloudy", "⛅"),
        3: WeatherInfo("Overcast", "☁️"),
        45: WeatherInfo("Fog", "🌫️"),
        48: WeatherInfo("Depositing rime fog", "🌫️"),
        51: WeatherInfo("Light drizzle", "🌦️"),
        53: WeatherInfo("Moderate drizzle", "🌦️"),
        55: WeatherInfo("Dense drizzle", "🌧️"),
        56: WeatherInfo("Light freezing drizzle", "🌨️"),
        57: WeatherInfo("Dense freezing drizzle", "🌨️"),
        61: WeatherInfo("Slight rain", "🌦️"),
        63: WeatherInfo("Moderate rain", "🌧️"),
        65: WeatherInfo("Heavy rain", "🌧️"),
        66: WeatherInfo("Light freezing rain", "🌨️"),
        67: WeatherInfo("Heavy freezing rain", "🌨️"),
        71: WeatherInfo("Slight snow", "❄️"),
        73: WeatherInfo("Moderate snow", "❄️"),
        75: WeatherInfo("Heavy snow", "❄️"),
        77: WeatherInfo("Snow grains", "❄️"),
        80: WeatherInfo("Slight rain showers", "🌦️"),
        81: WeatherInfo("Moderate rain showers", "🌧️"),
        82: WeatherInfo("Violent rain showers", "⛈️"),
        85: WeatherInfo("Slight snow showers", "❄️"),
        86: WeatherInfo("Heavy snow showers", "❄️"),
        95: WeatherInfo("Thunderstorm", "⛈️"),
        96: WeatherInfo("Thunderstorm with hail", "⛈️"),
        99: WeatherInfo("Heavy thunderstorm with hail", "⛈️"),
    }
)

INTERNAL_CODES = frozenset(WEATHER_DESCRIPTIONS)


def map_weather_code(provider_code: int | None) -> int:
    """Translate an OpenWeatherMap condition id; unknown ids become clear sky."""
    if provider_code is None:
        return CLEAR_SKY
    try:
        return WEATHER_CODE_MAP.get(int(provider_code), CLEAR_SKY)
    except (TypeError, ValueError):
        return CLEAR_SKY


def describe_weather(code: int) -> WeatherInfo:
    return WEATHER_DESCRIPTIONS.get(code, UNKNOWN_WEATHER)


__all__ = [
    "CLEAR_SKY",
    "INTERNAL_CODES",
    "UNKNOWN_WEATHER",
    "WEATHER_CODE_MAP",
    "WEATHER_DESCRIPTIONS",
    "WeatherInfo",
    "describe_weather",
    "map_weather_code",
]
