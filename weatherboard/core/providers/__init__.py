from .base import (
    ConfigurationError,
    NotFoundError,
    RateLimitError,
    TransportError,
    UpstreamAuthError,
    UpstreamError,
    UpstreamGenericError,
    WeatherError,
)
from .openweather import OpenWeatherProvider

__all__ = [
    "ConfigurationError",
    "NotFoundError",
    "OpenWeatherProvider",
    "RateLimitError",
    "TransportError",
    "UpstreamAuthError",
    "UpstreamError",
    "UpstreamGenericError",
    "WeatherError",
]
