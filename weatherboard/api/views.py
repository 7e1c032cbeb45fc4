"""REST API views for weather information."""
from __future__ import annotations

import logging
from functools import lru_cache

from django.conf import settings
from django.core.cache import caches
from rest_framework import status
from rest_framework.permissions import AllowAny
from rest_framework.response import Response
from rest_framework.views import APIView

from weatherboard.core.abstractions import WeatherService
from weatherboard.core.providers.base import WeatherError
from weatherboard.core.providers.openweather import OpenWeatherProvider
from weatherboard.core.services.weather_service import WeatherAggregator


logger = logging.getLogger(__name__)


@lru_cache(maxsize=1)
def get_weather_service() -> WeatherService:
    provider = OpenWeatherProvider(
        base_url=settings.OPENWEATHER_BASE_URL,
        lang=settings.OPENWEATHER_LANG,
    )
    return WeatherAggregator(
        provider=provider,
        cache=caches[settings.WEATHER_CACHE_ALIAS],
        ttl=settings.WEATHER_CACHE_TIMEOUT,
        timeout=settings.WEATHER_UPSTREAM_TIMEOUT,
    )


class WeatherView(APIView):
    """Provide the normalized weather document for a city."""

    permission_classes = [AllowAny]

    def get(self, request, *args, **kwargs):  # noqa: D401
        """Return current, 7 day and 24 hour weather for ``?city=``."""
        city = request.query_params.get("city") or settings.WEATHER_DEFAULT_CITY
        try:
            document = get_weather_service().fetch_weather(city)
        except WeatherError as exc:
            logger.warning("Weather request for %s failed with %s: %s", city, exc.status, exc.message)
            return Response(exc.as_payload(), status=exc.status)
        except Exception as exc:  # noqa: BLE001 - every failure must reach the client as a message
            logger.exception("Weather API error")
            return Response(
                {"error": "Failed to fetch weather data", "message": str(exc) or "Unknown error"},
                status=status.HTTP_500_INTERNAL_SERVER_ERROR,
            )
        return Response(document.as_dict(), status=status.HTTP_200_OK)
