"""Check that the OpenWeather credential works before starting the dashboard."""
from __future__ import annotations

from typing import Any

from django.conf import settings
from django.core.management.base import BaseCommand, CommandError

from weatherboard.core.providers.base import UpstreamAuthError, WeatherError
from weatherboard.core.providers.openweather import OpenWeatherProvider, key_prefix


class Command(BaseCommand):
    help = "Check the OpenWeather current-conditions endpoint with the configured API key"

    def add_arguments(self, parser) -> None:  # noqa: D401
        parser.add_argument("--city", type=str, default="Shenzhen", help="City used for the check request")

    def handle(self, *args: Any, **options: Any) -> None:  # noqa: D401
        provider = OpenWeatherProvider(base_url=settings.OPENWEATHER_BASE_URL, lang=settings.OPENWEATHER_LANG)
        city = options["city"]
        try:
            api_key = provider.get_api_key()
            self.stdout.write(f"Testing OpenWeather API with key {key_prefix(api_key)}")
            payload = provider.current(city, api_key=api_key)
        except UpstreamAuthError as exc:
            self.stderr.write(exc.message)
            raise CommandError("API key is invalid or not active yet") from exc
        except WeatherError as exc:
            raise CommandError(f"[{exc.status}] {exc.message}") from exc

        main = payload.get("main") or {}
        self.stdout.write(
            self.style.SUCCESS(f"API key is valid: {payload.get('name', city)} is {main.get('temp')}°C right now")
        )
