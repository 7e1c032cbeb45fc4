"""Management command to fetch weather using the same stack as the API."""
from __future__ import annotations

import json
from typing import Any

from django.conf import settings
from django.core.management.base import BaseCommand, CommandError

from weatherboard.api.views import get_weather_service
from weatherboard.core.providers.base import WeatherError


class Command(BaseCommand):
    help = "Fetch the normalized weather document for a city"

    def add_arguments(self, parser) -> None:  # noqa: D401
        parser.add_argument("--city", type=str, help="City name, e.g. 北京 or London")
        parser.add_argument("--indent", type=int, default=None, help="Pretty-print the JSON output")

    def handle(self, *args: Any, **options: Any) -> None:  # noqa: D401
        city = options.get("city") or settings.WEATHER_DEFAULT_CITY
        try:
            document = get_weather_service().fetch_weather(city)
        except WeatherError as exc:
            raise CommandError(f"[{exc.status}] {exc.message}") from exc

        self.stdout.write(json.dumps(document.as_dict(), ensure_ascii=False, indent=options.get("indent")))
