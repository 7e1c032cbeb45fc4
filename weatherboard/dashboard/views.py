"""Server-rendered weather dashboard."""
from __future__ import annotations

from django.conf import settings
from django.shortcuts import render

from weatherboard.api.views import get_weather_service

from .client import LocalWeatherClient, WeatherClient
from .presenters import present
from .state import Phase, WeatherDashboard


def _parse_index(value: str | None) -> int:
    try:
        return int(value) if value is not None else 0
    except ValueError:
        return 0


def build_client():
    """Talk to a remote API when one is configured, otherwise stay in-process."""
    if settings.DASHBOARD_API_BASE_URL:
        return WeatherClient(settings.DASHBOARD_API_BASE_URL, timeout=settings.DASHBOARD_TIMEOUT)
    return LocalWeatherClient(get_weather_service)


def dashboard(request):
    """Render the dashboard for ``?city=`` or the ``?index=`` rotation slot.

    A submitted search form always carries ``city``; a blank one reloads the
    city in ``?current=``.
    """
    board = WeatherDashboard(
        build_client().fetch,
        initial_city=(request.GET.get("current") or "").strip() or settings.DASHBOARD_INITIAL_CITY,
        city_index=_parse_index(request.GET.get("index")),
    )

    if "city" in request.GET:
        state = board.search(request.GET["city"]) or board.retry()
    elif "index" in request.GET:
        state = board.load(board.cities[board.city_index])
    else:
        state = board.load()

    context = {
        "state": state,
        "failed": state.phase is Phase.FAILURE,
        "weather": present(state.document) if state.phase is Phase.SUCCESS else None,
        "city_index": board.city_index,
        "next_index": (board.city_index + 1) % len(board.cities),
        "next_city": board.next_city_name,
    }
    return render(request, "dashboard/index.html", context)
