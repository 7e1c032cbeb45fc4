"""Dashboard state machine.

``IDLE -> LOADING -> SUCCESS | FAILURE``; every user action re-enters
``LOADING``. Each load captures a generation number and its outcome is only
applied while that number is still the latest, so a slow earlier request can
never overwrite a newer one. The guard only matters for instances shared
across overlapping loads; each dashboard page view builds its own.
"""
from __future__ import annotations

import enum
import logging
from dataclasses import dataclass, replace
from threading import Lock
from typing import Any, Callable, Dict, Optional, Sequence

from weatherboard.core.cities import POPULAR_CITIES

from .client import DisplayError


logger = logging.getLogger(__name__)

Fetcher = Callable[[str], Dict[str, Any]]


class Phase(str, enum.Enum):
    IDLE = "idle"
    LOADING = "loading"
    SUCCESS = "success"
    FAILURE = "failure"


@dataclass(frozen=True)
class DashboardState:
    city: str
    phase: Phase = Phase.IDLE
    document: Optional[Dict[str, Any]] = None
    error: Optional[str] = None
    generation: int = 0


class WeatherDashboard:
    def __init__(
        self,
        fetch: Fetcher,
        *,
        cities: Sequence[str] = POPULAR_CITIES,
        initial_city: str = "Shenzhen",
        city_index: int = 0,
    ) -> None:
        if not cities:
            raise ValueError("cities must not be empty")
        self._fetch = fetch
        self.cities = tuple(cities)
        self.city_index = city_index % len(self.cities)
        self._state = DashboardState(city=initial_city)
        self._generation = 0
        self._lock = Lock()

    @property
    def state(self) -> DashboardState:
        return self._state

    @property
    def current_city(self) -> str:
        return self._state.city

    @property
    def next_city_name(self) -> str:
        return self.cities[(self.city_index + 1) % len(self.cities)]

    # -- Transitions --------------------------------------------------------
    def begin(self, city: str) -> int:
        with self._lock:
            self._generation += 1
            self._state = DashboardState(city=city, phase=Phase.LOADING, generation=self._generation)
            return self._generation

    def complete(self, generation: int, document: Dict[str, Any]) -> bool:
        with self._lock:
            if generation != self._generation:
                logger.debug("Dropping stale result for generation %s", generation)
                return False
            self._state = replace(
                self._state,
                phase=Phase.SUCCESS,
                document=document,
                error=None,
                city=document.get("city") or self._state.city,
            )
            return True

    def fail(self, generation: int, message: str) -> bool:
        with self._lock:
            if generation != self._generation:
                logger.debug("Dropping stale failure for generation %s", generation)
                return False
            self._state = replace(self._state, phase=Phase.FAILURE, document=None, error=message)
            return True

    # -- User actions -------------------------------------------------------
    def load(self, city: Optional[str] = None) -> DashboardState:
        city = city or self.current_city
        generation = self.begin(city)
        try:
            document = self._fetch(city)
        except DisplayError as exc:
            logger.error("Failed to fetch weather data: %s", exc)
            self.fail(generation, str(exc) or "Unknown error")
        else:
            self.complete(generation, document)
        return self._state

    def search(self, text: str) -> Optional[DashboardState]:
        city = (text or "").strip()
        if not city:
            return None
        return self.load(city)

    def next_city(self) -> DashboardState:
        self.city_index = (self.city_index + 1) % len(self.cities)
        return self.load(self.cities[self.city_index])

    def retry(self) -> DashboardState:
        return self.load(self.current_city)


__all__ = ["DashboardState", "Phase", "WeatherDashboard"]
