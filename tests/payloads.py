"""OpenWeather payload builders shared by the tests."""
from __future__ import annotations

from datetime import datetime, timedelta, timezone
from typing import Any, Dict, List, Optional, Sequence


NOW = datetime(2024, 5, 1, 10, 0, tzinfo=timezone.utc)
BASE_URL = "https://api.openweathermap.org/data/2.5"
CURRENT_URL = f"{BASE_URL}/weather"
FORECAST_URL = f"{BASE_URL}/forecast"


def epoch(value: datetime) -> int:
    return int(value.timestamp())


def current_payload(
    *,
    temp: float = 21.5,
    temp_max: float = 25.0,
    temp_min: float = 17.0,
    humidity: int = 60,
    condition: int = 800,
    wind_speed: float = 5.0,
    wind_deg: Optional[int] = 90,
    name: str = "Shenzhen",
    observed_at: datetime = NOW - timedelta(minutes=10),
) -> Dict[str, Any]:
    wind: Dict[str, Any] = {"speed": wind_speed}
    if wind_deg is not None:
        wind["deg"] = wind_deg
    return {
        "coord": {"lat": 22.5455, "lon": 114.0683},
        "weather": [{"id": condition, "main": "Clear", "description": "clear sky"}],
        "main": {"temp": temp, "temp_max": temp_max, "temp_min": temp_min, "humidity": humidity},
        "wind": wind,
        "dt": epoch(observed_at),
        "name": name,
        "cod": 200,
    }


def forecast_sample(when: datetime, temp: float, condition: int = 800, humidity: int = 70) -> Dict[str, Any]:
    return {
        "dt": epoch(when),
        "main": {"temp": temp, "humidity": humidity},
        "weather": [{"id": condition}],
    }


def forecast_payload(samples: Sequence[Dict[str, Any]]) -> Dict[str, Any]:
    return {"cod": "200", "cnt": len(samples), "list": list(samples)}


def three_hourly(start: datetime, count: int, temp: float = 20.0, condition: int = 800) -> List[Dict[str, Any]]:
    return [forecast_sample(start + timedelta(hours=3 * i), temp + i, condition) for i in range(count)]

