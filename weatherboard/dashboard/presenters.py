"""Turn a weather document into template-friendly rows."""
from __future__ import annotations

import math
from datetime import datetime
from typing import Any, Dict, List

from weatherboard.core.codes import describe_weather


def parse_time(value: str) -> datetime:
    return datetime.fromisoformat(value.replace("Z", "+00:00"))


def round_half_up(value: float) -> int:
    return int(math.floor(float(value) + 0.5))


def format_time(value: str) -> str:
    """``Oct 19, 03:00 PM``"""
    return parse_time(value).strftime("%b %d, %I:%M %p")


def format_date(value: str) -> str:
    """``Mon, Oct 20``"""
    return parse_time(value).strftime("%a, %b %d")


def present_current(document: Dict[str, Any]) -> Dict[str, Any]:
    current = document["current_weather"]
    daily = document["daily"]
    info = describe_weather(current["weathercode"])
    return {
        "city": document["city"],
        "time": format_time(current["time"]),
        "temperature": round_half_up(current["temperature"]),
        "max": round_half_up(daily["temperature_2m_max"][0]),
        "min": round_half_up(daily["temperature_2m_min"][0]),
        "windspeed": round(current["windspeed"], 1),
        "winddirection": current["winddirection"],
        "emoji": info.emoji,
        "description": info.description,
    }


def present_daily(document: Dict[str, Any]) -> List[Dict[str, Any]]:
    daily = document["daily"]
    rows = []
    for index, value in enumerate(daily["time"][:7]):
        info = describe_weather(daily["weathercode"][index])
        rows.append(
            {
                "label": "Today" if index == 0 else format_date(value),
                "is_today": index == 0,
                "emoji": info.emoji,
                "description": info.description,
                "max": round_half_up(daily["temperature_2m_max"][index]),
                "min": round_half_up(daily["temperature_2m_min"][index]),
            }
        )
    return rows


def present_hourly(document: Dict[str, Any]) -> List[Dict[str, Any]]:
    hourly = document["hourly"]
    rows = []
    for index, value in enumerate(hourly["time"][:24]):
        info = describe_weather(hourly["weathercode"][index])
        rows.append(
            {
                "label": f"{parse_time(value).hour}:00",
                "is_now": index == 0,
                "emoji": info.emoji,
                "temperature": round_half_up(hourly["temperature_2m"][index]),
                "humidity": hourly["relative_humidity_2m"][index],
            }
        )
    return rows


def present(document: Dict[str, Any]) -> Dict[str, Any]:
    return {
        "current": present_current(document),
        "daily": present_daily(document),
        "hourly": present_hourly(document),
    }


__all__ = ["format_date", "format_time", "present", "round_half_up"]
