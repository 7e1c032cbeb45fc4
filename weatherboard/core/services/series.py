"""Reshape OpenWeather payloads into the fixed-length dashboard series."""
from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date, datetime, timedelta, timezone
from typing import Any, Dict, Iterable, List, Mapping, Sequence

from ..abstractions import CurrentWeather, DailySeries, HourlySeries
from ..codes import map_weather_code

DAYS = 7
HOURS = 24
# The forecast endpoint emits one sample every 3 hours; 8 samples cover a day.
HOURLY_SAMPLE_WINDOW = 8
MS_TO_KMH = 3.6


@dataclass
class DayBucket:
    max: float
    min: float
    codes: List[int] = field(default_factory=list)

    def add(self, temperature: float, code: int) -> None:
        self.max = max(self.max, temperature)
        self.min = min(self.min, temperature)
        self.codes.append(code)


def sample_time(sample: Mapping[str, Any]) -> datetime:
    return datetime.fromtimestamp(int(sample["dt"]), tz=timezone.utc)


def sample_code(sample: Mapping[str, Any]) -> int:
    weather = sample.get("weather") or [{}]
    return map_weather_code(weather[0].get("id"))


def most_common_code(codes: Sequence[int]) -> int:
    """Return the most frequent code; on a tie the earliest one wins.

    A candidate only replaces the current pick when it is strictly more
    frequent, so ``[61, 61, 80, 80]`` resolves to 61.
    """
    if not codes:
        raise ValueError("codes must not be empty")
    best = codes[0]
    for code in codes[1:]:
        if codes.count(best) < codes.count(code):
            best = code
    return best


def build_current(payload: Mapping[str, Any]) -> CurrentWeather:
    main = payload.get("main") or {}
    wind = payload.get("wind") or {}
    return CurrentWeather(
        temperature=float(main["temp"]),
        weathercode=sample_code(payload),
        windspeed=float(wind.get("speed") or 0.0) * MS_TO_KMH,
        winddirection=int(wind.get("deg") or 0),
        time=sample_time(payload),
    )


def bucket_by_day(samples: Iterable[Mapping[str, Any]]) -> Dict[date, DayBucket]:
    buckets: Dict[date, DayBucket] = {}
    for sample in samples:
        temperature = float(sample["main"]["temp"])
        key = sample_time(sample).date()
        bucket = buckets.get(key)
        if bucket is None:
            bucket = buckets[key] = DayBucket(max=temperature, min=temperature)
        bucket.add(temperature, sample_code(sample))
    return buckets


def build_daily(current: Mapping[str, Any], samples: Sequence[Mapping[str, Any]], now: datetime) -> DailySeries:
    """Seven day slots starting today.

    Today comes from the current-conditions payload because the forecast's
    same-day bucket only covers the remaining hours. Days without samples
    repeat the previous slot.
    """
    main = current.get("main") or {}
    buckets = bucket_by_day(samples)

    times = [now]
    maxima = [float(main["temp_max"])]
    minima = [float(main["temp_min"])]
    codes = [sample_code(current)]

    for offset in range(1, DAYS):
        slot_time = now + timedelta(days=offset)
        bucket = buckets.get(slot_time.astimezone(timezone.utc).date())
        times.append(slot_time)
        if bucket is not None:
            maxima.append(bucket.max)
            minima.append(bucket.min)
            codes.append(most_common_code(bucket.codes))
        else:
            maxima.append(maxima[-1])
            minima.append(minima[-1])
            codes.append(codes[-1])

    return DailySeries(
        time=tuple(times[:DAYS]),
        weathercode=tuple(codes[:DAYS]),
        temperature_2m_max=tuple(maxima[:DAYS]),
        temperature_2m_min=tuple(minima[:DAYS]),
    )


def build_hourly(current: Mapping[str, Any], samples: Sequence[Mapping[str, Any]], now: datetime) -> HourlySeries:
    main = current.get("main") or {}
    times = [now]
    temperatures = [float(main["temp"])]
    humidity = [int(main.get("humidity") or 0)]
    codes = [sample_code(current)]

    for sample in samples[:HOURLY_SAMPLE_WINDOW]:
        when = sample_time(sample)
        if when <= now:
            continue
        times.append(when)
        temperatures.append(float(sample["main"]["temp"]))
        humidity.append(int(sample["main"].get("humidity") or 0))
        codes.append(sample_code(sample))

    while len(times) < HOURS:
        times.append(times[-1] + timedelta(hours=1))
        temperatures.append(temperatures[-1])
        humidity.append(humidity[-1])
        codes.append(codes[-1])

    return HourlySeries(
        time=tuple(times[:HOURS]),
        temperature_2m=tuple(temperatures[:HOURS]),
        relative_humidity_2m=tuple(humidity[:HOURS]),
        weathercode=tuple(codes[:HOURS]),
    )


__all__ = [
    "DAYS",
    "HOURS",
    "DayBucket",
    "bucket_by_day",
    "build_current",
    "build_daily",
    "build_hourly",
    "most_common_code",
]
