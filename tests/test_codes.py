from __future__ import annotations

import pytest

from weatherboard.core.codes import (
    CLEAR_SKY,
    INTERNAL_CODES,
    UNKNOWN_WEATHER,
    WEATHER_CODE_MAP,
    describe_weather,
    map_weather_code,
)


def test_every_documented_provider_code_maps_into_internal_set() -> None:
    for provider_code in WEATHER_CODE_MAP:
        assert map_weather_code(provider_code) in INTERNAL_CODES


@pytest.mark.parametrize(
    "provider_code, expected",
    [
        (200, 95),
        (232, 96),
        (300, 51),
        (321, 55),
        (500, 61),
        (511, 66),
        (531, 82),
        (602, 75),
        (622, 86),
        (741, 45),
        (800, 0),
        (802, 2),
        (804, 3),
    ],
)
def test_group_representatives(provider_code: int, expected: int) -> None:
    assert map_weather_code(provider_code) == expected


@pytest.mark.parametrize("provider_code", [0, 199, 233, 505, 699, 799, 805, 1000, None, "not-a-code"])
def test_unmapped_codes_fall_back_to_clear_sky(provider_code) -> None:
    assert map_weather_code(provider_code) == CLEAR_SKY


def test_numeric_strings_are_accepted() -> None:
    assert map_weather_code("501") == 63


def test_code_table_is_read_only() -> None:
    with pytest.raises(TypeError):
        WEATHER_CODE_MAP[800] = 1  # type: ignore[index]


def test_describe_weather_has_unknown_fallback() -> None:
    assert describe_weather(95).description == "Thunderstorm"
    assert describe_weather(42) is UNKNOWN_WEATHER
