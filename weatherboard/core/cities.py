"""City name normalization.

OpenWeatherMap only resolves city queries given in Latin script, so the
curated Chinese names below are rewritten before the upstream call. Any other
input is passed through as-is.
"""
from __future__ import annotations

from types import MappingProxyType
from typing import Mapping, Tuple

DEFAULT_CITY = "深圳"

CITY_NAME_MAP: Mapping[str, str] = MappingProxyType(
    {
        "北京": "Beijing",
        "上海": "Shanghai",
        "广州": "Guangzhou",
        "深圳": "Shenzhen",
        "杭州": "Hangzhou",
        "成都": "Chengdu",
        "重庆": "Chongqing",
        "西安": "Xi'an",
        "南京": "Nanjing",
        "武汉": "Wuhan",
        "天津": "Tianjin",
        "苏州": "Suzhou",
        "长沙": "Changsha",
        "郑州": "Zhengzhou",
        "东莞": "Dongguan",
        "青岛": "Qingdao",
        "沈阳": "Shenyang",
        "宁波": "Ningbo",
        "昆明": "Kunming",
        "大连": "Dalian",
        "厦门": "Xiamen",
        "合肥": "Hefei",
        "佛山": "Foshan",
        "福州": "Fuzhou",
        "哈尔滨": "Harbin",
        "济南": "Jinan",
        "温州": "Wenzhou",
        "石家庄": "Shijiazhuang",
        "泉州": "Quanzhou",
        "长春": "Changchun",
        "贵阳": "Guiyang",
        "南昌": "Nanchang",
        "伦敦": "London",
        "纽约": "New York",
        "东京": "Tokyo",
        "巴黎": "Paris",
        "悉尼": "Sydney",
        "新加坡": "Singapore",
        "首尔": "Seoul",
        "曼谷": "Bangkok",
    }
)

# Rotation used by the dashboard's "next city" action.
POPULAR_CITIES: Tuple[str, ...] = tuple(CITY_NAME_MAP.values())


def normalize_city_name(city: str) -> str:
    """Return the provider-recognized name for ``city``."""
    return CITY_NAME_MAP.get(city, city)


def display_city_name(requested: str, normalized: str, provider_name: str | None) -> str:
    """Pick the name shown to the user.

    A translated request keeps the caller's spelling; otherwise the provider's
    canonical name wins when it has one.
    """
    if requested != normalized:
        return requested
    return provider_name or requested


__all__ = [
    "CITY_NAME_MAP",
    "DEFAULT_CITY",
    "POPULAR_CITIES",
    "display_city_name",
    "normalize_city_name",
]
