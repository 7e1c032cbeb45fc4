from __future__ import annotations

import json
from datetime import timedelta
from io import StringIO

import pytest
from django.core.management import call_command
from django.core.management.base import CommandError

from tests.payloads import CURRENT_URL, FORECAST_URL, NOW, current_payload, forecast_payload, three_hourly


def test_weather_fetch_prints_document(requests_mock, api_key) -> None:
    requests_mock.get(CURRENT_URL, json=current_payload(name="Beijing"))
    requests_mock.get(FORECAST_URL, json=forecast_payload(three_hourly(NOW + timedelta(hours=2), 40)))
    out = StringIO()

    call_command("weather_fetch", "--city", "北京", stdout=out)

    output = out.getvalue()
    assert "北京" in output
    document = json.loads(output)
    assert document["city"] == "北京"
    assert len(document["hourly"]["time"]) == 24


def test_weather_fetch_reports_provider_errors(requests_mock, api_key) -> None:
    requests_mock.get(CURRENT_URL, status_code=404, json={"cod": "404", "message": "city not found"})
    requests_mock.get(FORECAST_URL, status_code=404, json={"cod": "404", "message": "city not found"})

    with pytest.raises(CommandError, match=r"\[404\] City not found: Atlantis"):
        call_command("weather_fetch", "--city", "Atlantis", stdout=StringIO())


def test_weather_check_confirms_valid_key(requests_mock, api_key) -> None:
    requests_mock.get(CURRENT_URL, json=current_payload(temp=28.0))
    out = StringIO()

    call_command("weather_check", stdout=out)

    output = out.getvalue()
    assert "Testing OpenWeather API with key abcd..." in output
    assert "API key is valid: Shenzhen is 28.0°C right now" in output
    assert api_key not in output


def test_weather_check_flags_rejected_key(requests_mock, api_key) -> None:
    requests_mock.get(CURRENT_URL, status_code=401, json={"cod": 401, "message": "Invalid API key."})
    err = StringIO()

    with pytest.raises(CommandError, match="API key is invalid or not active yet"):
        call_command("weather_check", stdout=StringIO(), stderr=err)

    assert err.getvalue().startswith("Invalid API key.")


def test_weather_check_without_key(no_api_key) -> None:
    with pytest.raises(CommandError, match="OPENWEATHER_API_KEY"):
        call_command("weather_check", stdout=StringIO())
