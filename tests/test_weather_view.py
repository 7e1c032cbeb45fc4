from __future__ import annotations

from datetime import timedelta
from urllib.parse import parse_qs, urlparse

from django.test import Client

from tests.payloads import CURRENT_URL, FORECAST_URL, NOW, current_payload, forecast_payload, three_hourly


def mock_upstream(requests_mock, **current_kwargs) -> None:
    requests_mock.get(CURRENT_URL, json=current_payload(**current_kwargs))
    requests_mock.get(FORECAST_URL, json=forecast_payload(three_hourly(NOW + timedelta(hours=2), 40)))


def test_weather_endpoint_returns_normalized_document(requests_mock, api_key) -> None:
    mock_upstream(requests_mock, name="Beijing")

    response = Client().get("/api/weather", {"city": "北京"})

    assert response.status_code == 200
    payload = response.json()
    assert payload["city"] == "北京"
    assert payload["latitude"] == 22.5455
    assert payload["longitude"] == 114.0683
    assert set(payload["current_weather"]) == {"temperature", "weathercode", "windspeed", "winddirection", "time"}
    assert payload["current_weather"]["time"].endswith("Z")
    assert len(payload["daily"]["time"]) == 7
    assert len(payload["daily"]["weathercode"]) == 7
    assert len(payload["daily"]["temperature_2m_max"]) == 7
    assert len(payload["daily"]["temperature_2m_min"]) == 7
    assert len(payload["hourly"]["time"]) == 24
    assert len(payload["hourly"]["temperature_2m"]) == 24
    assert len(payload["hourly"]["relative_humidity_2m"]) == 24
    assert len(payload["hourly"]["weathercode"]) == 24
    upstream_cities = {parse_qs(urlparse(r.url).query)["q"][0] for r in requests_mock.request_history}
    assert upstream_cities == {"Beijing"}


def test_weather_endpoint_defaults_city(requests_mock, api_key) -> None:
    mock_upstream(requests_mock)

    response = Client().get("/api/weather")

    assert response.status_code == 200
    assert response.json()["city"] == "深圳"


def test_unknown_city_returns_404_envelope(requests_mock, api_key) -> None:
    requests_mock.get(CURRENT_URL, status_code=404, json={"cod": "404", "message": "city not found"})
    requests_mock.get(FORECAST_URL, json=forecast_payload(three_hourly(NOW, 8)))

    response = Client().get("/api/weather", {"city": "Atlantis"})

    assert response.status_code == 404
    payload = response.json()
    assert payload["error"] == "Failed to fetch weather data"
    assert "Atlantis" in payload["message"]
    assert payload["details"] == {"cod": "404", "message": "city not found"}


def test_invalid_key_selects_invalid_credential_message(requests_mock, api_key) -> None:
    body = {"cod": 401, "message": "Invalid API key. Please see https://openweathermap.org/faq#error401 for more info."}
    requests_mock.get(CURRENT_URL, status_code=401, json=body)
    requests_mock.get(FORECAST_URL, status_code=401, json=body)

    response = Client().get("/api/weather", {"city": "London"})

    assert response.status_code == 401
    message = response.json()["message"]
    assert message.startswith("Invalid API key.")
    assert "authentication failed" not in message


def test_missing_key_returns_setup_instructions(requests_mock, no_api_key) -> None:
    response = Client().get("/api/weather", {"city": "London"})

    assert response.status_code == 500
    payload = response.json()
    assert "OPENWEATHER_API_KEY" in payload["message"]
    assert "details" not in payload
    assert not requests_mock.called


def test_unexpected_errors_become_500(monkeypatch) -> None:
    class _Broken:
        def fetch_weather(self, city):
            raise KeyError("main")

    monkeypatch.setattr("weatherboard.api.views.get_weather_service", lambda: _Broken())

    response = Client().get("/api/weather", {"city": "London"})

    assert response.status_code == 500
    assert response.json() == {"error": "Failed to fetch weather data", "message": "'main'"}
