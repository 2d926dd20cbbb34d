import json
import os
import sys
from pathlib import Path
from typing import Any, List

import pytest

PROJECT_ROOT = Path(__file__).resolve().parents[1]
if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))

from openweather.transport import TransportResponse  # noqa: E402


@pytest.fixture(autouse=True)
def _test_env(monkeypatch):
    monkeypatch.setenv("OPENWEATHER_API_KEY", os.getenv("OPENWEATHER_API_KEY", "test-key"))


@pytest.fixture(autouse=True)
def _block_network(monkeypatch, request):
    if request.node.get_closest_marker("network"):
        return

    import aiohttp
    import httpx

    def _boom(*args, **kwargs):
        raise RuntimeError(
            "Network is blocked in unit tests. "
            "Inject a fake transport, use httpx.MockTransport or mark the test with @pytest.mark.network"
        )

    async def _aboom(*args, **kwargs):
        _boom()

    monkeypatch.setattr(httpx.AsyncHTTPTransport, "handle_async_request", _aboom, raising=True)
    monkeypatch.setattr(aiohttp.ClientSession, "_request", _aboom, raising=True)


def json_response(payload: Any, status: int = 200, status_text: str = "OK") -> TransportResponse:
    return TransportResponse(status=status, status_text=status_text, body=json.dumps(payload).encode())


class FakeTransport:
    """Records every URL and answers from a list of canned responses (the last one repeats)."""

    def __init__(self, *responses: TransportResponse):
        self.responses: List[TransportResponse] = list(responses)
        self.urls: List[str] = []
        self.closed = False

    @property
    def calls(self) -> int:
        return len(self.urls)

    async def fetch(self, url: str) -> TransportResponse:
        self.urls.append(url)
        if len(self.responses) > 1:
            return self.responses.pop(0)
        return self.responses[0]

    async def aclose(self) -> None:
        self.closed = True


class FakeClock:
    def __init__(self, now: float = 1000.0):
        self.now = now

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


@pytest.fixture
def clock():
    return FakeClock()


CURRENT_WEATHER_PAYLOAD = {
    "coord": {"lon": 2, "lat": 1},
    "weather": [{"id": 800, "main": "Clear", "description": "clear sky", "icon": "01d"}],
    "base": "stations",
    "main": {
        "temp": 20.0,
        "feels_like": 19.5,
        "pressure": 1012,
        "humidity": 55,
        "temp_min": 18.0,
        "temp_max": 22.0,
    },
    "visibility": 10000,
    "wind": {"speed": 3.2, "deg": 240},
    "clouds": {"all": 0},
    "rain": {"1h": 0.25},
    "dt": 1700000000,
    "sys": {"country": "GB", "sunrise": 1699990000, "sunset": 1700020000},
    "timezone": 0,
    "id": 2643743,
    "name": "London",
    "cod": 200,
}

FORECAST_PAYLOAD = {
    "cod": "200",
    "message": 0,
    "cnt": 1,
    "list": [
        {
            "dt": 1700010800,
            "main": {
                "temp": 11.2,
                "feels_like": 10.1,
                "temp_min": 10.5,
                "temp_max": 11.2,
                "pressure": 1015,
                "humidity": 80,
                "temp_kf": 0.7,
            },
            "weather": [{"id": 500, "main": "Rain", "description": "light rain", "icon": "10n"}],
            "clouds": {"all": 90},
            "wind": {"speed": 4.1, "deg": 200, "gust": 8.0},
            "visibility": 10000,
            "pop": 0.6,
            "rain": {"3h": 0.9},
            "sys": {"pod": "n"},
            "dt_txt": "2023-11-15 03:00:00",
        }
    ],
    "city": {"id": 2643743, "name": "London", "coord": {"lat": 51.5085, "lon": -0.1257}, "country": "GB"},
}

DIRECT_GEOCODING_PAYLOAD = [
    {
        "name": "London",
        "local_names": {"en": "London", "fr": "Londres"},
        "lat": 51.5073219,
        "lon": -0.1276474,
        "country": "GB",
        "state": "England",
    }
]

ZIP_GEOCODING_PAYLOAD = {"zip": "E14", "name": "London", "lat": 51.5, "lon": -0.0235, "country": "GB"}

REVERSE_GEOCODING_PAYLOAD = [
    {"name": "City of London", "local_names": {"en": "City of London"}, "lat": 51.51, "lon": -0.09, "country": "GB"}
]
