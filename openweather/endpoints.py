"""Host-relative query strings for each endpoint, without the API key.

An optional parameter is appended when it is not ``None``; ``limit=0`` is
still sent. The order of appended parameters is fixed.
"""

from enum import Enum
from typing import Any, List, Optional, Tuple
from urllib.parse import quote

from .types import Coordinates, Lang, Number, Units, format_number


def _text(value: str) -> str:
    return quote(value, safe=",")


def _render(value: Any) -> str:
    if isinstance(value, Enum):
        return str(value.value)
    return str(value)


def _build(path: str, required: List[Tuple[str, str]], optional: List[Tuple[str, Any]]) -> str:
    params = list(required)
    params.extend((name, _render(value)) for name, value in optional if value is not None)
    return path + "?" + "&".join(f"{name}={value}" for name, value in params)


def _position(coordinates: Coordinates) -> List[Tuple[str, str]]:
    return [("lat", format_number(coordinates.lat)), ("lon", format_number(coordinates.lon))]


def by_location_name(query: str, limit: Optional[int] = None) -> str:
    return _build("direct", [("q", _text(query))], [("limit", limit)])


def by_zip_or_post_code(zip_code: str) -> str:
    return _build("zip", [("zip", _text(zip_code))], [])


def reverse_geocoding(coordinates: Coordinates, limit: Optional[int] = None) -> str:
    return _build("reverse", _position(coordinates), [("limit", limit)])


def current_weather(
    coordinates: Coordinates,
    units: Optional[Units] = None,
    lang: Optional[Lang] = None,
) -> str:
    return _build("weather", _position(coordinates), [("units", units), ("lang", lang)])


def forecast_5days_3hours(
    coordinates: Coordinates,
    cnt: Optional[Number] = None,
    units: Optional[Units] = None,
    lang: Optional[Lang] = None,
) -> str:
    return _build("forecast", _position(coordinates), [("units", units), ("cnt", cnt), ("lang", lang)])
