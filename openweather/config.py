import os
from dataclasses import dataclass, field
from typing import Any, Dict, Optional

from dotenv import load_dotenv

from .exceptions import ValidationError
from .types import Coordinates, Lang, Units

DEFAULT_API_URL = "https://api.openweathermap.org"


@dataclass(frozen=True)
class Defaults:
    units: Optional[Units] = None
    lang: Optional[Lang] = None
    coordinates: Optional[Coordinates] = None


@dataclass(frozen=True)
class ClientOptions:
    api_key: str
    api_url: str = DEFAULT_API_URL
    defaults: Defaults = field(default_factory=Defaults)
    # slot name -> custom store, or cache_handler.DISABLED
    caches: Dict[str, Any] = field(default_factory=dict)


def _env_coordinates() -> Optional[Coordinates]:
    lat = os.getenv("OPENWEATHER_LAT")
    lon = os.getenv("OPENWEATHER_LON")
    if lat is None and lon is None:
        return None
    if lat is None or lon is None:
        raise ValidationError("OPENWEATHER_LAT and OPENWEATHER_LON must be set together")
    try:
        return Coordinates(lat=float(lat), lon=float(lon))
    except ValueError as e:
        raise ValidationError(f"OPENWEATHER_LAT/OPENWEATHER_LON must be numbers: {e}") from e


def options_from_env(**overrides: Any) -> ClientOptions:
    """Build :class:`ClientOptions` from ``OPENWEATHER_*`` variables (``.env`` is honoured).

    Keyword arguments override the matching ``ClientOptions`` field.
    The result is validated when it is handed to the client.
    """
    load_dotenv()

    api_key = os.getenv("OPENWEATHER_API_KEY")
    if not api_key and "api_key" not in overrides:
        raise ValidationError("OPENWEATHER_API_KEY is not set in environment")

    values: Dict[str, Any] = {
        "api_key": api_key,
        "api_url": os.getenv("OPENWEATHER_API_URL", DEFAULT_API_URL),
        "defaults": Defaults(
            units=os.getenv("OPENWEATHER_UNITS") or None,
            lang=os.getenv("OPENWEATHER_LANG") or None,
            coordinates=_env_coordinates(),
        ),
    }
    values.update(overrides)
    return ClientOptions(**values)
