"""Parameter checks run at the API boundary, before any cache or network I/O.

Each rule raises :class:`~openweather.exceptions.ValidationError` with its own
message. The coordinate, units and lang checks return the normalized value so
callers never have to look at the raw input again.
"""

from collections.abc import Mapping
from dataclasses import replace
from typing import Any, Optional

from .cache import CacheStore
from .cache_handler import DISABLED, SLOT_NAMES
from .config import ClientOptions, Defaults
from .exceptions import ValidationError
from .types import Coordinates, Lang, Units

COORDINATES_MESSAGE = "Invalid 'coordinates' parameter. Must be an object with 'lat' and 'lon' properties as numbers"
NO_DEFAULT_COORDINATES_MESSAGE = "'coordinates' parameter wasn't provided and no default has been set"
LIMIT_MESSAGE = "Invalid optional 'limit' parameter. Must be an integer between 0 and 5"
CNT_MESSAGE = "Invalid optional 'cnt' parameter. Must be a number"
LANG_MESSAGE = "Invalid optional 'lang' parameter. Must be a valid member of the Lang enum"
UNITS_MESSAGE = "Invalid optional 'units' parameter. Must be 'standard', 'metric' or 'imperial'"

MAX_LIMIT = 5


def _is_number(value: Any) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool)


def validate_client_options(options: Any) -> ClientOptions:
    """Check every field of ``options`` and return a copy with enum-typed defaults."""
    if not isinstance(options, ClientOptions):
        raise ValidationError("Invalid 'options' parameter. Is required and must be a ClientOptions")
    if not isinstance(options.api_key, str):
        raise ValidationError("Invalid 'options.api_key' parameter. Is required and must be a string")
    if not isinstance(options.api_url, str):
        raise ValidationError("Invalid optional 'options.api_url' parameter. Must be a string")

    defaults = options.defaults
    if not isinstance(defaults, Defaults):
        raise ValidationError("Invalid optional 'options.defaults' parameter. Must be a Defaults")
    units = validate_units(
        defaults.units,
        "Invalid optional 'options.defaults.units' parameter. Must be 'standard', 'metric' or 'imperial'",
    )
    lang = validate_lang(
        defaults.lang,
        "Invalid optional 'options.defaults.lang' parameter. Must be a valid member of the Lang enum",
    )
    coordinates = None
    if defaults.coordinates is not None:
        coordinates = validate_coordinates(
            defaults.coordinates,
            message="Invalid optional 'options.defaults.coordinates' parameter. "
                    "Must be an object with 'lat' and 'lon' properties as numbers",
        )

    if not isinstance(options.caches, Mapping):
        raise ValidationError("Invalid optional 'options.caches' parameter. Must be a mapping")
    for slot, store in options.caches.items():
        if slot not in SLOT_NAMES:
            raise ValidationError(f"Invalid 'options.caches' key {slot!r}. Must be one of: {', '.join(SLOT_NAMES)}")
        if store is None or store is DISABLED:
            continue
        if not isinstance(store, CacheStore):
            raise ValidationError(
                f"Invalid 'options.caches.{slot}' value. Must provide has(), get() and set(), or be DISABLED"
            )

    return replace(
        options,
        defaults=Defaults(units=units, lang=lang, coordinates=coordinates),
        caches=dict(options.caches),
    )


def validate_query(query: Any) -> None:
    if not isinstance(query, str):
        raise ValidationError("Invalid 'query' parameter. Must be a string")


def validate_zip_code(zip_code: Any) -> None:
    if not isinstance(zip_code, str):
        raise ValidationError("Invalid 'zipCode' parameter. Must be a string")


def validate_coordinates(
    coordinates: Any,
    default: Optional[Coordinates] = None,
    message: Optional[str] = None,
) -> Coordinates:
    if coordinates is None:
        if default is None:
            raise ValidationError(NO_DEFAULT_COORDINATES_MESSAGE)
        return default

    if isinstance(coordinates, Coordinates):
        lat, lon = coordinates.lat, coordinates.lon
    elif isinstance(coordinates, Mapping) and "lat" in coordinates and "lon" in coordinates:
        lat, lon = coordinates["lat"], coordinates["lon"]
    else:
        raise ValidationError(message or COORDINATES_MESSAGE)

    if not (_is_number(lat) and _is_number(lon)):
        raise ValidationError(message or COORDINATES_MESSAGE)
    if isinstance(coordinates, Coordinates):
        return coordinates
    return Coordinates(lat=lat, lon=lon)


def validate_limit(limit: Any) -> None:
    if limit is None:
        return
    if not isinstance(limit, int) or isinstance(limit, bool) or not 0 <= limit <= MAX_LIMIT:
        raise ValidationError(LIMIT_MESSAGE)


def validate_cnt(cnt: Any) -> None:
    if cnt is not None and not _is_number(cnt):
        raise ValidationError(CNT_MESSAGE)


def validate_lang(lang: Any, message: Optional[str] = None) -> Optional[Lang]:
    if lang is None:
        return None
    try:
        return Lang(lang)
    except ValueError:
        raise ValidationError(message or LANG_MESSAGE) from None


def validate_units(units: Any, message: Optional[str] = None) -> Optional[Units]:
    if units is None:
        return None
    try:
        return Units(units)
    except ValueError:
        raise ValidationError(message or UNITS_MESSAGE) from None
