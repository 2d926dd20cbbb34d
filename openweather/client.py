import logging
from dataclasses import replace
from typing import Any, Callable, List, Optional

from pydantic import TypeAdapter
from pydantic import ValidationError as PydanticValidationError

from . import endpoints
from . import validation
from .cache_handler import (
    COORDINATES_BY_LOCATION_NAME,
    COORDINATES_BY_ZIP_OR_POST_CODE,
    CURRENT_WEATHER,
    FORECAST_5DAYS_3HOURS,
    LOCATION_NAME_BY_COORDINATES,
    CacheHandler,
)
from .config import ClientOptions, Defaults
from .exceptions import ResponseParseError, TransportError
from .models import (
    CoordinatesByLocationName,
    CoordinatesByZipOrPostCode,
    CurrentWeather,
    Forecast5days3hours,
    LocationNameByCoordinates,
)
from .transport import HttpxTransport, Transport, TransportResponse
from .types import ApiNamespace, Coordinates, Lang, Number, Units

logger = logging.getLogger(__name__)

_LOCATIONS_BY_NAME = TypeAdapter(List[CoordinatesByLocationName])
_LOCATION_BY_ZIP = TypeAdapter(CoordinatesByZipOrPostCode)
_LOCATIONS_BY_COORDINATES = TypeAdapter(List[LocationNameByCoordinates])
_CURRENT_WEATHER = TypeAdapter(CurrentWeather)
_FORECAST = TypeAdapter(Forecast5days3hours)


class OpenWeatherClient:
    """Async client for the OpenWeather geocoding, current weather and forecast APIs.

    Every call validates its arguments first, then looks in the cache slot of
    the operation and only goes to the network on a miss. Use it as an async
    context manager, or call :meth:`aclose`, so the cache sweeps and the HTTP
    client are released::

        async with OpenWeatherClient(ClientOptions(api_key="...")) as client:
            places = await client.get_coordinates_by_location_name("London,GB", limit=1)
            weather = await client.get_current_weather(Coordinates(places[0].lat, places[0].lon))
    """

    def __init__(self, options: ClientOptions, transport: Optional[Transport] = None):
        self._options = validation.validate_client_options(options)
        self._owns_transport = transport is None
        self.transport = transport if transport is not None else HttpxTransport()
        self.cache_handler = CacheHandler(self._options.caches)

    async def __aenter__(self) -> "OpenWeatherClient":
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        await self.cache_handler.aclose()
        if self._owns_transport:
            await self.transport.aclose()

    @property
    def options(self) -> ClientOptions:
        return self._options

    @property
    def defaults(self) -> Defaults:
        return self._options.defaults

    @property
    def api_url(self) -> str:
        return self._options.api_url

    def _replace_defaults(self, **changes: Any) -> "OpenWeatherClient":
        self._options = replace(self._options, defaults=replace(self._options.defaults, **changes))
        return self

    def set_default_units(self, units: Optional[Units] = None) -> "OpenWeatherClient":
        """Units used when a call does not pass any. ``None`` removes the default."""
        return self._replace_defaults(units=validation.validate_units(units))

    def set_default_lang(self, lang: Optional[Lang] = None) -> "OpenWeatherClient":
        """Language used when a call does not pass any. ``None`` removes the default."""
        return self._replace_defaults(lang=validation.validate_lang(lang))

    def set_default_coordinates(self, coordinates: Optional[Coordinates] = None) -> "OpenWeatherClient":
        """Coordinates used when a call does not pass any. ``None`` removes the default."""
        if coordinates is not None:
            coordinates = validation.validate_coordinates(coordinates)
        return self._replace_defaults(coordinates=coordinates)

    async def get_coordinates_by_location_name(
        self, query: str, limit: Optional[int] = None
    ) -> List[CoordinatesByLocationName]:
        """Coordinates of places matching ``query`` ("city[,state][,country]", ISO 3166 codes).

        ``limit`` caps the number of results (0 to 5).
        """
        validation.validate_query(query)
        validation.validate_limit(limit)

        return await self._cached_request(
            COORDINATES_BY_LOCATION_NAME,
            query,
            ApiNamespace.GEO,
            lambda: endpoints.by_location_name(query, limit),
            _LOCATIONS_BY_NAME,
        )

    async def get_coordinates_by_zip_or_post_code(self, zip_code: str) -> CoordinatesByZipOrPostCode:
        """Coordinates of a zip/post code given as "code,country"."""
        validation.validate_zip_code(zip_code)

        return await self._cached_request(
            COORDINATES_BY_ZIP_OR_POST_CODE,
            zip_code,
            ApiNamespace.GEO,
            lambda: endpoints.by_zip_or_post_code(zip_code),
            _LOCATION_BY_ZIP,
        )

    async def get_location_name_by_coordinates(
        self, coordinates: Optional[Coordinates] = None, limit: Optional[int] = None
    ) -> List[LocationNameByCoordinates]:
        coordinates = validation.validate_coordinates(coordinates, self.defaults.coordinates)
        validation.validate_limit(limit)

        return await self._cached_request(
            LOCATION_NAME_BY_COORDINATES,
            coordinates.cache_key,
            ApiNamespace.GEO,
            lambda: endpoints.reverse_geocoding(coordinates, limit),
            _LOCATIONS_BY_COORDINATES,
        )

    async def get_current_weather(
        self,
        coordinates: Optional[Coordinates] = None,
        units: Optional[Units] = None,
        lang: Optional[Lang] = None,
    ) -> CurrentWeather:
        """Current weather at ``coordinates``, or at the default coordinates when omitted."""
        coordinates = validation.validate_coordinates(coordinates, self.defaults.coordinates)
        units = validation.validate_units(units) or self.defaults.units
        lang = validation.validate_lang(lang) or self.defaults.lang

        return await self._cached_request(
            CURRENT_WEATHER,
            coordinates.cache_key,
            ApiNamespace.DATA,
            lambda: endpoints.current_weather(coordinates, units, lang),
            _CURRENT_WEATHER,
        )

    async def get_forecast_5days_3hours(
        self,
        coordinates: Optional[Coordinates] = None,
        cnt: Optional[Number] = None,
        units: Optional[Units] = None,
        lang: Optional[Lang] = None,
    ) -> Forecast5days3hours:
        """5 day forecast in 3 hour steps. ``cnt`` limits the number of timestamps returned."""
        coordinates = validation.validate_coordinates(coordinates, self.defaults.coordinates)
        validation.validate_cnt(cnt)
        units = validation.validate_units(units) or self.defaults.units
        lang = validation.validate_lang(lang) or self.defaults.lang

        return await self._cached_request(
            FORECAST_5DAYS_3HOURS,
            coordinates.cache_key,
            ApiNamespace.DATA,
            lambda: endpoints.forecast_5days_3hours(coordinates, cnt, units, lang),
            _FORECAST,
        )

    async def _cached_request(
        self,
        slot: str,
        key: str,
        api: ApiNamespace,
        build_endpoint: Callable[[], str],
        adapter: TypeAdapter,
    ) -> Any:
        cached = await self.cache_handler.get(slot, key)
        if cached is not None:
            logger.debug("Cache hit for %s[%s]", slot, key)
            return cached

        logger.debug("Cache miss for %s[%s]", slot, key)
        payload = await self.send_request(api, build_endpoint())
        try:
            data = adapter.validate_python(payload)
        except PydanticValidationError as e:
            raise ResponseParseError(f"Unexpected {slot} payload: {e}") from e

        await self.cache_handler.set(slot, key, data)
        return data

    async def send_request(self, api: ApiNamespace, endpoint: str) -> Any:
        """GET ``endpoint`` under ``api`` and return the decoded JSON body.

        Prefer the typed methods; this is the raw path they all share.
        """
        url = f"{self.api_url}/{api.value}/{endpoint}"
        logger.debug("GET %s", url)
        resp: TransportResponse = await self.transport.fetch(f"{url}&appid={self._options.api_key}")

        if not resp.ok:
            logger.warning("OpenWeather returned %s %s for %s", resp.status, resp.status_text, url)
            raise TransportError(resp.status, resp.status_text)

        try:
            return resp.json()
        except ValueError as e:
            raise ResponseParseError(f"OpenWeather returned a non-JSON body for {url}", body=resp.body) from e
