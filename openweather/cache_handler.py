import enum
import logging
from typing import Any, Dict, List, Mapping, Optional

from .cache import CacheStore, MemoryCache

logger = logging.getLogger(__name__)


class _Disabled(enum.Enum):
    DISABLED = "disabled"

    def __repr__(self) -> str:
        return "DISABLED"


# Pass as a slot value to never cache that operation. None means "use the default store".
DISABLED = _Disabled.DISABLED

COORDINATES_BY_LOCATION_NAME = "coordinates_by_location_name"
COORDINATES_BY_ZIP_OR_POST_CODE = "coordinates_by_zip_or_post_code"
LOCATION_NAME_BY_COORDINATES = "location_name_by_coordinates"
CURRENT_WEATHER = "current_weather"
FORECAST_5DAYS_3HOURS = "forecast_5days_3hours"

_GEOCODING_TTL = 30 * 60
_WEATHER_TTL = 10 * 60

DEFAULT_TTLS: Dict[str, int] = {
    COORDINATES_BY_LOCATION_NAME: _GEOCODING_TTL,
    COORDINATES_BY_ZIP_OR_POST_CODE: _GEOCODING_TTL,
    LOCATION_NAME_BY_COORDINATES: _GEOCODING_TTL,
    CURRENT_WEATHER: _WEATHER_TTL,
    FORECAST_5DAYS_3HOURS: _WEATHER_TTL,
}

SLOT_NAMES = tuple(DEFAULT_TTLS)


class CacheHandler:
    """Resolves the per-operation cache slots once, at construction.

    A disabled slot is left empty: lookups miss and stores are dropped.
    """

    def __init__(self, caches: Optional[Mapping[str, Any]] = None):
        caches = caches or {}
        self._slots: Dict[str, Optional[CacheStore]] = {}
        self._owned: List[MemoryCache] = []

        for slot, ttl in DEFAULT_TTLS.items():
            configured = caches.get(slot)
            if configured is DISABLED:
                self._slots[slot] = None
                logger.debug("CacheHandler: slot %s disabled", slot)
            elif configured is not None:
                self._slots[slot] = configured
            else:
                store = MemoryCache(sweep_delay=ttl)
                self._owned.append(store)
                self._slots[slot] = store

    def store(self, slot: str) -> Optional[CacheStore]:
        return self._slots[slot]

    def enabled(self, slot: str) -> bool:
        return self._slots[slot] is not None

    async def get(self, slot: str, key: str) -> Optional[Any]:
        store = self._slots[slot]
        if store is None:
            return None
        return await store.get(key)

    async def set(self, slot: str, key: str, value: Any) -> None:
        store = self._slots[slot]
        if store is not None:
            await store.set(key, value)

    async def aclose(self) -> None:
        for store in self._owned:
            await store.aclose()
