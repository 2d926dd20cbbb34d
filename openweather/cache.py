import asyncio
import logging
import time
from dataclasses import dataclass
from typing import Any, Callable, Dict, Optional, Protocol, runtime_checkable

from pydantic import TypeAdapter
from redis import asyncio as aioredis

logger = logging.getLogger(__name__)

DEFAULT_SWEEP_INTERVAL = 5 * 60  # seconds


@runtime_checkable
class CacheStore(Protocol):
    """What the client needs from a cache. ``get`` returns ``None`` on a miss."""

    async def has(self, key: str) -> bool: ...

    async def get(self, key: str) -> Optional[Any]: ...

    async def set(self, key: str, value: Any) -> None: ...


@dataclass
class CacheEntry:
    value: Any
    stored_at: float


class MemoryCache:
    """In-process TTL cache with a periodic sweep.

    Entries older than ``sweep_delay`` seconds are dropped by a background
    task every ``sweep_interval`` seconds. Reads check the age as well, so a
    stale entry is never returned between two sweeps. The sweep task starts
    on the first ``set`` and is stopped by :meth:`aclose`.
    """

    def __init__(self, sweep_delay: float, sweep_interval: float = DEFAULT_SWEEP_INTERVAL,
                 clock: Callable[[], float] = time.monotonic):
        self.sweep_delay = sweep_delay
        self.sweep_interval = sweep_interval
        self._clock = clock
        self._store: Dict[str, CacheEntry] = {}
        self._sweeper: Optional[asyncio.Task] = None

    def __len__(self) -> int:
        return len(self._store)

    def _expired(self, entry: CacheEntry, now: float) -> bool:
        return now - entry.stored_at > self.sweep_delay

    def _fresh_entry(self, key: str) -> Optional[CacheEntry]:
        entry = self._store.get(key)
        if entry is None:
            return None
        if self._expired(entry, self._clock()):
            del self._store[key]
            return None
        return entry

    async def has(self, key: str) -> bool:
        return self._fresh_entry(key) is not None

    async def get(self, key: str) -> Optional[Any]:
        entry = self._fresh_entry(key)
        return entry.value if entry is not None else None

    async def set(self, key: str, value: Any) -> None:
        self._store[key] = CacheEntry(value=value, stored_at=self._clock())
        self._ensure_sweeper()

    def clear(self) -> None:
        self._store.clear()

    def sweep(self) -> int:
        now = self._clock()
        expired = [key for key, entry in self._store.items() if self._expired(entry, now)]
        for key in expired:
            del self._store[key]
        if expired:
            logger.debug("MemoryCache: swept %s expired entries, %s left", len(expired), len(self._store))
        return len(expired)

    @property
    def sweeping(self) -> bool:
        return self._sweeper is not None and not self._sweeper.done()

    def _ensure_sweeper(self) -> None:
        if not self.sweeping:
            self._sweeper = asyncio.get_running_loop().create_task(self._sweep_forever())

    async def _sweep_forever(self) -> None:
        while True:
            await asyncio.sleep(self.sweep_interval)
            self.sweep()

    async def aclose(self) -> None:
        task, self._sweeper = self._sweeper, None
        if task is None or task.done():
            return
        task.cancel()
        try:
            await task
        except asyncio.CancelledError:
            # the caller itself was cancelled while waiting
            current = asyncio.current_task()
            if current is not None and current.cancelling():
                raise


class RedisCache:
    """Cache store backed by Redis; expiry is left to Redis (``SET ... EX``).

    ``model`` is the type stored in this slot (for example
    ``List[CoordinatesByLocationName]``); it is used to serialize values to
    JSON and to rebuild them on read.
    """

    def __init__(self, redis: aioredis.Redis, model: Any, sweep_delay: int, prefix: str = "openweather"):
        self._redis = redis
        self._adapter = TypeAdapter(model)
        self.sweep_delay = sweep_delay
        self.prefix = prefix

    @classmethod
    def from_url(cls, url: str, model: Any, sweep_delay: int, prefix: str = "openweather") -> "RedisCache":
        return cls(aioredis.from_url(url, encoding="utf-8", decode_responses=True), model, sweep_delay, prefix)

    def _key(self, key: str) -> str:
        return f"{self.prefix}:{key}"

    async def has(self, key: str) -> bool:
        return bool(await self._redis.exists(self._key(key)))

    async def get(self, key: str) -> Optional[Any]:
        data = await self._redis.get(self._key(key))
        if data is None:
            return None
        return self._adapter.validate_json(data)

    async def set(self, key: str, value: Any) -> None:
        data = self._adapter.dump_json(value, by_alias=True)
        await self._redis.set(self._key(key), data, ex=self.sweep_delay)

    async def aclose(self) -> None:
        await self._redis.aclose()
