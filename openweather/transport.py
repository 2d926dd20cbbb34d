import asyncio
import json
import logging
from dataclasses import dataclass
from typing import Any, Optional, Protocol

import aiohttp
import httpx

from .exceptions import NetworkError

logger = logging.getLogger(__name__)

DEFAULT_TIMEOUT = 10.0  # seconds
_TCP_LIMIT = 100


@dataclass(frozen=True)
class TransportResponse:
    status: int
    status_text: str
    body: bytes

    @property
    def ok(self) -> bool:
        return 200 <= self.status < 300

    def json(self) -> Any:
        return json.loads(self.body)


class Transport(Protocol):
    async def fetch(self, url: str) -> TransportResponse: ...

    async def aclose(self) -> None: ...


class HttpxTransport:
    """GET over a shared ``httpx.AsyncClient``. A client passed in is not closed by us."""

    def __init__(self, client: Optional[httpx.AsyncClient] = None, timeout: float = DEFAULT_TIMEOUT):
        self._owns_client = client is None
        self._client = client if client is not None else httpx.AsyncClient(timeout=timeout)

    async def fetch(self, url: str) -> TransportResponse:
        try:
            resp = await self._client.get(url)
        except httpx.RequestError as e:
            raise NetworkError(f"Network error while requesting OpenWeather: {e!r}") from e
        return TransportResponse(status=resp.status_code, status_text=resp.reason_phrase, body=resp.content)

    async def aclose(self) -> None:
        if self._owns_client:
            await self._client.aclose()


class AiohttpTransport:
    def __init__(self, session: Optional[aiohttp.ClientSession] = None, timeout: float = DEFAULT_TIMEOUT):
        self._session = session
        self._owns_session = session is None
        self._timeout = timeout
        self._lock = asyncio.Lock()

    async def get_session(self) -> aiohttp.ClientSession:
        if self._session is None or self._session.closed:
            async with self._lock:
                if self._session is None or self._session.closed:
                    connector = aiohttp.TCPConnector(limit=_TCP_LIMIT, force_close=False)
                    self._session = aiohttp.ClientSession(connector=connector)
                    self._owns_session = True
                    logger.debug("AiohttpTransport: created new aiohttp ClientSession")
        return self._session

    async def fetch(self, url: str) -> TransportResponse:
        session = await self.get_session()
        try:
            async with session.get(url, timeout=aiohttp.ClientTimeout(total=self._timeout)) as resp:
                body = await resp.read()
                return TransportResponse(status=resp.status, status_text=resp.reason or "", body=body)
        except (asyncio.TimeoutError, aiohttp.ClientError) as e:
            raise NetworkError(f"Network error while requesting OpenWeather: {e!r}") from e

    async def aclose(self) -> None:
        if self._owns_session and self._session is not None and not self._session.closed:
            await self._session.close()
            logger.debug("AiohttpTransport: ClientSession closed")
        self._session = None
