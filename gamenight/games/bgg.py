"""
BoardGameGeek Client - Async access to the BGG XML API v2.

Only transport lives here: building URLs, applying timeouts and turning
transport failures into UpstreamError. Parsing is done by the normalizer.

Usage:
    client = BGGClient()
    payload = await client.search("catan")
    payload = await client.thing("13")
    await client.close()
"""

from __future__ import annotations
import asyncio
import logging

import aiohttp

from .. import config
from ..errors import UpstreamError

logger = logging.getLogger(__name__)


class BGGClient:
    """Thin aiohttp wrapper around the search and thing endpoints."""

    def __init__(
        self,
        base_url: str = config.BGG_BASE_URL,
        timeout: float = config.BGG_TIMEOUT,
    ):
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self._session: aiohttp.ClientSession | None = None

    async def connect(self) -> None:
        """Open the underlying HTTP session if needed."""
        if self._session is None or self._session.closed:
            self._session = aiohttp.ClientSession()

    async def close(self) -> None:
        if self._session is not None and not self._session.closed:
            await self._session.close()
        self._session = None

    async def search(self, query: str) -> bytes:
        """Raw XML for a board game name search."""
        return await self._get("/search", {"query": query, "type": "boardgame"})

    async def thing(self, game_id: str) -> bytes:
        """Raw XML for one game, including rating statistics."""
        return await self._get("/thing", {"id": game_id, "stats": "1"})

    async def _get(self, path: str, params: dict[str, str]) -> bytes:
        await self.connect()
        url = f"{self.base_url}{path}"
        client_timeout = aiohttp.ClientTimeout(total=self.timeout)

        try:
            async with self._session.get(url, params=params, timeout=client_timeout) as resp:
                # Raw bytes: the XML parser honours the document's own encoding.
                body = await resp.read()
                if resp.status != 200:
                    raise UpstreamError(f"BGG returned HTTP {resp.status} for {path}")
                return body
        except aiohttp.ClientError as e:
            raise UpstreamError(f"Network error calling BGG {path}: {e}") from e
        except asyncio.TimeoutError as e:
            raise UpstreamError(f"BGG request timed out after {self.timeout}s: {path}") from e
