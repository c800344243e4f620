"""
Keepalive - Periodic self-ping so free hosting tiers do not idle out.

Runs as an independent asyncio task next to the app. It touches no
session state and never raises: failures are logged and the loop goes on.
"""

from __future__ import annotations
import asyncio
import logging
import random

import aiohttp

from . import config

logger = logging.getLogger(__name__)


class Keepalive:
    """Ping url every interval seconds, give or take jitter seconds."""

    def __init__(
        self,
        url: str | None = config.KEEPALIVE_URL,
        interval: float = config.KEEPALIVE_INTERVAL,
        jitter: float = 5.0,
        timeout: float = 10.0,
    ):
        self.url = url
        self.interval = interval
        self.jitter = jitter
        self.timeout = timeout
        self._task: asyncio.Task | None = None

    @property
    def enabled(self) -> bool:
        return bool(self.url)

    @property
    def running(self) -> bool:
        return self._task is not None and not self._task.done()

    def next_delay(self) -> float:
        return max(0.0, self.interval + random.uniform(-self.jitter, self.jitter))

    def start(self) -> None:
        if not self.enabled:
            logger.debug("Keepalive disabled (KEEPALIVE_URL not set)")
            return
        if not self.running:
            self._task = asyncio.create_task(self._run())

    async def stop(self) -> None:
        if self._task is None:
            return
        self._task.cancel()
        try:
            await self._task
        except asyncio.CancelledError:
            pass
        self._task = None

    async def ping(self, session: aiohttp.ClientSession) -> bool:
        """Hit the URL once; True on a non-error response."""
        try:
            timeout = aiohttp.ClientTimeout(total=self.timeout)
            async with session.get(self.url, timeout=timeout) as resp:
                if resp.status >= 400:
                    logger.error("[Keepalive] %s answered HTTP %d", self.url, resp.status)
                    return False
            logger.info("[Keepalive] Success")
            return True
        except (aiohttp.ClientError, asyncio.TimeoutError) as e:
            logger.error("[Keepalive] Error: %s", e)
            return False

    async def _run(self) -> None:
        async with aiohttp.ClientSession() as session:
            while True:
                delay = self.next_delay()
                logger.info("[Keepalive] Pinging %s (next ping in ~%.0fs)", self.url, delay)
                await self.ping(session)
                await asyncio.sleep(delay)
