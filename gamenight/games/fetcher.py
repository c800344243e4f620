"""
Game Detail Fetcher - Lookups with per-call-site error policy.

Direct lookups (search, detail for display) raise domain errors so the API
can answer 404/500. Lookups made while creating a session never raise:
they log and degrade to a placeholder so the session is still created.

Multiple games are fetched one at a time with a fixed delay between
external calls, to stay polite with BoardGameGeek.
"""

from __future__ import annotations
import asyncio
import logging
from typing import Iterable

from .. import config
from ..errors import GameNotFoundError, UpstreamError, ValidationError
from .bgg import BGGClient
from .models import GameCandidate, GameInfo
from .normalizer import degraded_game_info, parse_search_results, parse_thing

logger = logging.getLogger(__name__)


class GameDetailFetcher:
    """Search and detail lookups on top of a BGG client."""

    def __init__(
        self,
        client: BGGClient | None = None,
        request_delay: float = config.BGG_REQUEST_DELAY,
    ):
        self.client = client or BGGClient()
        self.request_delay = request_delay

    async def search(self, query: str | None) -> list[GameCandidate]:
        """
        Search games by name.

        Raises:
            ValidationError: If the query is missing or blank.
            UpstreamError: If BGG is unreachable or the reply is unparsable.
        """
        if not query or not query.strip():
            raise ValidationError("Missing search query")
        payload = await self.client.search(query.strip())
        return parse_search_results(payload)

    async def fetch(self, game_id: str) -> GameInfo:
        """
        Fetch full details for one game.

        Raises:
            GameNotFoundError: If BGG has no usable record for the id.
            UpstreamError: If BGG is unreachable or the reply is unparsable.
        """
        payload = await self.client.thing(game_id)
        return parse_thing(payload, game_id)

    async def fetch_or_degrade(self, game_id: str, name: str) -> GameInfo:
        """Fetch details, falling back to a placeholder on any lookup failure."""
        try:
            return await self.fetch(game_id)
        except (GameNotFoundError, UpstreamError) as e:
            logger.warning("Could not fetch full game data for %s (%s): %s", game_id, name, e)
            return degraded_game_info(game_id, name)

    async def fetch_many(self, selections: Iterable[GameInfo]) -> list[GameInfo]:
        """
        Enrich a list of selected games in order.

        Games with an id are looked up one after another with request_delay
        seconds between external calls; each failure degrades on its own.
        Custom games (no id) are passed through untouched.
        """
        results: list[GameInfo] = []
        calls_made = 0

        for selection in selections:
            if selection.is_custom:
                results.append(selection)
                continue

            if calls_made and self.request_delay > 0:
                await asyncio.sleep(self.request_delay)
            calls_made += 1
            results.append(await self.fetch_or_degrade(selection.id, selection.name))

        return results
