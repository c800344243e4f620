"""
Pytest fixtures for Game Night tests.

No test touches the network: BoardGameGeek is replaced by FakeBGGClient,
which serves canned XML, and sessions live in an in-memory store.
"""

import asyncio
import time
from datetime import date, datetime, timedelta, timezone

import pytest
from fastapi.testclient import TestClient

from ..api.app import create_app
from ..api.service import APIService
from ..errors import UpstreamError
from ..games.bgg import BGGClient
from ..games.fetcher import GameDetailFetcher
from ..keepalive import Keepalive
from ..session.manager import SessionManager
from ..session.participation import ParticipationManager
from ..session.store import InMemorySessionStore

NOW = datetime(2026, 10, 16, 12, 0, tzinfo=timezone.utc)
TODAY = NOW.date()

CATAN_XML = """<?xml version="1.0" encoding="utf-8"?>
<items termsofuse="https://boardgamegeek.com/xmlapi/termsofuse">
  <item type="boardgame" id="13">
    <thumbnail>https://cf.geekdo-images.com/catan_thumb.jpg</thumbnail>
    <image>https://cf.geekdo-images.com/catan.jpg</image>
    <name type="primary" sortindex="1" value="CATAN" />
    <name type="alternate" sortindex="1" value="Die Siedler von Catan" />
    <yearpublished value="1995" />
    <minplaytime value="60" />
    <maxplaytime value="120" />
    <statistics page="1">
      <ratings>
        <averageweight value="2.2996" />
      </ratings>
    </statistics>
  </item>
</items>
"""

AZUL_XML = """<?xml version="1.0" encoding="utf-8"?>
<items>
  <item type="boardgame" id="230802">
    <thumbnail>https://cf.geekdo-images.com/azul_thumb.jpg</thumbnail>
    <name type="primary" sortindex="1" value="Azul" />
    <minplaytime value="30" />
    <maxplaytime value="45" />
    <statistics page="1">
      <ratings>
        <averageweight value="1.7612" />
      </ratings>
    </statistics>
  </item>
</items>
"""

EMPTY_XML = '<?xml version="1.0" encoding="utf-8"?><items termsofuse="x"></items>'

NAMELESS_XML = '<items><item type="boardgame" id="55"><minplaytime value="30"/></item></items>'

UNDECODABLE_XML = b"<items>\xff\xfe</items>"

SEARCH_XML = """<?xml version="1.0" encoding="utf-8"?>
<items total="3">
  <item type="boardgame" id="13">
    <name type="primary" value="CATAN" />
    <yearpublished value="1995" />
  </item>
  <item type="boardgame" id="27710">
    <name type="primary" value="Catan Dice Game" />
  </item>
  <item type="boardgame">
    <yearpublished value="2007" />
  </item>
</items>
"""


class FakeBGGClient(BGGClient):
    """BGG client serving canned XML and recording calls."""

    def __init__(self, things=None, search_payload=SEARCH_XML, failing=()):
        super().__init__(base_url="http://bgg.invalid")
        self.things = {"13": CATAN_XML, "230802": AZUL_XML}
        self.things.update(things or {})
        self.search_payload = search_payload
        self.failing = set(failing)
        self.calls: list[tuple[str, str, float]] = []

    async def connect(self) -> None:
        pass

    async def close(self) -> None:
        pass

    async def search(self, query: str):
        self.calls.append(("search", query, time.monotonic()))
        if "search" in self.failing:
            raise UpstreamError("BGG down")
        return self.search_payload

    async def thing(self, game_id: str):
        self.calls.append(("thing", game_id, time.monotonic()))
        if game_id in self.failing:
            raise UpstreamError("BGG down")
        return self.things.get(game_id, EMPTY_XML)


def run(coro):
    """Run a coroutine to completion from a sync test."""
    return asyncio.run(coro)


def details(**overrides) -> dict:
    """Keyword arguments shared by both table inputs."""
    data = {
        "date": TODAY + timedelta(days=1),
        "time": "18:00",
        "location": "Cafe",
        "players_needed": 4,
        "organizer_joins": True,
        "organizer_name": "Alice",
    }
    data.update(overrides)
    return data


@pytest.fixture
def bgg() -> FakeBGGClient:
    return FakeBGGClient()


@pytest.fixture
def fetcher(bgg: FakeBGGClient) -> GameDetailFetcher:
    return GameDetailFetcher(client=bgg, request_delay=0)


@pytest.fixture
def store() -> InMemorySessionStore:
    return InMemorySessionStore(clock=lambda: NOW)


@pytest.fixture
def manager(store, fetcher) -> SessionManager:
    return SessionManager(store, fetcher, clock=lambda: NOW)


@pytest.fixture
def participation(store) -> ParticipationManager:
    return ParticipationManager(store)


@pytest.fixture
def service(fetcher) -> APIService:
    return APIService(store=InMemorySessionStore(), fetcher=fetcher)


@pytest.fixture
def client(service) -> TestClient:
    app = create_app(service=service, keepalive=Keepalive(url=None))
    with TestClient(app) as test_client:
        yield test_client


@pytest.fixture
def tomorrow() -> date:
    return datetime.now(timezone.utc).date() + timedelta(days=1)
