"""
Tests for GameDetailFetcher.

Tests:
- Direct lookups raise domain errors
- Lookups used during creation degrade instead of raising
- Multi-game enrichment is sequential, delayed and isolates failures
"""

import pytest

from ..errors import GameNotFoundError, UpstreamError, ValidationError
from ..games.fetcher import GameDetailFetcher
from ..games.models import NOT_AVAILABLE, GameInfo
from .conftest import FakeBGGClient, run


class TestSearch:
    def test_blank_query_rejected(self, fetcher, bgg):
        for query in (None, "", "   "):
            with pytest.raises(ValidationError):
                run(fetcher.search(query))
        assert bgg.calls == []

    def test_search_returns_candidates(self, fetcher, bgg):
        results = run(fetcher.search(" catan "))
        assert results[0].name == "CATAN"
        assert bgg.calls[0][:2] == ("search", "catan")

    def test_upstream_failure_propagates(self):
        fetcher = GameDetailFetcher(client=FakeBGGClient(failing={"search"}))
        with pytest.raises(UpstreamError):
            run(fetcher.search("catan"))


class TestFetch:
    def test_fetch_known_game(self, fetcher):
        assert run(fetcher.fetch("13")).name == "CATAN"

    def test_fetch_unknown_game(self, fetcher):
        with pytest.raises(GameNotFoundError):
            run(fetcher.fetch("999"))

    def test_fetch_upstream_failure(self):
        fetcher = GameDetailFetcher(client=FakeBGGClient(failing={"13"}))
        with pytest.raises(UpstreamError):
            run(fetcher.fetch("13"))

    def test_fetch_or_degrade_on_failure(self):
        fetcher = GameDetailFetcher(client=FakeBGGClient(failing={"13"}))
        game = run(fetcher.fetch_or_degrade("13", "Catan"))
        assert game.name == "Catan"
        assert game.complexity == NOT_AVAILABLE

    def test_fetch_or_degrade_on_not_found(self, fetcher):
        game = run(fetcher.fetch_or_degrade("999", "Homebrew"))
        assert game.id == "999"
        assert game.name == "Homebrew"


class TestFetchMany:
    def test_custom_games_pass_through(self, fetcher, bgg):
        selections = [GameInfo(name="Catan"), GameInfo(name="Risk")]
        results = run(fetcher.fetch_many(selections))

        assert results == selections
        assert bgg.calls == []

    def test_mixed_selection_keeps_order(self, fetcher):
        results = run(fetcher.fetch_many([
            GameInfo(id="13", name="Catan"),
            GameInfo(name="House rules game"),
            GameInfo(id="230802", name="Azul"),
        ]))

        assert [g.name for g in results] == ["CATAN", "House rules game", "Azul"]
        assert results[0].complexity == "2.30"
        assert results[1].id is None

    def test_one_failure_does_not_block_the_rest(self):
        fetcher = GameDetailFetcher(client=FakeBGGClient(failing={"13"}), request_delay=0)
        results = run(fetcher.fetch_many([
            GameInfo(id="13", name="Catan"),
            GameInfo(id="230802", name="Azul"),
        ]))

        assert results[0].name == "Catan"
        assert results[0].complexity == NOT_AVAILABLE
        assert results[1].complexity == "1.76"

    def test_calls_are_spaced_by_delay(self):
        client = FakeBGGClient()
        fetcher = GameDetailFetcher(client=client, request_delay=0.05)
        run(fetcher.fetch_many([
            GameInfo(id="13", name="Catan"),
            GameInfo(name="Custom"),
            GameInfo(id="230802", name="Azul"),
        ]))

        times = [t for kind, _, t in client.calls if kind == "thing"]
        assert len(times) == 2
        assert times[1] - times[0] >= 0.04
