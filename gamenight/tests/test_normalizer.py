"""
Tests for BGG metadata normalization.

Tests:
- Extraction strategies and their combinator
- Thing records with full, partial and missing fields
- Search result parsing
"""

from xml.etree import ElementTree

import pytest

from ..errors import GameNotFoundError, UpstreamError
from ..games.models import NOT_AVAILABLE
from ..games.normalizer import (
    UNKNOWN_GAME,
    attribute,
    degraded_game_info,
    first_of,
    format_complexity,
    normalize_thing,
    parse_search_results,
    parse_thing,
    text,
    youtube_link,
)
from .conftest import CATAN_XML, EMPTY_XML, NAMELESS_XML, SEARCH_XML, UNDECODABLE_XML


def item(xml: str):
    return ElementTree.fromstring(xml)


class TestExtractors:
    """Tests for the extraction strategies."""

    def test_first_of_returns_first_hit(self):
        element = item('<item><a value="1"/><b value="2"/></item>')
        extract = first_of(attribute("missing"), attribute("b"), attribute("a"))
        assert extract(element) == "2"

    def test_first_of_skips_blank_values(self):
        element = item('<item><a value="  "/><b>two</b></item>')
        assert first_of(attribute("a"), text("b"))(element) == "two"

    def test_first_of_nothing_found(self):
        assert first_of(attribute("a"), text("b"))(item("<item/>")) is None

    def test_primary_name_preferred_over_alternate(self):
        element = item(
            '<item id="1"><name type="alternate" value="Alt"/>'
            '<name type="primary" value="Main"/></item>'
        )
        assert normalize_thing(element).name == "Main"

    def test_single_untyped_name(self):
        element = item('<item id="1"><name value="Solo"/></item>')
        assert normalize_thing(element).name == "Solo"


class TestNormalizeThing:
    """Tests for normalize_thing / parse_thing."""

    def test_full_record(self):
        game = parse_thing(CATAN_XML, "13")

        assert game.id == "13"
        assert game.name == "CATAN"
        assert game.min_playing_time == "60"
        assert game.max_playing_time == "120"
        assert game.complexity == "2.30"
        assert game.link == "https://boardgamegeek.com/boardgame/13"
        assert game.thumbnail == "https://cf.geekdo-images.com/catan_thumb.jpg"
        assert game.image == "https://cf.geekdo-images.com/catan.jpg"
        assert game.youtube_link == (
            "https://www.youtube.com/results?search_query="
            "CATAN%20how%20to%20play%20board%20game"
        )

    def test_missing_fields_degrade_to_sentinel(self):
        game = normalize_thing(item('<item id="7"><name value="Bare"/></item>'))

        assert game.min_playing_time == NOT_AVAILABLE
        assert game.max_playing_time == NOT_AVAILABLE
        assert game.complexity == NOT_AVAILABLE
        assert game.thumbnail is None
        assert game.image is None

    def test_playing_time_falls_back_to_text(self):
        game = normalize_thing(item(
            '<item id="7"><name value="X"/><minplaytime>20</minplaytime>'
            '<maxplaytime>40</maxplaytime></item>'
        ))
        assert (game.min_playing_time, game.max_playing_time) == ("20", "40")

    def test_nameless_record_is_not_found(self):
        with pytest.raises(GameNotFoundError) as exc_info:
            parse_thing(NAMELESS_XML, "55")
        assert exc_info.value.game_id == "55"

    def test_nameless_idless_record_is_not_found(self):
        with pytest.raises(GameNotFoundError):
            normalize_thing(item("<item/>"))

    def test_empty_response_is_not_found(self):
        with pytest.raises(GameNotFoundError) as exc_info:
            parse_thing(EMPTY_XML, "404")
        assert exc_info.value.game_id == "404"

    def test_garbage_is_upstream_error(self):
        with pytest.raises(UpstreamError):
            parse_thing("<html>Service Unavailable", "13")

    def test_bytes_use_declared_encoding(self):
        payload = (
            '<?xml version="1.0" encoding="ISO-8859-1"?>'
            '<items><item id="1"><name value="Caf\u00e9 International"/></item></items>'
        ).encode("latin-1")
        assert parse_thing(payload, "1").name == "Caf\u00e9 International"

    def test_undecodable_bytes_are_upstream_error(self):
        with pytest.raises(UpstreamError):
            parse_thing(UNDECODABLE_XML, "13")


class TestComplexityFormatting:
    def test_two_decimals(self):
        assert format_complexity("3.14159") == "3.14"

    def test_unrated_is_not_available(self):
        assert format_complexity("0") == NOT_AVAILABLE

    def test_non_numeric_is_not_available(self):
        assert format_complexity("heavy") == NOT_AVAILABLE
        assert format_complexity(None) == NOT_AVAILABLE


class TestDegradedGameInfo:
    def test_keeps_selection_and_marks_rest_unknown(self):
        game = degraded_game_info("13", "Catan")

        assert game.id == "13"
        assert game.name == "Catan"
        assert game.complexity == NOT_AVAILABLE
        assert game.min_playing_time == NOT_AVAILABLE
        assert game.max_playing_time == NOT_AVAILABLE
        assert game.thumbnail is None
        assert game.link == "https://boardgamegeek.com/boardgame/13"

    def test_youtube_query_is_percent_encoded(self):
        link = youtube_link("Ticket to Ride: Europe & More")
        assert " " not in link
        assert "Ticket%20to%20Ride%3A%20Europe%20%26%20More%20how%20to%20play" in link


class TestSearchResults:
    def test_order_and_defaults(self):
        results = parse_search_results(SEARCH_XML)

        assert [r.id for r in results] == ["13", "27710", "Unknown ID"]
        assert results[0].name == "CATAN"
        assert results[0].year_published == "1995"
        assert results[1].year_published == NOT_AVAILABLE
        assert results[2].name == UNKNOWN_GAME
        assert results[2].year_published == "2007"

    def test_no_results(self):
        assert parse_search_results(EMPTY_XML) == []

    def test_to_dict_uses_camel_case(self):
        assert parse_search_results(SEARCH_XML)[0].to_dict() == {
            "id": "13",
            "name": "CATAN",
            "yearPublished": "1995",
        }
