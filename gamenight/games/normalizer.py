"""
Game Metadata Normalizer - BoardGameGeek XML to GameInfo.

BGG records are inconsistent: a game may have one <name> or several
(primary plus alternates), numeric fields may be missing, and statistics
are only present when requested. Each field is therefore read through an
ordered list of extractors; the first one that yields a value wins.

Extractors are plain callables taking an element and returning a string
or None, so each one can be tested on its own.
"""

from __future__ import annotations
from typing import Callable
from urllib.parse import quote
from xml.etree import ElementTree
from xml.etree.ElementTree import Element

from ..errors import GameNotFoundError, UpstreamError
from .models import NOT_AVAILABLE, GameCandidate, GameInfo

UNKNOWN_GAME = "Unknown Game"
UNKNOWN_ID = "Unknown ID"

BGG_GAME_URL = "https://boardgamegeek.com/boardgame/{id}"
YOUTUBE_SEARCH_URL = "https://www.youtube.com/results?search_query={query}"
YOUTUBE_QUERY_SUFFIX = "how to play board game"

Extractor = Callable[[Element], "str | None"]


# =============================================================================
# Extraction strategies
# =============================================================================

def first_of(*extractors: Extractor) -> Extractor:
    """Combine extractors; the first non-empty result wins."""
    def extract(element: Element) -> str | None:
        for extractor in extractors:
            value = extractor(element)
            if value:
                return value
        return None
    return extract


def attribute(path: str, name: str = "value") -> Extractor:
    """Read an attribute of the first child matching path."""
    def extract(element: Element) -> str | None:
        child = element.find(path)
        if child is None:
            return None
        return _clean(child.get(name))
    return extract


def text(path: str) -> Extractor:
    """Read the text content of the first child matching path."""
    def extract(element: Element) -> str | None:
        child = element.find(path)
        if child is None:
            return None
        return _clean(child.text)
    return extract


def _clean(value: str | None) -> str | None:
    if value is None:
        return None
    value = value.strip()
    return value or None


extract_name = first_of(
    attribute("name[@type='primary']"),
    attribute("name"),
    text("name"),
)
extract_year = first_of(attribute("yearpublished"), text("yearpublished"))
extract_min_playing_time = first_of(attribute("minplaytime"), text("minplaytime"))
extract_max_playing_time = first_of(attribute("maxplaytime"), text("maxplaytime"))
extract_weight = attribute("statistics/ratings/averageweight")
extract_thumbnail = text("thumbnail")
extract_image = text("image")


# =============================================================================
# Derived fields
# =============================================================================

def game_link(game_id: str) -> str:
    return BGG_GAME_URL.format(id=game_id)


def youtube_link(name: str) -> str:
    """Search URL for a how-to-play video of the named game."""
    query = quote(f"{name} {YOUTUBE_QUERY_SUFFIX}", safe="")
    return YOUTUBE_SEARCH_URL.format(query=query)


def format_complexity(raw: str | None) -> str:
    """Average weight to two decimals, or N/A.

    BGG reports 0 for games nobody has rated.
    """
    if raw is None:
        return NOT_AVAILABLE
    try:
        weight = float(raw)
    except ValueError:
        return NOT_AVAILABLE
    if weight <= 0:
        return NOT_AVAILABLE
    return f"{weight:.2f}"


# =============================================================================
# Normalization
# =============================================================================

def normalize_thing(item: Element) -> GameInfo:
    """
    Convert a BGG <item> from the thing endpoint into GameInfo.

    Raises:
        GameNotFoundError: If the record has no name.
    """
    game_id = _clean(item.get("id"))
    name = extract_name(item)
    if not name:
        raise GameNotFoundError(game_id or "")

    return GameInfo(
        id=game_id,
        name=name,
        min_playing_time=extract_min_playing_time(item) or NOT_AVAILABLE,
        max_playing_time=extract_max_playing_time(item) or NOT_AVAILABLE,
        complexity=format_complexity(extract_weight(item)),
        link=game_link(game_id) if game_id else None,
        thumbnail=extract_thumbnail(item),
        image=extract_image(item),
        youtube_link=youtube_link(name),
    )


def degraded_game_info(game_id: str | None, name: str) -> GameInfo:
    """Placeholder used when a lookup fails during session creation."""
    return GameInfo(
        id=game_id,
        name=name,
        min_playing_time=NOT_AVAILABLE,
        max_playing_time=NOT_AVAILABLE,
        complexity=NOT_AVAILABLE,
        link=game_link(game_id) if game_id else None,
        thumbnail=None,
        image=None,
        youtube_link=youtube_link(name),
    )


def parse_xml(payload: str | bytes) -> Element:
    try:
        return ElementTree.fromstring(payload)
    except ElementTree.ParseError as e:
        raise UpstreamError(f"Failed to parse BGG XML: {e}") from e


def parse_thing(payload: str | bytes, game_id: str) -> GameInfo:
    """
    Parse a thing response body.

    Raises:
        GameNotFoundError: If the response holds no item, or a nameless one.
        UpstreamError: If the body is not valid XML.
    """
    root = parse_xml(payload)
    item = root.find("item")
    if item is None:
        raise GameNotFoundError(game_id)
    try:
        return normalize_thing(item)
    except GameNotFoundError:
        raise GameNotFoundError(game_id) from None


def parse_search_results(payload: str | bytes) -> list[GameCandidate]:
    """
    Parse a search response body into candidates, in BGG's order.

    Malformed entries are defaulted rather than dropped.
    """
    root = parse_xml(payload)
    return [
        GameCandidate(
            id=_clean(item.get("id")) or UNKNOWN_ID,
            name=extract_name(item) or UNKNOWN_GAME,
            year_published=extract_year(item) or NOT_AVAILABLE,
        )
        for item in root.findall("item")
    ]
