"""
Games Module - BoardGameGeek lookups.

Searches games by name and fetches normalized metadata by id.
"""

from .models import NOT_AVAILABLE, GameCandidate, GameInfo
from .bgg import BGGClient
from .fetcher import GameDetailFetcher
from .normalizer import degraded_game_info, normalize_thing, parse_search_results, parse_thing

__all__ = [
    "NOT_AVAILABLE",
    "GameCandidate",
    "GameInfo",
    "BGGClient",
    "GameDetailFetcher",
    "degraded_game_info",
    "normalize_thing",
    "parse_search_results",
    "parse_thing",
]
