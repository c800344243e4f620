"""
Game Models - Normalized BoardGameGeek metadata.

GameInfo is embedded in sessions and never stored on its own.
Fields that cannot be resolved upstream hold the literal NOT_AVAILABLE
sentinel; display code depends on it being present.
"""

from __future__ import annotations
from dataclasses import dataclass
from typing import Any

NOT_AVAILABLE = "N/A"


@dataclass
class GameInfo:
    """Metadata for a single board game.

    Custom games typed in by the user in flexible mode have no id and
    carry only a name.
    """
    name: str
    id: str | None = None
    min_playing_time: str | None = None
    max_playing_time: str | None = None
    complexity: str | None = None
    link: str | None = None
    thumbnail: str | None = None
    image: str | None = None
    youtube_link: str | None = None

    @property
    def is_custom(self) -> bool:
        return not self.id

    def to_dict(self) -> dict[str, Any]:
        """Serialize with the camelCase keys used on the wire and in storage."""
        return {
            "id": self.id,
            "name": self.name,
            "minPlayingTime": self.min_playing_time,
            "maxPlayingTime": self.max_playing_time,
            "complexity": self.complexity,
            "link": self.link,
            "thumbnail": self.thumbnail,
            "image": self.image,
            "youtubeLink": self.youtube_link,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> GameInfo:
        return cls(
            id=data.get("id"),
            name=data.get("name") or "",
            min_playing_time=_as_text(data.get("minPlayingTime")),
            max_playing_time=_as_text(data.get("maxPlayingTime")),
            complexity=_as_text(data.get("complexity")),
            link=data.get("link"),
            thumbnail=data.get("thumbnail"),
            image=data.get("image"),
            youtube_link=data.get("youtubeLink"),
        )


@dataclass
class GameCandidate:
    """A lightweight search hit."""
    id: str
    name: str
    year_published: str = NOT_AVAILABLE

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "name": self.name,
            "yearPublished": self.year_published,
        }


def _as_text(value: Any) -> str | None:
    if value is None:
        return None
    return str(value)
