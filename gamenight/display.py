"""
Display Derivation - Pure formatting of stored table data.

Everything here is deterministic and side-effect free: the same session
always yields the same labels, links and preview.

Complexity uses BGG's average weight (1-5) with these bands:
    < 2   Light
    < 3   Medium
    < 4   Medium-Heavy
    else  Heavy
"""

from __future__ import annotations
import html
from dataclasses import dataclass
from datetime import date
from typing import Any, Iterable

from . import config
from .games.models import NOT_AVAILABLE, GameInfo
from .session.models import Session

PLACEHOLDER_IMAGE = "https://upload.wikimedia.org/wikipedia/commons/1/14/No_Image_Available.jpg"
DEFAULT_GAME_NAME = "Board Game"
UNKNOWN_ORGANIZER = "Unknown"

COMPLEXITY_BANDS = (
    (2.0, "Light"),
    (3.0, "Medium"),
    (4.0, "Medium-Heavy"),
)
HEAVIEST = "Heavy"

MONTHS = (
    "January", "February", "March", "April", "May", "June", "July",
    "August", "September", "October", "November", "December",
)


def _as_number(value: Any) -> float | None:
    """Parse a stored numeric field; N/A, blanks and zero count as missing."""
    if value is None or value == NOT_AVAILABLE:
        return None
    try:
        number = float(value)
    except (TypeError, ValueError):
        return None
    return number or None


def complexity_category(value: float) -> str:
    for upper, label in COMPLEXITY_BANDS:
        if value < upper:
            return label
    return HEAVIEST


def complexity_label(value: Any) -> str:
    """'Light (1.50)' style label, or N/A."""
    number = _as_number(value)
    if number is None:
        return NOT_AVAILABLE
    return f"{complexity_category(number)} ({number:.2f})"


def playing_time_label(min_time: Any, max_time: Any) -> str:
    """'30 min' or '30-60 min', or N/A if either bound is unknown."""
    if not min_time or not max_time or NOT_AVAILABLE in (min_time, max_time):
        return NOT_AVAILABLE
    if str(min_time) == str(max_time):
        return f"{min_time} min"
    return f"{min_time}-{max_time} min"


def complexity_range(games: Iterable[GameInfo]) -> str:
    """Category span across a set of games, e.g. 'Light – Heavy'."""
    values = [v for v in (_as_number(game.complexity) for game in games) if v is not None]
    if not values:
        return NOT_AVAILABLE
    lightest = complexity_category(min(values))
    heaviest = complexity_category(max(values))
    if lightest == heaviest:
        return lightest
    return f"{lightest} – {heaviest}"


def format_date(value: date) -> str:
    """Long British form: '16 October 2026'."""
    return f"{value.day} {MONTHS[value.month - 1]} {value.year}"


def share_link(session_id: str) -> str:
    """Client URL that opens the table."""
    return f"{config.CLIENT_BASE_URL.rstrip('/')}/?table={session_id}"


def preview_link(session_id: str) -> str:
    """Server URL that serves link-preview metadata for the table."""
    return f"{config.PUBLIC_BASE_URL.rstrip('/')}/preview/{session_id}"


# =============================================================================
# Link previews
# =============================================================================

@dataclass(frozen=True)
class Preview:
    """Open Graph metadata for a shared table link."""
    title: str
    description: str
    image: str
    url: str


def build_preview(session: Session) -> Preview:
    when = f"{format_date(session.date)} • {session.time} • {session.location}"
    host = session.organizer or UNKNOWN_ORGANIZER

    if session.is_flexible and session.flexible_games:
        title = f"{when} by {host}"
        description = ", ".join(game.name for game in session.flexible_games)
        image = session.flexible_games[0].thumbnail
    else:
        game = session.game_data or GameInfo(name="")
        game_name = game.name or session.game_name or DEFAULT_GAME_NAME
        title = f"{game_name} • {when} by {host}"
        description = (
            f"Duration: {playing_time_label(game.min_playing_time, game.max_playing_time)}; "
            f"Complexity: {complexity_label(game.complexity)}"
        )
        image = game.thumbnail

    return Preview(
        title=title,
        description=description,
        image=image or PLACEHOLDER_IMAGE,
        url=share_link(session.session_id),
    )


PREVIEW_TEMPLATE = """<!DOCTYPE html>
<html>
  <head>
    <meta charset="utf-8">
    <title>{title}</title>
    <meta property="og:title" content="{title}">
    <meta property="og:description" content="{description}">
    <meta property="og:image" content="{image}">
    <meta property="og:url" content="{url}">
    <meta property="og:type" content="website">
    <meta http-equiv="refresh" content="0;URL='{url}'">
  </head>
  <body style="background:#f9f9f9;color:#333;font-family:sans-serif;text-align:center;padding:40px;">
    <h1>Board Game Session</h1>
    <p>Loading...</p>
  </body>
</html>
"""


def render_preview_html(preview: Preview) -> str:
    """HTML page with Open Graph tags that redirects to the client."""
    return PREVIEW_TEMPLATE.format(
        title=html.escape(preview.title),
        description=html.escape(preview.description),
        image=html.escape(preview.image),
        url=html.escape(preview.url),
    )
