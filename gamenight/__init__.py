"""
Game Night - Board game session scheduler.

Lets a group schedule a board-game session (a "table"), share a link to it,
and let friends join until the table is full. Game metadata is looked up
from BoardGameGeek to decorate sessions:
- Game search and detail lookup
- Session creation (single game or flexible multi-game)
- Joining and leaving under a capacity limit
- Link-preview metadata for shared links
"""

__version__ = "0.1.0"
