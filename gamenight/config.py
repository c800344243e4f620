"""
Configuration - Environment driven settings.

All settings are read once at import time from the process environment.
Unset MONGO_URI means sessions live in memory only (local runs and tests).
"""

import logging
import os

GAMENIGHT_ENV = os.getenv("GAMENIGHT_ENV", "development")
ALLOWED_ORIGINS = os.getenv("ALLOWED_ORIGINS", "*").split(",")

# Storage
MONGO_URI = os.getenv("MONGO_URI")
MONGO_DB = os.getenv("MONGO_DB", "gamenight")
SESSION_TTL_SECONDS = 60 * 60 * 24

# Scheduling
MAX_DAYS_AHEAD = 30

# BoardGameGeek
BGG_BASE_URL = os.getenv("BGG_BASE_URL", "https://boardgamegeek.com/xmlapi2")
BGG_TIMEOUT = float(os.getenv("BGG_TIMEOUT", "10"))
BGG_REQUEST_DELAY = float(os.getenv("BGG_REQUEST_DELAY", "0.1"))

# Links
CLIENT_BASE_URL = os.getenv("CLIENT_BASE_URL", "https://boardgame-scheduler.netlify.app")
PUBLIC_BASE_URL = os.getenv("PUBLIC_BASE_URL", "https://boardgame-scheduler.onrender.com")

# Keepalive
KEEPALIVE_URL = os.getenv("KEEPALIVE_URL")
KEEPALIVE_INTERVAL = float(os.getenv("KEEPALIVE_INTERVAL", "60"))

LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")
PORT = int(os.getenv("PORT", "5000"))


def configure_logging(level: str | None = None) -> None:
    """Configure root logging once for the process."""
    logging.basicConfig(
        level=(level or LOG_LEVEL).upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
