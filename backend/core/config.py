"""Centralized configuration for the backend.

Loads environment variables, sets defaults, and exposes constants
used across services and routes.
"""

import os

from dotenv import load_dotenv

from carstats.data.series import DEFAULT_SERIES_CSV
from carstats.visuals.core import constants
from carstats.visuals.io.geometry import DEFAULT_GEOJSON_URL

load_dotenv("env/.env")

ENV = os.getenv("ENV", "local")
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()

# Data sources
SERIES_CSV = os.getenv("SERIES_CSV", DEFAULT_SERIES_CSV)
WORLD_GEOJSON_URL = os.getenv("WORLD_GEOJSON_URL", DEFAULT_GEOJSON_URL)

# Animator defaults
TICK_MS = int(os.getenv("TICK_MS", str(constants.tick_ms)))
TOP_N = int(os.getenv("TOP_N", str(constants.top_n)))
JITTER_FRACTION = float(os.getenv("JITTER_FRACTION", str(constants.jitter_fraction)))
LIMIT_BAR_STRETCH = os.getenv("LIMIT_BAR_STRETCH", "true").lower() in ("1", "true", "yes")
MAX_BAR_HEIGHT = float(os.getenv("MAX_BAR_HEIGHT", str(constants.max_bar_height)))
MIN_BAR_GAP = float(os.getenv("MIN_BAR_GAP", str(constants.min_bar_gap)))

# Playback sessions
MAX_SESSIONS = int(os.getenv("MAX_SESSIONS", "5"))
SESSION_MAX_AGE_SECONDS = int(os.getenv("SESSION_MAX_AGE_SECONDS", "2700"))
