"""Configuration for Golfligan."""
from __future__ import annotations

import os
from pathlib import Path

from dotenv import load_dotenv

load_dotenv()

# Database
DATABASE_URL = os.getenv(
    "DATABASE_URL",
    f"sqlite+aiosqlite:///{Path(__file__).parent / 'golfligan.db'}",
)

# Web auth (JWT secret)
JWT_SECRET = os.getenv("JWT_SECRET", "change-me-in-production-use-long-random-string")
JWT_ALGORITHM = "HS256"
JWT_EXPIRE_DAYS = 1

# First admin player, created at startup if no player with that name exists
INITIAL_ADMIN_NAME = os.getenv("INITIAL_ADMIN_NAME", "")
INITIAL_ADMIN_NICKNAME = os.getenv("INITIAL_ADMIN_NICKNAME", "")

SITE_TITLE = os.getenv("SITE_TITLE", "Golfligan")


def _parse_int(value: str, default: int) -> int:
    try:
        return int(value)
    except (TypeError, ValueError):
        return default


# Placement stored for "did not play"; placements at or above it never score
UNSCORED_PLACEMENT = _parse_int(os.getenv("UNSCORED_PLACEMENT", ""), 17)

# Who has to report on the last game day before the season counts as complete:
#   standing  - every player listed in the standing (all active players)
#   submitted - only players with at least one submitted result
SEASON_COMPLETION_BASES = ("standing", "submitted")
SEASON_COMPLETION_BASIS = os.getenv("SEASON_COMPLETION_BASIS", "standing").strip().lower()
if SEASON_COMPLETION_BASIS not in SEASON_COMPLETION_BASES:
    SEASON_COMPLETION_BASIS = "standing"
