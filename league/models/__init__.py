"""Database models."""
from league.models.base import Base, init_db
from league.models.player import Player
from league.models.game_day import GameDay
from league.models.result import Result
from league.models.site_settings import SiteSettings  # noqa: F401 - for metadata

__all__ = [
    "Base",
    "Player",
    "GameDay",
    "Result",
    "SiteSettings",
    "init_db",
]
