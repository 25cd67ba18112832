"""Shared API utilities."""
from fastapi import HTTPException

from league.errors import (
    GameDayNotFoundError,
    InvalidPlacementError,
    LeagueError,
    PlayerNotFoundError,
    ResultLockedError,
)

_STATUS_BY_ERROR = {
    GameDayNotFoundError: (404, "Game day not found"),
    PlayerNotFoundError: (404, "Player not found"),
    InvalidPlacementError: (400, "Choose a valid placement"),
    ResultLockedError: (409, "Result already submitted"),
}


def http_error(exc: LeagueError) -> HTTPException:
    """Map a league service error onto an HTTPException (400 for anything unmapped)."""
    for error_type, (status_code, detail) in _STATUS_BY_ERROR.items():
        if isinstance(exc, error_type):
            return HTTPException(status_code, detail)
    return HTTPException(400, str(exc))


def player_display_name(name: str, nickname: str | None) -> str:
    """Nickname when set, else the player's name."""
    nickname = (nickname or "").strip()
    return nickname or name
