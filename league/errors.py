"""League service errors. The web layer maps these to HTTP 4xx responses."""
from __future__ import annotations


class LeagueError(Exception):
    """Base class for league service errors."""


class PlayerNotFoundError(LeagueError):
    def __init__(self, player_id: int):
        super().__init__(f"Player {player_id} not found")
        self.player_id = player_id


class GameDayNotFoundError(LeagueError):
    def __init__(self, game_day_id: int):
        super().__init__(f"Game day {game_day_id} not found")
        self.game_day_id = game_day_id


class InvalidPlacementError(LeagueError):
    """Placement missing, non-numeric or below 1."""

    def __init__(self, placement):
        super().__init__(f"Invalid placement: {placement!r}")
        self.placement = placement


class ResultLockedError(LeagueError):
    """Player already submitted for this game day and is not allowed to change it."""

    def __init__(self, player_id: int, game_day_id: int):
        super().__init__(f"Result for player {player_id} on game day {game_day_id} already submitted")
        self.player_id = player_id
        self.game_day_id = game_day_id
