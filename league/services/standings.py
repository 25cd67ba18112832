"""Season standing: turns submitted round results into a ranked leaderboard.

Pure functions over typed records. Nothing here touches the database; see
``league.services.season`` for the queries that feed it.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, Iterable, List, Optional, Sequence, Set

import config

NO_AVERAGE = "-"


@dataclass(frozen=True)
class PlayerRow:
    id: int
    name: str
    nickname: Optional[str] = None


@dataclass(frozen=True)
class GameDayRow:
    id: int
    date: str


@dataclass(frozen=True)
class ResultRow:
    """Submitted result joined with its player and game day."""

    player_id: int
    name: str
    nickname: Optional[str]
    placement: Any
    beer_tokens: Any
    game_day_id: int
    date: str


@dataclass
class StandingEntry:
    player_id: int
    name: str
    nickname: Optional[str]
    rounds: int = 0
    total_points: int = 0
    beer_debt: int = 0
    placements: List[int] = field(default_factory=list)

    @property
    def avg_placement(self) -> str:
        """Average placement with two decimals, or "-" before the first counted round."""
        if self.rounds == 0:
            return NO_AVERAGE
        return f"{self.total_points / self.rounds:.2f}"

    def to_dict(self) -> dict:
        return {
            "player_id": self.player_id,
            "name": self.name,
            "nickname": self.nickname,
            "rounds": self.rounds,
            "total_points": self.total_points,
            "beer_debt": self.beer_debt,
            "placements": list(self.placements),
            "avg_placement": self.avg_placement,
        }


@dataclass
class SeasonStanding:
    standing: List[StandingEntry]
    season_complete: bool = False
    winner: Optional[StandingEntry] = None

    def to_dict(self) -> dict:
        return {
            "standing": [e.to_dict() for e in self.standing],
            "season_complete": self.season_complete,
            "winner": self.winner.to_dict() if self.winner else None,
        }


def _as_int(value: Any) -> Optional[int]:
    """Integer value of a stored column, None for anything non-numeric."""
    if isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value
    if isinstance(value, float):
        return int(value) if value.is_integer() else None
    if isinstance(value, str):
        try:
            return int(value.strip())
        except ValueError:
            return None
    return None


def scored_placement(placement: Any, unscored: Optional[int] = None) -> Optional[int]:
    """Return the placement if it counts toward the standing, else None.

    Placements at or above the unscored sentinel (17 by default) mean the player
    did not play. Non-numeric placements are treated the same way.
    """
    if unscored is None:
        unscored = config.UNSCORED_PLACEMENT
    value = _as_int(placement)
    if value is None or value >= unscored:
        return None
    return value


def beer_debt_of(beer_tokens: Any) -> int:
    """Amount owed for one result: magnitude of a negative token balance, else 0."""
    value = _as_int(beer_tokens)
    if value is None or value >= 0:
        return 0
    return -value


def _sort_key(entry: StandingEntry):
    if entry.rounds == 0:
        return (1, 0, 0, entry.name.lower())
    return (0, entry.total_points, -entry.rounds, entry.name.lower())


def rank_standing(entries: Iterable[StandingEntry]) -> List[StandingEntry]:
    """Players with rounds first by fewest points then most rounds; players without rounds last by name."""
    return sorted(entries, key=_sort_key)


def expected_player_count(entries: Sequence[StandingEntry], submitted_player_ids: Set[int], basis: str) -> int:
    """Number of players that must report on the last game day for the season to be complete."""
    if basis == "submitted":
        return sum(1 for e in entries if e.player_id in submitted_player_ids)
    return len(entries)


def compute_standing(
    players: Iterable[PlayerRow],
    game_days: Sequence[GameDayRow],
    results: Iterable[ResultRow],
    *,
    unscored: Optional[int] = None,
    completion_basis: Optional[str] = None,
) -> SeasonStanding:
    """Aggregate submitted results into a ranked season standing.

    ``game_days`` must be ordered by date; the last one decides whether the
    season is complete. ``completion_basis`` picks who is expected to report on
    it ("standing" or "submitted", default from config).
    """
    if unscored is None:
        unscored = config.UNSCORED_PLACEMENT
    if completion_basis is None:
        completion_basis = config.SEASON_COMPLETION_BASIS
    if completion_basis not in config.SEASON_COMPLETION_BASES:
        raise ValueError(f"Unknown season completion basis: {completion_basis!r}")

    stats: Dict[int, StandingEntry] = {}
    submitted_player_ids: Set[int] = set()
    submitted_per_day: Dict[int, int] = {}

    for r in results:
        entry = stats.get(r.player_id)
        if entry is None:
            entry = StandingEntry(player_id=r.player_id, name=r.name, nickname=r.nickname)
            stats[r.player_id] = entry
        submitted_player_ids.add(r.player_id)
        submitted_per_day[r.game_day_id] = submitted_per_day.get(r.game_day_id, 0) + 1

        placement = scored_placement(r.placement, unscored)
        if placement is not None:
            entry.rounds += 1
            entry.total_points += placement
            entry.placements.append(placement)
        entry.beer_debt += beer_debt_of(r.beer_tokens)

    for p in players:
        if p.id not in stats:
            stats[p.id] = StandingEntry(player_id=p.id, name=p.name, nickname=p.nickname)

    standing = rank_standing(stats.values())

    season = SeasonStanding(standing=standing)
    if game_days:
        last_game_day_id = game_days[-1].id
        submitted = submitted_per_day.get(last_game_day_id, 0)
        expected = expected_player_count(standing, submitted_player_ids, completion_basis)
        season.season_complete = submitted >= expected and submitted > 0
        if season.season_complete and standing:
            season.winner = standing[0]
    return season
