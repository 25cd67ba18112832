"""Game day service: scheduling rounds and reporting results."""
from __future__ import annotations

import json
import logging
from datetime import datetime, timezone
from typing import Any, Iterable, List, Optional, Tuple

from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

import config
from league.errors import GameDayNotFoundError, InvalidPlacementError, ResultLockedError
from league.models import GameDay, Player, Result

logger = logging.getLogger("golfligan.game_days")

# Four-ball side game; the only one played in fixed groups
FOUR_BALL_SIDE_GAME = "fyrbollstävling"
GROUP_SIZE = 4


def parse_side_game_groups(raw_groups: Optional[Iterable[str]]) -> List[List[int]]:
    """Parse group strings like "3, 1, 7" into lists of player ids. Blank groups and non-numeric ids are dropped."""
    groups: List[List[int]] = []
    for raw in raw_groups or []:
        if not raw or not raw.strip():
            continue
        ids = []
        for piece in raw.split(","):
            try:
                ids.append(int(piece.strip()))
            except ValueError:
                continue
        groups.append(ids)
    return groups


def encode_side_game_groups(side_game: Optional[str], raw_groups: Optional[Iterable[str]]) -> Optional[str]:
    """JSON column value for a game day's groups. Only the four-ball side game keeps groups."""
    if side_game != FOUR_BALL_SIDE_GAME or raw_groups is None:
        return None
    return json.dumps(parse_side_game_groups(raw_groups))


def side_placement_for(side_game: Optional[str], groups: List[List[int]], player_id: int) -> Optional[int]:
    """Starting side placement for a player in the four-ball side game: (group number * 4) + 1."""
    if side_game != FOUR_BALL_SIDE_GAME:
        return None
    for i, group in enumerate(groups):
        if player_id in group:
            return (i + 1) * GROUP_SIZE + 1
    return None


def encode_beer_tokens(count: Any, sign: Optional[str]) -> int:
    """Signed token balance from the report form's count and +/- sign. A bad count is 0."""
    try:
        magnitude = abs(int(count))
    except (TypeError, ValueError):
        magnitude = 0
    return -magnitude if sign == "-" else magnitude


def decode_beer_tokens(beer_tokens: Optional[int]) -> Tuple[int, str]:
    """Inverse of encode_beer_tokens: (count, sign) for prefilling the report form."""
    if beer_tokens is None:
        return 0, "+"
    return abs(beer_tokens), "-" if beer_tokens < 0 else "+"


def parse_placement(value: Any) -> int:
    """Validate a reported placement. Must be an integer >= 1."""
    if isinstance(value, bool):
        raise InvalidPlacementError(value)
    try:
        placement = int(value)
    except (TypeError, ValueError):
        raise InvalidPlacementError(value)
    if placement < 1:
        raise InvalidPlacementError(value)
    return placement


async def get_game_day(session: AsyncSession, game_day_id: int) -> GameDay:
    game_day = await session.get(GameDay, game_day_id)
    if not game_day:
        raise GameDayNotFoundError(game_day_id)
    return game_day


async def get_result(session: AsyncSession, player_id: int, game_day_id: int) -> Optional[Result]:
    result = await session.execute(
        select(Result).where(Result.player_id == player_id, Result.game_day_id == game_day_id)
    )
    return result.scalar_one_or_none()


async def count_active_players(session: AsyncSession) -> int:
    result = await session.execute(select(func.count(Player.id)).where(Player.is_active.is_(True)))
    return result.scalar_one()


async def create_game_day(
    session: AsyncSession,
    date: str,
    tee: Optional[str] = None,
    game_mode: Optional[str] = None,
    side_game: Optional[str] = None,
    groups: Optional[Iterable[str]] = None,
    beer_game_enabled: bool = False,
) -> GameDay:
    """Schedule a game day and add an unsubmitted placeholder result for every active player."""
    game_day = GameDay(
        date=date,
        tee=tee,
        game_mode=game_mode,
        side_game=side_game or None,
        side_game_groups=encode_side_game_groups(side_game, groups),
        beer_game_enabled=bool(beer_game_enabled),
    )
    session.add(game_day)
    await session.flush()

    players = await session.execute(select(Player.id).where(Player.is_active.is_(True)))
    added = 0
    for player_id in players.scalars().all():
        session.add(
            Result(
                player_id=player_id,
                game_day_id=game_day.id,
                placement=config.UNSCORED_PLACEMENT,
                submitted=False,
            )
        )
        added += 1
    await session.commit()
    await session.refresh(game_day)
    logger.info("Created game day %s on %s with %d placeholder results", game_day.id, game_day.date, added)
    return game_day


async def submit_result(
    session: AsyncSession,
    player_id: int,
    game_day_id: int,
    placement: Any,
    beer_tokens: int = 0,
    allow_resubmit: bool = True,
) -> Result:
    """Save a player's report for a game day, replacing the placeholder or an earlier report."""
    placement = parse_placement(placement)
    game_day = await get_game_day(session, game_day_id)
    row = await get_result(session, player_id, game_day_id)
    if row and row.submitted and not allow_resubmit:
        logger.warning("Rejected resubmission by player %s for game day %s", player_id, game_day_id)
        raise ResultLockedError(player_id, game_day_id)
    if row is None:
        row = Result(player_id=player_id, game_day_id=game_day_id)
        session.add(row)
    row.placement = placement
    row.side_placement = side_placement_for(game_day.side_game, game_day.groups, player_id)
    row.beer_tokens = beer_tokens
    row.submitted = True
    row.submitted_at = datetime.now(timezone.utc)
    await session.commit()
    await session.refresh(row)
    logger.info("Player %s reported placement %s for game day %s", player_id, placement, game_day_id)
    return row


async def list_game_day_results(session: AsyncSession, game_day_id: int) -> List[Tuple[Result, Player]]:
    """All results for a game day with their players, submitted ones first."""
    result = await session.execute(
        select(Result, Player)
        .join(Player, Result.player_id == Player.id)
        .where(Result.game_day_id == game_day_id)
        .order_by(Result.submitted.desc(), Result.placement, Player.name)
    )
    return [(r, p) for r, p in result.all()]
