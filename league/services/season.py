"""Season queries: load players, game days and submitted results as typed rows."""
from __future__ import annotations

from typing import List

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from league.models import GameDay, Player, Result
from league.services.standings import (
    GameDayRow,
    PlayerRow,
    ResultRow,
    SeasonStanding,
    compute_standing,
)


async def fetch_active_players(session: AsyncSession) -> List[PlayerRow]:
    result = await session.execute(
        select(Player.id, Player.name, Player.nickname)
        .where(Player.is_active.is_(True))
        .order_by(Player.name)
    )
    return [PlayerRow(id=row.id, name=row.name, nickname=row.nickname) for row in result]


async def fetch_active_game_days(session: AsyncSession) -> List[GameDayRow]:
    """Active game days, oldest first."""
    result = await session.execute(
        select(GameDay.id, GameDay.date)
        .where(GameDay.is_active.is_(True))
        .order_by(GameDay.date, GameDay.id)
    )
    return [GameDayRow(id=row.id, date=row.date) for row in result]


async def fetch_submitted_results(session: AsyncSession) -> List[ResultRow]:
    """Submitted results of active players, by player name then date."""
    result = await session.execute(
        select(
            Result.player_id,
            Player.name,
            Player.nickname,
            Result.placement,
            Result.beer_tokens,
            Result.game_day_id,
            GameDay.date,
        )
        .join(Player, Result.player_id == Player.id)
        .join(GameDay, Result.game_day_id == GameDay.id)
        .where(
            Player.is_active.is_(True),
            Result.submitted.is_(True),
        )
        .order_by(Player.name, GameDay.date)
    )
    return [
        ResultRow(
            player_id=row.player_id,
            name=row.name,
            nickname=row.nickname,
            placement=row.placement,
            beer_tokens=row.beer_tokens,
            game_day_id=row.game_day_id,
            date=row.date,
        )
        for row in result
    ]


async def load_season_standing(session: AsyncSession) -> tuple[SeasonStanding, List[GameDayRow]]:
    """Run the season queries and aggregate them. Returns the standing and the game days it covers."""
    players = await fetch_active_players(session)
    game_days = await fetch_active_game_days(session)
    results = await fetch_submitted_results(session)
    return compute_standing(players, game_days, results), game_days
