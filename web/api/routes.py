"""API routes for players: season standing, game days, reporting and live results."""
from __future__ import annotations

from datetime import datetime
from typing import Optional, Union

from fastapi import APIRouter, Depends
from pydantic import BaseModel, ConfigDict
from sqlalchemy import select

import config
from league.errors import LeagueError
from league.models import GameDay
from league.models.base import async_session_factory
from league.services.game_days import (
    count_active_players,
    decode_beer_tokens,
    encode_beer_tokens,
    get_game_day,
    get_result,
    list_game_day_results,
    side_placement_for,
    submit_result,
)
from league.services.season import load_season_standing
from web.api.utils import http_error, player_display_name
from web.auth import PlayerContext, require_player

router = APIRouter(prefix="/api", tags=["league"])


# --- Pydantic schemas ---


class GameDaySummary(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    date: str
    tee: Optional[str] = None
    game_mode: Optional[str] = None


class GameDayResponse(GameDaySummary):
    side_game: Optional[str] = None
    side_game_groups: list[list[int]] = []
    beer_game_enabled: bool = False
    is_active: bool = True


class ResultResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    player_id: int
    game_day_id: int
    placement: int
    side_placement: Optional[int] = None
    beer_tokens: Optional[int] = None
    submitted: bool = False
    submitted_at: Optional[datetime] = None


class ReportForm(BaseModel):
    game_day: GameDayResponse
    result: ResultResponse
    placement: int
    side_placement: Optional[int] = None
    beer_count: int
    beer_sign: str
    player_count: int
    locked: bool
    is_admin: bool


class ReportRequest(BaseModel):
    placement: Optional[Union[int, str]] = None  # validated by parse_placement
    beer_count: int = 0
    beer_sign: str = "+"


class GameDayResultRow(ResultResponse):
    name: str
    nickname: Optional[str] = None
    display_name: str


class GameDayResults(BaseModel):
    game_day: GameDayResponse
    results: list[GameDayResultRow]
    player_id: int
    is_admin: bool


def game_day_response(game_day: GameDay) -> GameDayResponse:
    return GameDayResponse(
        id=game_day.id,
        date=game_day.date,
        tee=game_day.tee,
        game_mode=game_day.game_mode,
        side_game=game_day.side_game,
        side_game_groups=game_day.groups,
        beer_game_enabled=game_day.beer_game_enabled,
        is_active=game_day.is_active,
    )


# --- Season standing ---


@router.get("/standings")
async def get_standings(player: PlayerContext = Depends(require_player)):
    """Season leaderboard over all active game days, with completion status and winner."""
    async with async_session_factory() as session:
        season, game_days = await load_season_standing(session)
    data = season.to_dict()
    data["game_days"] = [{"id": g.id, "date": g.date} for g in game_days]
    data["player_name"] = player.name
    data["is_admin"] = player.is_admin
    return data


# --- Game days ---


@router.get("/game-days", response_model=list[GameDaySummary])
async def list_game_days(player: PlayerContext = Depends(require_player)):
    """Active game days, newest first."""
    async with async_session_factory() as session:
        result = await session.execute(
            select(GameDay).where(GameDay.is_active.is_(True)).order_by(GameDay.date.desc(), GameDay.id.desc())
        )
        return [GameDaySummary.model_validate(g) for g in result.scalars().all()]


@router.get("/game-days/{game_day_id}/report", response_model=ReportForm)
async def get_report_form(game_day_id: int, player: PlayerContext = Depends(require_player)):
    """Prefilled report form for the current player. Locked once submitted unless admin."""
    async with async_session_factory() as session:
        try:
            game_day = await get_game_day(session, game_day_id)
        except LeagueError as e:
            raise http_error(e) from e
        row = await get_result(session, player.id, game_day_id)
        player_count = await count_active_players(session)

    if row:
        result = ResultResponse.model_validate(row)
    else:
        result = ResultResponse(
            player_id=player.id,
            game_day_id=game_day_id,
            placement=config.UNSCORED_PLACEMENT,
            beer_tokens=0,
        )
    beer_count, beer_sign = decode_beer_tokens(result.beer_tokens)
    return ReportForm(
        game_day=game_day_response(game_day),
        result=result,
        placement=result.placement,
        side_placement=side_placement_for(game_day.side_game, game_day.groups, player.id),
        beer_count=beer_count,
        beer_sign=beer_sign,
        player_count=player_count,
        locked=bool(row and row.submitted and not player.is_admin),
        is_admin=player.is_admin,
    )


@router.post("/game-days/{game_day_id}/report", response_model=ResultResponse)
async def report_result(game_day_id: int, body: ReportRequest, player: PlayerContext = Depends(require_player)):
    """Save the current player's placement and beer tokens for a game day."""
    beer_tokens = encode_beer_tokens(body.beer_count, body.beer_sign)
    async with async_session_factory() as session:
        try:
            row = await submit_result(
                session,
                player.id,
                game_day_id,
                body.placement,
                beer_tokens,
                allow_resubmit=player.is_admin,
            )
        except LeagueError as e:
            raise http_error(e) from e
        return ResultResponse.model_validate(row)


@router.get("/game-days/{game_day_id}/results", response_model=GameDayResults)
async def get_game_day_results(game_day_id: int, player: PlayerContext = Depends(require_player)):
    """Live results for a game day, submitted reports first."""
    async with async_session_factory() as session:
        try:
            game_day = await get_game_day(session, game_day_id)
        except LeagueError as e:
            raise http_error(e) from e
        rows = await list_game_day_results(session, game_day_id)
    results = []
    for r, p in rows:
        results.append(
            GameDayResultRow(
                player_id=r.player_id,
                game_day_id=r.game_day_id,
                placement=r.placement,
                side_placement=r.side_placement,
                beer_tokens=r.beer_tokens,
                submitted=r.submitted,
                submitted_at=r.submitted_at,
                name=p.name,
                nickname=p.nickname,
                display_name=player_display_name(p.name, p.nickname),
            )
        )
    return GameDayResults(
        game_day=game_day_response(game_day),
        results=results,
        player_id=player.id,
        is_admin=player.is_admin,
    )
