"""Admin API routes: schedule game days and manage players."""
from __future__ import annotations

import datetime as dt
import logging
from typing import Optional

from fastapi import APIRouter, Depends, HTTPException
from pydantic import BaseModel, ConfigDict
from sqlalchemy import select

from league.errors import LeagueError
from league.models import GameDay
from league.models.base import async_session_factory
from league.services.game_days import (
    create_game_day,
    encode_side_game_groups,
    get_game_day,
)
from league.services.roster import DuplicatePlayerError, create_player, get_player, list_players
from web.api.routes import GameDayResponse, game_day_response
from web.api.utils import http_error
from web.auth import PlayerContext, require_admin_player

logger = logging.getLogger("golfligan.api")

router = APIRouter(prefix="/api/admin", tags=["admin"])


class GameDayCreate(BaseModel):
    date: dt.date
    tee: Optional[str] = None
    game_mode: Optional[str] = None
    side_game: Optional[str] = None
    groups: Optional[list[str]] = None  # "1, 4, 7" per group, four-ball side game only
    beer_game_enabled: bool = False


class GameDayUpdate(BaseModel):
    date: Optional[dt.date] = None
    tee: Optional[str] = None
    game_mode: Optional[str] = None
    side_game: Optional[str] = None
    groups: Optional[list[str]] = None
    beer_game_enabled: Optional[bool] = None
    is_active: Optional[bool] = None


class PlayerCreate(BaseModel):
    name: str
    nickname: Optional[str] = None
    is_admin: bool = False


class PlayerUpdate(BaseModel):
    nickname: Optional[str] = None
    is_active: Optional[bool] = None
    is_admin: Optional[bool] = None


class PlayerResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    name: str
    nickname: Optional[str] = None
    is_active: bool
    is_admin: bool


# --- Game days ---


@router.get("/game-days", response_model=list[GameDayResponse])
async def list_all_game_days(admin: PlayerContext = Depends(require_admin_player)):
    """All game days including inactive ones, newest first."""
    async with async_session_factory() as session:
        result = await session.execute(select(GameDay).order_by(GameDay.date.desc(), GameDay.id.desc()))
        return [game_day_response(g) for g in result.scalars().all()]


@router.post("/game-days", response_model=GameDayResponse)
async def add_game_day(body: GameDayCreate, admin: PlayerContext = Depends(require_admin_player)):
    """Schedule a game day. Every active player gets an unsubmitted placeholder result."""
    async with async_session_factory() as session:
        game_day = await create_game_day(
            session,
            date=body.date.isoformat(),
            tee=body.tee,
            game_mode=body.game_mode,
            side_game=body.side_game,
            groups=body.groups,
            beer_game_enabled=body.beer_game_enabled,
        )
        logger.info("Admin %s scheduled game day %s", admin.name, game_day.id)
        return game_day_response(game_day)


@router.patch("/game-days/{game_day_id}", response_model=GameDayResponse)
async def update_game_day(game_day_id: int, body: GameDayUpdate, admin: PlayerContext = Depends(require_admin_player)):
    """Edit a game day or toggle whether it counts toward the season."""
    async with async_session_factory() as session:
        try:
            game_day = await get_game_day(session, game_day_id)
        except LeagueError as e:
            raise http_error(e) from e
        updates = body.model_dump(exclude_unset=True)
        current_groups = [",".join(str(pid) for pid in g) for g in game_day.groups]
        if "date" in updates and body.date is not None:
            game_day.date = body.date.isoformat()
        for key in ("tee", "game_mode", "side_game"):
            if key in updates:
                setattr(game_day, key, updates[key] or None)
        if body.beer_game_enabled is not None:
            game_day.beer_game_enabled = body.beer_game_enabled
        if body.is_active is not None:
            game_day.is_active = body.is_active
        # Groups only survive on a four-ball game day
        if "groups" in updates or "side_game" in updates:
            raw_groups = body.groups if "groups" in updates else current_groups
            game_day.side_game_groups = encode_side_game_groups(game_day.side_game, raw_groups)
        await session.commit()
        await session.refresh(game_day)
        return game_day_response(game_day)


# --- Players ---


@router.get("/players", response_model=list[PlayerResponse])
async def list_all_players(admin: PlayerContext = Depends(require_admin_player)):
    """All players, active and inactive."""
    async with async_session_factory() as session:
        players = await list_players(session)
        return [PlayerResponse.model_validate(p) for p in players]


@router.post("/players", response_model=PlayerResponse)
async def add_player(body: PlayerCreate, admin: PlayerContext = Depends(require_admin_player)):
    """Add a player to the league."""
    if not body.name.strip():
        raise HTTPException(400, "Name is required")
    async with async_session_factory() as session:
        try:
            player = await create_player(session, body.name, nickname=body.nickname, is_admin=body.is_admin)
        except DuplicatePlayerError:
            raise HTTPException(400, "Player name already exists")
        return PlayerResponse.model_validate(player)


@router.patch("/players/{player_id}", response_model=PlayerResponse)
async def update_player(player_id: int, body: PlayerUpdate, admin: PlayerContext = Depends(require_admin_player)):
    """Update nickname, active or admin flag. Admins cannot remove their own admin flag or deactivate themselves."""
    if player_id == admin.id and (body.is_admin is False or body.is_active is False):
        raise HTTPException(400, "Cannot demote or deactivate your own account")
    async with async_session_factory() as session:
        try:
            player = await get_player(session, player_id)
        except LeagueError as e:
            raise http_error(e) from e
        updates = body.model_dump(exclude_unset=True)
        if "nickname" in updates:
            player.nickname = updates["nickname"] or None
        if body.is_active is not None:
            player.is_active = body.is_active
        if body.is_admin is not None:
            player.is_admin = body.is_admin
        await session.commit()
        await session.refresh(player)
        logger.info("Admin %s updated player %s: %s", admin.name, player.name, ", ".join(sorted(updates)))
        return PlayerResponse.model_validate(player)
