"""Auth API routes: login player list, login, current player."""
from __future__ import annotations

import logging
from typing import Optional

from fastapi import APIRouter, Depends, HTTPException
from pydantic import BaseModel

from league.models.base import async_session_factory
from league.services.roster import list_players
from web.auth import (
    PlayerContext,
    create_access_token,
    get_active_player,
    get_current_player,
    require_player,
    role_for,
)

logger = logging.getLogger("golfligan.auth")

router = APIRouter(prefix="/api/auth", tags=["auth"])


class LoginRequest(BaseModel):
    player_id: int


class LoginResponse(BaseModel):
    access_token: str
    token_type: str = "bearer"
    player_id: int
    name: str
    role: str


class LoginPlayer(BaseModel):
    id: int
    name: str
    nickname: Optional[str] = None


class MeResponse(BaseModel):
    player_id: int
    name: str
    role: str
    is_admin: bool


@router.get("/players", response_model=list[LoginPlayer])
async def login_players():
    """Active players to choose from on the login page."""
    async with async_session_factory() as session:
        players = await list_players(session, active_only=True)
        return [LoginPlayer(id=p.id, name=p.name, nickname=p.nickname) for p in players]


@router.post("/login", response_model=LoginResponse)
async def login(body: LoginRequest):
    """Log in as an active player and return a JWT."""
    player = await get_active_player(body.player_id)
    if not player:
        raise HTTPException(status_code=401, detail="Unknown or inactive player")
    role = role_for(player)
    token = create_access_token(player.id, role)
    logger.info("Player %s logged in as %s", player.name, role)
    return LoginResponse(access_token=token, player_id=player.id, name=player.name, role=role)


@router.post("/logout")
async def logout():
    """Tokens are stateless; the client discards its token."""
    return {"ok": True}


@router.get("/me", response_model=MeResponse)
async def get_me(player: PlayerContext = Depends(require_player)):
    """Get current authenticated player."""
    return MeResponse(player_id=player.id, name=player.name, role=player.role, is_admin=player.is_admin)


@router.get("/me/optional")
async def get_me_optional(player: Optional[PlayerContext] = Depends(get_current_player)):
    """Get current player if logged in, else null. For frontend auth check."""
    if not player:
        return None
    return {"player_id": player.id, "name": player.name, "role": player.role, "is_admin": player.is_admin}
