"""Authentication for web API: JWT tokens and the per-request player context."""
from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from typing import Optional

import jwt
from fastapi import Depends, Header, HTTPException, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

import config
from league.models import Player
from league.models.base import async_session_factory

logger = logging.getLogger("golfligan.auth")

http_bearer = HTTPBearer(auto_error=False)

ROLE_ADMIN = "admin"
ROLE_PLAYER = "player"


@dataclass(frozen=True)
class PlayerContext:
    """Authenticated player for the current request."""

    id: int
    name: str
    is_admin: bool

    @property
    def role(self) -> str:
        return ROLE_ADMIN if self.is_admin else ROLE_PLAYER


def role_for(player: Player) -> str:
    return ROLE_ADMIN if player.is_admin else ROLE_PLAYER


def create_access_token(player_id: int, role: str) -> str:
    expire = datetime.now(timezone.utc) + timedelta(days=config.JWT_EXPIRE_DAYS)
    payload = {"sub": str(player_id), "role": role, "exp": expire}
    return jwt.encode(payload, config.JWT_SECRET, algorithm=config.JWT_ALGORITHM)


def decode_token(token: str) -> Optional[dict]:
    try:
        return jwt.decode(token, config.JWT_SECRET, algorithms=[config.JWT_ALGORITHM])
    except jwt.InvalidTokenError:
        return None


async def get_active_player(player_id: int) -> Optional[Player]:
    async with async_session_factory() as session:
        player = await session.get(Player, player_id)
        if not player or not player.is_active:
            return None
        return player


async def get_current_player(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(http_bearer),
    x_auth_token: Optional[str] = Header(None, alias="X-Auth-Token"),
) -> Optional[PlayerContext]:
    """Return the logged-in player from the JWT, or None. Accepts Authorization: Bearer or X-Auth-Token."""
    token = None
    if credentials and credentials.credentials:
        token = credentials.credentials
    elif x_auth_token:
        token = x_auth_token
    if not token:
        return None
    payload = decode_token(token)
    if not payload:
        return None
    try:
        player_id = int(payload.get("sub"))
    except (TypeError, ValueError):
        return None
    # Admin flag is read from storage; the token's role claim is informational only
    player = await get_active_player(player_id)
    if not player:
        return None
    return PlayerContext(id=player.id, name=player.name, is_admin=player.is_admin)


async def require_player(
    player: Optional[PlayerContext] = Depends(get_current_player),
) -> PlayerContext:
    """Require a logged-in player. Raises 401 if not logged in."""
    if not player:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Not authenticated",
            headers={"WWW-Authenticate": "Bearer"},
        )
    return player


def require_admin(player: PlayerContext) -> PlayerContext:
    """Require admin flag. Raises 403 if insufficient."""
    if not player.is_admin:
        logger.warning("Player %s denied admin access", player.id)
        raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail="Admin access required")
    return player


async def require_admin_player(
    player: PlayerContext = Depends(require_player),
) -> PlayerContext:
    """Dependency: require logged-in admin."""
    return require_admin(player)
