"""Player roster: bootstrap admin and player management."""
from __future__ import annotations

import logging
from typing import List, Optional

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

import config
from league.errors import LeagueError, PlayerNotFoundError
from league.models import Player

logger = logging.getLogger("golfligan.roster")


class DuplicatePlayerError(LeagueError):
    def __init__(self, name: str):
        super().__init__(f"Player name already exists: {name}")
        self.name = name


async def get_player(session: AsyncSession, player_id: int) -> Player:
    player = await session.get(Player, player_id)
    if not player:
        raise PlayerNotFoundError(player_id)
    return player


async def get_player_by_name(session: AsyncSession, name: str) -> Optional[Player]:
    result = await session.execute(select(Player).where(Player.name == name))
    return result.scalar_one_or_none()


async def list_players(session: AsyncSession, active_only: bool = False) -> List[Player]:
    query = select(Player).order_by(Player.name)
    if active_only:
        query = query.where(Player.is_active.is_(True))
    result = await session.execute(query)
    return list(result.scalars().all())


async def create_player(
    session: AsyncSession,
    name: str,
    nickname: Optional[str] = None,
    is_admin: bool = False,
    is_active: bool = True,
) -> Player:
    name = name.strip()
    if await get_player_by_name(session, name):
        raise DuplicatePlayerError(name)
    player = Player(name=name, nickname=nickname or None, is_admin=is_admin, is_active=is_active)
    session.add(player)
    await session.commit()
    await session.refresh(player)
    logger.info("Added player %s (admin=%s)", player.name, player.is_admin)
    return player


async def ensure_initial_admin(session: AsyncSession) -> Optional[Player]:
    """Create the INITIAL_ADMIN_NAME player as admin if configured and missing."""
    if not config.INITIAL_ADMIN_NAME:
        return None
    player = await get_player_by_name(session, config.INITIAL_ADMIN_NAME)
    if player:
        return player
    return await create_player(
        session,
        config.INITIAL_ADMIN_NAME,
        nickname=config.INITIAL_ADMIN_NICKNAME or None,
        is_admin=True,
    )
