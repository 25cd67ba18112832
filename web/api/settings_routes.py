"""Site settings API: title and message to players (public read, admin write)."""
from __future__ import annotations

import logging

from fastapi import APIRouter, Depends
from pydantic import BaseModel
from sqlalchemy import select

import config
from league.models import SiteSettings
from league.models.base import async_session_factory
from web.auth import PlayerContext, require_admin_player

logger = logging.getLogger("golfligan.api")

router = APIRouter(prefix="/api/settings", tags=["settings"])

DEFAULTS = {
    "site_title": config.SITE_TITLE,
    "site_message": "",
}


async def _get_setting(key: str) -> str:
    async with async_session_factory() as session:
        result = await session.execute(select(SiteSettings).where(SiteSettings.key == key))
        row = result.scalar_one_or_none()
        return row.value if row else DEFAULTS.get(key, "")


async def _set_setting(key: str, value: str) -> None:
    async with async_session_factory() as session:
        result = await session.execute(select(SiteSettings).where(SiteSettings.key == key))
        row = result.scalar_one_or_none()
        if row:
            row.value = value
        else:
            session.add(SiteSettings(key=key, value=value))
        await session.commit()


class SettingsResponse(BaseModel):
    site_title: str
    site_message: str


class SettingsUpdate(BaseModel):
    site_title: str | None = None
    site_message: str | None = None


async def _current_settings() -> SettingsResponse:
    return SettingsResponse(
        site_title=await _get_setting("site_title"),
        site_message=await _get_setting("site_message"),
    )


@router.get("", response_model=SettingsResponse)
async def get_settings():
    """Get site settings (public)."""
    return await _current_settings()


@router.patch("", response_model=SettingsResponse)
async def update_settings(body: SettingsUpdate, admin: PlayerContext = Depends(require_admin_player)):
    """Update site title or message (admin only). An empty message clears it."""
    updates = body.model_dump(exclude_unset=True)
    for key, value in updates.items():
        if value is not None:
            await _set_setting(key, value)
    logger.info("Admin %s updated settings: %s", admin.name, ", ".join(sorted(updates)))
    return await _current_settings()
