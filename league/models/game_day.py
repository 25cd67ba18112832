"""Game day model."""
from __future__ import annotations

import json
from typing import Optional

from sqlalchemy import Boolean, Integer, String, Text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from league.models.base import Base


class GameDay(Base):
    """A scheduled round. One Result per active player is created along with it."""

    __tablename__ = "game_days"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    date: Mapped[str] = mapped_column(String(10), nullable=False, index=True)  # YYYY-MM-DD
    tee: Mapped[Optional[str]] = mapped_column(String(32), nullable=True)
    game_mode: Mapped[Optional[str]] = mapped_column(String(64), nullable=True)
    side_game: Mapped[Optional[str]] = mapped_column(String(64), nullable=True)
    side_game_groups: Mapped[Optional[str]] = mapped_column(Text, nullable=True)  # JSON list of player-id lists
    beer_game_enabled: Mapped[bool] = mapped_column(Boolean, default=False, nullable=False)
    is_active: Mapped[bool] = mapped_column(Boolean, default=True, nullable=False)

    results = relationship(
        "Result", back_populates="game_day", cascade="all, delete-orphan"
    )

    @property
    def groups(self) -> list[list[int]]:
        """Decoded side game groups, empty when none are stored."""
        if not self.side_game_groups:
            return []
        try:
            decoded = json.loads(self.side_game_groups)
        except ValueError:
            return []
        if not isinstance(decoded, list):
            return []
        return [list(g) for g in decoded if isinstance(g, list)]
