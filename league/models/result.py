"""Result model - one outcome per player and game day."""
from __future__ import annotations

from datetime import datetime
from typing import Optional

from sqlalchemy import Boolean, DateTime, ForeignKey, Integer, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column, relationship

import config
from league.models.base import Base


class Result(Base):
    """Placement and beer tokens reported by a player for a game day."""

    __tablename__ = "results"
    __table_args__ = (UniqueConstraint("player_id", "game_day_id", name="uq_results_player_game_day"),)

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    player_id: Mapped[int] = mapped_column(ForeignKey("players.id"), nullable=False)
    game_day_id: Mapped[int] = mapped_column(ForeignKey("game_days.id"), nullable=False)
    placement: Mapped[int] = mapped_column(Integer, default=config.UNSCORED_PLACEMENT, nullable=False)
    side_placement: Mapped[Optional[int]] = mapped_column(Integer, nullable=True)
    beer_tokens: Mapped[Optional[int]] = mapped_column(Integer, nullable=True)  # negative = owes
    submitted: Mapped[bool] = mapped_column(Boolean, default=False, nullable=False)
    submitted_at: Mapped[Optional[datetime]] = mapped_column(DateTime(timezone=True), nullable=True)

    player: Mapped["Player"] = relationship("Player", back_populates="results")
    game_day: Mapped["GameDay"] = relationship("GameDay", back_populates="results")
