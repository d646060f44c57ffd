"""players table model."""

from __future__ import annotations

from datetime import datetime

from sqlalchemy import CheckConstraint, DateTime, Float, Integer, String, func
from sqlalchemy.orm import Mapped, mapped_column

from models.base import Base


class PlayerRow(Base):
    """Current rating and experience for one ladder player."""

    __tablename__ = "players"
    __table_args__ = (
        CheckConstraint("nb_games >= 0", name="ck_players_nb_games"),
    )

    id: Mapped[str] = mapped_column(String(64), primary_key=True)
    name: Mapped[str | None] = mapped_column(String(256), nullable=True)
    elo: Mapped[float] = mapped_column(Float, nullable=False)
    nb_games: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    version: Mapped[int] = mapped_column(Integer, nullable=False)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=False),
        nullable=False,
        server_default=func.now(),
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=False),
        nullable=False,
        server_default=func.now(),
    )

    # Concurrent read-modify-write of the same player raises StaleDataError.
    __mapper_args__ = {"version_id_col": version}
