"""match_history table model."""

from __future__ import annotations

from datetime import datetime

from sqlalchemy import JSON, CheckConstraint, DateTime, Enum, Index, Integer, String, func
from sqlalchemy.dialects.postgresql import JSONB
from sqlalchemy.orm import Mapped, mapped_column

from models.base import Base

_ROSTER_TYPE = JSON().with_variant(JSONB(), "postgresql")


class MatchHistory(Base):
    """Immutable record of one reported match."""

    __tablename__ = "match_history"
    __table_args__ = (
        CheckConstraint(
            "team_1_score >= 0 AND team_2_score >= 0",
            name="ck_match_history_scores",
        ),
        Index("idx_match_history_report_date", "report_date"),
    )

    id: Mapped[str] = mapped_column(String(36), primary_key=True)
    report_date: Mapped[datetime] = mapped_column(DateTime(timezone=False), nullable=False)
    team_1: Mapped[list[str]] = mapped_column(_ROSTER_TYPE, nullable=False)
    team_2: Mapped[list[str]] = mapped_column(_ROSTER_TYPE, nullable=False)
    team_1_score: Mapped[int] = mapped_column(Integer, nullable=False)
    team_2_score: Mapped[int] = mapped_column(Integer, nullable=False)
    winner: Mapped[str] = mapped_column(
        Enum(
            "team_1",
            "team_2",
            name="match_winner",
            native_enum=False,
        ),
        nullable=False,
    )
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=False),
        nullable=False,
        server_default=func.now(),
    )
