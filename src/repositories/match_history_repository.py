"""Match Recorder: immutable history of reported matches."""

from __future__ import annotations

from datetime import UTC, datetime
from uuid import uuid4

from sqlalchemy import select
from sqlalchemy.engine import Engine
from sqlalchemy.orm import Session

from domain.ratings.common import MatchResult
from models import MatchHistory


class MatchHistoryRepository:
    """Append-only persistence for finished matches."""

    def ensure_schema(self, engine: Engine) -> None:
        """Create the match_history table when missing."""
        with engine.begin() as connection:
            MatchHistory.__table__.create(bind=connection, checkfirst=True)

    def record(
        self,
        session: Session,
        match_result: MatchResult,
        *,
        report_date: datetime | None = None,
    ) -> MatchHistory:
        """Insert one match row and return it."""
        row = MatchHistory(
            id=str(uuid4()),
            report_date=report_date or datetime.now(UTC).replace(tzinfo=None),
            team_1=list(match_result.team_1),
            team_2=list(match_result.team_2),
            team_1_score=match_result.team_1_score,
            team_2_score=match_result.team_2_score,
            winner=match_result.winner.value,
        )
        session.add(row)
        session.flush()
        return row

    def recent(self, session: Session, *, limit: int = 10) -> list[MatchHistory]:
        """Most recently reported matches, newest first."""
        if limit <= 0:
            raise ValueError("limit must be greater than 0")
        statement = select(MatchHistory).order_by(MatchHistory.report_date.desc()).limit(limit)
        return list(session.execute(statement).scalars())


MATCH_HISTORY_REPOSITORY = MatchHistoryRepository()
