"""Progress ledger database models."""
from datetime import datetime
from sqlalchemy import Column, String, Integer, DateTime, ForeignKey, UniqueConstraint, CheckConstraint, Index

from kosaquest.infra.db.base import Base, JSONType
from kosaquest.domain.quiz.models import ProgressRecord, QuestionResult


class UserProgressModel(Base):
    """One completed quiz per (user, story)."""

    __tablename__ = "user_progress"

    id = Column(String, primary_key=True)
    user_id = Column(String, ForeignKey("users.id", ondelete="CASCADE"), nullable=False)
    story_id = Column(String, nullable=False)
    quiz_responses = Column(JSONType, nullable=False, default=list)
    total_score = Column(Integer, nullable=False)
    max_score = Column(Integer, nullable=False)
    xp_earned = Column(Integer, nullable=False)
    completed_at = Column(DateTime, default=datetime.utcnow, nullable=False)

    __table_args__ = (
        # Sole arbiter of "first completion wins"
        UniqueConstraint("user_id", "story_id", name="uq_user_progress_user_story"),
        CheckConstraint("total_score >= 0", name="ck_user_progress_total_score_non_negative"),
        CheckConstraint("max_score >= 0", name="ck_user_progress_max_score_non_negative"),
        CheckConstraint("xp_earned >= 0", name="ck_user_progress_xp_non_negative"),
        Index("ix_user_progress_user_id", "user_id"),
        Index("ix_user_progress_story_id", "story_id"),
        Index("ix_user_progress_completed_at", "completed_at"),
    )

    def to_entity(self) -> ProgressRecord:
        """Convert to domain entity."""
        return ProgressRecord(
            id=self.id,
            user_id=self.user_id,
            story_id=self.story_id,
            results=[QuestionResult(**r) for r in (self.quiz_responses or [])],
            total_score=self.total_score,
            max_score=self.max_score,
            xp_earned=self.xp_earned,
            completed_at=self.completed_at,
        )

    @classmethod
    def from_entity(cls, entity: ProgressRecord) -> "UserProgressModel":
        """Create from domain entity."""
        return cls(
            id=entity.id,
            user_id=entity.user_id,
            story_id=entity.story_id,
            quiz_responses=[r.model_dump() for r in entity.results],
            total_score=entity.total_score,
            max_score=entity.max_score,
            xp_earned=entity.xp_earned,
            completed_at=entity.completed_at,
        )


class XPCreditModel(Base):
    """Ledger entry proving a completion's XP reached the user balance."""

    __tablename__ = "xp_credits"

    id = Column(String, primary_key=True)
    user_id = Column(String, ForeignKey("users.id", ondelete="CASCADE"), nullable=False)
    progress_id = Column(String, ForeignKey("user_progress.id", ondelete="CASCADE"), nullable=False)
    amount = Column(Integer, nullable=False)
    created_at = Column(DateTime, default=datetime.utcnow, nullable=False)

    __table_args__ = (
        UniqueConstraint("progress_id", name="uq_xp_credits_progress_id"),
        CheckConstraint("amount >= 0", name="ck_xp_credits_amount_non_negative"),
        Index("ix_xp_credits_user_id", "user_id"),
    )
