"""Story catalog database model."""
from datetime import datetime
from sqlalchemy import Column, String, Integer, Boolean, DateTime, Text, Index, CheckConstraint

from kosaquest.infra.db.base import Base, JSONType
from kosaquest.domain.catalog.models import (
    Story,
    StoryPage,
    QuizQuestion,
    StoryMetadata,
    Difficulty,
)


class StoryModel(Base):
    """Story model. Pages and quizzes are embedded JSON documents, ordered."""

    __tablename__ = "stories"

    id = Column(Integer, primary_key=True, autoincrement=True)
    story_id = Column(String, unique=True, nullable=False)
    title = Column(String, nullable=False)
    description = Column(Text, nullable=False)
    language = Column(String, nullable=False)
    difficulty = Column(String, nullable=False, default=Difficulty.BEGINNER.value)
    pages = Column(JSONType, nullable=False, default=list)  # [{"page_no", "english", "native"}]
    quizzes = Column(JSONType, nullable=False, default=list)  # [{"question_id", "question", "options", "answer", "points"}]
    total_xp = Column(Integer, nullable=False)
    is_active = Column(Boolean, default=True, nullable=False)
    story_metadata = Column(JSONType, nullable=True)
    created_at = Column(DateTime, default=datetime.utcnow, nullable=False)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow, nullable=False)

    __table_args__ = (
        CheckConstraint("total_xp >= 0", name="ck_stories_total_xp_non_negative"),
        Index("ix_stories_is_active", "is_active"),
        Index("ix_stories_difficulty", "difficulty"),
        Index("ix_stories_language", "language"),
    )

    def to_entity(self) -> Story:
        """Convert to domain entity."""
        return Story(
            story_id=self.story_id,
            title=self.title,
            description=self.description,
            language=self.language,
            difficulty=Difficulty(self.difficulty),
            pages=[StoryPage(**page) for page in (self.pages or [])],
            quizzes=[QuizQuestion(**quiz) for quiz in (self.quizzes or [])],
            total_xp=self.total_xp,
            is_active=self.is_active,
            metadata=StoryMetadata(**self.story_metadata) if self.story_metadata else None,
            created_at=self.created_at,
            updated_at=self.updated_at,
        )

    @classmethod
    def from_entity(cls, entity: Story) -> "StoryModel":
        """Create from domain entity."""
        now = datetime.utcnow()
        return cls(
            story_id=entity.story_id,
            title=entity.title,
            description=entity.description,
            language=entity.language,
            difficulty=entity.difficulty.value,
            pages=[page.model_dump() for page in entity.pages],
            quizzes=[quiz.model_dump() for quiz in entity.quizzes],
            total_xp=entity.total_xp,
            is_active=entity.is_active,
            story_metadata=entity.metadata.model_dump() if entity.metadata else None,
            created_at=entity.created_at or now,
            updated_at=entity.updated_at or now,
        )
