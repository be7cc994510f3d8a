"""Story catalog domain models."""
from datetime import datetime
from enum import Enum
from typing import List, Optional
from pydantic import BaseModel, ConfigDict, Field


class Difficulty(str, Enum):
    """Story difficulty enum."""
    BEGINNER = "beginner"
    INTERMEDIATE = "intermediate"
    ADVANCED = "advanced"


class StoryPage(BaseModel):
    """One illustrated page: English text alongside the native-language text."""
    model_config = ConfigDict(frozen=True)

    page_no: int
    english: str
    native: str


class QuizQuestion(BaseModel):
    """Quiz question as stored in the catalog (includes the correct answer)."""
    model_config = ConfigDict(frozen=True)

    question_id: str
    question: str
    options: List[str] = Field(default_factory=list)
    answer: str
    points: int


class StoryMetadata(BaseModel):
    """Provenance of an imported folktale."""
    model_config = ConfigDict(frozen=True)

    source: Optional[str] = None
    region: Optional[str] = None
    culture: Optional[str] = None
    audience: Optional[str] = None
    collection: Optional[str] = None
    themes: List[str] = Field(default_factory=list)
    author: Optional[str] = None


class Story(BaseModel):
    """Story catalog entry. Read-only for the quiz pipeline."""
    model_config = ConfigDict(frozen=True)

    story_id: str
    title: str
    description: str
    language: str
    difficulty: Difficulty = Difficulty.BEGINNER
    pages: List[StoryPage] = Field(default_factory=list)
    quizzes: List[QuizQuestion] = Field(default_factory=list)
    total_xp: int
    is_active: bool = True
    metadata: Optional[StoryMetadata] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None


class StoryStats(BaseModel):
    """Catalog statistics for administrators."""
    total: int
    active: int
    inactive: int
    language_distribution: dict[str, int]
    difficulty_distribution: dict[str, int]
    recent_stories: List[Story]
