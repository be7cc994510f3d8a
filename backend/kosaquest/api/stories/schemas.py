"""Public story representations. Correct answers never leave the server."""
from datetime import datetime
from typing import List, Optional
from pydantic import BaseModel

from kosaquest.domain.catalog.models import Story, StoryPage, StoryMetadata, Difficulty


class StorySummary(BaseModel):
    story_id: str
    title: str
    description: str
    language: str
    difficulty: Difficulty
    total_xp: int
    page_count: int
    quiz_count: int
    created_at: Optional[datetime] = None

    @classmethod
    def from_story(cls, story: Story) -> "StorySummary":
        return cls(
            story_id=story.story_id,
            title=story.title,
            description=story.description,
            language=story.language,
            difficulty=story.difficulty,
            total_xp=story.total_xp,
            page_count=len(story.pages),
            quiz_count=len(story.quizzes),
            created_at=story.created_at,
        )


class PublicQuizQuestion(BaseModel):
    question_id: str
    question: str
    options: List[str]
    points: int


class StoryDetail(BaseModel):
    story_id: str
    title: str
    description: str
    language: str
    difficulty: Difficulty
    total_xp: int
    pages: List[StoryPage]
    quizzes: List[PublicQuizQuestion]
    metadata: Optional[StoryMetadata] = None

    @classmethod
    def from_story(cls, story: Story) -> "StoryDetail":
        return cls(
            story_id=story.story_id,
            title=story.title,
            description=story.description,
            language=story.language,
            difficulty=story.difficulty,
            total_xp=story.total_xp,
            pages=list(story.pages),
            quizzes=[
                PublicQuizQuestion(
                    question_id=q.question_id,
                    question=q.question,
                    options=list(q.options),
                    points=q.points,
                )
                for q in story.quizzes
            ],
            metadata=story.metadata,
        )


class StoryListResponse(BaseModel):
    stories: List[StorySummary]
    count: int
