"""Quiz domain models."""
from dataclasses import dataclass
from datetime import datetime
from typing import List
from pydantic import BaseModel


@dataclass(frozen=True)
class SubmittedResponse:
    """One answer supplied by the learner."""
    question_id: str
    answer: str


class QuestionResult(BaseModel):
    """Scored outcome for one catalog question."""
    question_id: str
    answer: str
    is_correct: bool
    points_earned: int


@dataclass(frozen=True)
class QuizScore:
    """Output of the scoring engine."""
    results: List[QuestionResult]
    total_score: int
    max_score: int


class ProgressRecord(BaseModel):
    """Durable proof that a user completed a story's quiz."""
    id: str
    user_id: str
    story_id: str
    results: List[QuestionResult]
    total_score: int
    max_score: int
    xp_earned: int
    completed_at: datetime


@dataclass(frozen=True)
class QuizOutcome:
    """What a successful submission reports back to the learner."""
    progress: ProgressRecord
    xp_earned: int
    total_xp: int
    score_percentage: float

    @property
    def score(self) -> int:
        return self.progress.total_score

    @property
    def max_score(self) -> int:
        return self.progress.max_score

    @property
    def results(self) -> List[QuestionResult]:
        return self.progress.results
