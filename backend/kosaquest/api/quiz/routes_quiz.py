"""Quiz submission and progress routes."""
from datetime import datetime
from typing import List
from fastapi import APIRouter, Depends
from pydantic import BaseModel, Field

from kosaquest.api.deps import get_current_user, get_quiz_service
from kosaquest.domain.accounts.models import User
from kosaquest.domain.quiz.models import QuestionResult, SubmittedResponse, ProgressRecord
from kosaquest.domain.quiz.rewards import percentage_points
from kosaquest.domain.quiz.services import QuizService

router = APIRouter()


class QuizResponseItem(BaseModel):
    question_id: str = Field(..., min_length=1)
    answer: str


class QuizSubmitRequest(BaseModel):
    story_id: str = Field(..., min_length=1)
    responses: List[QuizResponseItem]


class QuizSubmitResponse(BaseModel):
    xp_earned: int
    total_xp: int
    score: int
    max_score: int
    score_percentage: int
    results: List[QuestionResult]


class ProgressItem(BaseModel):
    story_id: str
    total_score: int
    max_score: int
    xp_earned: int
    results: List[QuestionResult]
    completed_at: datetime

    @classmethod
    def from_record(cls, record: ProgressRecord) -> "ProgressItem":
        return cls(
            story_id=record.story_id,
            total_score=record.total_score,
            max_score=record.max_score,
            xp_earned=record.xp_earned,
            results=record.results,
            completed_at=record.completed_at,
        )


class ProgressResponse(BaseModel):
    progress: List[ProgressItem]
    count: int


@router.post("/submit", response_model=QuizSubmitResponse)
async def submit_quiz(
    request: QuizSubmitRequest,
    current_user: User = Depends(get_current_user),
    quiz_service: QuizService = Depends(get_quiz_service),
):
    """Score the caller's answers for a story and award XP once."""
    outcome = await quiz_service.submit_quiz(
        user_id=current_user.id,
        story_id=request.story_id,
        responses=[SubmittedResponse(question_id=r.question_id, answer=r.answer) for r in request.responses],
    )
    return QuizSubmitResponse(
        xp_earned=outcome.xp_earned,
        total_xp=outcome.total_xp,
        score=outcome.score,
        max_score=outcome.max_score,
        score_percentage=percentage_points(outcome.score, outcome.max_score),
        results=outcome.results,
    )


@router.get("/progress", response_model=ProgressResponse)
async def get_progress(
    current_user: User = Depends(get_current_user),
    quiz_service: QuizService = Depends(get_quiz_service),
):
    """The caller's completed stories, newest first."""
    records = await quiz_service.list_progress(current_user.id)
    return ProgressResponse(
        progress=[ProgressItem.from_record(r) for r in records],
        count=len(records),
    )
