"""Quiz API routes."""
from fastapi import APIRouter

from kosaquest.api.quiz import routes_quiz

router = APIRouter()

router.include_router(routes_quiz.router, prefix="/quiz", tags=["quiz"])
