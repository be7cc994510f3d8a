"""Shared test helpers: story builder, fake minter, email outbox, registration."""
import asyncio
from typing import Optional

from httpx import AsyncClient

from kosaquest.domain.badges.minter import MintReceipt, MintingError
from kosaquest.domain.catalog.models import Story, StoryPage, QuizQuestion
from kosaquest.domain.quiz.services import QuizService, XPAccountingService
from kosaquest.infra.db.repositories.progress_repo import ProgressRepositoryImpl, XPLedgerRepositoryImpl
from kosaquest.infra.db.repositories.story_repo import StoryRepositoryImpl

ADMIN_KEY = "test-admin-key"


class RecordingEmailService:
    """Keeps sent verification codes in memory."""

    def __init__(self):
        self.sent = []

    async def send_verification_code(self, to_email: str, code: str) -> None:
        self.sent.append((to_email, code))

    def code_for(self, email: str) -> str:
        return next(code for to, code in reversed(self.sent) if to == email)


class FakeMinter:
    """Deterministic minter; can be told to fail or stall."""

    def __init__(self, fail: bool = False, delay: float = 0.0):
        self.fail = fail
        self.delay = delay
        self.calls = []

    async def mint(self, recipient: str, badge_type: str, metadata: dict) -> MintReceipt:
        self.calls.append((recipient, badge_type, metadata))
        if self.delay:
            await asyncio.sleep(self.delay)
        if self.fail:
            raise MintingError("gateway down")
        return MintReceipt(
            link=f"https://mint.test/{badge_type}-{recipient}",
            tx_reference=f"0x{len(self.calls):064x}",
        )


def make_story(
    story_id: str = "001",
    total_xp: int = 45,
    questions: Optional[list] = None,
    is_active: bool = True,
    language: str = "Yoruba",
    difficulty: str = "beginner",
) -> Story:
    """Story with the Ijapa quiz unless ``questions`` is given as (id, answer, points)."""
    if questions is None:
        questions = [("q1", "Ijapa", 10), ("q2", "Wisdom", 15)]
    return Story(
        story_id=story_id,
        title=f"Story {story_id}",
        description="A classic Yoruba tale about wisdom and patience",
        language=language,
        difficulty=difficulty,
        pages=[StoryPage(page_no=1, english="Once upon a time...", native="Ni igba kan...")],
        quizzes=[
            QuizQuestion(
                question_id=qid,
                question=f"Question {qid}?",
                options=[answer, "Other"],
                answer=answer,
                points=points,
            )
            for qid, answer, points in questions
        ],
        total_xp=total_xp,
        is_active=is_active,
    )


async def register(client: AsyncClient, email: str = "learner@example.com") -> dict:
    """Register a learner and return auth headers."""
    r = await client.post(
        "/v1/auth/register",
        json={"name": "Learner", "email": email, "password": "secret123"},
    )
    assert r.status_code == 201, r.text
    return {"Authorization": f"Bearer {r.json()['access_token']}"}


def build_quiz_service(session):
    """QuizService wired to SQL repositories on one session."""
    progress_repo = ProgressRepositoryImpl(session)
    return QuizService(
        story_repo=StoryRepositoryImpl(session),
        progress_repo=progress_repo,
        xp_accounting=XPAccountingService(progress_repo, XPLedgerRepositoryImpl(session)),
    )
