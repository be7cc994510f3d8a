"""Quiz domain services."""
import logging
from typing import Iterable, List

from kosaquest.domain.catalog.repositories import StoryRepository
from kosaquest.domain.common.errors import NotFoundError, DuplicateCompletionError
from kosaquest.domain.common.types import generate_id, utcnow
from kosaquest.domain.quiz.models import ProgressRecord, QuizOutcome, SubmittedResponse
from kosaquest.domain.quiz.repositories import ProgressRepository, XPLedgerRepository
from kosaquest.domain.quiz.rewards import compute_xp, score_ratio
from kosaquest.domain.quiz.scoring import score_quiz

logger = logging.getLogger(__name__)


class XPAccountingService:
    """Applies earned XP to user balances."""

    def __init__(self, progress_repo: ProgressRepository, xp_ledger: XPLedgerRepository):
        self.progress_repo = progress_repo
        self.xp_ledger = xp_ledger

    async def apply_xp(self, user_id: str, progress_id: str, xp_earned: int) -> int:
        """Credit a completion's XP and return the new balance.

        Safe to call again for the same completion: the second call leaves
        the balance untouched.
        """
        credited, balance = await self.xp_ledger.credit(user_id, progress_id, xp_earned)
        if credited:
            logger.info("Credited %d XP to user %s for progress %s (balance %d)", xp_earned, user_id, progress_id, balance)
        else:
            logger.warning("XP for progress %s was already credited; skipping", progress_id)
        return balance

    async def reconcile(self, user_id: str) -> List[str]:
        """Credit completions whose XP credit never landed. Returns their ids."""
        repaired: List[str] = []
        for record in await self.progress_repo.list_uncredited(user_id):
            credited, _ = await self.xp_ledger.credit(user_id, record.id, record.xp_earned)
            if credited:
                repaired.append(record.id)
        if repaired:
            logger.info("Reconciled %d uncredited completions for user %s", len(repaired), user_id)
        return repaired


class QuizService:
    """Quiz submission: score, record the completion, then credit XP."""

    def __init__(
        self,
        story_repo: StoryRepository,
        progress_repo: ProgressRepository,
        xp_accounting: XPAccountingService,
    ):
        self.story_repo = story_repo
        self.progress_repo = progress_repo
        self.xp_accounting = xp_accounting

    async def submit_quiz(
        self,
        user_id: str,
        story_id: str,
        responses: Iterable[SubmittedResponse],
    ) -> QuizOutcome:
        """Score a submission and issue its reward.

        Raises:
            DuplicateCompletionError: the user already completed the story.
            NotFoundError: no active story with this id.
        """
        if await self.progress_repo.has_completed(user_id, story_id):
            logger.warning("User %s already completed story %s", user_id, story_id)
            raise DuplicateCompletionError(user_id, story_id)

        story = await self.story_repo.get_by_story_id(story_id, active_only=True)
        if story is None:
            raise NotFoundError("Story", story_id)

        score = score_quiz(story.quizzes, responses)
        xp_earned = compute_xp(score.total_score, score.max_score, story.total_xp)

        record = await self.progress_repo.record_completion(
            ProgressRecord(
                id=generate_id(),
                user_id=user_id,
                story_id=story_id,
                results=score.results,
                total_score=score.total_score,
                max_score=score.max_score,
                xp_earned=xp_earned,
                completed_at=utcnow(),
            )
        )
        logger.info(
            "User %s completed story %s: %d/%d, %d XP",
            user_id, story_id, score.total_score, score.max_score, xp_earned,
        )

        balance = await self.xp_accounting.apply_xp(user_id, record.id, xp_earned)
        return QuizOutcome(
            progress=record,
            xp_earned=xp_earned,
            total_xp=balance,
            score_percentage=score_ratio(score.total_score, score.max_score),
        )

    async def list_progress(self, user_id: str) -> List[ProgressRecord]:
        """The user's completion records, newest first."""
        return await self.progress_repo.list_for_user(user_id)
