"""Progress ledger and XP credit repository implementations."""
import logging
from typing import Optional, List
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy import select, func, update
from sqlalchemy.exc import IntegrityError

from kosaquest.domain.common.errors import DuplicateCompletionError, NotFoundError
from kosaquest.domain.common.types import generate_id, utcnow
from kosaquest.domain.quiz.models import ProgressRecord
from kosaquest.domain.quiz.repositories import ProgressRepository, XPLedgerRepository
from kosaquest.infra.db.models.progress import UserProgressModel, XPCreditModel
from kosaquest.infra.db.models.user import UserModel

logger = logging.getLogger(__name__)


class ProgressRepositoryImpl(ProgressRepository):
    """Progress repository implementation."""

    def __init__(self, session: AsyncSession):
        self.session = session

    async def record_completion(self, record: ProgressRecord) -> ProgressRecord:
        model = UserProgressModel.from_entity(record)
        self.session.add(model)
        try:
            await self.session.commit()
        except IntegrityError as e:
            await self.session.rollback()
            logger.warning(
                "Completion for user %s story %s lost to an existing record",
                record.user_id, record.story_id,
            )
            raise DuplicateCompletionError(record.user_id, record.story_id) from e
        await self.session.refresh(model)
        return model.to_entity()

    async def has_completed(self, user_id: str, story_id: str) -> bool:
        result = await self.session.execute(
            select(UserProgressModel.id).where(
                UserProgressModel.user_id == user_id,
                UserProgressModel.story_id == story_id,
            )
        )
        return result.scalar_one_or_none() is not None

    async def get(self, user_id: str, story_id: str) -> Optional[ProgressRecord]:
        result = await self.session.execute(
            select(UserProgressModel).where(
                UserProgressModel.user_id == user_id,
                UserProgressModel.story_id == story_id,
            )
        )
        model = result.scalar_one_or_none()
        return model.to_entity() if model else None

    async def list_for_user(self, user_id: str) -> List[ProgressRecord]:
        result = await self.session.execute(
            select(UserProgressModel)
            .where(UserProgressModel.user_id == user_id)
            .order_by(UserProgressModel.completed_at.desc())
        )
        return [m.to_entity() for m in result.scalars().all()]

    async def count_for_user(self, user_id: str) -> int:
        result = await self.session.execute(
            select(func.count(UserProgressModel.id)).where(UserProgressModel.user_id == user_id)
        )
        return int(result.scalar_one() or 0)

    async def list_uncredited(self, user_id: str) -> List[ProgressRecord]:
        result = await self.session.execute(
            select(UserProgressModel)
            .outerjoin(XPCreditModel, XPCreditModel.progress_id == UserProgressModel.id)
            .where(UserProgressModel.user_id == user_id, XPCreditModel.id.is_(None))
            .order_by(UserProgressModel.completed_at.asc())
        )
        return [m.to_entity() for m in result.scalars().all()]


class XPLedgerRepositoryImpl(XPLedgerRepository):
    """Balance updates keyed by completion record.

    The credit row and the balance increment commit together, and the unique
    index on progress_id stops a second credit for the same completion.
    """

    def __init__(self, session: AsyncSession):
        self.session = session

    async def _balance(self, user_id: str) -> int:
        result = await self.session.execute(select(UserModel.xp).where(UserModel.id == user_id))
        balance = result.scalar_one_or_none()
        if balance is None:
            raise NotFoundError("User", user_id)
        return balance

    async def credit(self, user_id: str, progress_id: str, amount: int) -> tuple[bool, int]:
        if amount < 0:
            raise ValueError("XP credit must be non-negative")
        self.session.add(
            XPCreditModel(
                id=generate_id(),
                user_id=user_id,
                progress_id=progress_id,
                amount=amount,
                created_at=utcnow(),
            )
        )
        try:
            # Flush the credit first so a duplicate fails before the increment runs
            await self.session.flush()
            await self.session.execute(
                update(UserModel)
                .where(UserModel.id == user_id)
                .values(xp=UserModel.xp + amount, updated_at=utcnow())
            )
            await self.session.commit()
        except IntegrityError:
            await self.session.rollback()
            return False, await self._balance(user_id)
        return True, await self._balance(user_id)

    async def is_credited(self, progress_id: str) -> bool:
        result = await self.session.execute(
            select(XPCreditModel.id).where(XPCreditModel.progress_id == progress_id)
        )
        return result.scalar_one_or_none() is not None
