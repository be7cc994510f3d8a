"""Badge repository implementation."""
import logging
from typing import Optional, List
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy import select
from sqlalchemy.exc import IntegrityError

from kosaquest.domain.badges.catalog import BadgeType
from kosaquest.domain.badges.models import BadgeRecord
from kosaquest.domain.badges.repositories import BadgeRepository
from kosaquest.domain.common.errors import AlreadyMintedError
from kosaquest.infra.db.models.badge import NFTBadgeModel

logger = logging.getLogger(__name__)


class BadgeRepositoryImpl(BadgeRepository):
    """Badge repository implementation."""

    def __init__(self, session: AsyncSession):
        self.session = session

    async def create(self, badge: BadgeRecord) -> BadgeRecord:
        model = NFTBadgeModel.from_entity(badge)
        self.session.add(model)
        try:
            await self.session.commit()
        except IntegrityError as e:
            await self.session.rollback()
            existing = await self.get(badge.user_id, badge.badge_type)
            # The minted asset for this request has no record; leave a trail for support
            logger.error(
                "Badge %s for user %s already recorded; orphaned mint %s",
                badge.badge_type.value, badge.user_id, badge.tx_hash,
            )
            raise AlreadyMintedError(
                badge.badge_type.value,
                existing.badge_link if existing else None,
                existing.tx_hash if existing else None,
            ) from e
        await self.session.refresh(model)
        return model.to_entity()

    async def get(self, user_id: str, badge_type: BadgeType) -> Optional[BadgeRecord]:
        result = await self.session.execute(
            select(NFTBadgeModel).where(
                NFTBadgeModel.user_id == user_id,
                NFTBadgeModel.badge_type == BadgeType(badge_type).value,
            )
        )
        model = result.scalar_one_or_none()
        return model.to_entity() if model else None

    async def list_for_user(self, user_id: str) -> List[BadgeRecord]:
        result = await self.session.execute(
            select(NFTBadgeModel)
            .where(NFTBadgeModel.user_id == user_id)
            .order_by(NFTBadgeModel.issued_at.desc())
        )
        return [m.to_entity() for m in result.scalars().all()]
