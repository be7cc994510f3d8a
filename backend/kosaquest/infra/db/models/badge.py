"""NFT badge database model."""
from datetime import datetime
from sqlalchemy import Column, String, Integer, DateTime, Text, ForeignKey, UniqueConstraint, Index

from kosaquest.infra.db.base import Base
from kosaquest.domain.badges.catalog import BadgeType
from kosaquest.domain.badges.models import BadgeRecord


class NFTBadgeModel(Base):
    """Minted badge; at most one per (user, badge type)."""

    __tablename__ = "nft_badges"

    id = Column(String, primary_key=True)
    user_id = Column(String, ForeignKey("users.id", ondelete="CASCADE"), nullable=False)
    badge_type = Column(String, nullable=False)
    badge_name = Column(String, nullable=False)
    description = Column(Text, nullable=False)
    image_url = Column(String, nullable=False)
    badge_link = Column(String, nullable=False)
    tx_hash = Column(String, nullable=True)
    xp_required = Column(Integer, nullable=False)
    issued_at = Column(DateTime, default=datetime.utcnow, nullable=False)

    __table_args__ = (
        UniqueConstraint("user_id", "badge_type", name="uq_nft_badges_user_type"),
        Index("ix_nft_badges_user_id", "user_id"),
        Index("ix_nft_badges_badge_type", "badge_type"),
        Index("ix_nft_badges_issued_at", "issued_at"),
    )

    def to_entity(self) -> BadgeRecord:
        """Convert to domain entity."""
        return BadgeRecord(
            id=self.id,
            user_id=self.user_id,
            badge_type=BadgeType(self.badge_type),
            badge_name=self.badge_name,
            description=self.description,
            image_url=self.image_url,
            badge_link=self.badge_link,
            tx_hash=self.tx_hash,
            xp_required=self.xp_required,
            issued_at=self.issued_at,
        )

    @classmethod
    def from_entity(cls, entity: BadgeRecord) -> "NFTBadgeModel":
        """Create from domain entity."""
        return cls(
            id=entity.id,
            user_id=entity.user_id,
            badge_type=entity.badge_type.value,
            badge_name=entity.badge_name,
            description=entity.description,
            image_url=entity.image_url,
            badge_link=entity.badge_link,
            tx_hash=entity.tx_hash,
            xp_required=entity.xp_required,
            issued_at=entity.issued_at,
        )
