"""User database model."""
from datetime import datetime
from sqlalchemy import Column, String, Boolean, DateTime, Integer, CheckConstraint

from kosaquest.infra.db.base import Base
from kosaquest.domain.accounts.models import User as UserEntity


class UserModel(Base):
    """User database model."""

    __tablename__ = "users"

    id = Column(String, primary_key=True)
    email = Column(String, unique=True, index=True, nullable=False)
    name = Column(String, nullable=False)
    password_hash = Column(String, nullable=False)
    xp = Column(Integer, default=0, nullable=False)
    is_email_verified = Column(Boolean, default=False, nullable=False)
    verification_code = Column(String, nullable=True, index=True)
    is_active = Column(Boolean, default=True, nullable=False)
    created_at = Column(DateTime, default=datetime.utcnow, nullable=False)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow, nullable=False)

    __table_args__ = (
        CheckConstraint("xp >= 0", name="ck_users_xp_non_negative"),
    )

    def to_entity(self) -> UserEntity:
        """Convert to domain entity."""
        return UserEntity(
            id=self.id,
            email=self.email,
            name=self.name,
            password_hash=self.password_hash,
            xp=self.xp,
            is_email_verified=self.is_email_verified,
            verification_code=self.verification_code,
            is_active=self.is_active,
            created_at=self.created_at,
            updated_at=self.updated_at,
        )

    @classmethod
    def from_entity(cls, entity: UserEntity) -> "UserModel":
        """Create from domain entity."""
        return cls(
            id=entity.id,
            email=entity.email,
            name=entity.name,
            password_hash=entity.password_hash,
            xp=entity.xp,
            is_email_verified=entity.is_email_verified,
            verification_code=entity.verification_code,
            is_active=entity.is_active,
            created_at=entity.created_at,
            updated_at=entity.updated_at,
        )
