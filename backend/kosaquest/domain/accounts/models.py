"""Account domain models."""
from datetime import datetime
from typing import Optional
from pydantic import BaseModel, EmailStr, Field

from kosaquest.domain.common.types import generate_id, utcnow


class User(BaseModel):
    """User domain model."""

    id: str
    email: EmailStr
    name: str
    password_hash: str
    xp: int = Field(default=0, ge=0)
    is_email_verified: bool = False
    verification_code: Optional[str] = None
    is_active: bool = True
    created_at: datetime
    updated_at: datetime

    @classmethod
    def create(
        cls,
        email: str,
        name: str,
        password_hash: str,
        verification_code: Optional[str] = None,
    ) -> "User":
        """Create a new, unverified user with an empty XP balance."""
        now = utcnow()
        return cls(
            id=generate_id(),
            email=email.strip().lower(),
            name=name.strip(),
            password_hash=password_hash,
            xp=0,
            is_email_verified=False,
            verification_code=verification_code,
            is_active=True,
            created_at=now,
            updated_at=now,
        )


class UserProfile(BaseModel):
    """Public view of a user (no credentials)."""

    id: str
    name: str
    email: EmailStr
    xp: int
    is_email_verified: bool
    created_at: datetime
    updated_at: datetime

    @classmethod
    def from_user(cls, user: User) -> "UserProfile":
        return cls(
            id=user.id,
            name=user.name,
            email=user.email,
            xp=user.xp,
            is_email_verified=user.is_email_verified,
            created_at=user.created_at,
            updated_at=user.updated_at,
        )
