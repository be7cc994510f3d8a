"""User repository implementation."""
from datetime import datetime
from typing import Optional
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy import select, update
from sqlalchemy.exc import IntegrityError

from kosaquest.domain.accounts.models import User
from kosaquest.domain.accounts.services import UserRepository
from kosaquest.domain.common.errors import EmailAlreadyRegisteredError
from kosaquest.infra.db.models.user import UserModel


class UserRepositoryImpl(UserRepository):
    """User repository implementation."""

    def __init__(self, session: AsyncSession):
        self.session = session

    async def create(self, user: User) -> User:
        """Create a new user."""
        model = UserModel.from_entity(user)
        self.session.add(model)
        try:
            await self.session.commit()
        except IntegrityError:
            await self.session.rollback()
            raise EmailAlreadyRegisteredError(user.email)
        await self.session.refresh(model)
        return model.to_entity()

    async def get_by_id(self, user_id: str) -> Optional[User]:
        """Get user by ID."""
        result = await self.session.execute(select(UserModel).where(UserModel.id == user_id))
        model = result.scalar_one_or_none()
        return model.to_entity() if model else None

    async def get_by_email(self, email: str) -> Optional[User]:
        """Get user by email."""
        result = await self.session.execute(select(UserModel).where(UserModel.email == email))
        model = result.scalar_one_or_none()
        return model.to_entity() if model else None

    async def get_xp(self, user_id: str) -> Optional[int]:
        """Get the current XP balance."""
        result = await self.session.execute(
            select(UserModel.xp).where(UserModel.id == user_id)
        )
        return result.scalar_one_or_none()

    async def mark_email_verified(self, user_id: str) -> Optional[User]:
        """Flag the email as verified and clear the pending code."""
        await self.session.execute(
            update(UserModel)
            .where(UserModel.id == user_id)
            .values(
                is_email_verified=True,
                verification_code=None,
                updated_at=datetime.utcnow(),
            )
        )
        await self.session.commit()
        result = await self.session.execute(
            select(UserModel)
            .where(UserModel.id == user_id)
            .execution_options(populate_existing=True)
        )
        model = result.scalar_one_or_none()
        return model.to_entity() if model else None
