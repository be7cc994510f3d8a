"""Account domain services."""
import logging
import secrets
from typing import Protocol, Optional

from kosaquest.domain.accounts.models import User
from kosaquest.domain.common.errors import BadRequestError, NotFoundError, EmailAlreadyRegisteredError

logger = logging.getLogger(__name__)


def generate_verification_code() -> str:
    """Six-digit one-time code sent to confirm an email address."""
    return str(100000 + secrets.randbelow(900000))


class UserRepository(Protocol):
    """User repository protocol."""

    async def create(self, user: User) -> User:
        """Create a new user. Raises EmailAlreadyRegisteredError on a duplicate email."""
        ...

    async def get_by_id(self, user_id: str) -> Optional[User]:
        """Get user by ID."""
        ...

    async def get_by_email(self, email: str) -> Optional[User]:
        """Get user by email."""
        ...

    async def get_xp(self, user_id: str) -> Optional[int]:
        """Current XP balance, or None when the user does not exist."""
        ...

    async def mark_email_verified(self, user_id: str) -> Optional[User]:
        """Set the verified flag and drop the pending code."""
        ...


class UserService:
    """User service."""

    def __init__(self, user_repo: UserRepository):
        self.user_repo = user_repo

    async def register(self, email: str, name: str, password_hash: str) -> User:
        """Register a new user with a pending email verification code."""
        existing = await self.user_repo.get_by_email(email.strip().lower())
        if existing:
            logger.warning("Registration rejected, email already registered")
            raise EmailAlreadyRegisteredError(email)
        user = User.create(
            email=email,
            name=name,
            password_hash=password_hash,
            verification_code=generate_verification_code(),
        )
        created = await self.user_repo.create(user)
        logger.info("Registered user %s", created.id)
        return created

    async def verify_email(self, email: str, verification_code: str) -> User:
        """Confirm an email address with the code sent at registration.

        Raises:
            BadRequestError: unknown email, already verified, or wrong code.
        """
        user = await self.user_repo.get_by_email(email.strip().lower())
        pending = user.verification_code if user else None
        if not pending or not secrets.compare_digest(
            verification_code.strip().encode(), pending.encode()
        ):
            logger.warning("Email verification rejected")
            raise BadRequestError("Invalid verification code")

        verified = await self.user_repo.mark_email_verified(user.id)
        if verified is None:
            raise NotFoundError("User", user.id)
        logger.info("Email verified for user %s", user.id)
        return verified

    async def get_user(self, user_id: str) -> User:
        """Get user by ID."""
        user = await self.user_repo.get_by_id(user_id)
        if not user:
            raise NotFoundError("User", user_id)
        return user

    async def get_user_by_email(self, email: str) -> Optional[User]:
        """Get user by email."""
        return await self.user_repo.get_by_email(email.strip().lower())
