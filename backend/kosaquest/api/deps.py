"""API dependencies."""
import secrets
from typing import Optional
from fastapi import Depends, Header, HTTPException, status
from fastapi.security import OAuth2PasswordBearer
from sqlalchemy.ext.asyncio import AsyncSession

from kosaquest.infra.db.session import get_db
from kosaquest.infra.security.jwt import decode_token
from kosaquest.domain.accounts.models import User
from kosaquest.domain.accounts.services import UserRepository
from kosaquest.domain.badges.minter import BadgeMinter
from kosaquest.domain.badges.services import BadgeService
from kosaquest.domain.catalog.services import CatalogService
from kosaquest.domain.quiz.services import QuizService, XPAccountingService
from kosaquest.infra.db.repositories.user_repo import UserRepositoryImpl
from kosaquest.infra.db.repositories.story_repo import StoryRepositoryImpl
from kosaquest.infra.db.repositories.progress_repo import ProgressRepositoryImpl, XPLedgerRepositoryImpl
from kosaquest.infra.db.repositories.badge_repo import BadgeRepositoryImpl
from kosaquest.infra.messaging.email_base import get_email_service
from kosaquest.infra.minting import build_minter
from kosaquest.settings import settings, get_settings

oauth2_scheme = OAuth2PasswordBearer(tokenUrl="/v1/auth/login")

__all__ = [
    "get_db",
    "get_current_user",
    "get_badge_minter",
    "get_email_service",
    "get_catalog_service",
    "get_quiz_service",
    "get_badge_service",
    "require_admin_key",
]


async def get_current_user(
    token: str = Depends(oauth2_scheme),
    db: AsyncSession = Depends(get_db),
) -> User:
    """Get current authenticated user."""
    credentials_exception = HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail="Could not validate credentials",
        headers={"WWW-Authenticate": "Bearer"},
    )

    payload = decode_token(token)
    if payload is None:
        raise credentials_exception

    user_id: str = payload.get("sub")
    token_type: str = payload.get("type")
    if user_id is None or token_type != "access":
        raise credentials_exception

    user_repo: UserRepository = UserRepositoryImpl(db)
    user = await user_repo.get_by_id(user_id)
    if user is None or not user.is_active:
        raise credentials_exception

    return user


def get_badge_minter() -> BadgeMinter:
    """Build the configured badge minter."""
    return build_minter(get_settings())


def get_catalog_service(db: AsyncSession = Depends(get_db)) -> CatalogService:
    return CatalogService(StoryRepositoryImpl(db))


def get_quiz_service(db: AsyncSession = Depends(get_db)) -> QuizService:
    progress_repo = ProgressRepositoryImpl(db)
    return QuizService(
        story_repo=StoryRepositoryImpl(db),
        progress_repo=progress_repo,
        xp_accounting=XPAccountingService(progress_repo, XPLedgerRepositoryImpl(db)),
    )


def get_badge_service(
    db: AsyncSession = Depends(get_db),
    minter: BadgeMinter = Depends(get_badge_minter),
) -> BadgeService:
    return BadgeService(
        badge_repo=BadgeRepositoryImpl(db),
        user_repo=UserRepositoryImpl(db),
        minter=minter,
        mint_timeout_s=settings.badge_mint_timeout_s,
    )


async def require_admin_key(x_admin_key: Optional[str] = Header(default=None)) -> None:
    """Gate admin routes on the X-Admin-Key header. No configured key means no admin access."""
    expected = settings.admin_api_key
    if not expected or not x_admin_key or not secrets.compare_digest(x_admin_key, expected):
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="Admin access required",
        )
