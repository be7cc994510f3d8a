"""Authentication routes."""
import logging
from fastapi import APIRouter, Depends, HTTPException, status
from pydantic import BaseModel, EmailStr, Field
from sqlalchemy.ext.asyncio import AsyncSession

from kosaquest.api.deps import get_db, get_email_service
from kosaquest.domain.accounts.models import UserProfile
from kosaquest.domain.accounts.services import UserService, UserRepository
from kosaquest.infra.db.repositories.user_repo import UserRepositoryImpl
from kosaquest.infra.messaging.email_base import EmailService
from kosaquest.infra.security.password import verify_password, get_password_hash
from kosaquest.infra.security.jwt import create_access_token

logger = logging.getLogger(__name__)

router = APIRouter()


class RegisterRequest(BaseModel):
    """Registration request model."""
    name: str = Field(..., min_length=2, max_length=50)
    email: EmailStr
    password: str = Field(..., min_length=6)


class LoginRequest(BaseModel):
    """Login request model."""
    email: EmailStr
    password: str


class VerifyEmailRequest(BaseModel):
    """Email verification request model."""
    email: EmailStr
    verification_code: str = Field(..., min_length=1)


class TokenResponse(BaseModel):
    """Token response model."""
    access_token: str
    token_type: str = "bearer"
    user: UserProfile


@router.post("/register", response_model=TokenResponse, status_code=status.HTTP_201_CREATED)
async def register(
    request: RegisterRequest,
    db: AsyncSession = Depends(get_db),
    email_service: EmailService = Depends(get_email_service),
):
    """Register a new learner."""
    user_repo: UserRepository = UserRepositoryImpl(db)
    user_service = UserService(user_repo)

    user = await user_service.register(
        email=request.email,
        name=request.name,
        password_hash=get_password_hash(request.password),
    )
    try:
        await email_service.send_verification_code(user.email, user.verification_code)
    except Exception:
        # Registration stands; the code stays pending in the database
        logger.exception("Failed to send verification email for user %s", user.id)

    access_token = create_access_token(data={"sub": user.id})
    return TokenResponse(access_token=access_token, user=UserProfile.from_user(user))


@router.post("/login", response_model=TokenResponse)
async def login(
    request: LoginRequest,
    db: AsyncSession = Depends(get_db),
):
    """Login user."""
    user_repo: UserRepository = UserRepositoryImpl(db)
    user_service = UserService(user_repo)

    user = await user_service.get_user_by_email(request.email)
    if not user or not verify_password(request.password, user.password_hash):
        logger.warning("Login failed for a submitted email")
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Incorrect email or password",
        )

    if not user.is_active:
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="User account is inactive",
        )

    access_token = create_access_token(data={"sub": user.id})
    logger.info("Login successful for user %s", user.id)
    return TokenResponse(access_token=access_token, user=UserProfile.from_user(user))


@router.post("/verify-email")
async def verify_email(
    request: VerifyEmailRequest,
    db: AsyncSession = Depends(get_db),
):
    """Confirm the caller's email with the code sent at registration."""
    user_service = UserService(UserRepositoryImpl(db))
    await user_service.verify_email(request.email, request.verification_code)
    return {"message": "Email verified successfully"}
