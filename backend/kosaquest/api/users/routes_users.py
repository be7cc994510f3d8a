"""User routes."""
from fastapi import APIRouter, Depends

from kosaquest.api.deps import get_current_user
from kosaquest.domain.accounts.models import User, UserProfile

router = APIRouter()


@router.get("/me", response_model=UserProfile)
async def get_me(current_user: User = Depends(get_current_user)):
    """Current user's profile, including XP."""
    return UserProfile.from_user(current_user)
