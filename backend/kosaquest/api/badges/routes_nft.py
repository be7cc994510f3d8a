"""NFT badge routes."""
from datetime import datetime
from typing import List, Optional
from fastapi import APIRouter, Depends, status
from pydantic import BaseModel, Field

from kosaquest.api.deps import get_current_user, get_badge_service
from kosaquest.domain.accounts.models import User
from kosaquest.domain.badges.catalog import BadgeType
from kosaquest.domain.badges.models import BadgeRecord, EligibleBadge
from kosaquest.domain.badges.services import BadgeService

router = APIRouter()


class MintRequest(BaseModel):
    badge_type: str = Field(default=BadgeType.PROVERB_APPRENTICE.value, min_length=1)


class BadgeView(BaseModel):
    id: str
    name: str
    type: str
    description: str
    image_url: str
    badge_link: str
    tx_hash: Optional[str] = None
    issued_at: datetime

    @classmethod
    def from_record(cls, badge: BadgeRecord) -> "BadgeView":
        return cls(
            id=badge.id,
            name=badge.badge_name,
            type=badge.badge_type.value,
            description=badge.description,
            image_url=badge.image_url,
            badge_link=badge.badge_link,
            tx_hash=badge.tx_hash,
            issued_at=badge.issued_at,
        )


class MintResponse(BaseModel):
    message: str = "NFT badge minted successfully"
    badge_link: str
    tx_hash: Optional[str] = None
    badge: BadgeView


class MyBadgesResponse(BaseModel):
    badges: List[BadgeView]
    count: int


class EligibilityResponse(BaseModel):
    eligible_badges: List[EligibleBadge]
    user_xp: int


@router.post("/mint", response_model=MintResponse, status_code=status.HTTP_201_CREATED)
async def mint_badge(
    request: MintRequest,
    current_user: User = Depends(get_current_user),
    badge_service: BadgeService = Depends(get_badge_service),
):
    """Mint a badge the caller has earned."""
    badge = await badge_service.mint(current_user.id, request.badge_type)
    return MintResponse(
        badge_link=badge.badge_link,
        tx_hash=badge.tx_hash,
        badge=BadgeView.from_record(badge),
    )


@router.get("/my-badges", response_model=MyBadgesResponse)
async def my_badges(
    current_user: User = Depends(get_current_user),
    badge_service: BadgeService = Depends(get_badge_service),
):
    """The caller's badges, newest first."""
    badges = await badge_service.list_badges(current_user.id)
    return MyBadgesResponse(badges=[BadgeView.from_record(b) for b in badges], count=len(badges))


@router.get("/check-eligibility", response_model=EligibilityResponse)
async def check_eligibility(
    current_user: User = Depends(get_current_user),
    badge_service: BadgeService = Depends(get_badge_service),
):
    """Badges the caller can mint right now."""
    eligibility = await badge_service.check_eligibility(current_user.id)
    return EligibilityResponse(
        eligible_badges=eligibility.eligible_badges,
        user_xp=eligibility.user_xp,
    )
