"""Badge domain models."""
from datetime import datetime
from typing import List, Optional
from pydantic import BaseModel

from kosaquest.domain.badges.catalog import BadgeType, BadgeDefinition


class BadgeRecord(BaseModel):
    """A minted badge. One per (user, badge type)."""
    id: str
    user_id: str
    badge_type: BadgeType
    badge_name: str
    description: str
    image_url: str
    badge_link: str
    tx_hash: Optional[str] = None
    xp_required: int
    issued_at: datetime


class EligibleBadge(BaseModel):
    """A badge the user can mint right now."""
    type: BadgeType
    name: str
    description: str
    xp_required: int

    @classmethod
    def from_definition(cls, definition: BadgeDefinition) -> "EligibleBadge":
        return cls(
            type=definition.type,
            name=definition.name,
            description=definition.description,
            xp_required=definition.xp_required,
        )


class Eligibility(BaseModel):
    """Derived eligibility; never stored."""
    eligible_badges: List[EligibleBadge]
    user_xp: int
