"""Badge repository protocols."""
from typing import Protocol, Optional, List

from kosaquest.domain.badges.catalog import BadgeType
from kosaquest.domain.badges.models import BadgeRecord


class BadgeRepository(Protocol):
    """Badge records: at most one per (user, badge type)."""

    async def create(self, badge: BadgeRecord) -> BadgeRecord:
        """Persist a badge.

        Raises AlreadyMintedError when the pair already has one, including
        when a concurrent insert wins the unique index.
        """
        ...

    async def get(self, user_id: str, badge_type: BadgeType) -> Optional[BadgeRecord]:
        """Get the user's badge of this type."""
        ...

    async def list_for_user(self, user_id: str) -> List[BadgeRecord]:
        """User's badges, newest first."""
        ...
