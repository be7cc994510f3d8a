"""Badge domain services."""
import asyncio
import logging
from typing import List

from kosaquest.domain.accounts.services import UserRepository
from kosaquest.domain.badges.catalog import BADGE_CATALOG, lookup_badge
from kosaquest.domain.badges.minter import BadgeMinter, MintingError
from kosaquest.domain.badges.models import BadgeRecord, Eligibility, EligibleBadge
from kosaquest.domain.badges.repositories import BadgeRepository
from kosaquest.domain.common.errors import (
    AlreadyMintedError,
    InsufficientXPError,
    InvalidBadgeTypeError,
    MintingFailedError,
    NotFoundError,
)
from kosaquest.domain.common.types import generate_id, utcnow

logger = logging.getLogger(__name__)


class BadgeService:
    """Badge eligibility and minting."""

    def __init__(
        self,
        badge_repo: BadgeRepository,
        user_repo: UserRepository,
        minter: BadgeMinter,
        mint_timeout_s: float = 30.0,
    ):
        self.badge_repo = badge_repo
        self.user_repo = user_repo
        self.minter = minter
        self.mint_timeout_s = mint_timeout_s

    async def _user_xp(self, user_id: str) -> int:
        xp = await self.user_repo.get_xp(user_id)
        if xp is None:
            raise NotFoundError("User", user_id)
        return xp

    async def check_eligibility(self, user_id: str) -> Eligibility:
        """Badges the user qualifies for and has not minted yet, in catalog order."""
        user_xp = await self._user_xp(user_id)
        owned = {badge.badge_type for badge in await self.badge_repo.list_for_user(user_id)}
        eligible = [
            EligibleBadge.from_definition(definition)
            for badge_type, definition in BADGE_CATALOG.items()
            if badge_type not in owned and user_xp >= definition.xp_required
        ]
        return Eligibility(eligible_badges=eligible, user_xp=user_xp)

    async def mint(self, user_id: str, badge_type: str) -> BadgeRecord:
        """Mint a badge for the user.

        Raises:
            InvalidBadgeTypeError: unknown badge type.
            AlreadyMintedError: the user already holds this badge.
            InsufficientXPError: XP below the badge threshold.
            MintingFailedError: the minter failed or timed out; nothing recorded.
        """
        definition = lookup_badge(badge_type)
        if definition is None:
            raise InvalidBadgeTypeError(badge_type)

        existing = await self.badge_repo.get(user_id, definition.type)
        if existing is not None:
            logger.warning("User %s already holds badge %s", user_id, definition.type.value)
            raise AlreadyMintedError(definition.type.value, existing.badge_link, existing.tx_hash)

        user_xp = await self._user_xp(user_id)
        if user_xp < definition.xp_required:
            raise InsufficientXPError(definition.xp_required, user_xp)

        metadata = {
            "name": definition.name,
            "description": definition.description,
            "image": definition.image_url,
            "xp_required": definition.xp_required,
        }
        try:
            receipt = await asyncio.wait_for(
                self.minter.mint(user_id, definition.type.value, metadata),
                timeout=self.mint_timeout_s,
            )
        except asyncio.TimeoutError:
            logger.error("Minting %s for user %s timed out after %.1fs", definition.type.value, user_id, self.mint_timeout_s)
            raise MintingFailedError(definition.type.value, "timeout")
        except MintingError as e:
            logger.error("Minting %s for user %s failed: %s", definition.type.value, user_id, e)
            raise MintingFailedError(definition.type.value, str(e)) from e
        except Exception as e:
            # Vendor SDKs raise their own types; every minter failure is retryable.
            logger.exception("Minter raised unexpectedly for %s / user %s", definition.type.value, user_id)
            raise MintingFailedError(definition.type.value, str(e)) from e

        badge = await self.badge_repo.create(
            BadgeRecord(
                id=generate_id(),
                user_id=user_id,
                badge_type=definition.type,
                badge_name=definition.name,
                description=definition.description,
                image_url=definition.image_url,
                badge_link=receipt.link,
                tx_hash=receipt.tx_reference,
                xp_required=definition.xp_required,
                issued_at=utcnow(),
            )
        )
        logger.info("Minted badge %s for user %s (tx %s)", definition.type.value, user_id, receipt.tx_reference)
        return badge

    async def list_badges(self, user_id: str) -> List[BadgeRecord]:
        """The user's badges, newest first."""
        return await self.badge_repo.list_for_user(user_id)
