"""Tests for badge eligibility and minting."""
import pytest

from kosaquest.domain.badges.catalog import BADGE_CATALOG, BadgeType, lookup_badge
from kosaquest.domain.badges.services import BadgeService
from kosaquest.domain.common.errors import (
    AlreadyMintedError,
    InsufficientXPError,
    InvalidBadgeTypeError,
    MintingFailedError,
    NotFoundError,
)
from kosaquest.domain.common.types import generate_id, utcnow
from kosaquest.domain.badges.models import BadgeRecord
from kosaquest.domain.quiz.models import SubmittedResponse
from kosaquest.infra.db.repositories.badge_repo import BadgeRepositoryImpl
from kosaquest.infra.db.repositories.user_repo import UserRepositoryImpl

from helpers import FakeMinter, build_quiz_service


def build_badge_service(session, minter=None, timeout: float = 5.0) -> BadgeService:
    return BadgeService(
        badge_repo=BadgeRepositoryImpl(session),
        user_repo=UserRepositoryImpl(session),
        minter=minter or FakeMinter(),
        mint_timeout_s=timeout,
    )


class TestBadgeCatalog:
    def test_catalog_order_and_thresholds(self):
        assert [(t.value, d.xp_required) for t, d in BADGE_CATALOG.items()] == [
            ("proverb_apprentice", 1),
            ("story_master", 500),
            ("quiz_champion", 250),
            ("language_explorer", 1000),
        ]

    def test_catalog_is_read_only(self):
        with pytest.raises(TypeError):
            BADGE_CATALOG[BadgeType.STORY_MASTER] = BADGE_CATALOG[BadgeType.PROVERB_APPRENTICE]

    def test_lookup(self):
        assert lookup_badge("quiz_champion").name == "Quiz Champion"
        assert lookup_badge("dragon_slayer") is None


class TestEligibility:
    async def test_zero_xp_user_is_not_eligible_until_completion(self, db_session, create_user, add_story):
        user = await create_user()
        await add_story()
        service = build_badge_service(db_session)

        before = await service.check_eligibility(user.id)
        assert before.user_xp == 0
        assert before.eligible_badges == []

        await build_quiz_service(db_session).submit_quiz(
            user.id,
            "001",
            [SubmittedResponse("q1", "Ijapa"), SubmittedResponse("q2", "Wisdom")],
        )
        after = await service.check_eligibility(user.id)
        assert after.user_xp == 54
        assert [b.type for b in after.eligible_badges] == [BadgeType.PROVERB_APPRENTICE]

    async def test_thresholds_are_inclusive_and_in_catalog_order(self, db_session, create_user):
        user = await create_user(xp=500)
        eligibility = await build_badge_service(db_session).check_eligibility(user.id)
        assert [b.type.value for b in eligibility.eligible_badges] == [
            "proverb_apprentice",
            "story_master",
            "quiz_champion",
        ]

    async def test_owned_badges_are_excluded(self, db_session, create_user):
        user = await create_user(xp=300)
        service = build_badge_service(db_session)
        await service.mint(user.id, "proverb_apprentice")
        eligibility = await service.check_eligibility(user.id)
        assert [b.type.value for b in eligibility.eligible_badges] == ["quiz_champion"]

    async def test_unknown_user(self, db_session):
        with pytest.raises(NotFoundError):
            await build_badge_service(db_session).check_eligibility("nobody")


class TestMint:
    async def test_mint_records_badge(self, db_session, create_user):
        user = await create_user(xp=54)
        minter = FakeMinter()
        badge = await build_badge_service(db_session, minter).mint(user.id, "proverb_apprentice")

        assert badge.badge_type == BadgeType.PROVERB_APPRENTICE
        assert badge.badge_name == "Proverb Apprentice"
        assert badge.xp_required == 1
        assert badge.badge_link == f"https://mint.test/proverb_apprentice-{user.id}"
        assert badge.tx_hash.startswith("0x")
        assert len(minter.calls) == 1
        recipient, badge_type, metadata = minter.calls[0]
        assert (recipient, badge_type) == (user.id, "proverb_apprentice")
        assert metadata["xp_required"] == 1

    async def test_xp_is_not_spent(self, db_session, create_user):
        user = await create_user(xp=54)
        await build_badge_service(db_session).mint(user.id, "proverb_apprentice")
        assert await UserRepositoryImpl(db_session).get_xp(user.id) == 54

    async def test_second_mint_conflicts_with_existing_reference(self, db_session, create_user):
        user = await create_user(xp=54)
        minter = FakeMinter()
        service = build_badge_service(db_session, minter)
        first = await service.mint(user.id, "proverb_apprentice")

        with pytest.raises(AlreadyMintedError) as exc_info:
            await service.mint(user.id, "proverb_apprentice")
        assert exc_info.value.existing == {"badge_link": first.badge_link, "tx_hash": first.tx_hash}
        assert len(minter.calls) == 1

    async def test_insufficient_xp(self, db_session, create_user):
        user = await create_user(xp=249)
        minter = FakeMinter()
        with pytest.raises(InsufficientXPError) as exc_info:
            await build_badge_service(db_session, minter).mint(user.id, "quiz_champion")
        assert str(exc_info.value) == "Insufficient XP. Required: 250, Current: 249"
        assert minter.calls == []

    async def test_invalid_badge_type(self, db_session, create_user):
        user = await create_user(xp=5000)
        with pytest.raises(InvalidBadgeTypeError):
            await build_badge_service(db_session).mint(user.id, "dragon_slayer")

    async def test_minter_failure_records_nothing(self, db_session, create_user):
        user = await create_user(xp=54)
        service = build_badge_service(db_session, FakeMinter(fail=True))
        with pytest.raises(MintingFailedError):
            await service.mint(user.id, "proverb_apprentice")
        assert await service.list_badges(user.id) == []
        eligibility = await service.check_eligibility(user.id)
        assert [b.type.value for b in eligibility.eligible_badges] == ["proverb_apprentice"]

    async def test_unexpected_minter_exception_is_minting_failure(self, db_session, create_user):
        class ExplodingMinter:
            async def mint(self, recipient, badge_type, metadata):
                raise RuntimeError("sdk exploded")

        user = await create_user(xp=10)
        service = build_badge_service(db_session, ExplodingMinter())
        with pytest.raises(MintingFailedError) as exc_info:
            await service.mint(user.id, "proverb_apprentice")
        assert isinstance(exc_info.value.__cause__, RuntimeError)
        assert await service.list_badges(user.id) == []

    async def test_minter_timeout_records_nothing(self, db_session, create_user):
        user = await create_user(xp=54)
        service = build_badge_service(db_session, FakeMinter(delay=1.0), timeout=0.05)
        with pytest.raises(MintingFailedError):
            await service.mint(user.id, "proverb_apprentice")
        assert await service.list_badges(user.id) == []

    async def test_list_badges_newest_first(self, db_session, create_user):
        user = await create_user(xp=300)
        service = build_badge_service(db_session)
        await service.mint(user.id, "proverb_apprentice")
        await service.mint(user.id, "quiz_champion")
        badges = await service.list_badges(user.id)
        assert [b.badge_type.value for b in badges] == ["quiz_champion", "proverb_apprentice"]


class TestBadgeRepository:
    async def test_racing_insert_reports_existing_badge(self, db_session, create_user):
        user = await create_user()
        repo = BadgeRepositoryImpl(db_session)

        def record(tx: str) -> BadgeRecord:
            return BadgeRecord(
                id=generate_id(),
                user_id=user.id,
                badge_type=BadgeType.PROVERB_APPRENTICE,
                badge_name="Proverb Apprentice",
                description="d",
                image_url="https://example.com/a.png",
                badge_link="https://mint.test/a",
                tx_hash=tx,
                xp_required=1,
                issued_at=utcnow(),
            )

        await repo.create(record("0xfirst"))
        with pytest.raises(AlreadyMintedError) as exc_info:
            await repo.create(record("0xsecond"))
        assert exc_info.value.existing["tx_hash"] == "0xfirst"
        assert len(await repo.list_for_user(user.id)) == 1
