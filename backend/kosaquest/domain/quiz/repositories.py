"""Quiz repository protocols."""
from typing import Protocol, Optional, List

from kosaquest.domain.quiz.models import ProgressRecord


class ProgressRepository(Protocol):
    """Progress ledger: at most one record per (user, story)."""

    async def record_completion(self, record: ProgressRecord) -> ProgressRecord:
        """Persist a completion record.

        Raises DuplicateCompletionError when (user_id, story_id) already has
        one. The unique index decides races; the loser sees the same error.
        """
        ...

    async def has_completed(self, user_id: str, story_id: str) -> bool:
        """True when a completion record exists for the pair."""
        ...

    async def get(self, user_id: str, story_id: str) -> Optional[ProgressRecord]:
        """Get the completion record for a pair."""
        ...

    async def list_for_user(self, user_id: str) -> List[ProgressRecord]:
        """All completion records of a user, newest first."""
        ...

    async def count_for_user(self, user_id: str) -> int:
        """Number of stories a user has completed."""
        ...

    async def list_uncredited(self, user_id: str) -> List[ProgressRecord]:
        """Completion records with no matching XP credit."""
        ...


class XPLedgerRepository(Protocol):
    """Credits XP to user balances, once per completion record."""

    async def credit(self, user_id: str, progress_id: str, amount: int) -> tuple[bool, int]:
        """Add ``amount`` to the user's XP, keyed by ``progress_id``.

        Returns (credited, balance). ``credited`` is False when the progress
        record had already been credited; the balance is then unchanged.
        """
        ...

    async def is_credited(self, progress_id: str) -> bool:
        """True when the completion record's XP has been applied."""
        ...
