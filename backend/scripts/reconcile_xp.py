#!/usr/bin/env python3
"""Credit XP for completion records whose balance update never landed.

Usage:
    python scripts/reconcile_xp.py            # every user with completions
    python scripts/reconcile_xp.py <user_id>  # a single user

Exit 0 when nothing needed repair or every repair succeeded.
"""
import asyncio
import sys
from pathlib import Path

sys.path.insert(0, str(Path(__file__).parent.parent))

from sqlalchemy import select

from kosaquest.domain.quiz.services import XPAccountingService
from kosaquest.infra.db.base import build_engine, build_session_factory
from kosaquest.infra.db.models.progress import UserProgressModel
from kosaquest.infra.db.repositories.progress_repo import ProgressRepositoryImpl, XPLedgerRepositoryImpl
from kosaquest.settings import settings


async def reconcile(user_ids: list[str] | None = None) -> int:
    """Reconcile the given users (or all users with completions). Returns repaired count."""
    engine = build_engine(settings.database_url, echo=False)
    session_factory = build_session_factory(engine)
    repaired = 0

    async with session_factory() as session:
        if not user_ids:
            result = await session.execute(select(UserProgressModel.user_id).distinct())
            user_ids = [row[0] for row in result.all()]
        accounting = XPAccountingService(ProgressRepositoryImpl(session), XPLedgerRepositoryImpl(session))
        for user_id in user_ids:
            fixed = await accounting.reconcile(user_id)
            if fixed:
                print(f"  {user_id}: credited {len(fixed)} completion(s)")
            repaired += len(fixed)
    await engine.dispose()

    print(f"Reconciled {repaired} completion(s) across {len(user_ids)} user(s).")
    return repaired


if __name__ == "__main__":
    asyncio.run(reconcile(sys.argv[1:] or None))
    sys.exit(0)
