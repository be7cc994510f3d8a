"""Story catalog repository implementation."""
from typing import Optional, List
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy import select, func, delete
from sqlalchemy.exc import IntegrityError

from kosaquest.domain.catalog.models import Story, Difficulty
from kosaquest.domain.catalog.repositories import StoryRepository
from kosaquest.domain.common.errors import ConflictError
from kosaquest.infra.db.models.story import StoryModel

_GROUPABLE = {
    "language": StoryModel.language,
    "difficulty": StoryModel.difficulty,
}


class StoryRepositoryImpl(StoryRepository):
    """Story repository implementation."""

    def __init__(self, session: AsyncSession):
        self.session = session

    async def get_by_story_id(self, story_id: str, active_only: bool = True) -> Optional[Story]:
        stmt = select(StoryModel).where(StoryModel.story_id == story_id)
        if active_only:
            stmt = stmt.where(StoryModel.is_active.is_(True))
        result = await self.session.execute(stmt)
        model = result.scalar_one_or_none()
        return model.to_entity() if model else None

    async def list_stories(
        self,
        difficulty: Optional[Difficulty] = None,
        language: Optional[str] = None,
        active_only: bool = True,
    ) -> List[Story]:
        stmt = select(StoryModel)
        if active_only:
            stmt = stmt.where(StoryModel.is_active.is_(True))
        if difficulty is not None:
            stmt = stmt.where(StoryModel.difficulty == Difficulty(difficulty).value)
        if language:
            stmt = stmt.where(StoryModel.language == language)
        stmt = stmt.order_by(StoryModel.created_at.desc(), StoryModel.id.desc())
        result = await self.session.execute(stmt)
        return [m.to_entity() for m in result.scalars().all()]

    async def create(self, story: Story) -> Story:
        existing = await self.session.execute(
            select(StoryModel.id).where(StoryModel.story_id == story.story_id)
        )
        if existing.scalar_one_or_none() is not None:
            raise ConflictError(f"Story with id {story.story_id} already exists")
        model = StoryModel.from_entity(story)
        self.session.add(model)
        try:
            await self.session.commit()
        except IntegrityError as e:
            await self.session.rollback()
            raise ConflictError(f"Story with id {story.story_id} already exists") from e
        await self.session.refresh(model)
        return model.to_entity()

    async def delete(self, story_id: str) -> Optional[Story]:
        result = await self.session.execute(select(StoryModel).where(StoryModel.story_id == story_id))
        model = result.scalar_one_or_none()
        if model is None:
            return None
        entity = model.to_entity()
        await self.session.execute(delete(StoryModel).where(StoryModel.id == model.id))
        await self.session.commit()
        return entity

    async def count(self, is_active: Optional[bool] = None) -> int:
        stmt = select(func.count(StoryModel.id))
        if is_active is not None:
            stmt = stmt.where(StoryModel.is_active.is_(is_active))
        result = await self.session.execute(stmt)
        return int(result.scalar_one() or 0)

    async def count_by(self, column: str) -> dict[str, int]:
        col = _GROUPABLE.get(column)
        if col is None:
            raise ValueError(f"Cannot group stories by {column!r}")
        result = await self.session.execute(
            select(col, func.count(StoryModel.id)).group_by(col).order_by(func.count(StoryModel.id).desc())
        )
        return {key: int(n) for key, n in result.all()}

    async def list_recent(self, limit: int = 10) -> List[Story]:
        result = await self.session.execute(
            select(StoryModel).order_by(StoryModel.created_at.desc(), StoryModel.id.desc()).limit(limit)
        )
        return [m.to_entity() for m in result.scalars().all()]
