"""Story catalog repository protocols."""
from typing import Protocol, Optional, List

from kosaquest.domain.catalog.models import Story, Difficulty


class StoryRepository(Protocol):
    """Repository protocol for stories."""

    async def get_by_story_id(self, story_id: str, active_only: bool = True) -> Optional[Story]:
        """Get a story by its catalog identifier."""
        ...

    async def list_stories(
        self,
        difficulty: Optional[Difficulty] = None,
        language: Optional[str] = None,
        active_only: bool = True,
    ) -> List[Story]:
        """List stories, optionally filtered."""
        ...

    async def create(self, story: Story) -> Story:
        """Create a story. Raises ConflictError when story_id is taken."""
        ...

    async def delete(self, story_id: str) -> Optional[Story]:
        """Delete a story, returning what was deleted."""
        ...

    async def count(self, is_active: Optional[bool] = None) -> int:
        """Count stories, optionally by active flag."""
        ...

    async def count_by(self, column: str) -> dict[str, int]:
        """Count stories grouped by 'language' or 'difficulty'."""
        ...

    async def list_recent(self, limit: int = 10) -> List[Story]:
        """Most recently created stories."""
        ...
