"""Story catalog domain services."""
import logging
from typing import Any, List, Optional

from pydantic import ValidationError as PydanticValidationError

from kosaquest.domain.catalog.models import Story, StoryStats, Difficulty
from kosaquest.domain.catalog.repositories import StoryRepository
from kosaquest.domain.common.errors import NotFoundError, DomainError, ValidationError

logger = logging.getLogger(__name__)


def validate_story(story: Story) -> None:
    """Check the catalog invariants the quiz pipeline relies on."""
    if story.total_xp < 0:
        raise ValidationError("total_xp must be non-negative")
    seen = set()
    for quiz in story.quizzes:
        if quiz.points <= 0:
            raise ValidationError(f"Question {quiz.question_id} must award positive points")
        if quiz.question_id in seen:
            raise ValidationError(f"Duplicate question_id {quiz.question_id}")
        seen.add(quiz.question_id)
    for page in story.pages:
        if page.page_no < 1:
            raise ValidationError("page_no must start at 1")


def _item_title(item: Any, index: int) -> str:
    if isinstance(item, dict) and item.get("title"):
        return str(item["title"])
    return f"Story at index {index}"


class CatalogService:
    """Read access to the story catalog plus structured administration."""

    def __init__(self, story_repo: StoryRepository):
        self.story_repo = story_repo

    async def list_stories(
        self,
        difficulty: Optional[Difficulty] = None,
        language: Optional[str] = None,
    ) -> List[Story]:
        """Active stories, optionally filtered by difficulty and language."""
        return await self.story_repo.list_stories(difficulty=difficulty, language=language)

    async def get_story(self, story_id: str) -> Story:
        """Get an active story or raise NotFoundError."""
        story = await self.story_repo.get_by_story_id(story_id, active_only=True)
        if story is None:
            raise NotFoundError("Story", story_id)
        return story

    async def bulk_upload(self, items: List[Any]) -> tuple[List[str], List[dict]]:
        """Validate and save each story independently.

        Returns (saved story ids, errors). A failing item does not stop the
        rest of the batch; each error names its index and title.
        """
        saved: List[str] = []
        errors: List[dict] = []
        for index, item in enumerate(items):
            try:
                story = item if isinstance(item, Story) else Story.model_validate(item)
                validate_story(story)
                created = await self.story_repo.create(story)
            except PydanticValidationError as e:
                errors.append({"index": index, "story": _item_title(item, index), "error": str(e)})
                continue
            except DomainError as e:
                title = item.title if isinstance(item, Story) else _item_title(item, index)
                errors.append({"index": index, "story": title, "error": str(e)})
                continue
            saved.append(created.story_id)
        logger.info("Bulk upload saved %d of %d stories", len(saved), len(items))
        return saved, errors

    async def delete_story(self, story_id: str) -> Story:
        """Delete a story by catalog id."""
        deleted = await self.story_repo.delete(story_id)
        if deleted is None:
            raise NotFoundError("Story", story_id)
        logger.info("Deleted story %s", story_id)
        return deleted

    async def get_stats(self) -> StoryStats:
        """Catalog statistics."""
        return StoryStats(
            total=await self.story_repo.count(),
            active=await self.story_repo.count(is_active=True),
            inactive=await self.story_repo.count(is_active=False),
            language_distribution=await self.story_repo.count_by("language"),
            difficulty_distribution=await self.story_repo.count_by("difficulty"),
            recent_stories=await self.story_repo.list_recent(10),
        )
