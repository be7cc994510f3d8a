"""Story catalog routes."""
from typing import Optional
from fastapi import APIRouter, Depends, Query

from kosaquest.api.deps import get_catalog_service
from kosaquest.api.stories.schemas import StoryDetail, StoryListResponse, StorySummary
from kosaquest.domain.catalog.models import Difficulty
from kosaquest.domain.catalog.services import CatalogService

router = APIRouter()


@router.get("", response_model=StoryListResponse)
async def list_stories(
    difficulty: Optional[Difficulty] = Query(default=None),
    language: Optional[str] = Query(default=None),
    catalog: CatalogService = Depends(get_catalog_service),
):
    """Active stories, optionally filtered."""
    stories = await catalog.list_stories(difficulty=difficulty, language=language)
    return StoryListResponse(
        stories=[StorySummary.from_story(s) for s in stories],
        count=len(stories),
    )


@router.get("/{story_id}", response_model=StoryDetail)
async def get_story(
    story_id: str,
    catalog: CatalogService = Depends(get_catalog_service),
):
    """Story pages and quiz questions."""
    story = await catalog.get_story(story_id)
    return StoryDetail.from_story(story)
