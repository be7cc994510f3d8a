"""Story administration routes."""
import logging
from typing import Any, List, Optional
from fastapi import APIRouter, Depends, status
from pydantic import BaseModel

from kosaquest.api.deps import get_catalog_service
from kosaquest.api.stories.schemas import StorySummary
from kosaquest.domain.catalog.services import CatalogService

logger = logging.getLogger(__name__)

router = APIRouter()


class BulkUploadRequest(BaseModel):
    """Stories to import. Items are validated one by one."""
    stories: List[Any]


class BulkUploadError(BaseModel):
    index: int
    story: str
    error: str


class BulkUploadResponse(BaseModel):
    message: str
    successful_uploads: int
    total_attempted: int
    processed_stories: List[str]
    errors: Optional[List[BulkUploadError]] = None


class StoryStatsResponse(BaseModel):
    total: int
    active: int
    inactive: int
    language_distribution: dict[str, int]
    difficulty_distribution: dict[str, int]
    recent_stories: List[StorySummary]


@router.post("/bulk-upload", response_model=BulkUploadResponse, status_code=status.HTTP_201_CREATED)
async def bulk_upload(
    request: BulkUploadRequest,
    catalog: CatalogService = Depends(get_catalog_service),
):
    """Import stories; invalid or colliding items are reported by index."""
    saved, errors = await catalog.bulk_upload(request.stories)
    if errors:
        logger.warning("Bulk upload rejected %d of %d stories", len(errors), len(request.stories))
    return BulkUploadResponse(
        message="Bulk upload completed",
        successful_uploads=len(saved),
        total_attempted=len(request.stories),
        processed_stories=saved,
        errors=[BulkUploadError(**e) for e in errors] or None,
    )


@router.get("/stats", response_model=StoryStatsResponse)
async def story_stats(catalog: CatalogService = Depends(get_catalog_service)):
    """Catalog totals and distributions."""
    stats = await catalog.get_stats()
    return StoryStatsResponse(
        total=stats.total,
        active=stats.active,
        inactive=stats.inactive,
        language_distribution=stats.language_distribution,
        difficulty_distribution=stats.difficulty_distribution,
        recent_stories=[StorySummary.from_story(s) for s in stats.recent_stories],
    )


@router.delete("/{story_id}", response_model=StorySummary)
async def delete_story(
    story_id: str,
    catalog: CatalogService = Depends(get_catalog_service),
):
    """Delete a story from the catalog."""
    deleted = await catalog.delete_story(story_id)
    return StorySummary.from_story(deleted)
