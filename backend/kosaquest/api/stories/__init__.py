"""Story catalog API routes."""
from fastapi import APIRouter

from kosaquest.api.stories import routes_stories

router = APIRouter()

router.include_router(routes_stories.router, prefix="/stories", tags=["stories"])
