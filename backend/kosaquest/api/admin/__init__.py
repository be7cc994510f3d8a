"""Admin API routes. Every route requires the X-Admin-Key header."""
from fastapi import APIRouter, Depends

from kosaquest.api.admin import routes_config, routes_stories
from kosaquest.api.deps import require_admin_key

router = APIRouter(prefix="/admin", dependencies=[Depends(require_admin_key)])

router.include_router(routes_stories.router, prefix="/stories", tags=["admin"])
router.include_router(routes_config.router, tags=["config"])
