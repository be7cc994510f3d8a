"""Authentication API routes."""
from fastapi import APIRouter

from kosaquest.api.auth import routes_auth

router = APIRouter()

router.include_router(routes_auth.router, prefix="/auth", tags=["auth"])
