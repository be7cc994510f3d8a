"""NFT badge API routes."""
from fastapi import APIRouter

from kosaquest.api.badges import routes_nft

router = APIRouter()

router.include_router(routes_nft.router, prefix="/nft", tags=["nft"])
