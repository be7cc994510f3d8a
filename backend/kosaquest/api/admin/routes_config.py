"""Config reload (config file master over env)."""
import logging

from fastapi import APIRouter, HTTPException, status
from pydantic import ValidationError

from kosaquest.settings import get_config_store

logger = logging.getLogger(__name__)

router = APIRouter()


@router.post("/config/reload", status_code=status.HTTP_200_OK)
async def reload_config():
    """Re-read the config file. Invalid values keep the previous config."""
    try:
        get_config_store().reload_from_file()
    except ValidationError as e:
        logger.warning("Config reload rejected: %s", e)
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=f"Config reload failed: {e.error_count()} invalid value(s)",
        )
    return {"ok": True, "message": "Config reloaded from file"}
