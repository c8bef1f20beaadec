"""Health check route"""

from fastapi import APIRouter

from contract_manager import __version__
from contract_manager.api.schemas import HealthResponse

router = APIRouter()


@router.get("/api/health", response_model=HealthResponse)
async def health():
    """Health check endpoint"""
    try:
        from contract_manager.utils.config import get_settings
        db_mode = get_settings().db_mode
        status = "ok"
    except Exception:
        db_mode = "unknown"
        status = "error"

    return HealthResponse(status=status, db_mode=db_mode, version=__version__)
