from fastapi import APIRouter

from personalbook import __version__
from personalbook.core.config import settings

router = APIRouter()


@router.get("/health")
async def health_check():
    """Liveness check"""
    return {
        "status": "healthy",
        "app_name": settings.APP_NAME,
        "version": __version__,
        "environment": settings.ENVIRONMENT
    }
