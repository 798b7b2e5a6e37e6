"""
Health check endpoints
"""

from fastapi import APIRouter, Request

from app.utils.datetime import utc_now

router = APIRouter()


@router.get("/health")
async def health_check(request: Request):
    """Simple API health check."""
    return {
        "status": "healthy",
        "timestamp": utc_now().isoformat(),
        "service": request.app.state.settings.APP_NAME,
    }
