"""Health check endpoints."""

from fastapi import APIRouter

from ..core.config import settings

router = APIRouter()


@router.get("/health")
async def health() -> dict[str, str]:
    """Return service health and the configured timezone."""
    return {"status": "ok", "tz": settings.TZ}
