"""Health check endpoints."""

from typing import Dict

from fastapi import APIRouter

from ...domain.models.rating import utcnow

router = APIRouter(tags=["health"])


@router.get("/health")
async def health_check() -> Dict[str, str]:
    """Report that the service is up.

    Returns:
        Status and current server time
    """
    return {"status": "OK", "timestamp": utcnow().isoformat()}
