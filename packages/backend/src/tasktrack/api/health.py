"""Health check endpoint."""

from fastapi import APIRouter

router = APIRouter()


@router.get("/healthz")
async def health_check():
    """Liveness probe. The store is in-process, so there is nothing else to check."""
    return {"status": "ok"}
