"""
Service-level routes (health check).
"""

from __future__ import annotations

from datetime import datetime, timezone

from fastapi import APIRouter

from utils.schemas import HealthResponse

router = APIRouter(tags=["health"])


@router.get("/health", response_model=HealthResponse)
async def health() -> HealthResponse:
    return HealthResponse(
        message="Backend is running",
        timestamp=datetime.now(timezone.utc).isoformat(),
    )
