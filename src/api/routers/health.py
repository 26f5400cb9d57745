"""Liveness probe. Needs no token so load balancers can call it."""
import logging
from typing import Literal

from fastapi import APIRouter, Depends
from pydantic import BaseModel
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from api import __version__
from db.session import get_async_session

logger = logging.getLogger(__name__)

router = APIRouter(tags=["health"])


class HealthResponse(BaseModel):
    """Overall status plus the state of the bookmark store."""

    status: Literal["healthy", "degraded"]
    database: Literal["healthy", "unhealthy"]
    version: str = __version__


async def _database_reachable(db: AsyncSession) -> bool:
    try:
        return await db.scalar(select(1)) == 1
    except Exception:
        logger.exception("Database health check failed")
        return False


@router.get("/health", response_model=HealthResponse)
async def health_check(
    db: AsyncSession = Depends(get_async_session),
) -> HealthResponse:
    """Always 200; a broken database shows up as status=degraded."""
    if await _database_reachable(db):
        return HealthResponse(status="healthy", database="healthy")
    return HealthResponse(status="degraded", database="unhealthy")
