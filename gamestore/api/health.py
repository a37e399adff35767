"""
Liveness and readiness probes.

/ready runs a real query against the catalog, so it fails when the
database is unreachable or its tables were never created.
"""

import logging
from typing import Annotated

from fastapi import APIRouter, Depends, Response, status
from pydantic import BaseModel
from sqlalchemy.ext.asyncio import AsyncSession

from gamestore.config import settings
from gamestore.db.database import get_session
from gamestore.db.operations import count_games

logger = logging.getLogger(__name__)

router = APIRouter(tags=["health"])


class HealthResponse(BaseModel):
    status: str
    service: str = settings.app_name
    database: str | None = None
    catalog_size: int | None = None


@router.get("/health", response_model=HealthResponse)
async def health() -> HealthResponse:
    """The process is up. Storage is not touched."""
    return HealthResponse(status="healthy")


@router.get(
    "/ready",
    response_model=HealthResponse,
    responses={503: {"model": HealthResponse}},
)
async def ready(
    response: Response,
    session: Annotated[AsyncSession, Depends(get_session)],
) -> HealthResponse:
    """Ready to serve: the catalog can be queried. 503 otherwise."""
    try:
        size = await count_games(session)
    except Exception as e:
        logger.warning("READY_CHECK_FAILED error=%s", e)
        response.status_code = status.HTTP_503_SERVICE_UNAVAILABLE
        return HealthResponse(status="not ready", database="disconnected")
    return HealthResponse(status="ready", database="connected", catalog_size=size)
