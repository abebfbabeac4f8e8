from __future__ import annotations

import time
from datetime import datetime, timezone

from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse, Response
from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from agentsflow.config import Settings, get_settings
from agentsflow.db import get_db

router = APIRouter(prefix="/api", tags=["Health"])

NO_CACHE_HEADERS = {
    "Cache-Control": "no-cache, no-store, must-revalidate",
    "Pragma": "no-cache",
    "Expires": "0",
}

_started_at = time.monotonic()


@router.get("/health")
async def health(
    db: AsyncSession = Depends(get_db),
    settings: Settings = Depends(get_settings),
) -> JSONResponse:
    try:
        await db.execute(text("SELECT 1"))
        database = {"status": "connected"}
    except (SQLAlchemyError, OSError) as exc:
        database = {"status": "disconnected", "error": str(exc)}

    healthy = database["status"] == "connected"
    payload = {
        "status": "healthy" if healthy else "unhealthy",
        "timestamp": datetime.now(timezone.utc).isoformat(),
        "uptime": round(time.monotonic() - _started_at, 3),
        "version": settings.APP_VERSION,
        "environment": settings.ENVIRONMENT,
        "database": database,
    }
    return JSONResponse(
        content=payload,
        status_code=200 if healthy else 503,
        headers=NO_CACHE_HEADERS,
    )


@router.head("/health")
async def health_head() -> Response:
    return Response(status_code=200, headers={"Cache-Control": NO_CACHE_HEADERS["Cache-Control"]})
