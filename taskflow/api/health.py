"""Health check endpoints"""

from datetime import datetime
from fastapi import APIRouter, Depends, status
from fastapi.responses import JSONResponse
from sqlalchemy import text
from sqlalchemy.ext.asyncio import AsyncSession

from taskflow.config import settings
from taskflow.database import get_db

router = APIRouter(tags=["Health"])


@router.get("/health", status_code=status.HTTP_200_OK)
async def basic_health_check():
    """
    Basic health check endpoint (no authentication required)

    Returns simple health status and timestamp
    """
    return {
        "status": "ok",
        "timestamp": datetime.utcnow().isoformat() + "Z",
        "service": settings.service_name,
    }


@router.get("/api/health", status_code=status.HTTP_200_OK)
async def detailed_health_check(db: AsyncSession = Depends(get_db)):
    """
    Health check including database connectivity (no authentication required)

    Returns 503 when the database cannot be reached
    """
    services = {}
    overall_status = "ok"

    try:
        result = await db.execute(text("SELECT 1"))
        result.scalar_one()
        services["database"] = "connected"
    except Exception as e:
        services["database"] = f"disconnected: {e.__class__.__name__}"
        overall_status = "degraded"

    body = {
        "status": overall_status,
        "timestamp": datetime.utcnow().isoformat() + "Z",
        "service": settings.service_name,
        "services": services,
    }
    if overall_status != "ok":
        return JSONResponse(status_code=status.HTTP_503_SERVICE_UNAVAILABLE, content=body)
    return body
