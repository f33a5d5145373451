"""
Health check routes for project service
"""

from datetime import datetime, timezone

from fastapi import APIRouter, HTTPException, Request
import structlog

from projecthub.utils.dependencies import DatabaseDep

logger = structlog.get_logger(__name__)

router = APIRouter()


@router.get("/health")
async def health_check(request: Request):
    """Health check endpoint"""
    config = request.app.state.app_config
    return {
        "service": config.service_name,
        "status": "healthy",
        "timestamp": datetime.now(timezone.utc).isoformat(),
        "storage": config.storage_backend,
        "version": config.service_version,
    }


@router.get("/health/database")
async def database_health_check(db: DatabaseDep):
    """Storage connection health check"""
    try:
        await db.ping()
        return {
            "status": "healthy",
            "database": "connected",
            "test_query": "passed",
        }
    except Exception as e:
        logger.error("Database health check failed", error=str(e))
        raise HTTPException(status_code=503, detail="Database connection failed")
