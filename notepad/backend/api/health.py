"""
Health Check Endpoints.

Mounted at the root, outside the /api prefix:

    GET /health        liveness, never touches the database
    GET /health/ready  readiness: SQLite answers and the notepad tables exist

A failed readiness check answers 503 with the same body shape under
FastAPI's "detail" key, so callers can show which check failed.
"""

import time
from typing import Any

from fastapi import APIRouter, HTTPException
from sqlalchemy import func, select, text
from sqlalchemy.exc import SQLAlchemyError

from notepad.backend.core.dependencies import DbSession
from notepad.backend.core.logging import get_logger
from notepad.backend.core.utils import utc_now
from notepad.backend.models import Category, Note

router = APIRouter()
logger = get_logger(__name__)


async def check_database(db: DbSession) -> dict[str, Any]:
    """Round-trip a trivial query and report its latency."""
    started = time.perf_counter()
    try:
        await db.execute(text("SELECT 1"))
    except SQLAlchemyError as e:
        logger.warning("Database health check failed", extra={"error": str(e)})
        return {"status": "unhealthy", "error": str(e)}

    return {
        "status": "healthy",
        "latency_ms": int((time.perf_counter() - started) * 1000),
    }


async def check_storage(db: DbSession) -> dict[str, Any]:
    """Count categories and notes, which fails if the schema is missing."""
    try:
        categories = (await db.execute(select(func.count()).select_from(Category))).scalar_one()
        notes = (await db.execute(select(func.count()).select_from(Note))).scalar_one()
    except SQLAlchemyError as e:
        logger.warning("Storage health check failed", extra={"error": str(e)})
        return {"status": "unhealthy", "error": str(e)}

    return {"status": "healthy", "categories": categories, "notes": notes}


@router.get("/health")
async def health_check() -> dict[str, str]:
    """Liveness check. Returns 200 while the process is up."""
    return {"status": "healthy"}


@router.get("/health/ready")
async def readiness_check(db: DbSession) -> dict[str, Any]:
    """Readiness check. 200 when every check is healthy, 503 otherwise."""
    checks = {"database": await check_database(db)}
    if checks["database"]["status"] == "healthy":
        checks["storage"] = await check_storage(db)

    healthy = all(check["status"] == "healthy" for check in checks.values())
    body = {
        "status": "healthy" if healthy else "unhealthy",
        "checks": checks,
        "timestamp": utc_now().isoformat(),
    }

    if not healthy:
        logger.warning("Readiness check failed", extra={"checks": checks})
        raise HTTPException(status_code=503, detail=body)
    return body
