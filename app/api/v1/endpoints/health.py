from typing import Any, Dict

import structlog
from fastapi import APIRouter, Depends
from sqlalchemy import text
from sqlalchemy.ext.asyncio import AsyncSession

from app.api.deps.database import get_db

logger = structlog.get_logger(__name__)

router = APIRouter()


@router.get("")
async def health_check() -> Dict[str, str]:
    """Liveness probe."""
    return {"status": "ok"}


@router.get("/db")
async def health_check_db(db: AsyncSession = Depends(get_db)) -> Dict[str, Any]:
    """Readiness probe: runs SELECT 1 and reports up or down."""
    try:
        value = (await db.execute(text("SELECT 1"))).scalar_one()
        return {"status": "up", "result": int(value)}
    except Exception as e:
        logger.error("Database health check failed", error=str(e))
        return {"status": "down", "error": str(e)}
