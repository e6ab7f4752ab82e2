"""
Health endpoints: process liveness, the chat-completion deployment and the database.
"""
import logging

from fastapi import APIRouter, Depends
from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from meeting_tracker.core.config import settings
from meeting_tracker.core.deps import get_db
from meeting_tracker.services.llm_client import get_llm_client

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/health", tags=["health"])


def _database_status(db: Session) -> dict:
    try:
        db.execute(text("SELECT 1"))
    except SQLAlchemyError as e:
        logger.warning(f"Database health check failed: {e}")
        return {"status": "unhealthy", "error": str(e.__class__.__name__)}
    return {"status": "healthy"}


@router.get("")
async def health_check():
    return {"status": "ok", "service": settings.PROJECT_NAME}


@router.get("/llm")
async def llm_health_check():
    """Check the configured deployment with a one-token completion."""
    return await get_llm_client().health_check()


@router.get("/full")
async def full_health_check(db: Session = Depends(get_db)):
    """
    Status of every dependency.

    ``status`` is "healthy" only when both the LLM deployment and the
    database answer; otherwise "degraded".
    """
    services = {
        "api": {"status": "healthy"},
        "database": _database_status(db),
        "llm": await get_llm_client().health_check(),
    }
    healthy = all(s.get("status") == "healthy" for s in services.values())

    return {
        "status": "healthy" if healthy else "degraded",
        "services": services,
        "config": {
            "llm_deployment": settings.LLM_DEPLOYMENT,
            "llm_api_version": settings.LLM_API_VERSION,
            "storage_provider": settings.STORAGE_PROVIDER,
            "chunk_size": settings.CHUNK_SIZE,
        },
    }
