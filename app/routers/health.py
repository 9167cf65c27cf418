"""
ヘルスチェック API
"""
import logging
import time
from datetime import datetime, timezone

from fastapi import APIRouter, Depends, status
from fastapi.responses import JSONResponse
from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from app.config import settings
from app.database import get_db

logger = logging.getLogger(__name__)

router = APIRouter(tags=["Health"])

_started_at = time.monotonic()


def _base_status() -> dict:
    return {
        "status": "ok",
        "timestamp": datetime.now(timezone.utc).isoformat(),
        "uptime": round(time.monotonic() - _started_at, 3),
        "environment": settings.ENV,
    }


@router.get("/health")
def health_check():
    """簡易ヘルスチェック（DBには接続しない）"""
    return _base_status()


@router.get("/health/detailed")
def detailed_health_check(db: Session = Depends(get_db)):
    """DB接続を含むヘルスチェック（DBに接続できない場合は 503）"""
    body = _base_status()
    try:
        started = time.perf_counter()
        db.execute(text("SELECT 1"))
        database = {
            "status": "connected",
            "responseTimeMs": round((time.perf_counter() - started) * 1000, 2),
        }
    except SQLAlchemyError as e:
        logger.error(f"Database health check failed: {e}")
        database = {"status": "disconnected"}

    healthy = database["status"] == "connected"
    body["status"] = "ok" if healthy else "degraded"
    body["services"] = {"database": database}
    return JSONResponse(
        status_code=status.HTTP_200_OK if healthy else status.HTTP_503_SERVICE_UNAVAILABLE,
        content=body,
    )
