# app/api/v1/endpoints/health.py
import logging

from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse
from redis.exceptions import RedisError
from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from app.core.config import settings
from app.db.session import get_db
from app.workers.queue import get_maintenance_queue, get_redis_connection

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/health", tags=["health"])


def _unavailable(component: str, exc: Exception) -> JSONResponse:
    logger.warning(f"Health check for {component} failed: {exc}")
    return JSONResponse(status_code=503, content={"status": "unavailable", "component": component})


@router.get("/live")
def liveness_probe():
    return {"status": "ok", "service": settings.PROJECT_NAME}


@router.get("/db")
def database_check(db: Session = Depends(get_db)):
    try:
        db.execute(text("SELECT 1"))
    except SQLAlchemyError as e:
        return _unavailable("database", e)
    return {"status": "ok"}


@router.get("/queue")
def queue_check():
    try:
        get_redis_connection().ping()
        pending = len(get_maintenance_queue())
    except RedisError as e:
        return _unavailable("queue", e)
    return {"status": "ok", "pending_jobs": pending}
