# app/main.py
import logging

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from sqlalchemy.exc import SQLAlchemyError

from app.core.config import settings
from app.core.exceptions import ForumError
from app.core.logging_config import setup_logging
from app.db.base import Base
from app.db.session import engine
from app.api.v1.endpoints import admin, answers, auth, colleges, health, questions, users
from app import models  # noqa

setup_logging()
logger = logging.getLogger(__name__)

app = FastAPI(title=settings.PROJECT_NAME)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.BACKEND_CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.on_event("startup")
def on_startup():
    Base.metadata.create_all(bind=engine)
    logger.info(f"{settings.PROJECT_NAME} started")


@app.exception_handler(ForumError)
async def forum_error_handler(request: Request, exc: ForumError):
    logger.info(f"{request.method} {request.url.path} rejected: {exc.message}")
    return JSONResponse(status_code=exc.status_code, content={"detail": exc.message})


@app.exception_handler(SQLAlchemyError)
async def database_error_handler(request: Request, exc: SQLAlchemyError):
    logger.error(f"Database error on {request.method} {request.url.path}: {exc}", exc_info=exc)
    return JSONResponse(status_code=500, content={"detail": "Server error"})


prefix = settings.API_V1_PREFIX
app.include_router(auth.router, prefix=f"{prefix}/auth", tags=["auth"])
app.include_router(users.router, prefix=prefix)
app.include_router(colleges.router, prefix=prefix)
app.include_router(questions.router, prefix=prefix)
app.include_router(answers.router, prefix=prefix)
app.include_router(admin.router, prefix=prefix)
app.include_router(health.router, prefix=prefix)
