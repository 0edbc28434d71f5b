import logging
from contextlib import asynccontextmanager
from pathlib import Path
from typing import Type

import uvicorn
from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import ORJSONResponse
from fastapi.staticfiles import StaticFiles

from format_api.core.config import settings
from format_api.core.database import init_db
from format_api.routers.comment_router import router as comment_router
from format_api.routers.community_router import router as community_router
from format_api.routers.like_router import router as like_router
from format_api.routers.post_router import router as post_router
from format_api.routers.subscription_router import router as subscription_router
from format_api.routers.topic_router import router as topic_router
from format_api.routers.user_router import router as user_router
from format_api.utils.exceptions import (
    ApiError, BadRequestError, ConflictError,
    ForbiddenError, NotFoundError, UnauthorizedError
)

logger = logging.getLogger(__name__)

# ─── Application lifespan ──────────────────────────────────────────────
@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Create tables and seed reference roles on startup
    """
    await init_db()
    yield

# ─── FastAPI application ───────────────────────────────────────────────
app = FastAPI(
    title="FORMAT API",
    description="Social feed backend: users, posts, comments, likes, communities and topics",
    version="1.0.0",
    lifespan=lifespan,
    default_response_class=ORJSONResponse,
)

# ─── Logging ───────────────────────────────────────────────────────────
logging.basicConfig(
    level=settings.LOG_LEVEL,
    format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
    datefmt="%Y-%m-%d %H:%M:%S",
)

# ─── CORS ──────────────────────────────────────────────────────────────
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_methods=["*"],
    allow_headers=["*"],
)

# ─── Exception class → status code ─────────────────────────────────────
EXCEPTION_STATUS_MAP: dict[Type[Exception], int] = {
    BadRequestError: 400,
    UnauthorizedError: 401,
    ForbiddenError: 403,
    NotFoundError: 404,
    ConflictError: 409,
}

def status_for(exc: Exception) -> int:
    """
    Status code of the closest mapped base class, 500 when none matches
    """
    for klass in type(exc).__mro__:
        if klass in EXCEPTION_STATUS_MAP:
            return EXCEPTION_STATUS_MAP[klass]
    return 500

@app.get("/health")
async def health_check() -> dict:
    """
    Liveness endpoint
    """
    return {"status": "ok"}

# ─── Exception handlers ────────────────────────────────────────────────
@app.exception_handler(ApiError)
async def handle_api_error(request: Request, exc: ApiError):
    """
    Render every ApiError as {"detail": message}
    Mapped exceptions get their status code, anything else is a 500
    """
    status_code = status_for(exc)
    if status_code >= 500:
        logger.error("Unhandled API error on %s %s: %s", request.method, request.url.path, exc.message)
    return ORJSONResponse(status_code=status_code, content={"detail": exc.message})

@app.exception_handler(RequestValidationError)
async def handle_validation_error(request: Request, exc: RequestValidationError):
    """
    Missing or malformed request fields are invalid input (400)
    """
    errors = [
        {"loc": list(err.get("loc", ())), "msg": err.get("msg", "")}
        for err in exc.errors()
    ]
    return ORJSONResponse(status_code=400, content={"detail": errors})

# ─── Routers ───────────────────────────────────────────────────────────
app.include_router(user_router)
app.include_router(post_router)
app.include_router(comment_router)
app.include_router(like_router)
app.include_router(subscription_router)
app.include_router(community_router)
app.include_router(topic_router)

# ─── Stored media ──────────────────────────────────────────────────────
Path(settings.UPLOAD_DIR).mkdir(parents=True, exist_ok=True)
app.mount(
    settings.UPLOAD_URL_PREFIX,
    StaticFiles(directory=settings.UPLOAD_DIR),
    name="uploads",
)

if __name__ == "__main__":
    uvicorn.run(
        "format_api.main:app",
        host="0.0.0.0",
        port=8000,
        reload=True
    )
