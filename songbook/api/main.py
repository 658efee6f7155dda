"""
FastAPI app assembly: logging, middleware and router wiring.
"""
import logging
import os
import time
from contextlib import asynccontextmanager

from fastapi import FastAPI, status
from fastapi.middleware.cors import CORSMiddleware
from sqlalchemy.exc import SQLAlchemyError
from starlette.requests import Request
from starlette.responses import JSONResponse

# Configure logging
LOG_LEVEL_NAME = os.getenv("LOG_LEVEL", "INFO").upper()
LOG_LEVEL = getattr(logging, LOG_LEVEL_NAME, logging.INFO)
logging.basicConfig(level=LOG_LEVEL)
logger = logging.getLogger(__name__)
logger.setLevel(LOG_LEVEL)
logger.info("app_startup: log_level=%s", LOG_LEVEL_NAME)


from songbook.db import database
from songbook.api.songs import router as songs_router
from songbook.api.support import SERVICE_NAME, router as support_router

# Database schema is managed by Alembic migrations.


@asynccontextmanager
async def lifespan(_app: FastAPI):
    yield
    logger.info("app_shutdown: disposing database engine")
    database.engine.dispose()


app = FastAPI(
    title="Song Catalog Service",
    description="API for managing a catalog of songs and the groups that perform them.",
    version="1.0.0",
    lifespan=lifespan,
)

# Avoid implicit trailing-slash redirects for predictable URLs
app.router.redirect_slashes = False

_DEFAULT_ORIGINS = "http://localhost,http://localhost:3000,http://localhost:8000"
origins = [o.strip() for o in os.getenv("CORS_ORIGINS", _DEFAULT_ORIGINS).split(",") if o.strip()]

app.add_middleware(
    CORSMiddleware,
    allow_origins=origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


# Middleware: one access line per request with timing
@app.middleware("http")
async def log_requests(request: Request, call_next):
    started = time.perf_counter()
    response = await call_next(request)
    elapsed_ms = (time.perf_counter() - started) * 1000
    logger.info(
        "request: method=%s path=%s status=%s duration_ms=%.1f",
        request.method, request.url.path, response.status_code, elapsed_ms,
    )
    return response


app.include_router(songs_router)
app.include_router(support_router)


@app.get("/health")
def health_check():
    try:
        database.ping()
    except SQLAlchemyError as e:
        logger.error("health_check: database unavailable: %s", e)
        return JSONResponse(
            {"status": "degraded", "service": SERVICE_NAME, "database": "unavailable"},
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
        )
    return {"status": "ok", "service": SERVICE_NAME, "database": "ok"}
