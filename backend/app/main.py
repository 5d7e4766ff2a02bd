"""Hourbook backend entrypoint."""

import logging
import time
from pathlib import Path

from fastapi import FastAPI, Request, status
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from backend.app.api import clients
from backend.app.api import dashboard
from backend.app.api import invoices
from backend.app.api import profile
from backend.app.api import sessions
from backend.app.core.errors import AppError
from backend.app.core.middleware import RequestIDMiddleware, SecurityHeadersMiddleware
from backend.app.core.settings import get_settings
from backend.app.core.time import utc_now
from backend.app.db.base import Base
from backend.app.db.session import check_db_connection, engine

settings = get_settings()

logging.basicConfig(
    level=settings.log_level,
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)
logger = logging.getLogger(__name__)

app = FastAPI(title=settings.app_name, version=settings.api_version)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)
app.add_middleware(SecurityHeadersMiddleware)
app.add_middleware(RequestIDMiddleware)

app.include_router(clients.router)
app.include_router(sessions.router)
app.include_router(profile.router)
app.include_router(invoices.router)
app.include_router(dashboard.router)


@app.exception_handler(AppError)
async def app_error_handler(request: Request, exc: AppError):
    return JSONResponse(status_code=exc.status_code, content={"detail": exc.message})


@app.get("/")
def read_root():
    return {"app": "Hourbook backend", "status": "ok"}


@app.get("/health")
def health_check():
    started = time.perf_counter()
    try:
        check_db_connection()
        database = {"status": "healthy", "details": "Database connection successful"}
    except Exception as exc:
        logger.error("Database health check failed: %s", exc)
        database = {"status": "unhealthy", "details": "Database connection failed"}
    database["response_time_ms"] = round((time.perf_counter() - started) * 1000.0, 2)

    healthy = database["status"] == "healthy"
    body = {
        "status": "healthy" if healthy else "unhealthy",
        "timestamp": utc_now().isoformat(),
        "version": settings.api_version,
        "checks": {"database": database},
    }
    return JSONResponse(
        content=body,
        status_code=status.HTTP_200_OK if healthy else status.HTTP_503_SERVICE_UNAVAILABLE,
    )


@app.on_event("startup")
def prepare_storage():
    Base.metadata.create_all(bind=engine)
    Path(settings.invoice_dir).mkdir(parents=True, exist_ok=True)
    logger.info("%s started (%s), invoices stored in %s", settings.app_name, settings.environment, settings.invoice_dir)
