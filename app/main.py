# app/main.py
"""
FastAPI application entry point.
Includes API key middleware, error handlers, the dashboard and all routers.
"""

from fastapi import FastAPI, Request, status
from fastapi.responses import JSONResponse
from fastapi.middleware.cors import CORSMiddleware
from fastapi.staticfiles import StaticFiles
from starlette.middleware.base import BaseHTTPMiddleware
from app.routers import dashboard, fleet, health, reports
from app.database import create_tables, engine
from app.config import settings
from app.services.errors import MalformedRecordError, ReportNotFoundError, StorageUnavailableError
from app.utils.logger import get_logger
import time

logger = get_logger(__name__)

app = FastAPI(
    title="IoT Fleet Tracking API",
    description="Vehicles, shipments, telemetry and fleet reports.",
    version="1.0.0",
    docs_url="/docs",
    redoc_url="/redoc",
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

OPEN_PATHS = {"/", "/dashboard", "/api", "/health", "/docs", "/redoc", "/openapi.json"}


# ── API Key Middleware ───────────────────────────────────────────────────────
class APIKeyMiddleware(BaseHTTPMiddleware):
    """
    Optional API key check on the data and report endpoints.
    The dashboard page, its static assets and /health stay open; the
    dashboard script forwards the key it was opened with (?api_key=...).
    Set API_KEY in .env. Leave empty to disable auth.
    """
    async def dispatch(self, request: Request, call_next):
        path = request.url.path
        if path in OPEN_PATHS or path.startswith("/static/") or not settings.API_KEY:
            return await call_next(request)

        api_key = request.headers.get("X-API-Key") or request.query_params.get("api_key")
        if api_key != settings.API_KEY:
            return JSONResponse(
                status_code=status.HTTP_401_UNAUTHORIZED,
                content={"detail": "Invalid or missing API key"},
            )
        return await call_next(request)


app.add_middleware(APIKeyMiddleware)


# ── Request Timing Middleware ────────────────────────────────────────────────
@app.middleware("http")
async def log_requests(request: Request, call_next):
    start = time.time()
    response = await call_next(request)
    duration = round((time.time() - start) * 1000, 2)
    logger.debug(f"{request.method} {request.url.path} → {response.status_code} ({duration}ms)")
    return response


# ── Exception Handlers ───────────────────────────────────────────────────────
@app.exception_handler(StorageUnavailableError)
async def storage_unavailable_handler(request: Request, exc: StorageUnavailableError):
    logger.error(f"Storage unavailable on {request.url.path}: {exc.message}")
    return JSONResponse(
        status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
        content={"detail": exc.message},
    )


@app.exception_handler(MalformedRecordError)
async def malformed_record_handler(request: Request, exc: MalformedRecordError):
    logger.error(f"Report failed on {request.url.path}: {exc.message}")
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={"detail": exc.message},
    )


@app.exception_handler(ReportNotFoundError)
async def report_not_found_handler(request: Request, exc: ReportNotFoundError):
    return JSONResponse(
        status_code=status.HTTP_404_NOT_FOUND,
        content={"detail": exc.message},
    )


@app.exception_handler(Exception)
async def global_exception_handler(request: Request, exc: Exception):
    logger.error(f"Unhandled exception on {request.url.path}: {exc}", exc_info=True)
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={"detail": "Internal server error"},
    )


# ── Routers ──────────────────────────────────────────────────────────────────
app.include_router(dashboard.router, tags=["Dashboard"])
app.include_router(fleet.router,     tags=["Fleet Data"])
app.include_router(reports.router,   tags=["Reports"])
app.include_router(health.router,    tags=["Health"])

app.mount("/static", StaticFiles(directory=dashboard.public_dir(), check_dir=False), name="static")


# ── Startup ───────────────────────────────────────────────────────────────────
@app.on_event("startup")
async def startup():
    logger.info("Fleet Tracking backend starting up...")
    create_tables()
    logger.info("Database tables ready")
    logger.info(f"Dashboard at http://{settings.BACKEND_IP}:{settings.BACKEND_PORT}/dashboard")
    logger.info("API docs at /docs")


@app.on_event("shutdown")
async def shutdown():
    logger.info("Fleet Tracking backend shutting down...")
    engine.dispose()
