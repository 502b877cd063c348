# app/routers/dashboard.py
"""Dashboard page, root redirect and API index."""

import os
from fastapi import APIRouter
from fastapi.responses import FileResponse, RedirectResponse
from app.config import settings

router = APIRouter()

PROJECT_ROOT = os.path.dirname(os.path.dirname(os.path.dirname(os.path.abspath(__file__))))


def public_dir() -> str:
    """PUBLIC_DIR, resolved against the project root when relative."""
    if os.path.isabs(settings.PUBLIC_DIR):
        return settings.PUBLIC_DIR
    return os.path.join(PROJECT_ROOT, settings.PUBLIC_DIR)


@router.get("/", include_in_schema=False)
def root():
    return RedirectResponse(url="/dashboard")


@router.get("/dashboard", include_in_schema=False)
def dashboard():
    return FileResponse(os.path.join(public_dir(), "index.html"), media_type="text/html")


@router.get("/api", summary="API index")
def api_index():
    return {
        "message": "IoT Fleet Tracking API",
        "endpoints": {
            "vehicles": "/vehicles",
            "shipments": "/shipments",
            "telemetry": "/telemetry",
            "reports": "/reports",
            "dashboard": "/dashboard",
            "health": "/health",
        },
    }
