"""
Health check endpoints.

Provides basic health and status information about the server.
"""

import os
from fastapi import APIRouter, Depends
from datetime import datetime, timezone

from app.api.deps import get_state_store
from app.config import get_settings
from app.core.state_store import StateStore

router = APIRouter()
settings = get_settings()


@router.get("/health")
async def health_check(store: StateStore = Depends(get_state_store)) -> dict:
    """
    Basic health check endpoint.

    Returns:
        dict: Server status information including version and loaded counts.

    Example response:
        {
            "status": "healthy",
            "app_name": "BotLedger",
            "version": "0.1.0",
            "timestamp": "2024-12-11T23:00:00Z",
            "storage": "loaded",
            "bots": 3,
            "points": 550
        }
    """
    return {
        "status": "healthy",
        "app_name": settings.APP_NAME,
        "version": settings.VERSION,
        "timestamp": datetime.now(timezone.utc).isoformat().replace("+00:00", "Z"),
        "storage": "loaded" if store.loaded else "not loaded",
        "bots": store.bot_count,
        "points": store.user_info.points,
    }


@router.get("/health/ready")
async def readiness_check(store: StateStore = Depends(get_state_store)) -> dict:
    """
    Readiness check for the service.

    Verifies that state has been loaded and the data directory is writable.

    Returns:
        dict: Readiness status.
    """
    data_dir = store.storage.DATA_DIR
    writable = os.path.isdir(data_dir) and os.access(data_dir, os.W_OK)
    checks = {
        "state": "ok" if store.loaded else "not loaded",
        "data_dir": "ok" if writable else f"not writable: {data_dir}",
    }
    return {
        "ready": store.loaded and writable,
        "checks": checks,
    }
