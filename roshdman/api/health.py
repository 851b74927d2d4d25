"""
Health endpoints for operational monitoring.

/healthz has no dependencies; /readyz checks that the record store can be written.
"""

import logging

from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse

from roshdman.core.store import JsonRecordStore, get_store

logger = logging.getLogger("roshdman")

router = APIRouter(tags=["health"])


@router.get("/healthz")
def healthz():
    """Lightweight liveness check (no deps)."""
    return {"status": "ok"}


@router.get("/readyz")
def readyz(store: JsonRecordStore = Depends(get_store)):
    """Readiness check: the data file's directory exists and is writable."""
    if not store.is_writable():
        detail = "data directory is not writable"
        logger.warning(f"[readyz] {detail}: {store.path}")
        return JSONResponse(status_code=503, content={"status": "error", "detail": detail})
    return {"status": "ok"}
