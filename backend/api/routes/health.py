"""
api/routes/health.py
--------------------
Liveness check. Also reports which session store and catalog this process
was configured with, so a misconfigured deployment shows up at a glance.
"""
from __future__ import annotations

from fastapi import APIRouter

import config

router = APIRouter()


@router.get("/health", summary="Health check")
def health() -> dict:
    return {
        "status": "ok",
        "service": "wanderplan-backend",
        "session_backend": config.SESSION_BACKEND,
        "catalog": "bundled" if config.USE_STUB_CATALOG else "remote",
    }
