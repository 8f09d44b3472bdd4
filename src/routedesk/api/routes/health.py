"""Health endpoints."""

from __future__ import annotations

import time
from datetime import datetime, timezone

from fastapi import APIRouter, status

router = APIRouter(tags=["health"])
service_router = APIRouter(tags=["health"])

_STARTED_AT = time.monotonic()


@service_router.get("/health", status_code=status.HTTP_200_OK)
def service_health() -> dict:
    """Liveness probe served outside the API prefix; also the keep-alive target."""
    return {
        "status": "ok",
        "uptimeSeconds": int(time.monotonic() - _STARTED_AT),
        "timestamp": datetime.now(timezone.utc).isoformat(),
    }


@router.get("/health", status_code=status.HTTP_200_OK)
def health_root() -> dict:
    """Simple health check endpoint that doesn't require any dependencies."""
    return {"status": "ok"}


@router.get("/health/database", status_code=status.HTTP_200_OK)
def check_database() -> dict:
    """Report which order store is active and whether it can be read."""
    from ...data.orders_repository import OrderStorageError, list_orders, storage_backend

    backend = storage_backend()
    try:
        orders = list_orders()
    except OrderStorageError as exc:
        return {
            "backend": backend,
            "connected": False,
            "error": str(exc),
            "message": f"Order store error: {exc}",
        }
    return {
        "backend": backend,
        "connected": True,
        "orders_count": len(orders),
        "message": f"Order store reachable. Found {len(orders)} orders.",
    }
