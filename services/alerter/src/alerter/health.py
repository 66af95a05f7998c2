"""
Health check endpoint for the alerter service.

Exposes ``/health`` with the consumer state and the registered notifiers.
"""

from __future__ import annotations

from typing import Any

from fastapi import APIRouter, Request

router = APIRouter()


@router.get("/health")
async def health(request: Request) -> dict[str, Any]:
    """Return ``"ok"`` while the consumer loop and intake pump run, ``"degraded"`` otherwise."""
    alerter = getattr(request.app.state, "alerter", None)
    if alerter is None:
        return {"status": "degraded", "service": "alerter", "notifiers": [], "in_flight": 0}
    pump = getattr(request.app.state, "pump", None)
    intake_alive = pump is None or not pump.done()
    return {
        "status": "ok" if alerter.running and intake_alive else "degraded",
        "service": "alerter",
        "notifiers": sorted(alerter.notifiers),
        "in_flight": alerter.in_flight,
    }
