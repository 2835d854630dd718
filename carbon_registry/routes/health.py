"""
Health check endpoints.
"""

from fastapi import APIRouter, Depends
from carbon_registry.core.config import get_settings
from carbon_registry.core.dependencies import get_ledger
from carbon_registry.core.ledger import CarbonLedger

router = APIRouter(prefix="/health", tags=["health"])
settings = get_settings()


@router.get("/")
async def health_check():
    """Root health check endpoint."""
    return {
        "status": "healthy",
        "service": settings.app_name,
        "version": settings.app_version
    }


@router.get("/live")
async def liveness():
    """Liveness probe endpoint."""
    return {"status": "alive"}


@router.get("/ready")
async def readiness(ledger: CarbonLedger = Depends(get_ledger)):
    """Readiness probe: the ledger database answers a query."""
    return {"status": "ready", "total_supply": await ledger.total_supply()}
