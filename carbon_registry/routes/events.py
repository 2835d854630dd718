"""
Ledger event log endpoints.
"""

from fastapi import APIRouter, Depends, Query
from typing import List

from carbon_registry.core.dependencies import get_ledger
from carbon_registry.core.ledger import CarbonLedger
from carbon_registry.models.event import LedgerEventRead

router = APIRouter(prefix="/events", tags=["events"])


@router.get("/", response_model=List[LedgerEventRead])
async def list_events_endpoint(
    limit: int = Query(default=100, ge=1, le=1000),
    ledger: CarbonLedger = Depends(get_ledger)
):
    """Most recent ledger events first."""
    return await ledger.get_events(limit)
