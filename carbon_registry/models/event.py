"""
Ledger event model - append-only tamper-evident event log.
"""

from sqlmodel import SQLModel, Field
from typing import Optional
from datetime import datetime


class LedgerEventBase(SQLModel):
    """Base ledger event schema."""
    event: str = Field(..., description="Event name (e.g. 'CreditMinted', 'CreditSold')")
    payload: str = Field(..., description="Canonical JSON of the event fields")
    payload_hash: str = Field(..., description="SHA-256 hash of the payload")


class LedgerEvent(LedgerEventBase, table=True):
    """Ledger event database table - append-only."""
    __tablename__ = "ledger_events"

    id: Optional[int] = Field(default=None, primary_key=True)
    created_at: datetime = Field(...)


class LedgerEventRead(LedgerEventBase):
    """Schema for reading a ledger event."""
    id: int
    created_at: datetime
