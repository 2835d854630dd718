"""
Producer verification model - addresses allowed to mint credits.
"""

from sqlmodel import SQLModel, Field
from datetime import datetime


class VerifiedProducer(SQLModel, table=True):
    """Verified producer table. A row is never removed once written."""
    __tablename__ = "verified_producers"

    address: str = Field(..., primary_key=True)
    verified_at: datetime = Field(...)


class ProducerRead(SQLModel):
    """Schema for reading an address's standing in the registry."""
    address: str
    is_verified: bool
    token_balance: int
    proceeds: int
