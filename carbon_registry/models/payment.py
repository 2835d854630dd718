"""
Payment model - value moved from a buyer to a seller on a sale.
"""

from sqlmodel import SQLModel, Field
from typing import Optional
from datetime import datetime


class Payment(SQLModel, table=True):
    """Payment database table - append-only."""
    __tablename__ = "payments"

    id: Optional[int] = Field(default=None, primary_key=True)
    token_id: int = Field(..., foreign_key="carbon_credits.id")
    payer: str = Field(..., index=True)
    payee: str = Field(..., index=True)
    amount: int = Field(..., gt=0)
    created_at: datetime = Field(...)
