"""
Carbon credit model - one minted token per claimed carbon reduction.
"""

from sqlmodel import SQLModel, Field
from datetime import datetime


class CarbonCreditBase(SQLModel):
    """Base carbon credit schema."""
    carbon_reduced: int = Field(..., description="Claimed CO2 reduction in kg")
    project_type: str = Field(default="", description="Free-text project label")
    iot_device_id: str = Field(..., foreign_key="iot_devices.device_id")


class CarbonCredit(CarbonCreditBase, table=True):
    """
    Carbon credit database table.

    ``producer`` is provenance and never changes; the current holder lives
    in ``token_owners``. ``price`` is 0 whenever ``for_sale`` is false.
    """
    __tablename__ = "carbon_credits"

    id: int = Field(..., primary_key=True, sa_column_kwargs={"autoincrement": False})
    producer: str = Field(..., index=True)
    timestamp: datetime = Field(..., description="Mint time")
    is_verified: bool = Field(default=True)
    price: int = Field(default=0, ge=0)
    for_sale: bool = Field(default=False, index=True)


class CarbonCreditCreate(SQLModel):
    """Schema for minting a carbon credit."""
    carbon_reduced: int
    project_type: str = ""
    device_id: str


class CarbonCreditRead(CarbonCreditBase):
    """Schema for reading a carbon credit."""
    id: int
    producer: str
    timestamp: datetime
    is_verified: bool
    price: int
    for_sale: bool


class ListingRequest(SQLModel):
    """Body for listing a credit."""
    price: int


class PurchaseRequest(SQLModel):
    """Body for buying a listed credit."""
    payment: int


class TransferRequest(SQLModel):
    """Body for a direct ownership transfer."""
    to: str


class TradeRequest(SQLModel):
    """Body for the combined list/buy entry point: price 0 buys, price > 0 lists."""
    price: int
    payment: int = 0


class TokenOwnerRead(SQLModel):
    token_id: int
    owner: str


class SupplyRead(SQLModel):
    name: str
    symbol: str
    total_supply: int
