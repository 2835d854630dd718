"""
Carbon credit and marketplace endpoints.
"""

from fastapi import APIRouter, Depends, status
from typing import List, Optional

from carbon_registry.core.dependencies import get_caller, get_ledger
from carbon_registry.core.ledger import CarbonLedger
from carbon_registry.models.credit import (
    CarbonCreditCreate,
    CarbonCreditRead,
    ListingRequest,
    PurchaseRequest,
    SupplyRead,
    TokenOwnerRead,
    TradeRequest,
    TransferRequest,
)

router = APIRouter(prefix="/credits", tags=["credits"])


@router.post("/", response_model=CarbonCreditRead, status_code=status.HTTP_201_CREATED)
async def mint_credit_endpoint(
    credit: CarbonCreditCreate,
    caller: str = Depends(get_caller),
    ledger: CarbonLedger = Depends(get_ledger)
):
    """
    Mint a credit against one of the caller's devices.

    The caller must be a verified producer and own the active device.
    """
    return await ledger.mint_credit(
        credit.carbon_reduced,
        credit.project_type,
        credit.device_id,
        caller
    )


@router.get("/", response_model=List[CarbonCreditRead])
async def list_credits_endpoint(
    for_sale: Optional[bool] = None,
    ledger: CarbonLedger = Depends(get_ledger)
):
    """List all credits, optionally only those for sale (or not)."""
    return await ledger.list_credits(for_sale)


@router.get("/supply", response_model=SupplyRead)
async def total_supply_endpoint(ledger: CarbonLedger = Depends(get_ledger)):
    """Token name, symbol and number minted."""
    return SupplyRead(
        name=ledger.token_name,
        symbol=ledger.token_symbol,
        total_supply=await ledger.total_supply()
    )


@router.get("/{token_id}", response_model=CarbonCreditRead)
async def get_credit_endpoint(
    token_id: int,
    ledger: CarbonLedger = Depends(get_ledger)
):
    """Get credit by token ID."""
    return await ledger.get_credit(token_id)


@router.get("/{token_id}/owner", response_model=TokenOwnerRead)
async def owner_of_endpoint(
    token_id: int,
    ledger: CarbonLedger = Depends(get_ledger)
):
    """Current owner of a token."""
    return TokenOwnerRead(token_id=token_id, owner=await ledger.owner_of(token_id))


@router.post("/{token_id}/list", response_model=CarbonCreditRead)
async def list_credit_endpoint(
    token_id: int,
    listing: ListingRequest,
    caller: str = Depends(get_caller),
    ledger: CarbonLedger = Depends(get_ledger)
):
    """List the caller's credit at a fixed price."""
    return await ledger.list_for_sale(token_id, listing.price, caller)


@router.post("/{token_id}/buy", response_model=CarbonCreditRead)
async def buy_credit_endpoint(
    token_id: int,
    order: PurchaseRequest,
    caller: str = Depends(get_caller),
    ledger: CarbonLedger = Depends(get_ledger)
):
    """Buy a listed credit. The payment must equal the price exactly."""
    return await ledger.purchase(token_id, caller, order.payment)


@router.post("/{token_id}/delist", response_model=CarbonCreditRead)
async def delist_credit_endpoint(
    token_id: int,
    caller: str = Depends(get_caller),
    ledger: CarbonLedger = Depends(get_ledger)
):
    """Withdraw the caller's listing."""
    return await ledger.delist(token_id, caller)


@router.post("/{token_id}/transfer", response_model=TokenOwnerRead)
async def transfer_credit_endpoint(
    token_id: int,
    body: TransferRequest,
    caller: str = Depends(get_caller),
    ledger: CarbonLedger = Depends(get_ledger)
):
    """Transfer the caller's credit to another address."""
    await ledger.transfer(token_id, body.to, caller)
    return TokenOwnerRead(token_id=token_id, owner=body.to)


@router.post("/{token_id}/trade", response_model=CarbonCreditRead)
async def trade_credit_endpoint(
    token_id: int,
    body: TradeRequest,
    caller: str = Depends(get_caller),
    ledger: CarbonLedger = Depends(get_ledger)
):
    """
    Combined list/buy entry point.

    A price above zero lists the credit; a price of zero buys it with the
    attached payment. Prefer /list and /buy.
    """
    return await ledger.trade(token_id, body.price, caller, body.payment)
