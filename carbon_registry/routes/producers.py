"""
Producer verification endpoints.
"""

from fastapi import APIRouter, Depends

from carbon_registry.core.dependencies import get_caller, get_ledger
from carbon_registry.core.ledger import CarbonLedger
from carbon_registry.models.producer import ProducerRead

router = APIRouter(prefix="/producers", tags=["producers"])


async def _producer_view(ledger: CarbonLedger, address: str) -> ProducerRead:
    return ProducerRead(
        address=address,
        is_verified=await ledger.is_verified_producer(address),
        token_balance=await ledger.balance_of(address),
        proceeds=await ledger.proceeds_of(address)
    )


@router.get("/{address}", response_model=ProducerRead)
async def get_producer_endpoint(
    address: str,
    ledger: CarbonLedger = Depends(get_ledger)
):
    """Verification flag, token balance and sale proceeds of an address."""
    return await _producer_view(ledger, address)


@router.post("/{address}/verify", response_model=ProducerRead)
async def verify_producer_endpoint(
    address: str,
    caller: str = Depends(get_caller),
    ledger: CarbonLedger = Depends(get_ledger)
):
    """Mark an address as a verified producer (administrator only)."""
    await ledger.verify_producer(address, caller)
    return await _producer_view(ledger, address)
