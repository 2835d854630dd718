"""
Carbon credit minting handler.
"""

from sqlalchemy.ext.asyncio import AsyncSession
from sqlmodel import select, func
from typing import List, Optional

from carbon_registry.core.constants import (
    EVENT_CREDIT_MINTED,
    EVENT_DATA_VERIFIED,
    FIRST_TOKEN_ID,
    MAX_AMOUNT,
)
from carbon_registry.core.errors import (
    DeviceInactive,
    InvalidAmount,
    NotAuthorized,
    NotFound,
    NotVerified,
)
from carbon_registry.handlers.devices import is_verified_producer
from carbon_registry.handlers.events import record_event
from carbon_registry.handlers.tokens import assign_owner
from carbon_registry.models.credit import CarbonCredit, CarbonCreditRead
from carbon_registry.models.device import IoTDevice
from carbon_registry.utils.time import utc_now


async def next_token_id(session: AsyncSession) -> int:
    """Next sequential token id; ids start at 0 and never skip."""
    result = await session.execute(select(func.max(CarbonCredit.id)))
    current = result.scalar()
    return FIRST_TOKEN_ID if current is None else current + 1


async def mint_credit(
    session: AsyncSession,
    carbon_reduced: int,
    project_type: str,
    device_id: str,
    caller: str
) -> CarbonCredit:
    """
    Mint a credit for a claimed reduction measured by one of the caller's devices.

    Checks run in this order, each with its own error:
    - caller is a verified producer (NotVerified)
    - carbon_reduced is positive and fits the ledger (InvalidAmount)
    - the device exists and belongs to the caller (NotAuthorized)
    - the device is active (DeviceInactive)

    Nothing ties ``carbon_reduced`` to real sensor output: owning the
    device is the whole proof.
    """
    if not await is_verified_producer(session, caller):
        raise NotVerified(f"{caller} is not a verified producer")

    if carbon_reduced <= 0 or carbon_reduced > MAX_AMOUNT:
        raise InvalidAmount(f"carbon_reduced must be between 1 and {MAX_AMOUNT}")

    device = await session.get(IoTDevice, device_id)
    if device is None or device.owner != caller:
        raise NotAuthorized(f"{caller} does not own device {device_id!r}")

    if not device.is_active:
        raise DeviceInactive(f"device {device_id!r} is inactive")

    now = utc_now()
    token_id = await next_token_id(session)
    credit = CarbonCredit(
        id=token_id,
        producer=caller,
        carbon_reduced=carbon_reduced,
        project_type=project_type,
        timestamp=now,
        iot_device_id=device_id,
        is_verified=True,
        price=0,
        for_sale=False
    )
    session.add(credit)
    await assign_owner(session, token_id, caller)

    device.last_data_timestamp = now
    session.add(device)

    record_event(session, EVENT_CREDIT_MINTED, {
        "token_id": token_id,
        "producer": caller,
        "carbon_reduced": carbon_reduced
    })
    record_event(session, EVENT_DATA_VERIFIED, {
        "device_id": device_id,
        "carbon_reduced": carbon_reduced
    })
    return credit


async def get_credit_row(session: AsyncSession, token_id: int) -> CarbonCredit:
    """Credit table row; raises NotFound if it was never minted."""
    credit = await session.get(CarbonCredit, token_id)
    if credit is None:
        raise NotFound(f"credit {token_id} does not exist")
    return credit


async def get_credit(session: AsyncSession, token_id: int) -> CarbonCreditRead:
    """Get a credit by token id."""
    return CarbonCreditRead.model_validate(await get_credit_row(session, token_id))


async def total_supply(session: AsyncSession) -> int:
    """Number of credits ever minted."""
    result = await session.execute(select(func.count(CarbonCredit.id)))
    return result.scalar() or 0


async def list_credits(
    session: AsyncSession,
    for_sale: Optional[bool] = None
) -> List[CarbonCreditRead]:
    """All credits by id, optionally filtered by sale status."""
    statement = select(CarbonCredit)
    if for_sale is not None:
        statement = statement.where(CarbonCredit.for_sale == for_sale)
    statement = statement.order_by(CarbonCredit.id)

    result = await session.execute(statement)
    return [CarbonCreditRead.model_validate(c) for c in result.scalars().all()]
