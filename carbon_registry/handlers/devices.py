"""
Device registration and producer verification handler.
"""

from sqlalchemy.ext.asyncio import AsyncSession

from carbon_registry.core.constants import (
    EVENT_DEVICE_DEACTIVATED,
    EVENT_DEVICE_REGISTERED,
    EVENT_PRODUCER_VERIFIED,
)
from carbon_registry.core.errors import AlreadyRegistered, InvalidInput
from carbon_registry.handlers.events import record_event
from carbon_registry.models.device import IoTDevice, IoTDeviceRead
from carbon_registry.models.producer import VerifiedProducer
from carbon_registry.utils.time import utc_now


async def is_verified_producer(session: AsyncSession, address: str) -> bool:
    """Check the producer verification flag for an address."""
    return await session.get(VerifiedProducer, address) is not None


async def verify_producer(session: AsyncSession, address: str) -> bool:
    """
    Mark an address as a verified producer.

    Returns True when the flag was newly set. Setting it again is a no-op.
    """
    if not address:
        raise InvalidInput("address must not be empty")
    if await is_verified_producer(session, address):
        return False
    session.add(VerifiedProducer(address=address, verified_at=utc_now()))
    record_event(session, EVENT_PRODUCER_VERIFIED, {"address": address})
    return True


async def register_device(
    session: AsyncSession,
    device_id: str,
    device_type: str,
    caller: str
) -> IoTDevice:
    """
    Register a device to the caller.

    A device id can be claimed once; nobody can register it again, its
    first owner included. The caller becomes a verified producer as a side
    effect.
    """
    if not device_id:
        raise InvalidInput("device id must not be empty")

    existing = await session.get(IoTDevice, device_id)
    if existing is not None and existing.owner:
        raise AlreadyRegistered(f"device {device_id!r} is already registered")

    device = IoTDevice(
        device_id=device_id,
        device_type=device_type,
        owner=caller,
        is_active=True,
        last_data_timestamp=utc_now()
    )
    session.add(device)

    await verify_producer(session, caller)
    record_event(session, EVENT_DEVICE_REGISTERED, {"device_id": device_id, "owner": caller})
    return device


async def get_device(session: AsyncSession, device_id: str) -> IoTDeviceRead:
    """
    Get a device by id.

    Unknown ids yield an empty record rather than an error.
    """
    device = await session.get(IoTDevice, device_id)
    if device is None:
        return IoTDeviceRead.empty()
    return IoTDeviceRead.model_validate(device)


async def deactivate_device(session: AsyncSession, device_id: str) -> bool:
    """Switch a device off. Unknown ids are ignored; returns whether anything changed."""
    device = await session.get(IoTDevice, device_id)
    if device is None or not device.is_active:
        return False
    device.is_active = False
    session.add(device)
    record_event(session, EVENT_DEVICE_DEACTIVATED, {"device_id": device_id})
    return True
