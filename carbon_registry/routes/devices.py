"""
Device registry endpoints.
"""

from fastapi import APIRouter, Depends, status
from typing import Dict

from carbon_registry.core.dependencies import get_caller, get_ledger
from carbon_registry.core.ledger import CarbonLedger
from carbon_registry.models.device import IoTDeviceCreate, IoTDeviceRead

router = APIRouter(prefix="/devices", tags=["devices"])


@router.post("/", response_model=IoTDeviceRead, status_code=status.HTTP_201_CREATED)
async def register_device_endpoint(
    device: IoTDeviceCreate,
    caller: str = Depends(get_caller),
    ledger: CarbonLedger = Depends(get_ledger)
):
    """
    Register a device to the caller.

    The caller becomes a verified producer if it was not one already.
    """
    return await ledger.register_device(device.device_id, device.device_type, caller)


@router.get("/{device_id}", response_model=IoTDeviceRead)
async def get_device_endpoint(
    device_id: str,
    ledger: CarbonLedger = Depends(get_ledger)
):
    """Get device by ID. Unknown ids return an empty record."""
    return await ledger.get_device(device_id)


@router.post("/{device_id}/deactivate")
async def deactivate_device_endpoint(
    device_id: str,
    caller: str = Depends(get_caller),
    ledger: CarbonLedger = Depends(get_ledger)
) -> Dict[str, bool]:
    """Deactivate a device (administrator only)."""
    changed = await ledger.deactivate_device(device_id, caller)
    return {"changed": changed}
