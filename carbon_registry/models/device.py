"""
IoT device model - a registered monitoring source owned by one address.
"""

from sqlmodel import SQLModel, Field
from typing import Optional
from datetime import datetime


class IoTDeviceBase(SQLModel):
    """Base device schema."""
    device_id: str = Field(..., description="Caller-chosen device identifier")
    device_type: str = Field(default="", description="Free-text device type")


class IoTDevice(IoTDeviceBase, table=True):
    """Device database table. The owner is set once and never changes."""
    __tablename__ = "iot_devices"

    device_id: str = Field(..., primary_key=True)
    owner: str = Field(..., index=True)
    is_active: bool = Field(default=True)
    last_data_timestamp: datetime = Field(..., description="Last mint referencing this device")


class IoTDeviceCreate(IoTDeviceBase):
    """Schema for registering a device."""
    pass


class IoTDeviceRead(IoTDeviceBase):
    """Schema for reading a device."""
    owner: str
    is_active: bool
    last_data_timestamp: Optional[datetime] = None

    @classmethod
    def empty(cls) -> "IoTDeviceRead":
        """Default record returned for an unregistered device id."""
        return cls(device_id="", device_type="", owner="", is_active=False, last_data_timestamp=None)
