# SQLModel database models

from carbon_registry.models.device import IoTDevice
from carbon_registry.models.credit import CarbonCredit
from carbon_registry.models.token import TokenOwner
from carbon_registry.models.producer import VerifiedProducer
from carbon_registry.models.payment import Payment
from carbon_registry.models.event import LedgerEvent

__all__ = [
    "IoTDevice",
    "CarbonCredit",
    "TokenOwner",
    "VerifiedProducer",
    "Payment",
    "LedgerEvent",
]
