"""
Optional development seeding script.
"""

import asyncio
import logging
from typing import Optional

from carbon_registry.core.config import get_settings
from carbon_registry.core.database import build_engine, build_session_factory, init_db, close_db
from carbon_registry.core.ledger import CarbonLedger
from carbon_registry.core.log import configure_logging

logger = logging.getLogger("carbon_registry.seed")

SAMPLE_PRODUCER = "0x00000000000000000000000000000000000000a1"
SAMPLE_BUYER = "0x00000000000000000000000000000000000000b2"

# device id, device type, kg CO2 per daily claim
SAMPLE_DEVICES = [
    ("lagos-solar-01", "solar-inverter", 420),
    ("abuja-meter-02", "grid-meter", 180),
]


async def seed_data(database_url: Optional[str] = None, days: int = 7) -> CarbonLedger:
    """Seed the ledger with sample devices, a week of credits and one sale."""
    settings = get_settings()
    engine = build_engine(database_url or settings.database_url)
    await init_db(engine)

    ledger = CarbonLedger(build_session_factory(engine), admin_address=settings.admin_address)
    try:
        for device_id, device_type, daily_kg in SAMPLE_DEVICES:
            await ledger.register_device(device_id, device_type, SAMPLE_PRODUCER)
            for day in range(days):
                # Simulate a weekly cycle around the daily baseline
                carbon_reduced = daily_kg + (day % 3) * 15
                await ledger.mint_credit(carbon_reduced, "renewable-energy", device_id, SAMPLE_PRODUCER)

        await ledger.list_for_sale(0, 25, SAMPLE_PRODUCER)
        await ledger.purchase(0, SAMPLE_BUYER, 25)
        await ledger.list_for_sale(1, 30, SAMPLE_PRODUCER)

        logger.info("seeded %d credits", await ledger.total_supply())
    finally:
        await close_db(engine)
    return ledger


if __name__ == "__main__":
    configure_logging(get_settings().log_level)
    asyncio.run(seed_data())
