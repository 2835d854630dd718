"""
Shared fixtures: a fresh in-memory ledger per test and an HTTP client.
"""

import pytest
import pytest_asyncio
from fastapi.testclient import TestClient

from carbon_registry.core.config import get_settings
from carbon_registry.core.database import build_engine, build_session_factory, init_db, close_db
from carbon_registry.core.ledger import CarbonLedger
from carbon_registry.main import create_app

from tests.helpers import ADMIN, ALICE, MEMORY_URL


@pytest_asyncio.fixture
async def ledger():
    engine = build_engine(MEMORY_URL)
    await init_db(engine)
    yield CarbonLedger(build_session_factory(engine), admin_address=ADMIN)
    await close_db(engine)


@pytest_asyncio.fixture
async def minted(ledger):
    """Ledger where alice owns device 'sensor-1' and token 0."""
    await ledger.register_device("sensor-1", "air-quality", ALICE)
    await ledger.mint_credit(100, "reforestation", "sensor-1", ALICE)
    return ledger


@pytest.fixture
def admin_address():
    return get_settings().admin_address


@pytest.fixture
def client():
    app = create_app(MEMORY_URL)
    with TestClient(app) as test_client:
        yield test_client
