"""
Carbon credit ledger service.

Owns the session factory and the single lock that serializes every
mutating operation. Each mutation runs in its own transaction: checks
first, then staged writes committed together, so a rejected call never
leaves partial state behind.
"""

import asyncio
import logging
from contextlib import asynccontextmanager
from contextvars import ContextVar
from typing import AsyncIterator, List, Optional

from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from carbon_registry.core.errors import LedgerError, NotAuthorized, ReentrantCall
from carbon_registry.core.log import log_event
from carbon_registry.handlers import credits, devices, events, market, tokens
from carbon_registry.models.credit import CarbonCreditRead
from carbon_registry.models.device import IoTDeviceRead
from carbon_registry.models.event import LedgerEventRead

logger = logging.getLogger("carbon_registry.ledger")

_in_mutation: ContextVar[bool] = ContextVar("carbon_registry_in_mutation", default=False)


class CarbonLedger:
    """Device registry and credit marketplace."""

    def __init__(
        self,
        session_factory: async_sessionmaker[AsyncSession],
        admin_address: str,
        token_name: str = "CarbonCredit",
        token_symbol: str = "CCR"
    ):
        self._session_factory = session_factory
        self.admin_address = admin_address
        self.token_name = token_name
        self.token_symbol = token_symbol
        self._lock = asyncio.Lock()

    @asynccontextmanager
    async def _mutation(self, operation: str) -> AsyncIterator[AsyncSession]:
        if _in_mutation.get():
            raise ReentrantCall(f"{operation} called while another operation is in progress")

        token = _in_mutation.set(True)
        try:
            async with self._lock:
                async with self._session_factory() as session:
                    try:
                        yield session
                        await session.commit()
                    except LedgerError as exc:
                        await session.rollback()
                        events.pop_pending_events(session)
                        logger.debug("%s rejected: %s", operation, exc)
                        raise
                    except Exception:
                        await session.rollback()
                        events.pop_pending_events(session)
                        raise
                    for name, payload in events.pop_pending_events(session):
                        log_event(logger, name, payload)
        finally:
            _in_mutation.reset(token)

    @asynccontextmanager
    async def _view(self) -> AsyncIterator[AsyncSession]:
        async with self._session_factory() as session:
            yield session

    def _require_admin(self, caller: str) -> None:
        if caller != self.admin_address:
            raise NotAuthorized(f"{caller} is not the administrator")

    # Devices

    async def register_device(self, device_id: str, device_type: str, caller: str) -> IoTDeviceRead:
        async with self._mutation("register_device") as session:
            device = await devices.register_device(session, device_id, device_type, caller)
            return IoTDeviceRead.model_validate(device)

    async def get_device(self, device_id: str) -> IoTDeviceRead:
        async with self._view() as session:
            return await devices.get_device(session, device_id)

    async def deactivate_device(self, device_id: str, caller: str) -> bool:
        self._require_admin(caller)
        async with self._mutation("deactivate_device") as session:
            return await devices.deactivate_device(session, device_id)

    # Producers

    async def is_verified_producer(self, address: str) -> bool:
        async with self._view() as session:
            return await devices.is_verified_producer(session, address)

    async def verify_producer(self, address: str, caller: str) -> bool:
        self._require_admin(caller)
        async with self._mutation("verify_producer") as session:
            return await devices.verify_producer(session, address)

    # Credits

    async def mint_credit(
        self,
        carbon_reduced: int,
        project_type: str,
        device_id: str,
        caller: str
    ) -> CarbonCreditRead:
        async with self._mutation("mint_credit") as session:
            credit = await credits.mint_credit(session, carbon_reduced, project_type, device_id, caller)
            return CarbonCreditRead.model_validate(credit)

    async def get_credit(self, token_id: int) -> CarbonCreditRead:
        async with self._view() as session:
            return await credits.get_credit(session, token_id)

    async def list_credits(self, for_sale: Optional[bool] = None) -> List[CarbonCreditRead]:
        async with self._view() as session:
            return await credits.list_credits(session, for_sale)

    async def total_supply(self) -> int:
        async with self._view() as session:
            return await credits.total_supply(session)

    # Marketplace

    async def list_for_sale(self, token_id: int, price: int, caller: str) -> CarbonCreditRead:
        async with self._mutation("list_for_sale") as session:
            credit = await market.list_for_sale(session, token_id, price, caller)
            return CarbonCreditRead.model_validate(credit)

    async def purchase(self, token_id: int, caller: str, payment: int) -> CarbonCreditRead:
        async with self._mutation("purchase") as session:
            await market.purchase(session, token_id, caller, payment)
            credit = await credits.get_credit_row(session, token_id)
            return CarbonCreditRead.model_validate(credit)

    async def delist(self, token_id: int, caller: str) -> CarbonCreditRead:
        async with self._mutation("delist") as session:
            credit = await market.delist(session, token_id, caller)
            return CarbonCreditRead.model_validate(credit)

    async def trade(self, token_id: int, price: int, caller: str, payment: int = 0) -> CarbonCreditRead:
        """Combined entry point: a positive price lists, a zero price buys."""
        if price == 0:
            return await self.purchase(token_id, caller, payment)
        return await self.list_for_sale(token_id, price, caller)

    # Ownership

    async def owner_of(self, token_id: int) -> str:
        async with self._view() as session:
            return await tokens.owner_of(session, token_id)

    async def balance_of(self, address: str) -> int:
        async with self._view() as session:
            return await tokens.balance_of(session, address)

    async def tokens_of(self, address: str) -> List[int]:
        async with self._view() as session:
            return await tokens.tokens_of(session, address)

    async def transfer(self, token_id: int, to: str, caller: str) -> None:
        async with self._mutation("transfer") as session:
            await market.transfer(session, token_id, to, caller)

    async def proceeds_of(self, address: str) -> int:
        async with self._view() as session:
            return await market.proceeds_of(session, address)

    # Events

    async def get_events(self, limit: int = 100) -> List[LedgerEventRead]:
        async with self._view() as session:
            rows = await events.get_events(session, limit)
            return [LedgerEventRead.model_validate(row) for row in rows]
