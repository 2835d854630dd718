"""
Ledger event log handler.
"""

from sqlalchemy.ext.asyncio import AsyncSession
from sqlmodel import select
from typing import Any, Dict, List

from carbon_registry.models.event import LedgerEvent
from carbon_registry.utils.hashing import canonical_json, hash_payload
from carbon_registry.utils.time import utc_now

PENDING_EVENTS_KEY = "pending_events"


def record_event(session: AsyncSession, event: str, payload: Dict[str, Any]) -> LedgerEvent:
    """
    Stage an event in the current transaction.

    The row is written together with the state change it describes, so a
    rejected or rolled back operation leaves no event behind.
    """
    entry = LedgerEvent(
        event=event,
        payload=canonical_json(payload),
        payload_hash=hash_payload({"event": event, **payload}),
        created_at=utc_now()
    )
    session.add(entry)
    session.info.setdefault(PENDING_EVENTS_KEY, []).append((event, payload))
    return entry


def pop_pending_events(session: AsyncSession) -> List[tuple]:
    """Take the (event, payload) pairs staged on a session."""
    return session.info.pop(PENDING_EVENTS_KEY, [])


async def get_events(session: AsyncSession, limit: int = 100) -> List[LedgerEvent]:
    """Most recent events first."""
    statement = select(LedgerEvent).order_by(LedgerEvent.id.desc()).limit(limit)
    result = await session.execute(statement)
    return list(result.scalars().all())
