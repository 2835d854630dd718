"""
Token ownership handler: one owner per token, transfers are atomic.
"""

from sqlalchemy.ext.asyncio import AsyncSession
from sqlmodel import select, func
from typing import List, Optional

from carbon_registry.core.constants import EVENT_TRANSFER
from carbon_registry.core.errors import NotFound
from carbon_registry.handlers.events import record_event
from carbon_registry.models.token import TokenOwner


async def find_owner(session: AsyncSession, token_id: int) -> Optional[str]:
    """Current owner of a token, or None if it was never minted."""
    row = await session.get(TokenOwner, token_id)
    return row.owner if row is not None else None


async def owner_of(session: AsyncSession, token_id: int) -> str:
    """Current owner of a token."""
    owner = await find_owner(session, token_id)
    if owner is None:
        raise NotFound(f"token {token_id} does not exist")
    return owner


async def balance_of(session: AsyncSession, address: str) -> int:
    """Number of tokens held by an address."""
    statement = select(func.count(TokenOwner.token_id)).where(TokenOwner.owner == address)
    result = await session.execute(statement)
    return result.scalar() or 0


async def tokens_of(session: AsyncSession, address: str) -> List[int]:
    """Token ids held by an address, ascending."""
    statement = select(TokenOwner.token_id).where(
        TokenOwner.owner == address
    ).order_by(TokenOwner.token_id)
    result = await session.execute(statement)
    return list(result.scalars().all())


async def assign_owner(
    session: AsyncSession,
    token_id: int,
    to: str,
    previous: Optional[str] = None
) -> None:
    """Move a token to ``to``; ``previous`` is None on mint."""
    row = await session.get(TokenOwner, token_id)
    if row is None:
        row = TokenOwner(token_id=token_id, owner=to)
    else:
        row.owner = to
    session.add(row)
    record_event(session, EVENT_TRANSFER, {"from": previous, "to": to, "token_id": token_id})
