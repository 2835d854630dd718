"""
Marketplace handler: fixed-price listings, purchases and transfers.

Sale status of one credit:

    NotListed --list_for_sale--> Listed
    Listed --purchase / delist--> NotListed
"""

from sqlalchemy.ext.asyncio import AsyncSession
from sqlmodel import select, func

from carbon_registry.core.constants import (
    EVENT_CREDIT_DELISTED,
    EVENT_CREDIT_LISTED,
    EVENT_CREDIT_SOLD,
    MAX_AMOUNT,
    NOT_FOR_SALE_PRICE,
)
from carbon_registry.core.errors import (
    AlreadyListed,
    InvalidAmount,
    InvalidInput,
    NotForSale,
    NotFound,
    NotOwner,
    SelfPurchase,
    WrongPayment,
)
from carbon_registry.handlers.credits import get_credit_row
from carbon_registry.handlers.events import record_event
from carbon_registry.handlers.tokens import assign_owner, find_owner, owner_of
from carbon_registry.models.credit import CarbonCredit
from carbon_registry.models.payment import Payment
from carbon_registry.utils.time import utc_now


def _reset_listing(credit: CarbonCredit) -> None:
    credit.for_sale = False
    credit.price = NOT_FOR_SALE_PRICE


async def list_for_sale(
    session: AsyncSession,
    token_id: int,
    price: int,
    caller: str
) -> CarbonCredit:
    """Put the caller's credit up for sale at a fixed price."""
    if price <= NOT_FOR_SALE_PRICE or price > MAX_AMOUNT:
        raise InvalidAmount(f"price must be between 1 and {MAX_AMOUNT}")

    owner = await find_owner(session, token_id)
    if owner is None:
        raise NotFound(f"token {token_id} does not exist")
    if owner != caller:
        raise NotOwner(f"{caller} does not own token {token_id}")

    credit = await get_credit_row(session, token_id)
    if credit.for_sale:
        raise AlreadyListed(f"token {token_id} is already listed")

    credit.price = price
    credit.for_sale = True
    session.add(credit)
    record_event(session, EVENT_CREDIT_LISTED, {"token_id": token_id, "price": price})
    return credit


async def purchase(
    session: AsyncSession,
    token_id: int,
    caller: str,
    payment: int
) -> Payment:
    """
    Buy a listed credit by paying exactly its price.

    The listing is reset and ownership moved before the payment to the
    seller is staged; the payment is always the last effect.
    """
    credit = await session.get(CarbonCredit, token_id)
    seller = await find_owner(session, token_id)
    if credit is None or seller is None:
        raise NotFound(f"token {token_id} does not exist")
    if not credit.for_sale:
        raise NotForSale(f"token {token_id} is not for sale")
    if payment != credit.price:
        raise WrongPayment(f"payment {payment} does not match price {credit.price}")
    if seller == caller:
        raise SelfPurchase(f"{caller} already owns token {token_id}")

    price = credit.price
    _reset_listing(credit)
    session.add(credit)

    await assign_owner(session, token_id, caller, previous=seller)
    record_event(session, EVENT_CREDIT_SOLD, {"token_id": token_id, "buyer": caller, "price": price})

    paid = Payment(
        token_id=token_id,
        payer=caller,
        payee=seller,
        amount=price,
        created_at=utc_now()
    )
    session.add(paid)
    return paid


async def delist(session: AsyncSession, token_id: int, caller: str) -> CarbonCredit:
    """Withdraw the caller's listing."""
    owner = await owner_of(session, token_id)
    if owner != caller:
        raise NotOwner(f"{caller} does not own token {token_id}")

    credit = await get_credit_row(session, token_id)
    if not credit.for_sale:
        raise NotForSale(f"token {token_id} is not for sale")

    _reset_listing(credit)
    session.add(credit)
    record_event(session, EVENT_CREDIT_DELISTED, {"token_id": token_id})
    return credit


async def transfer(session: AsyncSession, token_id: int, to: str, caller: str) -> None:
    """
    Owner-initiated transfer.

    A listed token is taken off the market first so the old listing can
    never sell it on behalf of the new owner.
    """
    if not to:
        raise InvalidInput("recipient must not be empty")
    owner = await owner_of(session, token_id)
    if owner != caller:
        raise NotOwner(f"{caller} does not own token {token_id}")

    credit = await get_credit_row(session, token_id)
    if credit.for_sale:
        _reset_listing(credit)
        session.add(credit)
        record_event(session, EVENT_CREDIT_DELISTED, {"token_id": token_id})

    await assign_owner(session, token_id, to, previous=owner)


async def proceeds_of(session: AsyncSession, address: str) -> int:
    """Total sale proceeds paid to an address."""
    statement = select(func.sum(Payment.amount)).where(Payment.payee == address)
    result = await session.execute(statement)
    return result.scalar() or 0
