"""
FastAPI dependencies shared by the routers.
"""

from fastapi import Header, Request

from carbon_registry.core.constants import CALLER_HEADER
from carbon_registry.core.ledger import CarbonLedger


def get_ledger(request: Request) -> CarbonLedger:
    """Ledger attached to the application at startup."""
    return request.app.state.ledger


def get_caller(caller: str = Header(..., alias=CALLER_HEADER)) -> str:
    """
    Caller address taken from the request header.

    The address is trusted as sent; there is no signature check.
    """
    return caller
