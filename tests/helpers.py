"""Addresses and helpers shared across the test modules."""

MEMORY_URL = "sqlite+aiosqlite:///:memory:"

ADMIN = "0xadmin"
ALICE = "0xalice"
BOB = "0xbob"
CAROL = "0xcarol"


def as_caller(address):
    """Request headers identifying the caller."""
    return {"X-Caller-Address": address}
