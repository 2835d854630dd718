"""
Ledger error taxonomy.

Every failure is a precondition violation raised before any state is
touched. ``code`` is the stable error name returned to API clients.
"""

from fastapi import status


class LedgerError(Exception):
    """Base error for rejected ledger operations."""

    status_code: int = status.HTTP_400_BAD_REQUEST

    def __init__(self, message: str = ""):
        super().__init__(message or self.code)
        self.message = message or self.code

    @property
    def code(self) -> str:
        return type(self).__name__

    def __str__(self) -> str:
        return f"{self.code}: {self.message}"


class InvalidInput(LedgerError):
    """Empty identifier or malformed argument."""


class InvalidAmount(InvalidInput):
    """Non-positive carbon amount or sale price."""


class AlreadyRegistered(LedgerError):
    status_code = status.HTTP_409_CONFLICT


class AlreadyListed(LedgerError):
    status_code = status.HTTP_409_CONFLICT


class NotFound(LedgerError):
    status_code = status.HTTP_404_NOT_FOUND


class NotAuthorized(LedgerError):
    status_code = status.HTTP_403_FORBIDDEN


class NotOwner(LedgerError):
    status_code = status.HTTP_403_FORBIDDEN


class NotVerified(LedgerError):
    status_code = status.HTTP_403_FORBIDDEN


class DeviceInactive(LedgerError):
    pass


class NotForSale(LedgerError):
    status_code = status.HTTP_409_CONFLICT


class WrongPayment(LedgerError):
    """Payment must equal the listed price exactly."""


class SelfPurchase(LedgerError):
    status_code = status.HTTP_409_CONFLICT


class ReentrantCall(LedgerError):
    """A mutating call was made while another one is in progress."""

    status_code = status.HTTP_409_CONFLICT
