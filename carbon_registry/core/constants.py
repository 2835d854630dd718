"""
Ledger constants: event names, sale sentinels and caller header.
"""

# A price of zero marks a credit as not for sale; it is never a valid sale price
NOT_FOR_SALE_PRICE = 0

# First token id handed out by the mint counter
FIRST_TOKEN_ID = 0

# HTTP header carrying the caller's address
CALLER_HEADER = "X-Caller-Address"

# Event names written to the ledger event log
EVENT_DEVICE_REGISTERED = "DeviceRegistered"
EVENT_DEVICE_DEACTIVATED = "DeviceDeactivated"
EVENT_PRODUCER_VERIFIED = "ProducerVerified"
EVENT_CREDIT_MINTED = "CreditMinted"
EVENT_DATA_VERIFIED = "DataVerified"
EVENT_CREDIT_LISTED = "CreditListed"
EVENT_CREDIT_DELISTED = "CreditDelisted"
EVENT_CREDIT_SOLD = "CreditSold"
EVENT_TRANSFER = "Transfer"

# Largest amount or price a ledger INTEGER column can hold (signed 64-bit)
MAX_AMOUNT = 2**63 - 1
