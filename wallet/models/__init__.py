"""
Data Models Package

This package contains all Pydantic models used by the wallet ledger.
"""

from wallet.models.ledger import (
    Account,
    Favorite,
    LedgerState,
    Payment,
    PaymentStatus,
    new_id,
)

__all__ = [
    "Account",
    "Favorite",
    "LedgerState",
    "Payment",
    "PaymentStatus",
    "new_id",
]
