"""
Core Data Models for the Wallet Ledger

These models define the schemas for everything the ledger holds.
They are designed to:
1. Enforce the numeric invariants at runtime (no negative balances)
2. Be serializable for storage and logging
3. Keep favorites decoupled from the payments they were copied from

DESIGN DECISION: Accounts and payments are mutated in place by the
service, so they use validate_assignment. A balance that would drop
below zero raises instead of being stored.
"""

from enum import Enum
from uuid import uuid4

from pydantic import BaseModel, ConfigDict, Field, model_validator


def new_id() -> str:
    """Generate a fresh opaque identifier for payments and favorites."""
    return str(uuid4())


# =============================================================================
# ENUMS
# =============================================================================

class PaymentStatus(str, Enum):
    """
    Payment lifecycle status.

    The only transition is IN_PROGRESS -> FAIL, triggered by a rejection.
    """
    IN_PROGRESS = "INPROGRESS"
    FAIL = "FAIL"


# =============================================================================
# LEDGER ENTITIES
# =============================================================================

class Account(BaseModel):
    """
    A registered wallet, identified by phone number.

    Balance is kept in minor units (integer) and can never be negative.
    """
    model_config = ConfigDict(validate_assignment=True)

    id: int = Field(
        ...,
        ge=1,
        description="Sequential account ID assigned by the service"
    )
    phone: str = Field(
        ...,
        description="Phone number, unique across accounts"
    )
    balance: int = Field(
        default=0,
        ge=0,
        description="Balance in minor units"
    )


class Payment(BaseModel):
    """
    A single debit against an account.

    Only the status changes after creation.
    """
    model_config = ConfigDict(validate_assignment=True)

    id: str = Field(
        default_factory=new_id,
        description="Unique payment ID"
    )
    account_id: int = Field(
        ...,
        description="Account the payment was charged to"
    )
    amount: int = Field(
        ...,
        gt=0,
        description="Charged amount in minor units"
    )
    category: str = Field(
        ...,
        description="Free-form category label"
    )
    status: PaymentStatus = Field(
        default=PaymentStatus.IN_PROGRESS,
        description="Payment status"
    )


class Favorite(BaseModel):
    """
    Named template for re-issuing a payment.

    A snapshot: later changes to the source payment do not reach it.
    """
    model_config = ConfigDict(frozen=True)

    id: str = Field(
        default_factory=new_id,
        description="Unique favorite ID"
    )
    name: str = Field(
        ...,
        description="Display label"
    )
    account_id: int
    amount: int = Field(..., gt=0)
    category: str


# =============================================================================
# PERSISTENCE SNAPSHOT
# =============================================================================

class LedgerState(BaseModel):
    """
    Everything a WalletService owns, as one serializable value.

    This is what storage backends load and save.
    """

    next_account_id: int = Field(
        default=0,
        ge=0,
        description="Last account ID handed out"
    )
    accounts: list[Account] = Field(default_factory=list)
    payments: list[Payment] = Field(default_factory=list)
    favorites: list[Favorite] = Field(default_factory=list)

    @model_validator(mode='after')
    def validate_accounts(self) -> 'LedgerState':
        """Validate account identity invariants of a loaded state."""
        account_ids = [account.id for account in self.accounts]
        if len(set(account_ids)) != len(account_ids):
            raise ValueError("Duplicate account IDs in ledger state")

        if account_ids and self.next_account_id < max(account_ids):
            raise ValueError(
                f"next_account_id {self.next_account_id} is behind "
                f"highest account ID {max(account_ids)}"
            )

        phones = [account.phone for account in self.accounts]
        if len(set(phones)) != len(phones):
            raise ValueError("Duplicate phone numbers in ledger state")

        return self
