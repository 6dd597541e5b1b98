"""
Storage Services Package

Provides the abstract load/save interface for ledger state and an
in-memory implementation.
"""

from wallet.services.storage.interface import (
    LedgerStorageInterface,
    NoStorageAttachedError,
    StorageError,
)
from wallet.services.storage.memory import InMemoryLedgerStorage

__all__ = [
    # Interfaces
    "LedgerStorageInterface",
    # Exceptions
    "NoStorageAttachedError",
    "StorageError",
    # In-memory implementation
    "InMemoryLedgerStorage",
]
