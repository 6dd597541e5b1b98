"""Services package."""

from wallet.services.storage import (
    InMemoryLedgerStorage,
    LedgerStorageInterface,
    NoStorageAttachedError,
    StorageError,
)

__all__ = [
    # Storage services
    "InMemoryLedgerStorage",
    "LedgerStorageInterface",
    "NoStorageAttachedError",
    "StorageError",
]
