"""
Abstract Storage Interface

DESIGN DECISION: The ledger runs entirely in memory. Persistence is
an outside concern reached through two hooks:
1. load() - build the initial ledger state
2. save() - checkpoint the current ledger state

This allows us to:
1. Plug in a real database later
2. Use in-memory storage for testing
3. Keep business logic decoupled from storage implementation

The interface is intentionally tiny - whole-state snapshots, no queries.
"""

from abc import ABC, abstractmethod

from wallet.models.ledger import LedgerState


class LedgerStorageInterface(ABC):
    """
    Abstract interface for ledger state storage.

    Any storage implementation must implement these methods.
    """

    @abstractmethod
    def load(self) -> LedgerState:
        """
        Load the last saved ledger state.

        Returns:
            The stored state, or an empty LedgerState if nothing was saved yet

        Raises:
            StorageError: If the backend cannot be read
        """
        pass

    @abstractmethod
    def save(self, state: LedgerState) -> None:
        """
        Persist a ledger state snapshot, replacing the previous one.

        Args:
            state: The state to save

        Raises:
            StorageError: If save fails
        """
        pass


class StorageError(Exception):
    """Base exception for storage operations."""
    pass


class NoStorageAttachedError(StorageError):
    """A checkpoint was requested on a service without storage."""
    pass
