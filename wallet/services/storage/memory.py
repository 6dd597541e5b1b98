"""
In-Memory Storage Implementation

Keeps the last saved snapshot in process memory. Used by tests and by
embedding applications that only need checkpoint/restore within one run.

Snapshots are deep-copied on both save and load, so a service built from
this storage never shares mutable accounts or payments with it.
"""

from typing import Optional

from wallet.models.ledger import LedgerState
from wallet.services.storage.interface import LedgerStorageInterface


class InMemoryLedgerStorage(LedgerStorageInterface):
    """Ledger storage backed by a single in-process snapshot."""

    def __init__(self, initial: Optional[LedgerState] = None):
        self._state: Optional[LedgerState] = (
            initial.model_copy(deep=True) if initial is not None else None
        )
        self.save_count = 0

    def load(self) -> LedgerState:
        if self._state is None:
            return LedgerState()
        return self._state.model_copy(deep=True)

    def save(self, state: LedgerState) -> None:
        self._state = state.model_copy(deep=True)
        self.save_count += 1
