"""
Tests for ledger persistence hooks.

No real backends in tests: the in-memory storage stands in for any
LedgerStorageInterface implementation.
"""

import pytest

from wallet.models.ledger import Account, LedgerState, PaymentStatus
from wallet.service import WalletService
from wallet.services.storage import (
    InMemoryLedgerStorage,
    LedgerStorageInterface,
    NoStorageAttachedError,
    StorageError,
)


class TestInMemoryStorage:
    """Tests for InMemoryLedgerStorage."""

    def test_load_before_save_is_empty(self):
        """Test an untouched storage loads an empty ledger."""
        assert InMemoryLedgerStorage().load() == LedgerState()

    def test_save_then_load(self):
        """Test the saved snapshot is loaded back."""
        storage = InMemoryLedgerStorage()
        state = LedgerState(next_account_id=1, accounts=[Account(id=1, phone="+1")])
        storage.save(state)
        assert storage.load() == state
        assert storage.save_count == 1

    def test_snapshots_are_copies(self):
        """Test later edits to a saved or loaded state do not leak."""
        storage = InMemoryLedgerStorage()
        state = LedgerState(next_account_id=1, accounts=[Account(id=1, phone="+1")])
        storage.save(state)
        state.accounts[0].balance = 500

        loaded = storage.load()
        assert loaded.accounts[0].balance == 0
        loaded.accounts[0].balance = 700
        assert storage.load().accounts[0].balance == 0

    def test_is_a_storage_interface(self):
        """Test the in-memory backend implements the interface."""
        assert isinstance(InMemoryLedgerStorage(), LedgerStorageInterface)


class TestServicePersistence:
    """Tests for WalletService load/checkpoint."""

    def test_checkpoint_and_restore(self):
        """Test a restored service continues where the saved one stopped."""
        storage = InMemoryLedgerStorage()
        service = WalletService.from_storage(storage)
        account = service.register_account("+992900801441")
        service.deposit(account.id, 1000)
        payment = service.pay(account.id, 100, "fun")
        favorite = service.favorite_payment(payment.id, "Cinema")
        service.reject(payment.id)
        service.checkpoint()

        restored = WalletService.from_storage(storage)
        assert restored.find_account_by_id(account.id).balance == 1000
        assert restored.find_payment_by_id(payment.id).status == PaymentStatus.FAIL
        assert restored.find_favorite_by_id(favorite.id).name == "Cinema"
        assert restored.register_account("+2").id == 2

    def test_restored_service_is_independent(self):
        """Test mutations after checkpoint do not reach storage until the next one."""
        storage = InMemoryLedgerStorage()
        service = WalletService.from_storage(storage)
        account = service.register_account("+1")
        service.checkpoint()
        service.deposit(account.id, 50)

        assert storage.load().accounts[0].balance == 0

    def test_export_state_is_a_copy(self):
        """Test the exported state does not share entities with the service."""
        service = WalletService()
        account = service.register_account("+1")
        state = service.export_state()
        state.accounts[0].balance = 999
        assert account.balance == 0

    def test_service_from_state(self):
        """Test a service can start from an explicit state."""
        state = LedgerState(next_account_id=3, accounts=[Account(id=3, phone="+3", balance=10)])
        service = WalletService(state=state)
        assert service.find_account_by_id(3).balance == 10
        assert service.register_account("+4").id == 4

    def test_checkpoint_without_storage(self):
        """Test checkpoint needs a storage backend."""
        with pytest.raises(NoStorageAttachedError):
            WalletService().checkpoint()
        assert issubclass(NoStorageAttachedError, StorageError)


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
