"""
Wallet Ledger Service

This module owns the ledger: accounts, payments and favorites, plus the
counter that hands out account IDs. It defines the operations that
mutate them:
1. Register / Deposit (accounts)
2. Pay / Reject / Repeat (payments)
3. Favorite / Pay from favorite (saved payment templates)

DESIGN DECISION: A refused operation raises one of the WalletError
subclasses below and leaves the ledger untouched. Every check runs
before the first mutation.

Persistence is optional. A service built with a storage backend can be
checkpointed at any time; without one it is purely in-memory.
"""

import functools
from typing import Optional

from wallet.logger import get_logger
from wallet.models.ledger import (
    Account,
    Favorite,
    LedgerState,
    Payment,
    PaymentStatus,
)
from wallet.services.storage import (
    LedgerStorageInterface,
    NoStorageAttachedError,
)


logger = get_logger(__name__)


class WalletError(Exception):
    """Base exception for refused ledger operations."""
    pass


class PhoneAlreadyRegisteredError(WalletError):
    """An account with this phone number already exists."""

    def __init__(self, phone: str):
        self.phone = phone
        super().__init__(f"phone already registered: {phone}")


class AmountMustBePositiveError(WalletError):
    """Deposit or payment amount is zero or negative."""

    def __init__(self, amount: int):
        self.amount = amount
        super().__init__(f"amount must be greater than zero, got {amount}")


class AccountNotFoundError(WalletError):
    """No account with this ID."""

    def __init__(self, account_id: int):
        self.account_id = account_id
        super().__init__(f"account not found: {account_id}")


class InsufficientBalanceError(WalletError):
    """Account balance is lower than the requested payment."""

    def __init__(self, account_id: int, balance: int, amount: int):
        self.account_id = account_id
        self.balance = balance
        self.amount = amount
        super().__init__(
            f"not enough balance on account {account_id}: {balance} < {amount}"
        )


class PaymentNotFoundError(WalletError):
    """No payment with this ID."""

    def __init__(self, payment_id: str):
        self.payment_id = payment_id
        super().__init__(f"payment not found: {payment_id}")


class PaymentCreationFailedError(WalletError):
    """Re-running a payment failed. The underlying error is in .reason."""

    def __init__(self, payment_id: str, reason: WalletError):
        self.payment_id = payment_id
        self.reason = reason
        super().__init__(f"could not repeat payment {payment_id}: {reason}")


class FavoriteNotFoundError(WalletError):
    """No favorite with this ID."""

    def __init__(self, favorite_id: str):
        self.favorite_id = favorite_id
        super().__init__(f"favorite not found: {favorite_id}")


def _logs_refusals(operation: str):
    """Log a warning naming the error kind when a ledger operation is refused."""

    def decorator(func):
        @functools.wraps(func)
        def wrapper(*args, **kwargs):
            try:
                return func(*args, **kwargs)
            except WalletError as e:
                logger.warning(
                    "operation_refused",
                    operation=operation,
                    error=type(e).__name__,
                    message=str(e),
                )
                raise
        return wrapper

    return decorator


class WalletService:
    """
    In-memory wallet ledger.

    GUARANTEES:
    - Phone numbers are unique across accounts
    - Balances never go negative
    - Favorites are snapshots, unaffected by later changes to their payment
    - Repeat and pay-from-favorite re-validate everything a new payment needs
    """

    def __init__(
        self,
        state: Optional[LedgerState] = None,
        storage: Optional[LedgerStorageInterface] = None,
    ):
        """
        Initialize the ledger.

        Args:
            state: Starting state. A deep copy is taken; defaults to empty.
            storage: Backend used by checkpoint(). Optional.
        """
        state = state.model_copy(deep=True) if state is not None else LedgerState()
        self._next_account_id = state.next_account_id
        self._accounts: list[Account] = state.accounts
        self._payments: list[Payment] = state.payments
        self._favorites: list[Favorite] = state.favorites
        self._storage = storage

    @classmethod
    def from_storage(cls, storage: LedgerStorageInterface) -> "WalletService":
        """Build a service from the storage's last saved state."""
        state = storage.load()
        logger.info(
            "ledger_loaded",
            accounts=len(state.accounts),
            payments=len(state.payments),
            favorites=len(state.favorites),
        )
        return cls(state=state, storage=storage)

    # -------------------------------------------------------------------------
    # Read access
    # -------------------------------------------------------------------------

    @property
    def accounts(self) -> tuple[Account, ...]:
        return tuple(self._accounts)

    @property
    def payments(self) -> tuple[Payment, ...]:
        return tuple(self._payments)

    @property
    def favorites(self) -> tuple[Favorite, ...]:
        return tuple(self._favorites)

    def find_account_by_id(self, account_id: int) -> Account:
        for account in self._accounts:
            if account.id == account_id:
                return account
        raise AccountNotFoundError(account_id)

    def find_payment_by_id(self, payment_id: str) -> Payment:
        for payment in self._payments:
            if payment.id == payment_id:
                return payment
        raise PaymentNotFoundError(payment_id)

    def find_favorite_by_id(self, favorite_id: str) -> Favorite:
        for favorite in self._favorites:
            if favorite.id == favorite_id:
                return favorite
        raise FavoriteNotFoundError(favorite_id)

    # -------------------------------------------------------------------------
    # Accounts
    # -------------------------------------------------------------------------

    @_logs_refusals("register_account")
    def register_account(self, phone: str) -> Account:
        """
        Register a new account with zero balance.

        Raises:
            PhoneAlreadyRegisteredError: If any account already uses this phone
        """
        for account in self._accounts:
            if account.phone == phone:
                raise PhoneAlreadyRegisteredError(phone)

        self._next_account_id += 1
        account = Account(id=self._next_account_id, phone=phone, balance=0)
        self._accounts.append(account)

        logger.info("account_registered", account_id=account.id)
        return account

    @_logs_refusals("deposit")
    def deposit(self, account_id: int, amount: int) -> None:
        """
        Add funds to an account.

        Raises:
            AmountMustBePositiveError: If amount <= 0
            AccountNotFoundError: If the account does not exist
        """
        if amount <= 0:
            raise AmountMustBePositiveError(amount)

        account = self.find_account_by_id(account_id)
        account.balance += amount

        logger.info(
            "deposit_applied",
            account_id=account_id,
            amount=amount,
            balance=account.balance,
        )

    # -------------------------------------------------------------------------
    # Payments
    # -------------------------------------------------------------------------

    @_logs_refusals("pay")
    def pay(self, account_id: int, amount: int, category: str) -> Payment:
        """
        Charge an account and record the payment as IN_PROGRESS.

        Checks run in order: amount, account, balance.

        Raises:
            AmountMustBePositiveError: If amount <= 0
            AccountNotFoundError: If the account does not exist
            InsufficientBalanceError: If the balance is lower than amount
        """
        if amount <= 0:
            raise AmountMustBePositiveError(amount)

        account = self.find_account_by_id(account_id)

        if account.balance < amount:
            raise InsufficientBalanceError(account_id, account.balance, amount)

        payment = Payment(
            account_id=account_id,
            amount=amount,
            category=category,
            status=PaymentStatus.IN_PROGRESS,
        )
        account.balance -= amount
        self._payments.append(payment)

        logger.info(
            "payment_created",
            payment_id=payment.id,
            account_id=account_id,
            amount=amount,
            category=category,
        )
        return payment

    @_logs_refusals("reject")
    def reject(self, payment_id: str) -> None:
        """
        Mark a payment as FAIL and refund its amount.

        Rejecting an already rejected payment is a no-op: the amount is
        refunded once only.

        Raises:
            PaymentNotFoundError: If the payment does not exist
            AccountNotFoundError: If the payment's account no longer exists
        """
        payment = self.find_payment_by_id(payment_id)
        account = self.find_account_by_id(payment.account_id)

        if payment.status == PaymentStatus.FAIL:
            logger.warning("payment_already_rejected", payment_id=payment_id)
            return

        payment.status = PaymentStatus.FAIL
        account.balance += payment.amount

        logger.info(
            "payment_rejected",
            payment_id=payment_id,
            account_id=account.id,
            refunded=payment.amount,
        )

    @_logs_refusals("repeat")
    def repeat(self, payment_id: str) -> Payment:
        """
        Issue a new payment with the same account, amount and category.

        The original payment's status is not consulted, so a rejected
        payment can be repeated.

        Raises:
            PaymentNotFoundError: If the original payment does not exist
            PaymentCreationFailedError: If the new payment is refused
        """
        original = self.find_payment_by_id(payment_id)

        try:
            payment = self.pay(original.account_id, original.amount, original.category)
        except WalletError as e:
            raise PaymentCreationFailedError(payment_id, e) from e

        logger.info("payment_repeated", payment_id=payment.id, original_id=payment_id)
        return payment

    # -------------------------------------------------------------------------
    # Favorites
    # -------------------------------------------------------------------------

    @_logs_refusals("favorite_payment")
    def favorite_payment(self, payment_id: str, name: str) -> Favorite:
        """
        Save a payment's account, amount and category under a name.

        Raises:
            PaymentNotFoundError: If the payment does not exist
        """
        payment = self.find_payment_by_id(payment_id)
        favorite = Favorite(
            name=name,
            account_id=payment.account_id,
            amount=payment.amount,
            category=payment.category,
        )
        self._favorites.append(favorite)

        logger.info("favorite_created", favorite_id=favorite.id, payment_id=payment_id)
        return favorite

    @_logs_refusals("pay_from_favorite")
    def pay_from_favorite(self, favorite_id: str) -> Payment:
        """
        Issue a new payment from a favorite.

        Errors from pay() propagate unchanged.

        Raises:
            FavoriteNotFoundError: If the favorite does not exist
            AccountNotFoundError: If the favorite's account does not exist
            InsufficientBalanceError: If the balance is lower than the amount
        """
        favorite = self.find_favorite_by_id(favorite_id)
        payment = self.pay(favorite.account_id, favorite.amount, favorite.category)

        logger.info("favorite_paid", favorite_id=favorite_id, payment_id=payment.id)
        return payment

    # -------------------------------------------------------------------------
    # Persistence
    # -------------------------------------------------------------------------

    def export_state(self) -> LedgerState:
        """Return a deep copy of the whole ledger."""
        return LedgerState(
            next_account_id=self._next_account_id,
            accounts=self._accounts,
            payments=self._payments,
            favorites=self._favorites,
        ).model_copy(deep=True)

    def checkpoint(self) -> None:
        """
        Save the current ledger to the attached storage.

        Raises:
            NoStorageAttachedError: If the service was built without storage
            StorageError: If the backend fails to save
        """
        if self._storage is None:
            raise NoStorageAttachedError("checkpoint requested but no storage is attached")

        self._storage.save(self.export_state())
        logger.info(
            "ledger_checkpointed",
            accounts=len(self._accounts),
            payments=len(self._payments),
            favorites=len(self._favorites),
        )
