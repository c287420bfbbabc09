"""
Port interfaces (ABCs) for the ledger bounded context.

Ports define the contracts that the domain requires from the outside world.
Infrastructure adapters implement these interfaces.
The domain layer never depends on concrete implementations.

Write-side ports take an opaque transaction handle as their first
argument. Handles come only from ``TransactionManager.transaction()``
and are meaningless outside that scope.
"""

from abc import ABC, abstractmethod
from contextlib import AbstractContextManager
from datetime import date
from decimal import Decimal
from typing import Any, Optional

from redcoins.domain.ledger.entities import Account, LedgerEntry, Trade

TransactionHandle = Any


class TransactionManager(ABC):
    """Port for opening one atomic unit of work against the store."""

    @abstractmethod
    def transaction(self) -> AbstractContextManager[TransactionHandle]:
        """Open a write transaction.

        The transaction commits when the block exits normally and rolls
        back on any exception, which is then re-raised. Store failures
        surface as StorageError.
        """
        raise NotImplementedError


class AccountRepository(ABC):
    """Port for the account registry."""

    @abstractmethod
    def count_by_email(self, tx: TransactionHandle, email: str) -> int:
        """Return how many accounts use this email (0 or 1)."""
        raise NotImplementedError

    @abstractmethod
    def insert(self, tx: TransactionHandle, account: Account) -> int:
        """Insert an account and return its internal row id."""
        raise NotImplementedError

    @abstractmethod
    def find_id(
        self, tx: TransactionHandle, email: str, lock: bool = False
    ) -> Optional[int]:
        """Return the internal row id for an email, or None.

        Args:
            tx: Open transaction handle.
            email: Account identifier.
            lock: Take an exclusive row lock on the account row.
        """
        raise NotImplementedError

    @abstractmethod
    def lookup_id(self, email: str) -> Optional[int]:
        """Return the internal row id for an email, or None. Takes no locks."""
        raise NotImplementedError

    @abstractmethod
    def get_password_hash(self, email: str) -> Optional[bytes]:
        """Return the stored password hash for an email, or None."""
        raise NotImplementedError


class LedgerRepository(ABC):
    """Port for the append-only ledger table."""

    @abstractmethod
    def append(self, tx: TransactionHandle, account_id: int, trade: Trade) -> None:
        """Insert one ledger row for the account. There is no update path."""
        raise NotImplementedError

    @abstractmethod
    def count_for_account(self, email: str) -> int:
        """Return the number of ledger rows owned by an account."""
        raise NotImplementedError

    @abstractmethod
    def list_for_account(self, email: str) -> list[LedgerEntry]:
        """Return an account's entries in insertion order."""
        raise NotImplementedError

    @abstractmethod
    def list_on_date(self, trade_date: date) -> list[LedgerEntry]:
        """Return all entries dated ``trade_date``, across accounts, in insertion order."""
        raise NotImplementedError


class BalanceEngine(ABC):
    """Port for the locked balance read."""

    @abstractmethod
    def locked_balance(self, tx: TransactionHandle, account_id: int) -> Decimal:
        """Return the account's asset balance under an exclusive lock.

        Must be called inside an open write transaction. Concurrent
        transactions touching the same account block until this one
        finishes. An account with no rows has a balance of zero.
        """
        raise NotImplementedError


class PasswordHasher(ABC):
    """Port for producing and checking password hashes."""

    @abstractmethod
    def hash(self, raw_password: str) -> bytes:
        """Return an opaque fixed-length hash for the password."""
        raise NotImplementedError

    @abstractmethod
    def verify(self, raw_password: str, password_hash: bytes) -> bool:
        """Return True when the password matches the stored hash."""
        raise NotImplementedError


class PriceQuotePort(ABC):
    """Port for the market price of the asset in the quote currency."""

    @abstractmethod
    def unit_price(self) -> Decimal:
        """Return the price of one unit of the asset."""
        raise NotImplementedError

    @abstractmethod
    def price(self, asset_qty: Decimal) -> Decimal:
        """Return the price of ``asset_qty`` units, at currency scale."""
        raise NotImplementedError
