"""
Use case: Create an account in the registry.

Input: CreateAccountCommand (email, password hash, name, birth date)
Output: Internal account id.
Side effects: Inserts one account row.
Failure cases: DuplicateAccountError, StorageError.

Concurrent registrations of the same email are not serialized here;
the unique constraint on account.email is the final guard.
"""

import logging

from redcoins.application.ledger.dtos import CreateAccountCommand
from redcoins.domain.ledger.entities import Account
from redcoins.domain.ledger.errors import DuplicateAccountError
from redcoins.domain.ledger.ports import AccountRepository, TransactionManager

logger = logging.getLogger(__name__)


class CreateAccountUseCase:
    """Checks email uniqueness and inserts the account atomically."""

    def __init__(
        self,
        transactions: TransactionManager,
        account_repo: AccountRepository,
    ) -> None:
        self._transactions = transactions
        self._account_repo = account_repo

    def execute(self, command: CreateAccountCommand) -> int:
        """Create the account.

        Args:
            command: Account fields, with the password already hashed.

        Returns:
            The new account's internal id.

        Raises:
            DuplicateAccountError: If the email is already registered.
        """
        account = Account(
            email=command.email,
            password_hash=command.password_hash,
            name=command.name,
            birth_date=command.birth_date,
        )
        with self._transactions.transaction() as tx:
            if self._account_repo.count_by_email(tx, account.email) > 0:
                logger.warning("Duplicate registration attempt")
                raise DuplicateAccountError(account.email)
            account_id = self._account_repo.insert(tx, account)

        logger.info("Account created: id=%s", account_id)
        return account_id
