"""
Use case: Resolve an email to its internal account id.

Read-only; runs outside any write transaction and takes no locks.
Failure cases: AccountNotFoundError, StorageError.
"""

from redcoins.domain.ledger.errors import AccountNotFoundError
from redcoins.domain.ledger.ports import AccountRepository


class LookupAccountUseCase:
    """Read-only lookup in the account registry."""

    def __init__(self, account_repo: AccountRepository) -> None:
        self._account_repo = account_repo

    def execute(self, email: str) -> int:
        account_id = self._account_repo.lookup_id(email)
        if account_id is None:
            raise AccountNotFoundError(email)
        return account_id
