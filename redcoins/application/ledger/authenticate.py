"""
Use case: Verify a user's credentials.

Unknown emails and wrong passwords fail the same way, so callers cannot
probe which emails are registered.
"""

import logging

from redcoins.domain.ledger.errors import AuthenticationError
from redcoins.domain.ledger.ports import AccountRepository, PasswordHasher

logger = logging.getLogger(__name__)


class AuthenticateUseCase:
    """Checks a raw password against the stored hash."""

    def __init__(
        self,
        account_repo: AccountRepository,
        hasher: PasswordHasher,
    ) -> None:
        self._account_repo = account_repo
        self._hasher = hasher

    def execute(self, email: str, password: str) -> None:
        """Return silently on success.

        Raises:
            AuthenticationError: If the account is unknown or the
                password does not match.
        """
        stored = self._account_repo.get_password_hash(email)
        if stored is None or not self._hasher.verify(password, stored):
            logger.warning("Authentication failed")
            raise AuthenticationError()
