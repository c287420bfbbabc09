"""
Use case: Register a new user from raw credentials.

Hashes the password through the PasswordHasher port, then delegates to
CreateAccountUseCase. The raw password never leaves this use case.
"""

from redcoins.application.ledger.create_account import CreateAccountUseCase
from redcoins.application.ledger.dtos import (
    CreateAccountCommand,
    RegisterAccountCommand,
)
from redcoins.domain.ledger.ports import PasswordHasher


class RegisterAccountUseCase:
    """Hash then create."""

    def __init__(
        self,
        hasher: PasswordHasher,
        create_account: CreateAccountUseCase,
    ) -> None:
        self._hasher = hasher
        self._create_account = create_account

    def execute(self, command: RegisterAccountCommand) -> int:
        return self._create_account.execute(
            CreateAccountCommand(
                email=command.email,
                password_hash=self._hasher.hash(command.password),
                name=command.name,
                birth_date=command.birth_date,
            )
        )
