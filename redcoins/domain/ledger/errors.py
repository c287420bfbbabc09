"""
Domain-specific errors for the ledger bounded context.

All errors raised from the domain and application layers are defined here.
They are mapped to HTTP responses at the interface layer.
No framework imports allowed.
"""


class LedgerDomainError(Exception):
    """Base error for all ledger domain errors.

    Attributes:
        message: Human-readable description, for logs only.
        code: Short machine code sent to clients.
        internal: True when the failure is a server fault that operators
            must see in the error log.
    """

    code = "erro_interno"
    internal = False

    def __init__(self, message: str) -> None:
        self.message = message
        super().__init__(self.message)


class DuplicateAccountError(LedgerDomainError):
    """Raised when an account with the same email is already registered."""

    code = "email_ja_cadastrado"

    def __init__(self, email: str) -> None:
        super().__init__(f"Account already registered: {email}")
        self.email = email


class AccountNotFoundError(LedgerDomainError):
    """Raised when no account matches the given email."""

    code = "usuario_nao_existente"

    def __init__(self, email: str) -> None:
        super().__init__(f"Account not found: {email}")
        self.email = email


class InsufficientBalanceError(LedgerDomainError):
    """Raised when a sell would drive the asset balance below zero."""

    code = "saldo_insuficiente"

    def __init__(self, required: str, available: str) -> None:
        super().__init__(
            f"Insufficient balance: required {required}, available {available}"
        )
        self.required = required
        self.available = available


class AuthenticationError(LedgerDomainError):
    """Raised when credentials are missing or do not match.

    Answered with an empty 403, so no client code is attached.
    """

    def __init__(self) -> None:
        super().__init__("Authentication failed")


class StorageError(LedgerDomainError):
    """Raised for any store failure not otherwise classified.

    The reason is kept for logs; clients only see a generic message.
    """

    internal = True

    def __init__(self, reason: str) -> None:
        super().__init__(f"Storage failure: {reason}")
        self.reason = reason


class PriceQuoteError(LedgerDomainError):
    """Raised when the unit price of the asset cannot be obtained."""

    code = "preco_indisponivel"
    internal = True

    def __init__(self, reason: str) -> None:
        super().__init__(f"Price quote unavailable: {reason}")
        self.reason = reason
