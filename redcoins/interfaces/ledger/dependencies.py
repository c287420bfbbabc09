"""
Dependency injection for the ledger bounded context.

Provides FastAPI dependency functions that wire infrastructure
adapters into use cases via constructor injection.
These are the composition root for the ledger context.

Process-wide resources (the Database and the price-quote client) are
built once per application from its Settings by ``build_database`` and
``build_price_quote``, and kept on ``app.state``. Tests replace them
through ``app.dependency_overrides``.
"""

from typing import Optional

from fastapi import Depends, Request
from fastapi.security import HTTPBasic, HTTPBasicCredentials

from redcoins.application.ledger.authenticate import AuthenticateUseCase
from redcoins.application.ledger.create_account import CreateAccountUseCase
from redcoins.application.ledger.execute_market_trade import (
    ExecuteMarketTradeUseCase,
)
from redcoins.application.ledger.get_trades import (
    GetAccountTradesUseCase,
    GetBalanceUseCase,
    GetTradesOnDateUseCase,
)
from redcoins.application.ledger.record_trade import RecordTradeUseCase
from redcoins.application.ledger.register_account import RegisterAccountUseCase
from redcoins.core.config import Settings
from redcoins.domain.ledger.errors import AuthenticationError
from redcoins.domain.ledger.ports import PasswordHasher, PriceQuotePort
from redcoins.infrastructure.database import Database
from redcoins.infrastructure.ledger.account_repository import (
    AccountRepositoryAdapter,
)
from redcoins.infrastructure.ledger.balance_engine import SqlBalanceEngine
from redcoins.infrastructure.ledger.ledger_repository import (
    LedgerRepositoryAdapter,
)
from redcoins.infrastructure.ledger.password_hasher import ScryptPasswordHasher
from redcoins.infrastructure.ledger.price_quote_adapter import (
    HttpPriceQuoteAdapter,
)

basic_auth = HTTPBasic(auto_error=False)


def build_database(settings: Settings) -> Database:
    """Build the application's Database from its settings."""
    return Database(settings.database_config())


def build_price_quote(settings: Settings) -> HttpPriceQuoteAdapter:
    """Build the application's price-quote client (shares its hourly cache)."""
    return HttpPriceQuoteAdapter(
        url=settings.price_quote_url,
        currency=settings.price_quote_currency,
        timeout=settings.price_quote_timeout,
    )


def get_database(request: Request) -> Database:
    return request.app.state.database


def get_price_quote_port(request: Request) -> PriceQuotePort:
    return request.app.state.price_quote


def get_password_hasher() -> PasswordHasher:
    return ScryptPasswordHasher()


def get_create_account_use_case(
    database: Database = Depends(get_database),
) -> CreateAccountUseCase:
    """Build CreateAccountUseCase with its infrastructure dependencies."""
    return CreateAccountUseCase(
        transactions=database,
        account_repo=AccountRepositoryAdapter(database),
    )


def get_register_account_use_case(
    hasher: PasswordHasher = Depends(get_password_hasher),
    create_account: CreateAccountUseCase = Depends(get_create_account_use_case),
) -> RegisterAccountUseCase:
    """Build RegisterAccountUseCase with its infrastructure dependencies."""
    return RegisterAccountUseCase(hasher=hasher, create_account=create_account)


def get_authenticate_use_case(
    database: Database = Depends(get_database),
    hasher: PasswordHasher = Depends(get_password_hasher),
) -> AuthenticateUseCase:
    """Build AuthenticateUseCase with its infrastructure dependencies."""
    return AuthenticateUseCase(
        account_repo=AccountRepositoryAdapter(database),
        hasher=hasher,
    )


def get_record_trade_use_case(
    database: Database = Depends(get_database),
) -> RecordTradeUseCase:
    """Build RecordTradeUseCase with its infrastructure dependencies."""
    return RecordTradeUseCase(
        transactions=database,
        account_repo=AccountRepositoryAdapter(database),
        ledger_repo=LedgerRepositoryAdapter(database),
        balance_engine=SqlBalanceEngine(),
    )


def get_market_trade_use_case(
    price_quote: PriceQuotePort = Depends(get_price_quote_port),
    record_trade: RecordTradeUseCase = Depends(get_record_trade_use_case),
) -> ExecuteMarketTradeUseCase:
    """Build ExecuteMarketTradeUseCase with its infrastructure dependencies."""
    return ExecuteMarketTradeUseCase(
        price_quote=price_quote,
        record_trade=record_trade,
    )


def get_account_trades_use_case(
    database: Database = Depends(get_database),
) -> GetAccountTradesUseCase:
    return GetAccountTradesUseCase(ledger_repo=LedgerRepositoryAdapter(database))


def get_trades_on_date_use_case(
    database: Database = Depends(get_database),
) -> GetTradesOnDateUseCase:
    return GetTradesOnDateUseCase(ledger_repo=LedgerRepositoryAdapter(database))


def get_balance_use_case(
    database: Database = Depends(get_database),
) -> GetBalanceUseCase:
    return GetBalanceUseCase(ledger_repo=LedgerRepositoryAdapter(database))


def get_authenticated_email(
    credentials: Optional[HTTPBasicCredentials] = Depends(basic_auth),
    use_case: AuthenticateUseCase = Depends(get_authenticate_use_case),
) -> str:
    """Resolve HTTP Basic credentials to the caller's email.

    Raises:
        AuthenticationError: If credentials are absent or wrong.
    """
    if credentials is None:
        raise AuthenticationError()
    use_case.execute(credentials.username, credentials.password)
    return credentials.username
