"""
Shared fixtures for the RedCoins test suite.

Every database test gets its own SQLite file under tmp_path, with the
schema bootstrapped. Password hashing runs with a tiny scrypt cost.
"""

from collections.abc import Callable, Iterator
from datetime import date
from decimal import Decimal

import pytest
from fastapi.testclient import TestClient

from redcoins.application.ledger.create_account import CreateAccountUseCase
from redcoins.application.ledger.dtos import CreateAccountCommand, RecordTradeCommand
from redcoins.application.ledger.record_trade import RecordTradeUseCase
from redcoins.core.config import DatabaseConfig, Settings
from redcoins.domain.ledger.entities import to_currency
from redcoins.domain.ledger.ports import PriceQuotePort
from redcoins.infrastructure.database import Database
from redcoins.infrastructure.ledger.account_repository import AccountRepositoryAdapter
from redcoins.infrastructure.ledger.balance_engine import SqlBalanceEngine
from redcoins.infrastructure.ledger.ledger_repository import LedgerRepositoryAdapter
from redcoins.infrastructure.ledger.password_hasher import ScryptPasswordHasher
from redcoins.infrastructure.ledger.schema import bootstrap_schema
from redcoins.interfaces.ledger.dependencies import (
    get_database,
    get_password_hasher,
    get_price_quote_port,
)
from redcoins.main import create_app

UNIT_PRICE = Decimal("10000")


class FixedPriceQuote(PriceQuotePort):
    """Price-quote fake with a constant unit price."""

    def __init__(self, unit_price: Decimal = UNIT_PRICE) -> None:
        self._unit_price = unit_price
        self.calls = 0

    def unit_price(self) -> Decimal:
        self.calls += 1
        return self._unit_price

    def price(self, asset_qty: Decimal) -> Decimal:
        return to_currency(self.unit_price() * asset_qty)


@pytest.fixture
def database(tmp_path) -> Iterator[Database]:
    db = Database(DatabaseConfig(dsn=f"sqlite:///{tmp_path / 'redcoins_teste.db'}"))
    bootstrap_schema(db)
    yield db
    db.dispose()


@pytest.fixture
def hasher() -> ScryptPasswordHasher:
    return ScryptPasswordHasher(n=2**4)


@pytest.fixture
def account_repo(database: Database) -> AccountRepositoryAdapter:
    return AccountRepositoryAdapter(database)


@pytest.fixture
def ledger_repo(database: Database) -> LedgerRepositoryAdapter:
    return LedgerRepositoryAdapter(database)


@pytest.fixture
def balance_engine() -> SqlBalanceEngine:
    return SqlBalanceEngine()


@pytest.fixture
def create_account(
    database: Database, account_repo: AccountRepositoryAdapter
) -> CreateAccountUseCase:
    return CreateAccountUseCase(transactions=database, account_repo=account_repo)


@pytest.fixture
def record_trade(
    database: Database,
    account_repo: AccountRepositoryAdapter,
    ledger_repo: LedgerRepositoryAdapter,
    balance_engine: SqlBalanceEngine,
) -> RecordTradeUseCase:
    return RecordTradeUseCase(
        transactions=database,
        account_repo=account_repo,
        ledger_repo=ledger_repo,
        balance_engine=balance_engine,
    )


@pytest.fixture
def register(
    create_account: CreateAccountUseCase, hasher: ScryptPasswordHasher
) -> Callable[..., int]:
    """Register an account and return its id."""

    def _register(
        email: str,
        password: str = "senha123",
        name: str = "Conta Teste",
        birth_date: date = date(1994, 3, 7),
    ) -> int:
        return create_account.execute(
            CreateAccountCommand(
                email=email,
                password_hash=hasher.hash(password),
                name=name,
                birth_date=birth_date,
            )
        )

    return _register


@pytest.fixture
def trade(record_trade: RecordTradeUseCase) -> Callable[..., None]:
    """Record a trade from plain strings: trade(email, True, "0.001", "10", day)."""

    def _trade(
        email: str,
        is_buy: bool,
        asset_qty: str,
        currency_qty: str = "0",
        trade_date: date = date(2018, 1, 1),
    ) -> None:
        record_trade.execute(
            RecordTradeCommand(
                email=email,
                is_buy=is_buy,
                asset_qty=Decimal(asset_qty),
                currency_qty=Decimal(currency_qty),
                trade_date=trade_date,
            )
        )

    return _trade


@pytest.fixture
def price_quote() -> FixedPriceQuote:
    return FixedPriceQuote()


@pytest.fixture
def app_settings(tmp_path) -> Settings:
    return Settings(
        database_dsn=f"sqlite:///{tmp_path / 'redcoins_teste.db'}",
        rate_limit_default="1000/minute",
        bootstrap_schema=False,
    )


@pytest.fixture
def client(
    database: Database,
    hasher: ScryptPasswordHasher,
    price_quote: FixedPriceQuote,
    app_settings: Settings,
) -> TestClient:
    app = create_app(app_settings)
    app.dependency_overrides[get_database] = lambda: database
    app.dependency_overrides[get_password_hasher] = lambda: hasher
    app.dependency_overrides[get_price_quote_port] = lambda: price_quote
    return TestClient(app)
