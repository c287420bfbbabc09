"""
Ledger store schema and bootstrap.

Declares the ``account`` and ``ledger_entry`` tables with SQLAlchemy Core
and creates them on startup. Creation is all-or-nothing: if the target
database already holds any table it is assumed to be provisioned and is
left untouched; otherwise every table and index is created inside one
transaction. Schema upgrades are a manual operation.
"""

import logging
from pathlib import Path

from sqlalchemy import (
    Boolean,
    Column,
    Date,
    ForeignKey,
    Index,
    Integer,
    LargeBinary,
    MetaData,
    Numeric,
    String,
    Table,
    create_engine,
    inspect,
    text,
)
from sqlalchemy.engine import make_url

from redcoins.core.config import DatabaseConfig
from redcoins.domain.ledger.entities import (
    ASSET_PRECISION,
    ASSET_SCALE,
    CURRENCY_PRECISION,
    CURRENCY_SCALE,
)
from redcoins.infrastructure.database import Database

logger = logging.getLogger(__name__)

PASSWORD_HASH_LENGTH = 60
SERVER_DATABASE = "postgres"

metadata = MetaData()

account_table = Table(
    "account",
    metadata,
    Column("id", Integer, primary_key=True, autoincrement=True),
    Column("email", String(128), nullable=False, unique=True),
    Column("password_hash", LargeBinary(PASSWORD_HASH_LENGTH), nullable=False),
    Column("name", String(255), nullable=False),
    Column("birth_date", Date, nullable=False),
)

# Append-only. Direction lives in is_buy; both quantities are stored
# unsigned.
ledger_entry_table = Table(
    "ledger_entry",
    metadata,
    Column("id", Integer, primary_key=True, autoincrement=True),
    Column("account_id", Integer, ForeignKey("account.id"), nullable=False),
    Column("is_buy", Boolean, nullable=False),
    Column(
        "currency_qty",
        Numeric(CURRENCY_PRECISION, CURRENCY_SCALE),
        nullable=False,
    ),
    Column("asset_qty", Numeric(ASSET_PRECISION, ASSET_SCALE), nullable=False),
    Column("trade_date", Date, nullable=False),
)

Index("ix_account_email", account_table.c.email)
Index("ix_ledger_entry_account_id", ledger_entry_table.c.account_id)
Index("ix_ledger_entry_trade_date", ledger_entry_table.c.trade_date)


def bootstrap_schema(database: Database) -> bool:
    """Create all tables unless the database already has any table.

    Args:
        database: The target store.

    Returns:
        True when the tables were created, False when creation was skipped.
    """
    with database.connect() as conn:
        existing = inspect(conn).get_table_names()
    if existing:
        logger.info(
            "Database already provisioned (%d tables); skipping schema creation",
            len(existing),
        )
        return False

    with database.transaction() as conn:
        metadata.create_all(conn)
    logger.info("Created ledger schema: %s", ", ".join(metadata.tables))
    return True


def create_database_if_missing(config: DatabaseConfig) -> bool:
    """Create the application database on a Postgres server if absent.

    SQLite creates its database file on first connect, so nothing is
    done for it.

    Returns:
        True when a database was created.
    """
    url = make_url(config.dsn)
    if url.get_backend_name() != "postgresql":
        return False

    server_engine = create_engine(
        url.set(database=SERVER_DATABASE), isolation_level="AUTOCOMMIT"
    )
    try:
        with server_engine.connect() as conn:
            exists = conn.execute(
                text("SELECT 1 FROM pg_database WHERE datname = :name"),
                {"name": url.database},
            ).scalar()
            if exists:
                return False
            quoted = server_engine.dialect.identifier_preparer.quote(url.database)
            conn.execute(text(f"CREATE DATABASE {quoted}"))
    finally:
        server_engine.dispose()

    logger.info("Created database %s", url.database)
    return True


def drop_test_database(config: DatabaseConfig) -> None:
    """Drop the test database entirely.

    Only the configured test database may be dropped; any other target
    raises ValueError before touching the server.
    """
    url = make_url(config.dsn)
    name = url.database or ""

    if url.get_backend_name() == "sqlite":
        path = Path(name)
        if path.stem != config.test_database_name:
            raise ValueError(f"Refusing to drop non-test database: {name}")
        path.unlink(missing_ok=True)
        return

    if name != config.test_database_name:
        raise ValueError(f"Refusing to drop non-test database: {name}")

    server_engine = create_engine(
        url.set(database=SERVER_DATABASE), isolation_level="AUTOCOMMIT"
    )
    try:
        with server_engine.connect() as conn:
            quoted = server_engine.dialect.identifier_preparer.quote(name)
            conn.execute(text(f"DROP DATABASE IF EXISTS {quoted}"))
    finally:
        server_engine.dispose()
    logger.info("Dropped test database %s", name)
