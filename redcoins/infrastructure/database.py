"""
Adapter: relational store access.

Implements the TransactionManager port on top of a SQLAlchemy engine.
One Database instance is built per process from an immutable
DatabaseConfig and shared by every repository.

Every write goes through ``transaction()``: the block either commits
as a whole or is rolled back, on every exit path. Any SQLAlchemy
failure leaves the scope as a StorageError.
"""

import logging
from collections.abc import Iterator
from contextlib import contextmanager

from sqlalchemy import create_engine, event
from sqlalchemy.engine import Connection, Engine
from sqlalchemy.exc import SQLAlchemyError

from redcoins.core.config import DatabaseConfig
from redcoins.domain.ledger.errors import StorageError
from redcoins.domain.ledger.ports import TransactionManager

logger = logging.getLogger(__name__)

SQLITE_BUSY_TIMEOUT_SECONDS = 30

# Connection execution option marking a write transaction scope
WRITE_SCOPE_OPTION = "redcoins_write_scope"


def _install_sqlite_hooks(engine: Engine) -> None:
    """Make SQLite write transactions take the write lock up front.

    SQLite has no FOR UPDATE. BEGIN IMMEDIATE serializes writers on the
    database file, which gives the balance check the same exclusion a
    row lock gives it on Postgres. Reads begin deferred, so they do not
    queue behind open write transactions.
    """

    @event.listens_for(engine, "connect")
    def _on_connect(dbapi_connection, _connection_record) -> None:
        # pysqlite must not emit its own BEGIN
        dbapi_connection.isolation_level = None
        cursor = dbapi_connection.cursor()
        cursor.execute("PRAGMA foreign_keys=ON")
        cursor.close()

    @event.listens_for(engine, "begin")
    def _on_begin(conn: Connection) -> None:
        if conn.get_execution_options().get(WRITE_SCOPE_OPTION):
            conn.exec_driver_sql("BEGIN IMMEDIATE")
        else:
            conn.exec_driver_sql("BEGIN")


def create_db_engine(config: DatabaseConfig) -> Engine:
    """Build a SQLAlchemy engine from a DatabaseConfig."""
    if config.is_sqlite:
        engine = create_engine(
            config.dsn,
            echo=config.echo,
            connect_args={
                "check_same_thread": False,
                "timeout": SQLITE_BUSY_TIMEOUT_SECONDS,
            },
        )
        _install_sqlite_hooks(engine)
        return engine
    return create_engine(
        config.dsn, pool_pre_ping=config.pool_pre_ping, echo=config.echo
    )


class Database(TransactionManager):
    """Owns the engine and hands out scoped connections."""

    def __init__(self, config: DatabaseConfig) -> None:
        self._config = config
        self._engine = create_db_engine(config)

    @property
    def config(self) -> DatabaseConfig:
        return self._config

    @property
    def engine(self) -> Engine:
        return self._engine

    @contextmanager
    def transaction(self) -> Iterator[Connection]:
        """Open a write transaction and yield its connection.

        Commits when the block exits normally. Any exception rolls the
        transaction back before propagating; SQLAlchemy errors are
        logged and re-raised as StorageError.
        """
        try:
            with self._engine.connect() as conn:
                conn.execution_options(**{WRITE_SCOPE_OPTION: True})
                trans = conn.begin()
                try:
                    yield conn
                    trans.commit()
                except BaseException:
                    if trans.is_active:
                        trans.rollback()
                    raise
        except SQLAlchemyError as exc:
            logger.error("Transaction aborted: %s", exc, exc_info=True)
            raise StorageError(type(exc).__name__) from exc

    @contextmanager
    def connect(self) -> Iterator[Connection]:
        """Yield a connection for read-only queries.

        Reads run at the store's default isolation and take no locks.
        """
        try:
            with self._engine.connect() as conn:
                yield conn
        except SQLAlchemyError as exc:
            logger.error("Read failed: %s", exc, exc_info=True)
            raise StorageError(type(exc).__name__) from exc

    def dispose(self) -> None:
        """Close every pooled connection."""
        self._engine.dispose()
