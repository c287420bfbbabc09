"""
Adapter: Ledger entry persistence.

Implements LedgerRepository port.
Appends to and reads the ledger_entry table. Rows are never updated or
deleted. Report reads take no locks and may observe trades committed
while they run.
"""

import logging
from datetime import date
from decimal import Decimal

from sqlalchemy import Select, func, insert, select
from sqlalchemy.engine import Connection, Row

from redcoins.domain.ledger.entities import LedgerEntry, Trade, to_asset, to_currency
from redcoins.domain.ledger.ports import LedgerRepository
from redcoins.infrastructure.database import Database
from redcoins.infrastructure.ledger.schema import account_table, ledger_entry_table

logger = logging.getLogger(__name__)


def _row_to_entry(row: Row) -> LedgerEntry:
    """Map a joined (email, is_buy, currency_qty, asset_qty, trade_date) row."""
    return LedgerEntry(
        email=row.email,
        is_buy=bool(row.is_buy),
        currency_qty=to_currency(Decimal(str(row.currency_qty))),
        asset_qty=to_asset(Decimal(str(row.asset_qty))),
        trade_date=row.trade_date,
    )


def _report_query() -> Select:
    """Entries joined with their owner's email, in insertion order."""
    return (
        select(
            account_table.c.email,
            ledger_entry_table.c.is_buy,
            ledger_entry_table.c.currency_qty,
            ledger_entry_table.c.asset_qty,
            ledger_entry_table.c.trade_date,
        )
        .select_from(
            ledger_entry_table.join(
                account_table, ledger_entry_table.c.account_id == account_table.c.id
            )
        )
        .order_by(ledger_entry_table.c.id)
    )


class LedgerRepositoryAdapter(LedgerRepository):
    """SQLAlchemy adapter for the ledger_entry table."""

    def __init__(self, database: Database) -> None:
        self._database = database

    def append(self, tx: Connection, account_id: int, trade: Trade) -> None:
        tx.execute(
            insert(ledger_entry_table).values(
                account_id=account_id,
                is_buy=trade.is_buy,
                currency_qty=to_currency(trade.currency_qty),
                asset_qty=to_asset(trade.asset_qty),
                trade_date=trade.trade_date,
            )
        )
        logger.debug(
            "Appended ledger entry: account_id=%s is_buy=%s asset_qty=%s date=%s",
            account_id,
            trade.is_buy,
            trade.asset_qty,
            trade.trade_date,
        )

    def count_for_account(self, email: str) -> int:
        query = (
            select(func.count())
            .select_from(
                ledger_entry_table.join(
                    account_table,
                    ledger_entry_table.c.account_id == account_table.c.id,
                )
            )
            .where(account_table.c.email == email)
        )
        with self._database.connect() as conn:
            return conn.execute(query).scalar_one()

    def list_for_account(self, email: str) -> list[LedgerEntry]:
        query = _report_query().where(account_table.c.email == email)
        with self._database.connect() as conn:
            rows = conn.execute(query).fetchall()
        return [_row_to_entry(r) for r in rows]

    def list_on_date(self, trade_date: date) -> list[LedgerEntry]:
        query = _report_query().where(ledger_entry_table.c.trade_date == trade_date)
        with self._database.connect() as conn:
            rows = conn.execute(query).fetchall()
        return [_row_to_entry(r) for r in rows]
