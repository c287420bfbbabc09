"""
Adapter: Balance engine.

Implements BalanceEngine port.

The asset balance is never stored. It is recomputed from the account's
ledger rows inside the caller's write transaction, under locks that
hold until that transaction ends:

1. the owning account row is locked (SELECT ... FOR UPDATE). Every
   trade for the account takes this lock first, so a second trade
   waits here and, once released, sees rows the first one inserted;
2. the ledger rows being summed are locked through a FOR UPDATE
   sub-select, so nothing else can touch them while the sum is used.
"""

import logging
from decimal import Decimal

from sqlalchemy import case, func, select
from sqlalchemy.engine import Connection

from redcoins.domain.ledger.entities import to_asset
from redcoins.domain.ledger.ports import BalanceEngine
from redcoins.infrastructure.ledger.schema import account_table, ledger_entry_table

logger = logging.getLogger(__name__)


class SqlBalanceEngine(BalanceEngine):
    """Computes a locked signed aggregate over an account's ledger rows."""

    def locked_balance(self, tx: Connection, account_id: int) -> Decimal:
        tx.execute(
            select(account_table.c.id)
            .where(account_table.c.id == account_id)
            .with_for_update()
        )

        rows = (
            select(ledger_entry_table.c.is_buy, ledger_entry_table.c.asset_qty)
            .where(ledger_entry_table.c.account_id == account_id)
            .with_for_update()
            .subquery()
        )
        signed_qty = case((rows.c.is_buy, rows.c.asset_qty), else_=-rows.c.asset_qty)
        total = tx.execute(select(func.coalesce(func.sum(signed_qty), 0))).scalar_one()

        balance = to_asset(Decimal(str(total)))
        logger.debug("Locked balance: account_id=%s balance=%s", account_id, balance)
        return balance
