"""
Use case: Record a trade in the ledger (the ledger transaction orchestrator).

Input: RecordTradeCommand (email, is_buy, asset_qty, currency_qty, trade_date)
Output: None.
Side effects: Appends exactly one ledger row, or nothing.
Failure cases: AccountNotFoundError, InsufficientBalanceError, StorageError.

Everything happens in one transaction:

1. resolve the email to the account row, locking it;
2. for a sell, read the locked balance and refuse if it is short;
3. append the entry;
4. commit.

The balance check and the insert share one lock scope. Two sells racing
on the same account are therefore serialized: the second one reads the
balance only after the first has committed or rolled back, and can
never spend the same coins twice. Raising out of the transaction block
rolls it back, so a refused trade leaves no row behind.
"""

import logging

from redcoins.application.ledger.dtos import RecordTradeCommand
from redcoins.domain.ledger.entities import Trade, to_asset, to_currency
from redcoins.domain.ledger.errors import (
    AccountNotFoundError,
    InsufficientBalanceError,
)
from redcoins.domain.ledger.ports import (
    AccountRepository,
    BalanceEngine,
    LedgerRepository,
    TransactionManager,
)

logger = logging.getLogger(__name__)


class RecordTradeUseCase:
    """Checks funds and appends a ledger entry atomically."""

    def __init__(
        self,
        transactions: TransactionManager,
        account_repo: AccountRepository,
        ledger_repo: LedgerRepository,
        balance_engine: BalanceEngine,
    ) -> None:
        self._transactions = transactions
        self._account_repo = account_repo
        self._ledger_repo = ledger_repo
        self._balance_engine = balance_engine

    def execute(self, command: RecordTradeCommand) -> None:
        """Run the orchestrator.

        Args:
            command: A pre-validated trade; quantities must be non-negative.

        Raises:
            AccountNotFoundError: If no account matches the email.
            InsufficientBalanceError: If a sell exceeds the asset balance.
            StorageError: On any store failure.
        """
        trade = Trade(
            email=command.email,
            is_buy=command.is_buy,
            asset_qty=to_asset(command.asset_qty),
            currency_qty=to_currency(command.currency_qty),
            trade_date=command.trade_date,
        )

        with self._transactions.transaction() as tx:
            account_id = self._account_repo.find_id(tx, trade.email, lock=True)
            if account_id is None:
                logger.warning("Trade refused: account not found")
                raise AccountNotFoundError(trade.email)

            if not trade.is_buy:
                balance = self._balance_engine.locked_balance(tx, account_id)
                if balance < trade.asset_qty:
                    logger.warning(
                        "Trade refused: account_id=%s balance=%s requested=%s",
                        account_id,
                        balance,
                        trade.asset_qty,
                    )
                    raise InsufficientBalanceError(
                        required=str(trade.asset_qty), available=str(balance)
                    )

            self._ledger_repo.append(tx, account_id, trade)

        logger.info(
            "Trade recorded: account_id=%s side=%s asset_qty=%s currency_qty=%s",
            account_id,
            "buy" if trade.is_buy else "sell",
            trade.asset_qty,
            trade.currency_qty,
        )
