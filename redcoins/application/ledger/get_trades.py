"""
Use cases: Trade reports.

Read-only; no locks are taken. A report may include trades committed
while it runs. Reports are informational and never used to authorize
a trade.
"""

import logging

from redcoins.application.ledger.dtos import (
    BalanceResult,
    GetAccountTradesQuery,
    GetTradesOnDateQuery,
    TradeResult,
)
from redcoins.domain.ledger.entities import LedgerEntry, derive_balance
from redcoins.domain.ledger.ports import LedgerRepository

logger = logging.getLogger(__name__)


def _to_result(entry: LedgerEntry) -> TradeResult:
    return TradeResult(
        email=entry.email,
        is_buy=entry.is_buy,
        currency_qty=entry.currency_qty,
        asset_qty=entry.asset_qty,
        trade_date=entry.trade_date,
    )


class GetAccountTradesUseCase:
    """Returns one account's trades in insertion order.

    An unknown email yields an empty history.
    """

    def __init__(self, ledger_repo: LedgerRepository) -> None:
        self._ledger_repo = ledger_repo

    def execute(self, query: GetAccountTradesQuery) -> list[TradeResult]:
        entries = self._ledger_repo.list_for_account(query.email)
        logger.debug("Account report: %d entries", len(entries))
        return [_to_result(e) for e in entries]


class GetTradesOnDateUseCase:
    """Returns every trade dated on a given day, across all accounts."""

    def __init__(self, ledger_repo: LedgerRepository) -> None:
        self._ledger_repo = ledger_repo

    def execute(self, query: GetTradesOnDateQuery) -> list[TradeResult]:
        entries = self._ledger_repo.list_on_date(query.trade_date)
        logger.debug(
            "Daily report for %s: %d entries", query.trade_date, len(entries)
        )
        return [_to_result(e) for e in entries]


class GetBalanceUseCase:
    """Unlocked, informational balance computed from the account's history."""

    def __init__(self, ledger_repo: LedgerRepository) -> None:
        self._ledger_repo = ledger_repo

    def execute(self, query: GetAccountTradesQuery) -> BalanceResult:
        entries = self._ledger_repo.list_for_account(query.email)
        return BalanceResult(email=query.email, asset_balance=derive_balance(entries))
