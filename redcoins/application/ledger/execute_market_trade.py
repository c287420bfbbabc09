"""
Use case: Buy or sell coins at the current market price.

Input: MarketTradeCommand (email, is_buy, asset_qty, trade_date)
Output: The credits amount the trade was recorded with.
Failure cases: PriceQuoteError, plus everything RecordTradeUseCase raises.

The quote is taken before the ledger transaction opens, so no lock is
held while waiting on the market-data service.
"""

import logging
from decimal import Decimal

from redcoins.application.ledger.dtos import MarketTradeCommand, RecordTradeCommand
from redcoins.application.ledger.record_trade import RecordTradeUseCase
from redcoins.domain.ledger.ports import PriceQuotePort

logger = logging.getLogger(__name__)


class ExecuteMarketTradeUseCase:
    """Prices a quantity of coins, then records the trade."""

    def __init__(
        self,
        price_quote: PriceQuotePort,
        record_trade: RecordTradeUseCase,
    ) -> None:
        self._price_quote = price_quote
        self._record_trade = record_trade

    def execute(self, command: MarketTradeCommand) -> Decimal:
        currency_qty = self._price_quote.price(command.asset_qty)
        self._record_trade.execute(
            RecordTradeCommand(
                email=command.email,
                is_buy=command.is_buy,
                asset_qty=command.asset_qty,
                currency_qty=currency_qty,
                trade_date=command.trade_date,
            )
        )
        return currency_qty
