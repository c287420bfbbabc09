"""
Data Transfer Objects for the ledger application layer.

DTOs carry data between the interface and application layers.
They are plain dataclasses with no behavior.
"""

from dataclasses import dataclass
from datetime import date
from decimal import Decimal


@dataclass(frozen=True)
class CreateAccountCommand:
    """Input DTO for creating an account from an already-hashed password."""

    email: str
    password_hash: bytes
    name: str
    birth_date: date


@dataclass(frozen=True)
class RegisterAccountCommand:
    """Input DTO for registering an account from a raw password.

    Attributes:
        email: Unique account identifier.
        password: Raw password; hashed before it reaches the store.
        name: Display name.
        birth_date: Date of birth.
    """

    email: str
    password: str
    name: str
    birth_date: date


@dataclass(frozen=True)
class RecordTradeCommand:
    """Input DTO for appending one trade to the ledger.

    Both quantities are non-negative; direction is carried by is_buy.
    """

    email: str
    is_buy: bool
    asset_qty: Decimal
    currency_qty: Decimal
    trade_date: date


@dataclass(frozen=True)
class MarketTradeCommand:
    """Input DTO for a buy or sell priced at the current market quote."""

    email: str
    is_buy: bool
    asset_qty: Decimal
    trade_date: date


@dataclass(frozen=True)
class GetAccountTradesQuery:
    """Input DTO for an account's trade history."""

    email: str


@dataclass(frozen=True)
class GetTradesOnDateQuery:
    """Input DTO for all trades made on one day."""

    trade_date: date


@dataclass(frozen=True)
class TradeResult:
    """Output DTO for a single ledger entry in a report.

    Attributes:
        email: Owning account's email.
        is_buy: True for a buy, False for a sell.
        currency_qty: Credits paid or received.
        asset_qty: Coins bought or sold.
        trade_date: Day of the trade.
    """

    email: str
    is_buy: bool
    currency_qty: Decimal
    asset_qty: Decimal
    trade_date: date


@dataclass(frozen=True)
class BalanceResult:
    """Output DTO for an informational balance read."""

    email: str
    asset_balance: Decimal
