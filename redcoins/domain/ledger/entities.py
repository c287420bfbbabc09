"""
Domain entities for the ledger bounded context.

Entities represent core business objects with identity and lifecycle.
They contain no framework imports and no IO operations.

Quantities are fixed-point ``Decimal`` values end-to-end. The two
scales below mirror the storage columns and are the only place where
rounding happens.
"""

from dataclasses import dataclass
from datetime import date
from decimal import ROUND_HALF_EVEN, Decimal

CURRENCY_PRECISION = 18
CURRENCY_SCALE = 9
ASSET_PRECISION = 15
ASSET_SCALE = 8

CURRENCY_QUANTUM = Decimal(1).scaleb(-CURRENCY_SCALE)
ASSET_QUANTUM = Decimal(1).scaleb(-ASSET_SCALE)

ZERO_ASSET = Decimal(0).quantize(ASSET_QUANTUM)


def to_currency(value: Decimal | int | str) -> Decimal:
    """Quantize a value to the currency scale (9 fractional digits)."""
    return Decimal(value).quantize(CURRENCY_QUANTUM, rounding=ROUND_HALF_EVEN)


def to_asset(value: Decimal | int | str) -> Decimal:
    """Quantize a value to the asset scale (8 fractional digits)."""
    return Decimal(value).quantize(ASSET_QUANTUM, rounding=ROUND_HALF_EVEN)


@dataclass(frozen=True)
class Account:
    """A registered user. Identity is the unique email.

    ``password_hash`` is an opaque fixed-length blob produced by the
    PasswordHasher port; the domain never inspects it.
    """

    email: str
    password_hash: bytes
    name: str
    birth_date: date


@dataclass(frozen=True)
class Trade:
    """A validated trade request handed to the orchestrator.

    Attributes:
        email: Account identifier of the trader.
        is_buy: Direction flag. Quantities themselves are never signed.
        asset_qty: Non-negative amount of coins bought or sold.
        currency_qty: Non-negative amount of credits paid or received.
        trade_date: Calendar day of the trade.
    """

    email: str
    is_buy: bool
    asset_qty: Decimal
    currency_qty: Decimal
    trade_date: date


@dataclass(frozen=True)
class LedgerEntry:
    """One immutable buy or sell event, as stored.

    ``email`` is the owning account's email, joined in on read.
    """

    email: str
    is_buy: bool
    currency_qty: Decimal
    asset_qty: Decimal
    trade_date: date

    @property
    def signed_asset_qty(self) -> Decimal:
        """Asset quantity with the direction applied."""
        return self.asset_qty if self.is_buy else -self.asset_qty


def derive_balance(entries: list[LedgerEntry]) -> Decimal:
    """Sum signed asset quantities over a set of entries.

    This is the same aggregate the balance engine computes in SQL; it
    exists for informational reads and for verifying the store.
    """
    return to_asset(sum((e.signed_asset_qty for e in entries), ZERO_ASSET))
