"""
Tests for the ledger domain layer.

Tests entities, fixed-point helpers and error classes in isolation.
No external dependencies or IO required.
"""

from datetime import date
from decimal import Decimal

from redcoins.domain.ledger.entities import (
    ZERO_ASSET,
    LedgerEntry,
    derive_balance,
    to_asset,
    to_currency,
)
from redcoins.domain.ledger.errors import (
    AccountNotFoundError,
    AuthenticationError,
    DuplicateAccountError,
    InsufficientBalanceError,
    LedgerDomainError,
    PriceQuoteError,
    StorageError,
)


def _entry(is_buy: bool, asset_qty: str) -> LedgerEntry:
    return LedgerEntry(
        email="a@b.com",
        is_buy=is_buy,
        currency_qty=to_currency("1"),
        asset_qty=to_asset(asset_qty),
        trade_date=date(2018, 1, 1),
    )


class TestFixedPointHelpers:
    """Tests for to_asset / to_currency."""

    def test_asset_scale_is_eight_digits(self) -> None:
        """Asset quantities keep exactly eight fractional digits."""
        assert to_asset("0.001") == Decimal("0.00100000")
        assert to_asset("0.001").as_tuple().exponent == -8

    def test_currency_scale_is_nine_digits(self) -> None:
        """Currency amounts keep exactly nine fractional digits."""
        assert to_currency("10").as_tuple().exponent == -9

    def test_half_even_rounding(self) -> None:
        """Ties round to the even neighbour."""
        assert to_asset("0.000000025") == Decimal("0.00000002")
        assert to_asset("0.000000035") == Decimal("0.00000004")


class TestDeriveBalance:
    """Tests for the signed aggregate over ledger entries."""

    def test_empty_history_is_zero(self) -> None:
        """An account with no entries has a zero balance."""
        assert derive_balance([]) == ZERO_ASSET

    def test_sells_subtract(self) -> None:
        """Buys add and sells subtract the asset quantity."""
        entries = [_entry(True, "0.001"), _entry(False, "0.0005")]
        assert derive_balance(entries) == Decimal("0.0005")

    def test_no_drift_over_many_entries(self) -> None:
        """Ten buys of 0.1 sum to exactly 1."""
        entries = [_entry(True, "0.1") for _ in range(10)]
        assert derive_balance(entries) == Decimal("1")

    def test_signed_asset_qty(self) -> None:
        """Direction is applied only when reading, never stored."""
        sell = _entry(False, "0.3")
        assert sell.asset_qty == Decimal("0.3")
        assert sell.signed_asset_qty == Decimal("-0.3")


class TestDomainErrors:
    """Tests for domain error classes."""

    def test_client_errors_carry_codes(self) -> None:
        """Client-caused errors expose the code sent to clients."""
        assert DuplicateAccountError("a@b.com").code == "email_ja_cadastrado"
        assert AccountNotFoundError("a@b.com").code == "usuario_nao_existente"
        assert InsufficientBalanceError("1", "0").code == "saldo_insuficiente"

    def test_client_errors_are_not_internal(self) -> None:
        """Business-rule failures are not server faults."""
        assert not DuplicateAccountError("a@b.com").internal
        assert not InsufficientBalanceError("1", "0").internal

    def test_storage_error_is_internal(self) -> None:
        """StorageError is a server fault and keeps its reason for logs."""
        error = StorageError("OperationalError")
        assert error.internal
        assert error.reason == "OperationalError"
        assert isinstance(error, LedgerDomainError)

    def test_insufficient_balance_message(self) -> None:
        """The message names both the requested and available amounts."""
        error = InsufficientBalanceError(required="0.0006", available="0.0005")
        assert "0.0006" in error.message
        assert "0.0005" in error.message

    def test_price_quote_error_is_internal(self) -> None:
        assert PriceQuoteError("timeout").internal

    def test_authentication_error_has_no_client_code(self) -> None:
        """Failed logins get an empty 403, so the error defines no code."""
        assert "code" not in vars(AuthenticationError)
        assert not AuthenticationError().internal
