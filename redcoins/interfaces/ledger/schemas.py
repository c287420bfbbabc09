"""
Pydantic schemas for ledger API request/response validation.

These schemas enforce field-level validation and define the API contract.
Field names follow the public wire format of the service.
Quantities are Decimals and serialize as strings, never floats.
"""

from datetime import date
from decimal import Decimal

from pydantic import BaseModel, Field, field_validator

from redcoins.domain.ledger.entities import ASSET_PRECISION, ASSET_SCALE

EMAIL_PATTERN = r"^.+@.+$"
EMAIL_MAX_LEN = 128
PASSWORD_MIN_LEN = 6
PASSWORD_MAX_LEN = 64
NAME_MAX_LEN = 128


class RegisterAccountRequest(BaseModel):
    """Form schema for account registration.

    Attributes:
        email: Account identifier; anything of the form ``x@y``.
        senha: Raw password, 6-64 characters.
        nome: Display name, 1-128 characters.
        nascimento: Date of birth; must not be in the future.
    """

    email: str = Field(..., pattern=EMAIL_PATTERN, max_length=EMAIL_MAX_LEN)
    senha: str = Field(..., min_length=PASSWORD_MIN_LEN, max_length=PASSWORD_MAX_LEN)
    nome: str = Field(..., min_length=1, max_length=NAME_MAX_LEN)
    nascimento: date

    @field_validator("nascimento")
    @classmethod
    def _not_in_future(cls, value: date) -> date:
        if value > date.today():
            raise ValueError("birth date is in the future")
        return value


class TradeRequest(BaseModel):
    """Form schema for a buy or sell.

    Attributes:
        qtd: Coins to buy or sell; non-negative, at most 8 decimal places.
        data: Day of the trade.
    """

    qtd: Decimal = Field(
        ..., ge=0, max_digits=ASSET_PRECISION, decimal_places=ASSET_SCALE
    )
    data: date


class TradeItem(BaseModel):
    """A single ledger entry in a report."""

    usuario: str
    compra: bool
    creditos: Decimal
    bitcoins: Decimal
    dia: date


class TradeReportResponse(BaseModel):
    """Response schema for both report endpoints."""

    transacoes: list[TradeItem]


class BalanceResponse(BaseModel):
    """Informational asset balance of the authenticated account."""

    email: str
    bitcoins: Decimal


class ErrorResponse(BaseModel):
    """Error container returned for client-caused failures."""

    erros: list[str]


class HealthResponse(BaseModel):
    """Response schema for the health check endpoint."""

    status: str
    version: str
