"""
FastAPI router for the ledger bounded context.

All routes delegate to use cases. No business logic here.
Input validation is handled by Pydantic schemas.
Error mapping is handled by centralized error handlers.

Request bodies are form-encoded. Trade and report routes require
HTTP Basic credentials.
"""

from datetime import date
from typing import Annotated

from fastapi import APIRouter, Depends, Form, Query, Response

from redcoins.application.ledger.dtos import (
    GetAccountTradesQuery,
    GetTradesOnDateQuery,
    MarketTradeCommand,
    RegisterAccountCommand,
    TradeResult,
)
from redcoins.application.ledger.execute_market_trade import (
    ExecuteMarketTradeUseCase,
)
from redcoins.application.ledger.get_trades import (
    GetAccountTradesUseCase,
    GetBalanceUseCase,
    GetTradesOnDateUseCase,
)
from redcoins.application.ledger.register_account import RegisterAccountUseCase
from redcoins.interfaces.ledger.dependencies import (
    get_account_trades_use_case,
    get_authenticated_email,
    get_balance_use_case,
    get_market_trade_use_case,
    get_register_account_use_case,
    get_trades_on_date_use_case,
)
from redcoins.interfaces.ledger.schemas import (
    BalanceResponse,
    ErrorResponse,
    RegisterAccountRequest,
    TradeItem,
    TradeReportResponse,
    TradeRequest,
)

HTTP_201 = 201

router = APIRouter(tags=["ledger"])


def _to_report(results: list[TradeResult]) -> TradeReportResponse:
    return TradeReportResponse(
        transacoes=[
            TradeItem(
                usuario=r.email,
                compra=r.is_buy,
                creditos=r.currency_qty,
                bitcoins=r.asset_qty,
                dia=r.trade_date,
            )
            for r in results
        ]
    )


def _market_trade(
    use_case: ExecuteMarketTradeUseCase,
    email: str,
    request: TradeRequest,
    is_buy: bool,
) -> Response:
    use_case.execute(
        MarketTradeCommand(
            email=email,
            is_buy=is_buy,
            asset_qty=request.qtd,
            trade_date=request.data,
        )
    )
    return Response(status_code=HTTP_201)


@router.post(
    "/cadastro",
    status_code=HTTP_201,
    response_class=Response,
    responses={400: {"model": ErrorResponse}},
    summary="Register an account",
)
def register_account(
    request: Annotated[RegisterAccountRequest, Form()],
    use_case: RegisterAccountUseCase = Depends(get_register_account_use_case),
) -> Response:
    """Register a new user. Fails with email_ja_cadastrado on a repeated email."""
    use_case.execute(
        RegisterAccountCommand(
            email=request.email,
            password=request.senha,
            name=request.nome,
            birth_date=request.nascimento,
        )
    )
    return Response(status_code=HTTP_201)


@router.post(
    "/compra",
    status_code=HTTP_201,
    response_class=Response,
    responses={400: {"model": ErrorResponse}, 403: {}},
    summary="Buy coins",
    description="Buy coins at the current market price.",
)
def buy(
    request: Annotated[TradeRequest, Form()],
    email: str = Depends(get_authenticated_email),
    use_case: ExecuteMarketTradeUseCase = Depends(get_market_trade_use_case),
) -> Response:
    return _market_trade(use_case, email, request, is_buy=True)


@router.post(
    "/venda",
    status_code=HTTP_201,
    response_class=Response,
    responses={400: {"model": ErrorResponse}, 403: {}},
    summary="Sell coins",
    description="Sell coins at the current market price. Refused when the "
    "coin balance is lower than the quantity.",
)
def sell(
    request: Annotated[TradeRequest, Form()],
    email: str = Depends(get_authenticated_email),
    use_case: ExecuteMarketTradeUseCase = Depends(get_market_trade_use_case),
) -> Response:
    return _market_trade(use_case, email, request, is_buy=False)


@router.get(
    "/relatorio/usr",
    response_model=TradeReportResponse,
    responses={400: {"model": ErrorResponse}, 403: {}},
    summary="Trades of an account",
)
def account_report(
    email: str = Query(...),
    _caller: str = Depends(get_authenticated_email),
    use_case: GetAccountTradesUseCase = Depends(get_account_trades_use_case),
) -> TradeReportResponse:
    return _to_report(use_case.execute(GetAccountTradesQuery(email=email)))


@router.get(
    "/relatorio/data",
    response_model=TradeReportResponse,
    responses={400: {"model": ErrorResponse}, 403: {}},
    summary="Trades on a day",
)
def daily_report(
    data: date = Query(...),
    _caller: str = Depends(get_authenticated_email),
    use_case: GetTradesOnDateUseCase = Depends(get_trades_on_date_use_case),
) -> TradeReportResponse:
    return _to_report(use_case.execute(GetTradesOnDateQuery(trade_date=data)))


@router.get(
    "/saldo",
    response_model=BalanceResponse,
    responses={403: {}},
    summary="Coin balance of the caller",
    description="Informational; computed without locks.",
)
def balance(
    email: str = Depends(get_authenticated_email),
    use_case: GetBalanceUseCase = Depends(get_balance_use_case),
) -> BalanceResponse:
    result = use_case.execute(GetAccountTradesQuery(email=email))
    return BalanceResponse(email=result.email, bitcoins=result.asset_balance)
