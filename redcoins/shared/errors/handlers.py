"""
Centralized error handlers for FastAPI.

Maps domain-specific errors to HTTP responses.
No stack traces or internal details are exposed to clients.

Client-facing failures use the error container ``{"erros": [code, ...]}``.
Client-caused errors are logged at WARNING; server faults at ERROR.
"""

import logging

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse, Response

from redcoins.domain.ledger.errors import (
    AccountNotFoundError,
    AuthenticationError,
    DuplicateAccountError,
    InsufficientBalanceError,
    LedgerDomainError,
    PriceQuoteError,
    StorageError,
)

logger = logging.getLogger(__name__)

HTTP_400 = 400
HTTP_403 = 403
HTTP_404 = 404
HTTP_500 = 500
HTTP_503 = 503

INTERNAL_ERROR_CODE = "erro_interno"
INVALID_REQUEST_CODE = "requisicao_invalida"

# Request field name -> error code sent to the client
FIELD_ERROR_CODES = {
    "email": "email_invalido",
    "senha": "senha_invalida",
    "nome": "nome_invalido",
    "nascimento": "nascimento_invalido",
    "qtd": "qtd_invalida",
    "data": "data_invalida",
}


def _error_response(status_code: int, *codes: str) -> JSONResponse:
    """Build a JSON error container response."""
    return JSONResponse(status_code=status_code, content={"erros": list(codes)})


def validation_error_codes(exc: RequestValidationError) -> list[str]:
    """Collapse Pydantic errors into one code per offending field, in order."""
    codes: list[str] = []
    for error in exc.errors():
        loc = error.get("loc") or ()
        field = loc[-1] if loc else None
        code = FIELD_ERROR_CODES.get(field, INVALID_REQUEST_CODE)
        if code not in codes:
            codes.append(code)
    return codes


def register_error_handlers(app: FastAPI) -> None:
    """Register all domain error handlers on the FastAPI application.

    Args:
        app: The FastAPI application instance.
    """

    @app.exception_handler(RequestValidationError)
    async def handle_validation(
        _request: Request, exc: RequestValidationError
    ) -> JSONResponse:
        """Translate field validation failures into field error codes."""
        codes = validation_error_codes(exc)
        logger.warning("Request validation failed: %s", ", ".join(codes))
        return _error_response(HTTP_400, *codes)

    @app.exception_handler(AuthenticationError)
    async def handle_authentication(
        _request: Request, _exc: AuthenticationError
    ) -> Response:
        """Bad or missing credentials: 403 with an empty body."""
        return Response(status_code=HTTP_403)

    @app.exception_handler(DuplicateAccountError)
    async def handle_duplicate_account(
        _request: Request, exc: DuplicateAccountError
    ) -> JSONResponse:
        return _error_response(HTTP_400, exc.code)

    @app.exception_handler(AccountNotFoundError)
    async def handle_account_not_found(
        _request: Request, exc: AccountNotFoundError
    ) -> JSONResponse:
        return _error_response(HTTP_404, exc.code)

    @app.exception_handler(InsufficientBalanceError)
    async def handle_insufficient_balance(
        _request: Request, exc: InsufficientBalanceError
    ) -> JSONResponse:
        return _error_response(HTTP_400, exc.code)

    @app.exception_handler(PriceQuoteError)
    async def handle_price_quote(
        _request: Request, exc: PriceQuoteError
    ) -> JSONResponse:
        """Market data is down; the trade was not attempted."""
        logger.error("Price quote error: %s", exc.reason)
        return _error_response(HTTP_503, exc.code)

    @app.exception_handler(StorageError)
    async def handle_storage(_request: Request, exc: StorageError) -> JSONResponse:
        """Store failure. The reason stays in the log."""
        logger.error("Storage error: %s", exc.reason)
        return _error_response(HTTP_500, INTERNAL_ERROR_CODE)

    @app.exception_handler(LedgerDomainError)
    async def handle_ledger_domain(
        _request: Request, exc: LedgerDomainError
    ) -> JSONResponse:
        """Catch-all for unhandled ledger domain errors."""
        logger.error("Unhandled ledger domain error: %s", exc.message)
        return _error_response(HTTP_500, INTERNAL_ERROR_CODE)

    @app.exception_handler(Exception)
    async def handle_unexpected(_request: Request, exc: Exception) -> JSONResponse:
        """Catch-all for unexpected errors. Never exposes internals."""
        logger.exception("Unexpected error: %s", type(exc).__name__)
        return _error_response(HTTP_500, INTERNAL_ERROR_CODE)
