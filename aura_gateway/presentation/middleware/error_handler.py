"""Error handling middleware and exception handlers."""

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
import structlog

from aura_gateway.domain.exceptions import (
    DomainException,
    InvalidAuraRequestException,
    LedgerAPIException,
    LedgerAPITimeoutException,
    LedgerDataException,
    SnapshotNotFoundException,
)
from .request_context import get_request_id

logger = structlog.get_logger(__name__)


def _error_response(status_code: int, code: str, message: str) -> JSONResponse:
    return JSONResponse(
        status_code=status_code,
        content={
            "error": code,
            "message": message,
            "request_id": get_request_id(),
        },
    )


def error_handler_middleware(app: FastAPI) -> None:
    """
    Register exception handlers with the FastAPI app.

    Domain exceptions answer with their own http_status and code; anything
    else is a 500 with a generic message.
    """

    @app.exception_handler(RequestValidationError)
    async def validation_error_handler(
        request: Request,
        exc: RequestValidationError,
    ) -> JSONResponse:
        """Handle request body/query validation errors."""
        messages = [
            f"{'.'.join(str(part) for part in err['loc'])}: {err['msg']}"
            for err in exc.errors()
        ]
        return _error_response(400, "VALIDATION_ERROR", "; ".join(messages))

    @app.exception_handler(InvalidAuraRequestException)
    async def invalid_request_handler(
        request: Request,
        exc: InvalidAuraRequestException,
    ) -> JSONResponse:
        """Handle invalid request errors."""
        return _error_response(exc.http_status, exc.code, exc.message)

    @app.exception_handler(SnapshotNotFoundException)
    async def snapshot_not_found_handler(
        request: Request,
        exc: SnapshotNotFoundException,
    ) -> JSONResponse:
        """Handle snapshot not found errors."""
        return _error_response(exc.http_status, exc.code, exc.message)

    @app.exception_handler(LedgerAPITimeoutException)
    async def ledger_timeout_handler(
        request: Request,
        exc: LedgerAPITimeoutException,
    ) -> JSONResponse:
        """Handle ledger API timeout errors."""
        logger.error("ledger_api_timeout")
        return _error_response(
            exc.http_status, exc.code, "Service temporarily unavailable. Please try again."
        )

    @app.exception_handler(LedgerAPIException)
    async def ledger_error_handler(
        request: Request,
        exc: LedgerAPIException,
    ) -> JSONResponse:
        """Handle ledger API errors."""
        logger.error(
            "ledger_api_error",
            message=exc.message,
            status_code=exc.status_code,
        )
        return _error_response(
            exc.http_status, exc.code, "Unable to read loan history. Please try again later."
        )

    @app.exception_handler(LedgerDataException)
    async def ledger_data_handler(
        request: Request,
        exc: LedgerDataException,
    ) -> JSONResponse:
        """Handle malformed ledger records."""
        logger.error("ledger_data_error", message=exc.message)
        return _error_response(
            exc.http_status, exc.code, "Loan history could not be read from the ledger."
        )

    @app.exception_handler(DomainException)
    async def domain_exception_handler(
        request: Request,
        exc: DomainException,
    ) -> JSONResponse:
        """Handle generic domain exceptions."""
        logger.warning(
            "domain_exception",
            code=exc.code,
            message=exc.message,
        )
        return _error_response(exc.http_status, exc.code, exc.message)

    @app.exception_handler(Exception)
    async def unhandled_exception_handler(
        request: Request,
        exc: Exception,
    ) -> JSONResponse:
        """Handle unexpected exceptions."""
        logger.exception(
            "unhandled_exception",
            error=str(exc),
            error_type=type(exc).__name__,
        )
        return _error_response(500, "INTERNAL_ERROR", "An unexpected error occurred.")
