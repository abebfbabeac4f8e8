from __future__ import annotations

import logging

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from sqlalchemy.exc import SQLAlchemyError

from agentsflow.core.errors import GatewayError

logger = logging.getLogger(__name__)


def register_exception_handlers(app: FastAPI) -> None:
    @app.exception_handler(GatewayError)
    async def handle_gateway_error(
        _request: Request,
        exc: GatewayError,
    ) -> JSONResponse:
        return JSONResponse(
            status_code=exc.status_code,
            content=exc.to_error(),
        )

    @app.exception_handler(RequestValidationError)
    async def handle_validation_error(
        _request: Request,
        exc: RequestValidationError,
    ) -> JSONResponse:
        errors = exc.errors()
        details = None
        if errors:
            first = errors[0]
            location = ".".join(str(part) for part in first.get("loc", ()) if part != "body")
            details = f"{location}: {first['msg']}" if location else first["msg"]

        error = GatewayError(status_code=400, message="Invalid request", details=details)
        return JSONResponse(
            status_code=error.status_code,
            content=error.to_error(),
        )

    @app.exception_handler(SQLAlchemyError)
    async def handle_database_error(
        request: Request,
        exc: SQLAlchemyError,
    ) -> JSONResponse:
        logger.error("Database error on %s %s: %s", request.method, request.url.path, exc)
        error = GatewayError(status_code=500, message="Database error", details=str(exc))
        return JSONResponse(
            status_code=error.status_code,
            content=error.to_error(),
        )
