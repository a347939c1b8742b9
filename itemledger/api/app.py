"""FastAPI application factory for itemledger.

Usage::

    from itemledger.api.app import create_app

    app = create_app(dispatcher=dispatcher, config=config)

The factory is used by both the production bootstrap (``itemledger.app``)
and the test suite.
"""

from __future__ import annotations

from typing import Any

import structlog
from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from itemledger.api.routes import router
from itemledger.api.schemas import ErrorResponse

_log = structlog.get_logger(component="api.app")

_API_PREFIX = "/api/v1"


def create_app(dispatcher: Any, config: Any = None) -> FastAPI:
    """Create and configure the itemledger FastAPI application.

    Args:
        dispatcher: contract Dispatcher serving /init and /invoke.
        config:     ItemLedgerConfig. Used for the ccid reported by /health.

    Returns:
        Configured FastAPI application, ready to be served by uvicorn.
    """
    from itemledger import __version__

    ccid: str = ""
    if config is not None and hasattr(config, "ccid"):
        ccid = config.ccid or ""

    app = FastAPI(
        title="itemledger",
        summary="Item records and audit history over a key-value ledger",
        version=__version__,
        docs_url="/api/v1/docs",
        redoc_url="/api/v1/redoc",
        openapi_url="/api/v1/openapi.json",
    )

    app.state.dispatcher = dispatcher
    app.state.config = config
    app.state.ccid = ccid

    app.include_router(router, prefix=_API_PREFIX)

    @app.exception_handler(RequestValidationError)
    async def validation_exception_handler(
        _request: Request,
        exc: RequestValidationError,
    ) -> JSONResponse:
        """Map Pydantic validation errors to our error envelope."""
        errors = exc.errors()
        detail = ""
        if errors:
            locs = errors[0].get("loc", ())
            field = ".".join(str(loc) for loc in locs[1:]) if len(locs) > 1 else ""
            msg = str(errors[0].get("msg", ""))
            detail = f"{field}: {msg}" if field else msg

        return JSONResponse(
            status_code=400,
            content=ErrorResponse(error="INVALID_REQUEST", detail=detail).model_dump(),
        )

    @app.exception_handler(Exception)
    async def generic_exception_handler(
        request: Request,
        exc: Exception,
    ) -> JSONResponse:
        """Catch-all for unhandled exceptions; never expose stack traces."""
        _log.error(
            "unhandled_exception",
            path=str(request.url.path),
            method=request.method,
            error=str(exc),
        )
        return JSONResponse(
            status_code=500,
            content=ErrorResponse(
                error="INTERNAL_ERROR",
                detail="An unexpected error occurred.",
            ).model_dump(),
        )

    return app
