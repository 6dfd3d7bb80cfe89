"""
Module 06 - FastAPI Application

Main application setup and configuration.

Usage:
    uvicorn autotrace_api.app:app --reload

    # Or run directly
    python -m autotrace_api.app
"""

import logging

from fastapi import FastAPI
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware

from autotrace.config.runtime import get_default_config
from autotrace.schemas.errors import AutotraceException
from autotrace_api.routes import digest, health, proofs
from autotrace_api.errors import (
    APIError,
    api_error_handler,
    engine_error_handler,
    generic_error_handler,
    validation_error_handler,
)


def _resolve_log_level() -> int:
    """Log level of the service configuration (AUTOTRACE_LOG_LEVEL), defaulting to INFO."""
    raw = get_default_config().service.log_level
    return getattr(logging, (raw or "INFO").upper(), logging.INFO)


logging.basicConfig(
    level=_resolve_log_level(),
    format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
)


def create_app() -> FastAPI:
    """Create and configure the FastAPI application."""

    app = FastAPI(
        title="Autotrace API",
        description="""
HTTP API for the Autotrace content-addressing engine.

## Endpoints

- **POST /digest** - `{"op": "hash", "payload": ...}` or `{"op": "merkle-root", "leaves": [...]}`
- **POST /hash** - `{"payload": ...}`
- **POST /merkle-root** - `{"leaves": [...]}`
- **POST /merkle-proof** - Inclusion proof for one leaf
- **POST /merkle-proof/verify** - Verify an inclusion proof
- **GET /health** - Health check

Digest endpoints respond with a single `text/plain` line: 64 lowercase hex characters.
        """,
        version="0.1.0",
        docs_url="/docs",
        redoc_url="/redoc",
    )

    # Add CORS middleware
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_methods=["GET", "POST"],
        allow_headers=["*"],
    )

    # Register exception handlers
    app.add_exception_handler(APIError, api_error_handler)
    app.add_exception_handler(AutotraceException, engine_error_handler)
    app.add_exception_handler(RequestValidationError, validation_error_handler)
    app.add_exception_handler(Exception, generic_error_handler)

    # Include routers
    app.include_router(health.router)
    app.include_router(digest.router)
    app.include_router(proofs.router)

    return app


# Create the application instance
app = create_app()


if __name__ == "__main__":
    import uvicorn

    service = get_default_config().service
    uvicorn.run(app, host=service.host, port=service.port, log_level=service.log_level.lower())
