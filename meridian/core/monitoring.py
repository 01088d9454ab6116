"""
Monitoring and Tracing Configuration Module.

This module wires Pydantic Logfire into Meridian. When enabled it instruments:
- Pydantic AI agent runs (minutes generation, email polishing)
- SQLAlchemy database operations
- HTTPX outbound requests
- FastAPI endpoints

All helpers are no-ops (beyond a debug log line) when Logfire is disabled or
not configured, so callers never need to guard them.
"""

import logging
import os
from typing import Optional

import logfire
from fastapi import FastAPI

logger = logging.getLogger(__name__)

# Logfire configuration from environment
LOGFIRE_ENABLED = os.getenv("LOGFIRE_ENABLED", "false").lower() in ("true", "1", "yes")
LOGFIRE_TOKEN = os.getenv("LOGFIRE_TOKEN", "")
LOGFIRE_ENVIRONMENT = os.getenv("LOGFIRE_ENVIRONMENT", "development")
LOGFIRE_SERVICE_NAME = os.getenv("LOGFIRE_SERVICE_NAME", "meridian-server")
LOGFIRE_SERVICE_VERSION = os.getenv("LOGFIRE_SERVICE_VERSION", "0.1.0")

# Feature flags
LOGFIRE_TRACE_PYDANTIC_AI = os.getenv("LOGFIRE_TRACE_PYDANTIC_AI", "true").lower() in ("true", "1", "yes")
LOGFIRE_TRACE_SQLALCHEMY = os.getenv("LOGFIRE_TRACE_SQLALCHEMY", "true").lower() in ("true", "1", "yes")
LOGFIRE_TRACE_HTTPX = os.getenv("LOGFIRE_TRACE_HTTPX", "true").lower() in ("true", "1", "yes")
LOGFIRE_TRACE_FASTAPI = os.getenv("LOGFIRE_TRACE_FASTAPI", "true").lower() in ("true", "1", "yes")

_initialized = False


def is_enabled() -> bool:
    """Whether Logfire has been configured for this process."""
    return _initialized


def initialize_logfire(app: FastAPI | None = None) -> None:
    """
    Initialize Pydantic Logfire for monitoring and tracing.

    Args:
        app: FastAPI application instance. When provided, endpoints are
             instrumented as well.

    The initialization is conditional on the LOGFIRE_ENABLED environment variable
    and a non-empty LOGFIRE_TOKEN.
    """
    global _initialized

    if not LOGFIRE_ENABLED:
        logger.info("Logfire monitoring is disabled. Set LOGFIRE_ENABLED=true to enable.")
        return

    if not LOGFIRE_TOKEN:
        logger.warning("Logfire is enabled but LOGFIRE_TOKEN is not set; monitoring stays off.")
        return

    try:
        logfire.configure(
            token=LOGFIRE_TOKEN,
            service_name=LOGFIRE_SERVICE_NAME,
            service_version=LOGFIRE_SERVICE_VERSION,
            environment=LOGFIRE_ENVIRONMENT,
        )
    except Exception as e:
        logger.error(f"Failed to initialize Logfire: {e}", exc_info=True)
        return

    _initialized = True

    if LOGFIRE_TRACE_PYDANTIC_AI:
        _instrument("Pydantic AI", logfire.instrument_pydantic_ai)
    if LOGFIRE_TRACE_SQLALCHEMY:
        _instrument("SQLAlchemy", logfire.instrument_sqlalchemy)
    if LOGFIRE_TRACE_HTTPX:
        _instrument("HTTPX", logfire.instrument_httpx)
    if LOGFIRE_TRACE_FASTAPI:
        if app is not None:
            _instrument("FastAPI", lambda: logfire.instrument_fastapi(app=app))
        else:
            logger.debug("FastAPI app instance not provided, skipping FastAPI instrumentation")

    logger.info(f"Logfire monitoring initialized: environment={LOGFIRE_ENVIRONMENT}, service={LOGFIRE_SERVICE_NAME}")


def _instrument(name: str, instrument) -> None:
    try:
        instrument()
        logger.info(f"Logfire: {name} instrumentation enabled")
    except Exception as e:
        logger.warning(f"Failed to instrument {name}: {e}")


def log_api_request(method: str, path: str, status_code: int, duration_ms: float) -> None:
    """
    Log an API request with performance metrics.

    Args:
        method: HTTP method
        path: Request path
        status_code: HTTP status code
        duration_ms: Request duration in milliseconds
    """
    if not _initialized:
        logger.debug(f"{method} {path} -> {status_code} ({duration_ms:.1f}ms)")
        return
    logfire.info(
        "API request completed",
        method=method,
        path=path,
        status_code=status_code,
        duration_ms=duration_ms,
    )


def log_llm_call(feature: str, model: str, duration_ms: float, succeeded: bool = True) -> None:
    """
    Log a hosted LLM call.

    Args:
        feature: Which helper made the call (``minutes`` or ``email_polish``)
        model: Model name
        duration_ms: Call duration in milliseconds
        succeeded: Whether the call produced a usable result
    """
    if not _initialized:
        logger.debug(f"LLM call feature={feature} model={model} ok={succeeded} ({duration_ms:.1f}ms)")
        return
    logfire.info(
        "LLM call completed",
        feature=feature,
        model=model,
        duration_ms=duration_ms,
        succeeded=succeeded,
    )


def log_error(error_type: str, error_message: str, context: Optional[dict] = None) -> None:
    """
    Log an error with context for debugging.

    Args:
        error_type: Type of error
        error_message: Error message
        context: Additional context dictionary
    """
    if not _initialized:
        logger.debug(f"{error_type}: {error_message}")
        return
    logfire.error(f"{error_type}: {error_message}", **(context or {}))
