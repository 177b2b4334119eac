"""
AI Cyber Crime Reporter API

Thin FastAPI backend that turns incident reports into AI remediation guidance.
"""

import logging
from contextlib import asynccontextmanager
from collections.abc import AsyncGenerator
from typing import Any

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from reporter.config import get_settings, require_gateway_key
from reporter.middleware import (
    CORSHeadersMiddleware,
    RequestIDMiddleware,
    request_id_var,
)
from reporter.routers import reports
from reporter.services.errors import ReportError

logger = logging.getLogger(__name__)

VERSION = "0.1.0"


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Application lifespan: refuse to start without a gateway key."""
    require_gateway_key()
    yield


app = FastAPI(
    title="AI Cyber Crime Reporter API",
    description="Report cybersecurity incidents and receive AI-powered guidance",
    version=VERSION,
    lifespan=lifespan,
)

# Middleware added last runs first: request ID outermost, then CORS
app.add_middleware(
    CORSHeadersMiddleware, allow_headers=get_settings().cors_allow_headers
)
app.add_middleware(RequestIDMiddleware)

# Routers
app.include_router(reports.router, prefix="/api")


@app.exception_handler(ReportError)
async def report_error_handler(request: Request, exc: ReportError) -> JSONResponse:
    if exc.status_code >= 500:
        logger.error(
            "Report analysis failed (%s) [request_id=%s]",
            exc.kind.value,
            request_id_var.get(),
        )
    return JSONResponse(status_code=exc.status_code, content={"error": exc.message})


@app.exception_handler(RequestValidationError)
async def request_validation_handler(
    request: Request, exc: RequestValidationError
) -> JSONResponse:
    return JSONResponse(
        status_code=400,
        content={"error": "Invalid request body. Expected category, details and email."},
    )


def _check_config() -> str:
    """Verify required configuration is loaded. Returns 'ok' or 'fail'."""
    return "ok" if get_settings().ai_gateway_api_key else "fail"


@app.get("/api/health")
async def health_check() -> JSONResponse:
    """Health check verifying service configuration."""
    checks = {"config": _check_config()}
    failed = [k for k, v in checks.items() if v != "ok"]
    if failed:
        logger.warning("Health check degraded: failed: %s", ", ".join(failed))

    result: dict[str, Any] = {
        "status": "degraded" if failed else "ok",
        "service": "cyber-crime-reporter-api",
        "version": VERSION,
        "checks": checks,
    }
    return JSONResponse(content=result)
