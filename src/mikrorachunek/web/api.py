"""
FastAPI application exposing the micro-account validator.

Endpoints:
- GET  /          service information
- GET  /health    liveness probe
- POST /validate  validate one account number

Each request builds its own trace buffer, so requests share no mutable state.
"""

from __future__ import annotations

import logging
from typing import List, Optional

from fastapi import FastAPI
from pydantic import BaseModel, Field

from .. import __version__
from ..validation import (
    AccountValidator,
    ListTrace,
    ValidationResult,
    headline,
    result_to_dict,
)

logger = logging.getLogger(__name__)

# Pydantic models for API requests/responses
class ValidationRequest(BaseModel):
    """Request model for account validation."""
    account: str = Field(..., description="Account number, whitespace allowed")
    trace: bool = Field(default=False, description="Return the validator's step-by-step trace")

class ValidationResponse(BaseModel):
    """Outcome of a validation; `reason` is set only when `valid` is false."""
    valid: bool
    message: str
    reason: Optional[str] = None
    identifier_type: Optional[str] = None
    identifier_number: Optional[str] = None
    trace: Optional[List[str]] = None

app = FastAPI(
    title="mikrorachunek API",
    description="Validation of Polish tax micro-account numbers",
    version=__version__,
    docs_url="/docs",
    redoc_url="/redoc"
)

validator = AccountValidator()


def to_response(result: ValidationResult, trace: Optional[List[str]] = None) -> ValidationResponse:
    payload = result_to_dict(result)
    logger.info("validated account: valid=%s reason=%s", payload["valid"], payload["reason"])
    return ValidationResponse(message=headline(result), trace=trace, **payload)


@app.get("/")
async def root():
    """Root endpoint with API information."""
    return {
        "message": "mikrorachunek API - micro-account validation",
        "version": __version__,
        "docs": "/docs"
    }

@app.get("/health")
async def health_check():
    """Health check endpoint."""
    return {"status": "healthy", "service": "mikrorachunek-api"}

@app.post("/validate", response_model=ValidationResponse)
def validate_account(request: ValidationRequest):
    """
    Validate a micro-account number.

    Rejections are regular responses (HTTP 200, `valid: false`); only a
    malformed request body yields an error status.
    """
    lines = ListTrace()
    result = validator.validate(request.account, trace=lines)
    return to_response(result, lines.lines if request.trace else None)
