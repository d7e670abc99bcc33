"""Micro-account validation: pipeline, checksums, result types and messages."""

from .account import AccountValidator, validate
from .checksums import nrb_check_digits, nrb_ok, validate_nip, validate_pesel
from .messages import failure_message, headline, render_lines
from .results import (
    Failure,
    FailureReason,
    IdentifierType,
    Success,
    ValidationResult,
    result_to_dict,
)
from .trace import ListTrace, StructlogTrace, TraceSink

__all__ = [
    "AccountValidator",
    "validate",
    "nrb_check_digits",
    "nrb_ok",
    "validate_nip",
    "validate_pesel",
    "failure_message",
    "headline",
    "render_lines",
    "Failure",
    "FailureReason",
    "IdentifierType",
    "Success",
    "ValidationResult",
    "result_to_dict",
    "ListTrace",
    "StructlogTrace",
    "TraceSink",
]
