"""mikrorachunek: validator for Polish tax micro-account numbers."""

__version__ = "0.1.0"

from .validation import (  # noqa: E402
    AccountValidator,
    Failure,
    FailureReason,
    IdentifierType,
    Success,
    validate,
)

__all__ = [
    "__version__",
    "AccountValidator",
    "Failure",
    "FailureReason",
    "IdentifierType",
    "Success",
    "validate",
]
