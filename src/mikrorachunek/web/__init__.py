"""HTTP interface for the micro-account validator."""

from .api import app, ValidationRequest, ValidationResponse

__all__ = [
    "app",
    "ValidationRequest",
    "ValidationResponse",
]
