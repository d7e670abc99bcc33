"""
Result types returned by the account validator.

A validation call ends in exactly one of two shapes:

- `Success`: the account passed every gate; carries the decoded identifier.
- `Failure`: the first gate that rejected the input, as a `FailureReason`.

Rejections are ordinary outcomes of user input, so they are returned rather
than raised.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict, Optional, Union


class IdentifierType(str, Enum):
    PESEL = "PESEL"
    NIP = "NIP"


class FailureReason(str, Enum):
    """Closed set of rejection kinds, in the order the pipeline checks them."""

    NON_DIGIT_CHARACTERS = "NonDigitCharacters"
    INVALID_LENGTH = "InvalidLength"
    CHECKSUM_MISMATCH = "ChecksumMismatch"
    NBP_NUMBER_MISMATCH = "NbpNumberMismatch"
    NBP_COMPLEMENT_MISMATCH = "NbpComplementMismatch"
    INVALID_IDENTIFIER_INDICATOR = "InvalidIdentifierIndicator"
    PESEL_CHECKSUM_FAILED = "PeselChecksumFailed"
    PESEL_TRAILING_ZERO_MISMATCH = "PeselTrailingZeroMismatch"
    NIP_CHECKSUM_FAILED = "NipChecksumFailed"
    NIP_TRAILING_ZEROS_MISMATCH = "NipTrailingZerosMismatch"


@dataclass(frozen=True)
class Success:
    identifier_type: IdentifierType
    identifier_number: str

    @property
    def valid(self) -> bool:
        return True


@dataclass(frozen=True)
class Failure:
    """
    A rejected account.

    Attributes:
        reason: Which gate rejected the input.
        length: Sanitized input length; set only for `INVALID_LENGTH`.
    """
    reason: FailureReason
    length: Optional[int] = None

    def __post_init__(self) -> None:
        if (self.reason is FailureReason.INVALID_LENGTH) != (self.length is not None):
            raise ValueError("length is required for INVALID_LENGTH and only for it")

    @property
    def valid(self) -> bool:
        return False


ValidationResult = Union[Success, Failure]


def result_to_dict(result: ValidationResult) -> Dict[str, Any]:
    """Flatten a result into JSON-friendly primitives."""
    if isinstance(result, Success):
        return {
            "valid": True,
            "reason": None,
            "identifier_type": result.identifier_type.value,
            "identifier_number": result.identifier_number,
        }
    return {
        "valid": False,
        "reason": result.reason.value,
        "identifier_type": None,
        "identifier_number": None,
    }
