"""
Micro-account validation pipeline.

What this does
--------------
Takes whatever the user typed and decides whether it is a valid tax
micro-account (mikrorachunek podatkowy) at the National Bank of Poland.

Layout of a 26-digit micro-account::

    CC 10100071 222 T IIIIIIIIII(I) 0(0)
    |  |        |   | |             |
    |  |        |   | |             +- trailing zeros: "0" for PESEL, "00" for NIP
    |  |        |   | +--------------- PESEL (11 digits) or NIP (10 digits)
    |  |        |   +----------------- identifier type: 1 = PESEL, 2 = NIP
    |  |        +--------------------- NBP complement, always 222
    |  +------------------------------ NBP settlement number, always 10100071
    +--------------------------------- NRB check digits (mod-97)

Order of gates
--------------
1) sanitize      -> drop whitespace
2) characters    -> digits only
3) length        -> exactly 26
4) checksum      -> NRB mod-97 == 1
5) fixed fields  -> NBP number, then NBP complement
6) identifier    -> type dispatch, PESEL/NIP checksum, trailing zeros
7) success

The first failing gate wins; later gates never run.
"""

from __future__ import annotations

from typing import Optional

from .checksums import (
    COUNTRY_CODE_DIGITS,
    is_digits,
    nip_control_digit,
    nrb_remainder,
    pesel_control_digit,
    remove_whitespace,
    validate_nip,
    validate_pesel,
)
from .results import Failure, FailureReason, IdentifierType, Success, ValidationResult
from .trace import TraceSink, null_trace

ACCOUNT_LENGTH = 26
NBP_NUMBER = "10100071"
NBP_COMPLEMENT = "222"

PESEL_INDICATOR = "1"
NIP_INDICATOR = "2"


class AccountValidator:
    """
    Validate micro-account numbers, optionally reporting each step to a trace sink.

    The validator holds no per-call state, so one instance can serve any number
    of calls. Pass `trace` per call to capture lines for a single validation.
    """

    def __init__(self, trace: Optional[TraceSink] = None) -> None:
        self._trace = trace if trace is not None else null_trace

    def validate(self, raw: str, trace: Optional[TraceSink] = None) -> ValidationResult:
        log = trace if trace is not None else self._trace

        log(f"Original input: {raw}")
        account = remove_whitespace(raw)
        log(f"After sanitization: {account}")

        if not is_digits(account):
            log("Validation failed: non-digit characters.")
            return Failure(FailureReason.NON_DIGIT_CHARACTERS)

        if len(account) != ACCOUNT_LENGTH:
            log(f"Validation failed: incorrect length {len(account)}.")
            return Failure(FailureReason.INVALID_LENGTH, length=len(account))
        log("Length check passed.")

        control_sum, rest = account[:2], account[2:]
        log(f"Control sum: {control_sum}")
        log(f"Rest of account: {rest}")
        log(f"Rearranged account for checksum: {rest}{COUNTRY_CODE_DIGITS}{control_sum}")
        remainder = nrb_remainder(account)
        log(f"Checksum remainder (modulo 97): {remainder}")
        if remainder != 1:
            log("Validation failed: checksum (modulo 97) failed.")
            return Failure(FailureReason.CHECKSUM_MISMATCH)
        log("Checksum (modulo 97) passed.")

        nbp_number, nbp_complement = account[2:10], account[10:13]
        log(f"NBP number: {nbp_number}")
        log(f"NBP complement: {nbp_complement}")
        if nbp_number != NBP_NUMBER:
            log("Validation failed: NBP number mismatch.")
            return Failure(FailureReason.NBP_NUMBER_MISMATCH)
        if nbp_complement != NBP_COMPLEMENT:
            log("Validation failed: NBP complement mismatch.")
            return Failure(FailureReason.NBP_COMPLEMENT_MISMATCH)
        log("NBP elements check passed.")

        indicator = account[13]
        log(f"Identifier type indicator: {indicator}")
        if indicator == PESEL_INDICATOR:
            result = self._check_pesel(account, log)
        elif indicator == NIP_INDICATOR:
            result = self._check_nip(account, log)
        else:
            log("Validation failed: invalid identifier type indicator.")
            return Failure(FailureReason.INVALID_IDENTIFIER_INDICATOR)

        if isinstance(result, Success):
            log("Validation successful!")
        return result

    # -- Identifier branches ---------------------------------------------------------------

    @staticmethod
    def _check_pesel(account: str, log: TraceSink) -> ValidationResult:
        pesel = account[14:25]
        log(f"Extracted PESEL: {pesel}")
        log(
            f"PESEL: {pesel} calculated control digit: {pesel_control_digit(pesel[:10])} "
            f"actual control digit: {pesel[10]}"
        )
        if not validate_pesel(pesel):
            log("Validation failed: PESEL checksum failed.")
            return Failure(FailureReason.PESEL_CHECKSUM_FAILED)
        log("PESEL checksum passed.")

        if account[25] != "0":
            log("Validation failed: PESEL trailing zero mismatch.")
            return Failure(FailureReason.PESEL_TRAILING_ZERO_MISMATCH)
        log("PESEL trailing zero check passed.")
        return Success(IdentifierType.PESEL, pesel)

    @staticmethod
    def _check_nip(account: str, log: TraceSink) -> ValidationResult:
        nip = account[14:24]
        log(f"Extracted NIP: {nip}")
        log(
            f"NIP: {nip} calculated control digit: {nip_control_digit(nip[:9])} "
            f"actual control digit: {nip[9]}"
        )
        if not validate_nip(nip):
            log("Validation failed: NIP checksum failed.")
            return Failure(FailureReason.NIP_CHECKSUM_FAILED)
        log("NIP checksum passed.")

        if account[24:26] != "00":
            log("Validation failed: NIP trailing zeros mismatch.")
            return Failure(FailureReason.NIP_TRAILING_ZEROS_MISMATCH)
        log("NIP trailing zeros check passed.")
        return Success(IdentifierType.NIP, nip)


_default = AccountValidator()


def validate(raw: str, trace: Optional[TraceSink] = None) -> ValidationResult:
    """Validate `raw` with a shared default validator."""
    return _default.validate(raw, trace=trace)
