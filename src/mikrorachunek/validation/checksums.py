"""
Checksum helpers used by the micro-account validator.

Why this file exists
--------------------
A micro-account number carries three independent check digits: the NRB/IBAN
mod-97 pair at the front, and the control digit of the embedded PESEL or NIP.
Each algorithm is small, but keeping them apart from the pipeline lets the
validator read as a list of gates and lets tests hit every rule directly.

Design principles
-----------------
- **Pure functions**: no I/O, no state; easy to test and reason about.
- **Never raise on bad input**: the identifier checks return False for inputs of
  the wrong length or with non-digit characters.
- **Fixed-width**: the NRB helpers only run on digit strings whose shape the
  caller has already verified.
"""

from __future__ import annotations

import re
from typing import Sequence

# "PL" with letters mapped A=10 .. Z=35 (P=25, L=21).
COUNTRY_CODE_DIGITS = "2521"

PESEL_WEIGHTS: Sequence[int] = (1, 3, 7, 9, 1, 3, 7, 9, 1, 3)
NIP_WEIGHTS: Sequence[int] = (6, 5, 7, 2, 3, 4, 5, 6, 7)

# ECMAScript \s set: includes U+FEFF, excludes U+001C-U+001F and U+0085.
_WHITESPACE = re.compile(
    "[\t\n\v\f\r \u00a0\u1680\u2000-\u200a\u2028\u2029\u202f\u205f\u3000\ufeff]"
)
_ASCII_DIGITS = re.compile(r"[0-9]+")


def remove_whitespace(s: str) -> str:
    """
    Remove every whitespace character from a string.

    Users paste account numbers grouped in blocks of four ("88 1010 0071 ...")
    or with stray tabs and newlines; the validator works on the bare digits.
    """
    return _WHITESPACE.sub("", s)


def is_digits(s: str) -> bool:
    """True if `s` is non-empty and made of ASCII digits 0-9 only."""
    return _ASCII_DIGITS.fullmatch(s) is not None


def mod97(digits: str) -> int:
    """
    Remainder of a decimal digit string modulo 97.

    Folded one digit at a time so the intermediate value never exceeds
    `96 * 10 + 9`, regardless of input length.
    """
    rem = 0
    for ch in digits:
        rem = (rem * 10 + (ord(ch) - 48)) % 97  # '0' -> 48
    return rem


def rearrange_nrb(account: str) -> str:
    """
    Move the two check digits behind the BBAN and the country code.

    For a 26-digit NRB `CCBBBB...` this yields `BBBB...` + "2521" + `CC`, the
    numeric form ISO 13616 checks with mod-97.
    """
    return account[2:] + COUNTRY_CODE_DIGITS + account[:2]


def nrb_remainder(account: str) -> int:
    """Mod-97 remainder of a 26-digit NRB; a valid number yields 1."""
    return mod97(rearrange_nrb(account))


def nrb_ok(account: str) -> bool:
    """
    Validate a Polish NRB (26 digits) with the IBAN mod-97 algorithm.

    Args:
        account: Candidate string; must already be whitespace-free.

    Returns:
        True if the account is 26 digits and the remainder is 1; False otherwise.
    """
    if len(account) != 26 or not is_digits(account):
        return False
    return nrb_remainder(account) == 1


def nrb_check_digits(bban: str) -> str:
    """
    Compute the two check digits that make a 24-digit BBAN a valid NRB.

    Raises:
        ValueError: if `bban` is not exactly 24 ASCII digits.
    """
    if len(bban) != 24 or not is_digits(bban):
        raise ValueError(f"BBAN must be 24 digits, got {bban!r}")
    rem = mod97(bban + COUNTRY_CODE_DIGITS + "00")
    return f"{98 - rem:02d}"


def _weighted_sum(digits: str, weights: Sequence[int]) -> int:
    return sum(int(d) * w for d, w in zip(digits, weights))


def pesel_control_digit(first10: str) -> int:
    """Control digit for the first ten digits of a PESEL."""
    return (10 - _weighted_sum(first10, PESEL_WEIGHTS) % 10) % 10


def nip_control_digit(first9: str) -> int:
    """
    Control value for the first nine digits of a NIP.

    May return 10, which no single digit can match; such prefixes cannot form
    a valid NIP.
    """
    return _weighted_sum(first9, NIP_WEIGHTS) % 11


def validate_pesel(pesel: str) -> bool:
    """
    Validate an 11-digit PESEL using its weighted mod-10 control digit.

    Args:
        pesel: Candidate string.

    Returns:
        True if the control digit matches; False otherwise, including for
        strings that are not exactly 11 digits.
    """
    if len(pesel) != 11 or not is_digits(pesel):
        return False
    return pesel_control_digit(pesel[:10]) == int(pesel[10])


def validate_nip(nip: str) -> bool:
    """
    Validate a 10-digit NIP using its weighted mod-11 control digit.

    A control value of 10 is compared like any other and therefore never
    matches the last digit.
    """
    if len(nip) != 10 or not is_digits(nip):
        return False
    return nip_control_digit(nip[:9]) == int(nip[9])
