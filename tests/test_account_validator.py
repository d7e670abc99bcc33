"""
End-to-end tests for the micro-account validation pipeline.

Every account below (except the deliberate checksum breakers) carries correct
NRB check digits, so each test isolates the single gate it targets.
"""

import pytest

from mikrorachunek import AccountValidator, Failure, FailureReason, IdentifierType, Success, validate
from mikrorachunek.validation import ListTrace
from mikrorachunek.validation.checksums import remove_whitespace

NIP_OK = "88101000712222123456321800"
PESEL_OK = "27101000712221440514013590"
BAD_INDICATOR = "15101000712225123456321800"
NIP_BAD_CHECKSUM = "72101000712222123456321700"
NIP_CONTROL_TEN = "53101000712222123456789000"
NIP_BAD_TRAILING = "61101000712222123456321801"
PESEL_BAD_CHECKSUM = "06101000712221440514013580"
PESEL_BAD_TRAILING = "97101000712221440514013591"
NBP_NUMBER_WRONG = "69102000712222123456321800"
NBP_COMPLEMENT_WRONG = "44101000713332123456321800"


class TestSuccess:

    def test_nip_account(self):
        assert validate(NIP_OK) == Success(IdentifierType.NIP, "1234563218")

    def test_pesel_account(self):
        assert validate(PESEL_OK) == Success(IdentifierType.PESEL, "44051401359")

    def test_grouped_input(self):
        result = validate("88 1010 0071 2222 1234 5632 1800")
        assert isinstance(result, Success)
        assert result.identifier_number == "1234563218"
        assert result.valid


class TestStructuralGates:

    @pytest.mark.parametrize("raw", ["12A4", "PL88101000712222123456321800", "88-1010-0071", "１２３"])
    def test_non_digit_characters(self, raw):
        assert validate(raw) == Failure(FailureReason.NON_DIGIT_CHARACTERS)

    @pytest.mark.parametrize("raw", ["", "   ", "\t\n"])
    def test_empty_input_is_non_digit(self, raw):
        assert validate(raw) == Failure(FailureReason.NON_DIGIT_CHARACTERS)

    def test_short_input_reports_length(self):
        result = validate("123")
        assert result == Failure(FailureReason.INVALID_LENGTH, length=3)
        assert not result.valid

    @pytest.mark.parametrize("n", [1, 25, 27, 40])
    def test_any_wrong_length(self, n):
        assert validate("1" * n) == Failure(FailureReason.INVALID_LENGTH, length=n)

    def test_length_counts_sanitized_digits(self):
        assert validate("1 2 3") == Failure(FailureReason.INVALID_LENGTH, length=3)

    def test_non_digit_wins_over_length(self):
        assert validate("1X") == Failure(FailureReason.NON_DIGIT_CHARACTERS)


class TestChecksumGate:

    def test_altered_check_digits_are_rejected(self):
        rest = NIP_OK[2:]
        for cc in range(100):
            account = f"{cc:02d}{rest}"
            result = validate(account)
            if account == NIP_OK:
                assert isinstance(result, Success)
            else:
                assert result == Failure(FailureReason.CHECKSUM_MISMATCH)

    def test_checksum_runs_before_field_checks(self):
        # wrong NBP number and wrong check digits: checksum is reported
        assert validate("00" + NBP_NUMBER_WRONG[2:]) == Failure(FailureReason.CHECKSUM_MISMATCH)

    def test_swapped_digits_detected(self):
        swapped = NIP_OK[:16] + NIP_OK[17] + NIP_OK[16] + NIP_OK[18:]
        assert swapped != NIP_OK
        assert validate(swapped) == Failure(FailureReason.CHECKSUM_MISMATCH)


class TestFixedFields:

    def test_nbp_number(self):
        assert validate(NBP_NUMBER_WRONG) == Failure(FailureReason.NBP_NUMBER_MISMATCH)

    def test_nbp_complement(self):
        assert validate(NBP_COMPLEMENT_WRONG) == Failure(FailureReason.NBP_COMPLEMENT_MISMATCH)


class TestIdentifier:

    def test_invalid_indicator(self):
        assert validate(BAD_INDICATOR) == Failure(FailureReason.INVALID_IDENTIFIER_INDICATOR)

    def test_pesel_checksum(self):
        assert validate(PESEL_BAD_CHECKSUM) == Failure(FailureReason.PESEL_CHECKSUM_FAILED)

    def test_pesel_trailing_zero(self):
        assert validate(PESEL_BAD_TRAILING) == Failure(FailureReason.PESEL_TRAILING_ZERO_MISMATCH)

    def test_nip_checksum(self):
        assert validate(NIP_BAD_CHECKSUM) == Failure(FailureReason.NIP_CHECKSUM_FAILED)

    def test_nip_control_value_ten(self):
        assert validate(NIP_CONTROL_TEN) == Failure(FailureReason.NIP_CHECKSUM_FAILED)

    def test_nip_trailing_zeros(self):
        assert validate(NIP_BAD_TRAILING) == Failure(FailureReason.NIP_TRAILING_ZEROS_MISMATCH)


@pytest.mark.parametrize(
    "account",
    [NIP_OK, PESEL_OK, BAD_INDICATOR, NIP_BAD_CHECKSUM, PESEL_BAD_TRAILING, "123", "12A4"],
)
@pytest.mark.parametrize("spacing", [" {} ", "{}\n", "\t{}"])
def test_whitespace_does_not_change_result(account, spacing):
    spaced = spacing.format(" ".join(account[i:i + 4] for i in range(0, len(account), 4)))
    assert validate(spaced) == validate(remove_whitespace(spaced)) == validate(account)


class TestTrace:

    def test_empty_list_trace_is_not_replaced(self):
        lines = ListTrace()
        assert len(lines) == 0
        validate("123", trace=lines)
        assert lines.lines == [
            "Original input: 123",
            "After sanitization: 123",
            "Validation failed: incorrect length 3.",
        ]

    def test_empty_list_trace_in_constructor(self):
        lines = ListTrace()
        AccountValidator(trace=lines).validate("12A4")
        assert lines.lines[-1] == "Validation failed: non-digit characters."

    def test_trace_records_steps_in_order(self):
        lines = ListTrace()
        validate("88 1010 0071 2222 1234 5632 1800", trace=lines)
        assert lines.lines[0] == "Original input: 88 1010 0071 2222 1234 5632 1800"
        assert lines.lines[1] == "After sanitization: " + NIP_OK
        assert "Checksum remainder (modulo 97): 1" in lines.lines
        assert "Extracted NIP: 1234563218" in lines.lines
        assert lines.lines[-1] == "Validation successful!"

    def test_trace_stops_at_first_failure(self):
        lines = ListTrace()
        validate("123", trace=lines)
        assert lines.lines[-1] == "Validation failed: incorrect length 3."
        assert not any("Checksum" in line for line in lines)

    def test_trace_does_not_affect_result(self):
        lines = ListTrace()
        for account in (NIP_OK, PESEL_BAD_CHECKSUM, BAD_INDICATOR):
            assert validate(account, trace=lines) == validate(account)

    def test_constructor_sink_used_by_default(self):
        lines = ListTrace()
        AccountValidator(trace=lines).validate(PESEL_OK)
        assert "Extracted PESEL: 44051401359" in lines.lines
        assert "PESEL trailing zero check passed." in lines.lines

    def test_per_call_sink_overrides_constructor_sink(self):
        default, call = ListTrace(), ListTrace()
        AccountValidator(trace=default).validate(NIP_OK, trace=call)
        assert len(default) == 0
        assert len(call) > 0

    def test_sink_errors_propagate(self):
        def broken(line):
            raise RuntimeError("sink down")

        with pytest.raises(RuntimeError):
            validate(NIP_OK, trace=broken)


def test_failure_requires_length_only_for_invalid_length():
    with pytest.raises(ValueError):
        Failure(FailureReason.INVALID_LENGTH)
    with pytest.raises(ValueError):
        Failure(FailureReason.CHECKSUM_MISMATCH, length=3)


class TestBrowserWhitespace:

    def test_byte_order_mark_is_stripped(self):
        assert validate("\ufeff" + NIP_OK) == Success(IdentifierType.NIP, "1234563218")

    def test_narrow_nbsp_grouping(self):
        grouped = "\u202f".join(NIP_OK[i:i + 4] for i in range(0, len(NIP_OK), 4))
        assert isinstance(validate(grouped), Success)

    @pytest.mark.parametrize("sep", ["\x1c", "\x1f", "\x85"])
    def test_python_only_whitespace_is_a_character(self, sep):
        assert validate(NIP_OK[:2] + sep + NIP_OK[2:]) == Failure(FailureReason.NON_DIGIT_CHARACTERS)
