"""
Tests for amount parsing and formatting
"""

import pytest
from decimal import Decimal

from finance_core.amounts import parse_amount, ensure_amount, format_amount, MAX_AMOUNT
from finance_core.exceptions import ValidationError


class TestParseAmount:
    """Test conversion of form text to Decimal"""

    @pytest.mark.parametrize("text,expected", [
        ("100", Decimal('100')),
        (" 42.50 ", Decimal('42.50')),
        ("$1,250.50", Decimal('1250.50')),
        ("€ 20", Decimal('20')),
        ("1,250", Decimal('1250')),
        ("1,234,567", Decimal('1234567')),
        ("7,5", Decimal('7.5')),
        ("0", Decimal('0')),
    ])
    def test_valid_amounts(self, text, expected):
        """Common ways of typing an amount are accepted"""
        assert parse_amount(text) == expected

    @pytest.mark.parametrize("text", [
        "", "   ", "abc", "12abc", "1.2.3", "--5", "NaN", "Infinity",
    ])
    def test_malformed_amounts(self, text):
        """Garbage is rejected instead of being guessed at"""
        with pytest.raises(ValidationError):
            parse_amount(text)

    def test_negative_amount_rejected(self):
        """The form never supplies a sign"""
        with pytest.raises(ValidationError, match="must not be negative"):
            parse_amount("-5")

    def test_non_string_rejected(self):
        """Only text comes from the form"""
        with pytest.raises(ValidationError):
            parse_amount(None)
        with pytest.raises(ValidationError):
            parse_amount(12)

    @pytest.mark.parametrize("text", ["1.234,56", "1.234,567", "0.5,0"])
    def test_ambiguous_separators_rejected(self, text):
        """A comma after a dot is never silently read as thousands"""
        with pytest.raises(ValidationError, match="Ambiguous separators"):
            parse_amount(text)

    @pytest.mark.parametrize("text", ["1e30", "1" * 28, "0.001"])
    def test_out_of_range_text_rejected(self, text):
        with pytest.raises(ValidationError):
            parse_amount(text)

    def test_validation_error_is_value_error(self):
        """Callers catching ValueError also catch bad amounts"""
        with pytest.raises(ValueError):
            parse_amount("twelve")


class TestEnsureAmount:
    """Test validation of amounts handed to the ledger"""

    def test_decimal_passes_through(self):
        amount = Decimal('10.25')
        assert ensure_amount(amount) == amount

    def test_trailing_zeros_are_quantized(self):
        assert ensure_amount("12.5") == Decimal('12.50')
        assert str(ensure_amount(Decimal('5'))) == "5.00"

    @pytest.mark.parametrize("amount", [Decimal('1e-26'), Decimal('0.001'), "10.005"])
    def test_sub_cent_amounts_rejected(self, amount):
        """Fractions of a cent would be lost silently, so they are refused"""
        with pytest.raises(ValidationError, match="decimal places"):
            ensure_amount(amount)

    def test_upper_bound(self):
        assert ensure_amount(MAX_AMOUNT) == MAX_AMOUNT
        with pytest.raises(ValidationError, match="must not exceed"):
            ensure_amount(MAX_AMOUNT + 1)
        with pytest.raises(ValidationError, match="must not exceed"):
            ensure_amount(Decimal('1e30'))

    def test_int_and_str_converted(self):
        assert ensure_amount(5) == Decimal('5')
        assert ensure_amount("5.5") == Decimal('5.5')

    def test_float_rejected(self):
        """Floats are refused outright"""
        with pytest.raises(ValidationError, match="float"):
            ensure_amount(0.1)

    def test_bool_rejected(self):
        with pytest.raises(ValidationError):
            ensure_amount(True)

    def test_non_finite_rejected(self):
        with pytest.raises(ValidationError, match="finite"):
            ensure_amount(Decimal('Infinity'))
        with pytest.raises(ValidationError, match="finite"):
            ensure_amount(Decimal('NaN'))

    def test_unparseable_string_rejected(self):
        with pytest.raises(ValidationError):
            ensure_amount("ten")


class TestFormatAmount:
    """Test display formatting"""

    @pytest.mark.parametrize("amount,expected", [
        (Decimal('500'), "500.0"),
        (Decimal('1300.00'), "1300.0"),
        (Decimal('12.50'), "12.5"),
        (Decimal('0.05'), "0.05"),
        (Decimal('0'), "0.0"),
    ])
    def test_format(self, amount, expected):
        assert format_amount(amount) == expected

    def test_large_values_never_raise(self):
        """Formatting is safe for any finite Decimal"""
        assert format_amount(Decimal('1E+30')) == "1000000000000000000000000000000.0"
        assert format_amount(Decimal('1E-26')) == "0.00000000000000000000000001"
        assert format_amount(Decimal('123456789012345678.9')) == "123456789012345678.9"

    def test_non_finite_shown_as_is(self):
        assert format_amount(Decimal('NaN')) == "NaN"
