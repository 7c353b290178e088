from decimal import Decimal

import pytest

from gst_billing.services.formatting import (
    amount_in_words,
    format_amount,
    format_currency,
    format_percentage,
    round_for_display,
)


class TestRoundForDisplay:
    def test_rounds_half_up(self):
        assert round_for_display(Decimal("0.005")) == Decimal("0.01")
        assert round_for_display(Decimal("2.675")) == Decimal("2.68")

    def test_negative_rounds_away_from_zero(self):
        assert round_for_display(Decimal("-0.005")) == Decimal("-0.01")

    def test_places(self):
        assert round_for_display(Decimal("1.2345"), 3) == Decimal("1.235")

    def test_garbage_is_zero(self):
        assert round_for_display("abc") == Decimal("0.00")

    def test_amounts_wider_than_the_default_precision(self):
        value = Decimal("123456789012345678901234567890.555")

        assert round_for_display(value) == Decimal("123456789012345678901234567890.56")


class TestFormatAmount:
    @pytest.mark.parametrize(
        "value,expected",
        [
            ("0", "0.00"),
            ("999", "999.00"),
            ("1000", "1,000.00"),
            ("123456.789", "1,23,456.79"),
            ("12345678", "1,23,45,678.00"),
            ("-1692", "-1,692.00"),
        ],
    )
    def test_indian_grouping(self, value, expected):
        assert format_amount(Decimal(value)) == expected

    def test_international_grouping(self):
        assert format_amount(Decimal("12345678"), grouping="international") == "12,345,678.00"

    def test_no_decimals(self):
        assert format_amount(Decimal("1234.5"), places=0) == "1,235"


class TestFormatCurrency:
    def test_rupee(self):
        assert format_currency(Decimal("1692")) == "₹1,692.00"

    def test_negative(self):
        assert format_currency(Decimal("-10")) == "-₹10.00"

    def test_custom_symbol(self):
        assert format_currency(Decimal("5"), symbol="Rs. ") == "Rs. 5.00"

    def test_very_large_amount(self):
        assert format_currency(Decimal("1e30")) == "₹10," + "00," * 13 + "000.00"
        assert format_currency(Decimal("-1e30")).startswith("-₹10,00,")


class TestFormatPercentage:
    def test_percentage(self):
        assert format_percentage(Decimal("18")) == "18.00%"
        assert format_percentage(Decimal("2.5"), places=1) == "2.5%"


class TestAmountInWords:
    @pytest.mark.parametrize(
        "value,expected",
        [
            ("0", "Zero Rupees Only"),
            ("1", "One Rupees Only"),
            ("15", "Fifteen Rupees Only"),
            ("1692", "One Thousand Six Hundred Ninety Two Rupees Only"),
            ("100000", "One Lakh Rupees Only"),
            ("12345678", "One Crore Twenty Three Lakh Forty Five Thousand Six Hundred Seventy Eight Rupees Only"),
        ],
    )
    def test_rupees(self, value, expected):
        assert amount_in_words(Decimal(value)) == expected

    def test_paise(self):
        assert (
            amount_in_words(Decimal("1692.50"))
            == "One Thousand Six Hundred Ninety Two Rupees and Fifty Paise Only"
        )

    def test_negative(self):
        assert amount_in_words(Decimal("-10")) == "Minus Ten Rupees Only"

    def test_rounds_before_spelling(self):
        assert amount_in_words(Decimal("0.999")) == "One Rupees Only"
