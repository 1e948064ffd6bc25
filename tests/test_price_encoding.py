"""
Tests for MOD-9 price encoding.
"""

import math
from decimal import Decimal

import pytest

from apps.labels import encoding
from apps.labels.exceptions import InvalidAmount, InvalidEncodedPrice, UnsupportedEncoding


class TestEncode:
    """Test encoding prices for printing."""

    def test_encode_1299(self):
        """Digits 1299 sum to 21, 21 mod 9 = 3."""
        result = encoding.encode(1299)

        assert result.encoded_string == "12993"
        assert result.checksum_digit == 3
        assert result.method == "MOD9"
        assert result.version == 1

    @pytest.mark.parametrize(
        "amount,expected",
        [
            (0, "09"),
            (9, "99"),
            (18, "189"),
            (800, "8008"),
            (1000, "10001"),
            (1250, "12508"),
            (99999, "999999"),
        ],
    )
    def test_known_values(self, amount, expected):
        """Digit sums divisible by 9 give check digit 9."""
        assert encoding.encode(amount).encoded_string == expected

    def test_check_digit_never_zero(self):
        """Every amount gets a check digit between 1 and 9."""
        for amount in range(0, 5000):
            assert 1 <= encoding.encode(amount).checksum_digit <= 9

    def test_encode_is_idempotent(self):
        """Repeated calls give identical results."""
        assert encoding.encode(Decimal("1299.50")) == encoding.encode(Decimal("1299.50"))

    def test_paise_are_truncated(self):
        """Only whole rupees are encoded; the amount itself is kept."""
        result = encoding.encode(Decimal("1299.99"))

        assert result.encoded_string == "12993"
        assert result.amount == Decimal("1299.99")

    def test_accepts_numeric_strings(self):
        """Decimal strings from the database encode like numbers."""
        assert encoding.encode("1250.00").encoded_string == "12508"

    @pytest.mark.parametrize(
        "amount",
        [-1, Decimal("-0.01"), math.inf, -math.inf, math.nan, "abc", None, True],
    )
    def test_invalid_amounts_rejected(self, amount):
        """Negative, non-finite and non-numeric prices raise InvalidAmount."""
        with pytest.raises(InvalidAmount):
            encoding.encode(amount)

    def test_unknown_version_rejected(self):
        """Only registered encodings can be used."""
        with pytest.raises(UnsupportedEncoding):
            encoding.encode(100, version=99)

    def test_as_dict(self):
        """Serialized form keeps the amount as a string."""
        assert encoding.encode(1299).as_dict() == {
            "amount": "1299",
            "encoded_string": "12993",
            "checksum_digit": 3,
            "method": "MOD9",
            "version": 1,
        }


class TestDecode:
    """Test recovering prices from printed codes."""

    @pytest.mark.parametrize("amount", [0, 7, 9, 800, 1250, 1299, 250000])
    def test_round_trip(self, amount):
        """Decoding an encoded whole-rupee price gives the price back."""
        assert encoding.decode(encoding.encode(amount).encoded_string) == Decimal(amount)

    def test_round_trip_drops_paise(self):
        """Decoding gives the whole-rupee part of a fractional price."""
        assert encoding.decode(encoding.encode(Decimal("1299.75")).encoded_string) == Decimal(1299)

    def test_single_digit_misread_detected(self):
        """A wrong digit makes the checksum fail."""
        with pytest.raises(InvalidEncodedPrice):
            encoding.decode("12893")

    @pytest.mark.parametrize("code", ["", "1", "12a3", "-12993", "12 993", "00099", "12990"])
    def test_malformed_codes_rejected(self, code):
        """Codes that could not have been produced by encode are rejected."""
        with pytest.raises(InvalidEncodedPrice):
            encoding.decode(code)

    def test_surrounding_whitespace_ignored(self):
        """Codes typed with stray spaces still decode."""
        assert encoding.decode(" 12993 ") == Decimal(1299)

    def test_is_valid_encoded_price(self):
        """The boolean helper never raises."""
        assert encoding.is_valid_encoded_price("12993") is True
        assert encoding.is_valid_encoded_price("12994") is False
        assert encoding.is_valid_encoded_price("") is False
