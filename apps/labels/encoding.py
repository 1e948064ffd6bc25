"""
MOD-9 price checksum encoding for printed labels.

The encoded price is the whole-rupee price followed by one check digit:

    1299 -> digits sum to 21 -> 21 % 9 = 3 -> "12993"

A digit sum divisible by 9 yields check digit 9, never 0, so the check digit
cannot be confused with a trailing zero on the tag. Staff recover the price
by dropping the last digit; a misread digit is caught by the checksum.

Encoders are keyed by (method, version). A printed job line keeps the method
and version it was created with, so changing the algorithm later never
alters a historical tag. Nothing in this module touches the database.
"""

from dataclasses import dataclass
from decimal import ROUND_DOWN, Decimal, InvalidOperation

from .exceptions import InvalidAmount, InvalidEncodedPrice, UnsupportedEncoding

METHOD_MOD9 = "MOD9"
CURRENT_VERSION = 1


@dataclass(frozen=True)
class EncodedPrice:
    """An amount together with its printable checksum encoding."""

    amount: Decimal
    encoded_string: str
    checksum_digit: int
    method: str = METHOD_MOD9
    version: int = CURRENT_VERSION

    def as_dict(self):
        return {
            "amount": str(self.amount),
            "encoded_string": self.encoded_string,
            "checksum_digit": self.checksum_digit,
            "method": self.method,
            "version": self.version,
        }


def to_amount(value) -> Decimal:
    """
    Convert a price to a finite, non-negative Decimal.

    Raises:
        InvalidAmount: For booleans, non-numeric values, NaN, infinities and negatives
    """
    if isinstance(value, bool):
        raise InvalidAmount(f"Not a price: {value!r}")

    if isinstance(value, Decimal):
        amount = value
    else:
        try:
            amount = Decimal(str(value).strip())
        except (InvalidOperation, ValueError, TypeError):
            raise InvalidAmount(f"Not a price: {value!r}")

    if not amount.is_finite():
        raise InvalidAmount(f"Price must be finite: {value!r}")
    if amount < 0:
        raise InvalidAmount(f"Price must not be negative: {value!r}")
    return amount


def mod9_check_digit(digits: str) -> int:
    """Digit sum modulo 9, with 0 mapped to 9."""
    return sum(int(char) for char in digits) % 9 or 9


class Mod9Encoder:
    """
    MOD-9, version 1.

    Only the integer-rupee portion is encoded; paise are truncated.
    """

    method = METHOD_MOD9
    version = 1

    def encode(self, amount: Decimal) -> EncodedPrice:
        rupees = int(amount.to_integral_value(rounding=ROUND_DOWN))
        digits = str(rupees)
        check_digit = mod9_check_digit(digits)
        return EncodedPrice(
            amount=amount,
            encoded_string=f"{digits}{check_digit}",
            checksum_digit=check_digit,
            method=self.method,
            version=self.version,
        )

    def decode(self, encoded_string: str) -> Decimal:
        encoded_string = (encoded_string or "").strip()
        if len(encoded_string) < 2 or not encoded_string.isdigit() or not encoded_string.isascii():
            raise InvalidEncodedPrice(f"Malformed price code: {encoded_string!r}")

        digits, check_digit = encoded_string[:-1], int(encoded_string[-1])
        if len(digits) > 1 and digits.startswith("0"):
            raise InvalidEncodedPrice(f"Malformed price code: {encoded_string!r}")
        if mod9_check_digit(digits) != check_digit:
            raise InvalidEncodedPrice(f"Checksum mismatch in price code: {encoded_string!r}")

        return Decimal(int(digits))


_ENCODERS = {
    (Mod9Encoder.method, Mod9Encoder.version): Mod9Encoder(),
}


def get_encoder(method: str = METHOD_MOD9, version: int = CURRENT_VERSION):
    """Look up the encoder registered for (method, version)."""
    try:
        return _ENCODERS[(method, version)]
    except KeyError:
        raise UnsupportedEncoding(f"No price encoder for {method} version {version}")


def encode(amount, version: int = CURRENT_VERSION, method: str = METHOD_MOD9) -> EncodedPrice:
    """
    Encode a price for printing.

    Deterministic: the same amount, method and version always give the same
    encoded string.

    Raises:
        InvalidAmount: If the amount is negative or not a finite number
        UnsupportedEncoding: If (method, version) is unknown
    """
    encoder = get_encoder(method, version)
    return encoder.encode(to_amount(amount))


def decode(encoded_string: str, version: int = CURRENT_VERSION, method: str = METHOD_MOD9) -> Decimal:
    """
    Recover the whole-rupee price from a printed code by verifying and
    stripping its check digit.

    Raises:
        InvalidEncodedPrice: If the code is malformed or its checksum does not match
    """
    return get_encoder(method, version).decode(encoded_string)


def is_valid_encoded_price(encoded_string: str, version: int = CURRENT_VERSION) -> bool:
    """Check a printed price code without raising."""
    try:
        decode(encoded_string, version=version)
    except InvalidEncodedPrice:
        return False
    return True
