"""
The DecimalAmount class - an exact fixed-point value (integer mantissa, decimal exponent) used for all balance math.

    value = minor_units / 10^decimals

No binary floating point is accepted or produced. Rendering truncates toward zero.
"""
import re
from decimal import Decimal
from functools import total_ordering

from tronkit.core import AmountFormatError

__all__ = ["DecimalAmount"]

_TEXT_PATTERN = re.compile(r"^([+-]?)(\d*)(?:\.(\d*))?$", re.ASCII)


@total_ordering
class DecimalAmount:
    __slots__ = ("minor_units", "decimals")

    def __init__(self, minor_units: int, decimals: int = 0):
        if isinstance(minor_units, bool) or not isinstance(minor_units, int):
            raise TypeError(f"Minor units must be an integer, received {type(minor_units)}")
        if isinstance(decimals, bool) or not isinstance(decimals, int) or decimals < 0:
            raise AmountFormatError(f"Decimals must be a non-negative integer, received {decimals!r}")
        object.__setattr__(self, "minor_units", minor_units)
        object.__setattr__(self, "decimals", decimals)

    def __setattr__(self, key, value):
        raise AttributeError("DecimalAmount is immutable")

    # --- CONSTRUCTORS --- #
    @classmethod
    def zero(cls, decimals: int = 0) -> "DecimalAmount":
        return cls(0, decimals)

    @classmethod
    def from_text(cls, text: str, decimals: int | None = None) -> "DecimalAmount":
        """
        Parse "123.456". With decimals=None the precision is the number of fractional digits given; otherwise the
        value is scaled to `decimals`, truncating surplus digits toward zero.
        """
        if not isinstance(text, str):
            raise TypeError(f"Expected str, received {type(text)}")
        match = _TEXT_PATTERN.match(text.strip())
        if match is None or not (match.group(2) or match.group(3)):
            raise AmountFormatError(f"Not a decimal number: {text!r}")

        sign, whole, fraction = match.group(1), match.group(2) or "0", match.group(3) or ""
        if decimals is None:
            decimals = len(fraction)
        elif decimals < 0:
            raise AmountFormatError(f"Decimals must be non-negative, received {decimals}")

        fraction = fraction[:decimals].ljust(decimals, "0")
        minor_units = int(whole + fraction)
        return cls(-minor_units if sign == "-" else minor_units, decimals)

    @classmethod
    def from_decimal(cls, value: Decimal, decimals: int | None = None) -> "DecimalAmount":
        if not isinstance(value, Decimal) or not value.is_finite():
            raise AmountFormatError(f"Expected a finite Decimal, received {value!r}")
        return cls.from_text(format(value, "f"), decimals)

    # --- PRECISION --- #
    def rescale(self, decimals: int) -> "DecimalAmount":
        """
        Change the exponent. Increasing pads with zeros, decreasing truncates toward zero.
        """
        if decimals < 0:
            raise AmountFormatError(f"Decimals must be non-negative, received {decimals}")
        if decimals >= self.decimals:
            return DecimalAmount(self.minor_units * 10 ** (decimals - self.decimals), decimals)

        divisor = 10 ** (self.decimals - decimals)
        quotient = abs(self.minor_units) // divisor
        return DecimalAmount(-quotient if self.minor_units < 0 else quotient, decimals)

    def normalized(self) -> "DecimalAmount":
        """Strip trailing zeros from the mantissa"""
        minor_units, decimals = self.minor_units, self.decimals
        while decimals > 0 and minor_units % 10 == 0:
            minor_units //= 10
            decimals -= 1
        return DecimalAmount(minor_units, decimals)

    def _aligned(self, other: "DecimalAmount") -> tuple[int, int, int]:
        decimals = max(self.decimals, other.decimals)
        return (self.minor_units * 10 ** (decimals - self.decimals),
                other.minor_units * 10 ** (decimals - other.decimals),
                decimals)

    # --- RENDERING --- #
    def to_text(self, decimals: int | None = None) -> str:
        """
        Exactly `decimals` fractional digits (default: own precision), truncated toward zero
        """
        amount = self if decimals is None else self.rescale(decimals)
        digits = str(abs(amount.minor_units)).rjust(amount.decimals + 1, "0")
        sign = "-" if amount.minor_units < 0 else ""
        if amount.decimals == 0:
            return sign + digits
        return f"{sign}{digits[:-amount.decimals]}.{digits[-amount.decimals:]}"

    def to_decimal(self) -> Decimal:
        return Decimal(self.minor_units).scaleb(-self.decimals)

    def is_zero(self) -> bool:
        return self.minor_units == 0

    # --- OVERRIDES --- #
    def __str__(self):
        return self.to_text()

    def __repr__(self):
        return f"DecimalAmount('{self.to_text()}')"

    def __eq__(self, other) -> bool:
        if not isinstance(other, DecimalAmount):
            return NotImplemented
        left, right, _ = self._aligned(other)
        return left == right

    def __lt__(self, other) -> bool:
        if not isinstance(other, DecimalAmount):
            return NotImplemented
        left, right, _ = self._aligned(other)
        return left < right

    def __hash__(self):
        reduced = self.normalized()
        return hash((reduced.minor_units, reduced.decimals))

    def __add__(self, other: "DecimalAmount") -> "DecimalAmount":
        if not isinstance(other, DecimalAmount):
            return NotImplemented
        left, right, decimals = self._aligned(other)
        return DecimalAmount(left + right, decimals)

    def __sub__(self, other: "DecimalAmount") -> "DecimalAmount":
        if not isinstance(other, DecimalAmount):
            return NotImplemented
        left, right, decimals = self._aligned(other)
        return DecimalAmount(left - right, decimals)

    def __neg__(self) -> "DecimalAmount":
        return DecimalAmount(-self.minor_units, self.decimals)

    def __bool__(self) -> bool:
        return not self.is_zero()

    def compare_to(self, other: "DecimalAmount") -> int:
        left, right, _ = self._aligned(other)
        return (left > right) - (left < right)
