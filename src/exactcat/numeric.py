"""Numeric formatter for integers rendered with arbitrary digit alphabets.

IntFormat is an immutable descriptor (digit alphabet, prefix, suffix,
minimum digit width, sign policy) implementing the Format protocol for
integers on the canonical 64-bit paths.

Length and write must agree byte for byte under every configuration, so
both sides share digit_count() and the same width arithmetic.

Digit emission:
    Digits are produced most-significant-first in a single forward pass,
    without a reversal buffer. reverse_digits() first builds the integer
    whose base-radix digits are those of the magnitude in reverse order;
    peeling least-significant digits off *that* value yields the original
    digits left to right. Trailing zeros of the magnitude become leading
    zeros of the reversed value and vanish from it, so the writer peels
    exactly digit_count() digits rather than stopping at zero. The glyphs of
    one field are joined and handed to the sink in a single write, so an
    unbuffered file or socket sees one call per number.

Example:
    >>> from exactcat import cat
    >>> from exactcat.numeric import IntFormat, SignPolicy
    >>> money = IntFormat(prefix="$", min_len=3, sign=SignPolicy.PLUS)
    >>> cat(money(7), " ", money(-1250))
    '+$007 -$1250'

Thread Safety:
IntFormat is frozen and safe to share across threads.

"""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass, field, replace
from enum import Enum
from typing import TYPE_CHECKING, Any

from exactcat.errors import FormatterConfigError
from exactcat.formatting import Formatter
from exactcat.integers import U64_MAX, canonical_int
from exactcat.sink import char_length, encode_str

if TYPE_CHECKING:
    from exactcat.sink import SinkWriter

DECIMAL_DIGITS: tuple[str, ...] = tuple("0123456789")
HEX_DIGITS: tuple[str, ...] = tuple("0123456789abcdef")
UPPER_HEX_DIGITS: tuple[str, ...] = tuple("0123456789ABCDEF")
OCTAL_DIGITS: tuple[str, ...] = tuple("01234567")
BINARY_DIGITS: tuple[str, ...] = tuple("01")

_MINUS = b"-"


class SignPolicy(Enum):
    """What is printed before a non-negative integer.

    Negative integers always get a ``-``.
    """

    PLUS = "+"  # "+372"
    SPACE = " "  # " 372"
    EMPTY = ""  # "372"


def digit_count(magnitude: int, radix: int) -> int:
    """Number of base-radix digits needed for a 64-bit magnitude.

    Zero needs exactly one digit. The running threshold starts at radix and
    is multiplied up until it exceeds the magnitude. Once the next threshold
    would leave the 64-bit range it has become large enough: no 64-bit
    magnitude can reach it, so at most one more digit is needed.

    Args:
        magnitude: Value in 0 .. 2**64 - 1
        radix: Base, at least 2

    Returns:
        Digit count, at least 1

    Example:
        >>> digit_count(0, 10), digit_count(999, 10), digit_count(2**64 - 1, 10)
        (1, 3, 20)
    """
    count = 1
    threshold = radix
    while threshold <= magnitude:
        if threshold * radix > U64_MAX:
            return count + 1
        threshold *= radix
        count += 1
    return count


def reverse_digits(magnitude: int, radix: int) -> int:
    """Integer whose base-radix digits are those of magnitude, reversed.

    Trailing zero digits of magnitude are lost (they would be leading zeros).

    Example:
        >>> reverse_digits(1234, 10)
        4321
        >>> reverse_digits(0b1101, 2) == 0b1011
        True
    """
    reversed_value = 0
    while magnitude:
        magnitude, digit = divmod(magnitude, radix)
        reversed_value = reversed_value * radix + digit
    return reversed_value


@dataclass(frozen=True, slots=True)
class IntFormat(Formatter):
    """Integer formatter descriptor.

    Attributes:
        prefix: Text written after the sign and before the digits (e.g. "0x")
        suffix: Text written after the digits
        digits: Digit alphabet; its length is the radix. digits[0] renders
            zero and is the padding glyph. A str is split into characters.
        min_len: Minimum digit-field width, excluding sign, prefix and suffix
        sign: Glyph policy for non-negative values

    Raises:
        FormatterConfigError: For alphabets with fewer than two glyphs,
            glyphs that are not single characters, or a negative min_len

    """

    prefix: str = ""
    suffix: str = ""
    digits: Sequence[str] = DECIMAL_DIGITS
    min_len: int = 0
    sign: SignPolicy = SignPolicy.EMPTY

    # Encoded forms, derived in __post_init__
    _glyphs: tuple[bytes, ...] = field(
        init=False, default=(), repr=False, compare=False, hash=False
    )
    _glyph_width: int = field(init=False, default=0, repr=False, compare=False, hash=False)
    _prefix_bytes: bytes = field(init=False, default=b"", repr=False, compare=False, hash=False)
    _suffix_bytes: bytes = field(init=False, default=b"", repr=False, compare=False, hash=False)
    _sign_bytes: bytes = field(init=False, default=b"", repr=False, compare=False, hash=False)

    def __post_init__(self) -> None:
        digits = tuple(self.digits)
        if len(digits) < 2:
            raise FormatterConfigError(
                "IntFormat", f"digit alphabet needs at least 2 glyphs, got {len(digits)}"
            )
        for glyph in digits:
            if not isinstance(glyph, str) or len(glyph) != 1:
                raise FormatterConfigError(
                    "IntFormat", f"digit glyphs must be single characters, got {glyph!r}"
                )
        if self.min_len < 0:
            raise FormatterConfigError("IntFormat", f"min_len must be >= 0, got {self.min_len}")

        glyphs = tuple(encode_str(g) for g in digits)
        widths = {char_length(g) for g in digits}

        object.__setattr__(self, "digits", digits)
        object.__setattr__(self, "_glyphs", glyphs)
        # 0 marks a mixed-width alphabet
        object.__setattr__(self, "_glyph_width", widths.pop() if len(widths) == 1 else 0)
        object.__setattr__(self, "_prefix_bytes", encode_str(self.prefix))
        object.__setattr__(self, "_suffix_bytes", encode_str(self.suffix))
        object.__setattr__(self, "_sign_bytes", self.sign.value.encode("ascii"))

    @property
    def radix(self) -> int:
        return len(self.digits)

    def with_sign(self, sign: SignPolicy) -> IntFormat:
        """Return an otherwise identical descriptor with a different sign policy."""
        if sign is self.sign:
            return self
        return replace(self, sign=sign)

    # =========================================================================
    # Length
    # =========================================================================

    def _digits_length(self, magnitude: int, count: int) -> int:
        if self._glyph_width:
            return count * self._glyph_width
        # Mixed-width alphabet: measure every glyph that will be emitted
        glyphs = self._glyphs
        radix = len(glyphs)
        total = 0
        for _ in range(count):
            magnitude, digit = divmod(magnitude, radix)
            total += len(glyphs[digit])
        return total

    def unsigned_length(self, magnitude: int) -> int:
        """Length of a non-negative magnitude on the unsigned path."""
        count = digit_count(magnitude, len(self._glyphs))
        padding = self.min_len - min(count, self.min_len)
        return (
            len(self._sign_bytes)
            + len(self._prefix_bytes)
            + padding * len(self._glyphs[0])
            + self._digits_length(magnitude, count)
            + len(self._suffix_bytes)
        )

    def format_length(self, value: Any) -> int:
        n = canonical_int(value)
        if n < 0:
            # The mandatory "-" takes the sign slot; EMPTY has no slot to take.
            extra = 1 if self.sign is SignPolicy.EMPTY else 0
            return self.unsigned_length(-n) + extra
        return self.unsigned_length(n)

    # =========================================================================
    # Write
    # =========================================================================

    def _render(self, magnitude: int, sign: bytes) -> bytes:
        """Encode sign, prefix, padding, digits and suffix in one forward pass."""
        glyphs = self._glyphs
        radix = len(glyphs)

        count = digit_count(magnitude, radix)
        padding = self.min_len - min(count, self.min_len)
        parts = [sign, self._prefix_bytes]
        if padding:
            parts.append(glyphs[0] * padding)

        r = reverse_digits(magnitude, radix)
        for _ in range(count):
            r, digit = divmod(r, radix)
            parts.append(glyphs[digit])

        parts.append(self._suffix_bytes)
        return b"".join(parts)

    def unsigned_write(self, magnitude: int, sink: SinkWriter) -> int:
        """Write a non-negative magnitude on the unsigned path.

        Order: sign glyph, prefix, padding, digits, suffix. The whole field
        reaches the sink in a single write.
        """
        return sink.write_bytes(self._render(magnitude, self._sign_bytes))

    def format_write(self, value: Any, sink: SinkWriter) -> int:
        n = canonical_int(value)
        if n < 0:
            return sink.write_bytes(self._render(-n, _MINUS))
        return self.unsigned_write(n, sink)


DECIMAL = IntFormat()
HEX = IntFormat(digits=HEX_DIGITS)
UPPER_HEX = IntFormat(digits=UPPER_HEX_DIGITS)
OCTAL = IntFormat(digits=OCTAL_DIGITS)
BINARY = IntFormat(digits=BINARY_DIGITS)
