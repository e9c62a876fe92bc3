"""Canonical 64-bit integer handling.

Every integer the numeric formatter sees is first brought onto one of two
canonical paths: unsigned 64-bit (0 .. 2**64 - 1) or signed 64-bit
(-2**63 .. 2**63 - 1). Fixed-width integers are represented by the ctypes
integer types; ``ctypes.c_uint8(300)`` already wraps to 44, so their values
are always in range. Plain Python ints are checked.

Example:
    >>> from ctypes import c_int8, c_uint16
    >>> canonical_int(c_uint16(65535))
    65535
    >>> canonical_int(c_int8(-128))
    -128

"""

from __future__ import annotations

import ctypes

from exactcat.errors import IntegerRangeError, ShowTypeError

U64_MAX = 2**64 - 1
I64_MIN = -(2**63)
I64_MAX = 2**63 - 1

# Aliases (c_ulong is c_uint64 on most platforms) are harmless in isinstance tuples.
UNSIGNED_CTYPES: tuple[type, ...] = (
    ctypes.c_uint8,
    ctypes.c_uint16,
    ctypes.c_uint32,
    ctypes.c_uint64,
    ctypes.c_size_t,
    ctypes.c_ubyte,
    ctypes.c_ushort,
    ctypes.c_uint,
    ctypes.c_ulong,
    ctypes.c_ulonglong,
)

SIGNED_CTYPES: tuple[type, ...] = (
    ctypes.c_int8,
    ctypes.c_int16,
    ctypes.c_int32,
    ctypes.c_int64,
    ctypes.c_ssize_t,
    ctypes.c_byte,
    ctypes.c_short,
    ctypes.c_int,
    ctypes.c_long,
    ctypes.c_longlong,
)

INTEGER_CTYPES: tuple[type, ...] = UNSIGNED_CTYPES + SIGNED_CTYPES


def is_integer(value: object) -> bool:
    """True for Python ints (excluding bool) and ctypes integer instances."""
    if isinstance(value, int):
        return not isinstance(value, bool)
    return isinstance(value, INTEGER_CTYPES)


def canonical_int(value: object) -> int:
    """Return value as a Python int on the signed or unsigned 64-bit path.

    Negative results belong to the signed path, non-negative ones to the
    unsigned path.

    Raises:
        IntegerRangeError: If a Python int falls outside [-2**63, 2**64 - 1]
        ShowTypeError: If value is not an integer
    """
    if isinstance(value, int) and not isinstance(value, bool):
        if value < I64_MIN or value > U64_MAX:
            raise IntegerRangeError(value)
        return value
    if isinstance(value, INTEGER_CTYPES):
        return value.value
    raise ShowTypeError(value)
