"""Show protocol and the Show implementations for built-in values.

A Show value reports the exact number of UTF-8 bytes it renders to, then
writes exactly that many bytes. Built-in types cannot grow methods, so
show_length() and show_write() dispatch on them directly and fall back to
the Show protocol for everything else.

Built-in Show values:
    int, ctypes integers    decimal, via the numeric formatter
    str                     UTF-8 bytes; one-character strings take the
                            character path (1 to 4 bytes by code point)
    bytes, bytearray,
    memoryview              raw copy, assumed to be valid UTF-8 already
    None                    the empty optional: nothing at all

Example:
    >>> from exactcat import cat, cat_length, cat_write
    >>> class Point:
    ...     def __init__(self, x, y):
    ...         self.x, self.y = x, y
    ...     def show_length(self):
    ...         return cat_length("(", self.x, ", ", self.y, ")")
    ...     def show_write(self, sink):
    ...         return cat_write(sink, "(", self.x, ", ", self.y, ")")
    >>> cat("p=", Point(3, -4))
    'p=(3, -4)'
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Any, Protocol, runtime_checkable

from exactcat.errors import ShowTypeError
from exactcat.integers import INTEGER_CTYPES
from exactcat.numeric import DECIMAL
from exactcat.sink import char_length, str_length

if TYPE_CHECKING:
    from exactcat.sink import SinkWriter


@runtime_checkable
class Show(Protocol):
    """Protocol for values that know how to display themselves.

    Invariant: ``show_write(sink)`` returns exactly ``show_length()``.
    """

    def show_length(self) -> int:
        """Bytes the UTF-8 representation of self will take."""
        ...

    def show_write(self, sink: SinkWriter) -> int:
        """Write self to sink and return the bytes written."""
        ...


def show_length(value: Any) -> int:
    """Bytes value will occupy once written.

    Raises:
        ShowTypeError: If value has no Show capability
    """
    match value:
        case None:
            return 0
        case bool():
            raise ShowTypeError(value)
        case int():
            return DECIMAL.format_length(value)
        case str():
            if len(value) == 1:
                return char_length(value)
            return str_length(value)
        case bytes() | bytearray():
            return len(value)
        case memoryview():
            return value.nbytes
        case _ if isinstance(value, INTEGER_CTYPES):
            return DECIMAL.format_length(value)
        case Show():
            return value.show_length()
        case _:
            raise ShowTypeError(value)


def show_write(value: Any, sink: SinkWriter) -> int:
    """Write value to sink.

    Returns:
        Bytes written, equal to show_length(value)

    Raises:
        ShowTypeError: If value has no Show capability
    """
    match value:
        case None:
            return 0
        case bool():
            raise ShowTypeError(value)
        case int():
            return DECIMAL.format_write(value, sink)
        case str():
            if len(value) == 1:
                return sink.write_char(value)
            return sink.write_str(value)
        case bytes() | bytearray():
            return sink.write_bytes(value)
        case memoryview():
            if value.format != "B" or value.ndim != 1:
                value = value.cast("B")
            return sink.write_bytes(value)
        case _ if isinstance(value, INTEGER_CTYPES):
            return DECIMAL.format_write(value, sink)
        case Show():
            return value.show_write(sink)
        case _:
            raise ShowTypeError(value)


@dataclass(frozen=True, slots=True)
class Bare:
    """A pipeline element written through its own Show capability."""

    value: Any

    def show_length(self) -> int:
        return show_length(self.value)

    def show_write(self, sink: SinkWriter) -> int:
        return show_write(self.value, sink)
