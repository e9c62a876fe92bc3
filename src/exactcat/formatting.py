"""Format protocol for formatter descriptors.

A formatter knows how to render values of some other type. It reports the
exact number of UTF-8 bytes a value occupies once formatted, then writes
exactly that many bytes. Formatters never own the values they format.

Thread Safety:
Formatters must be immutable. Multiple threads may use the same formatter
instance concurrently.

Example:
    >>> from exactcat import HEX, cat
    >>> HEX(255)
    Formatted(formatter=IntFormat(...), value=255)
    >>> cat("0x", HEX(255))
    '0xff'
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Any, Protocol, runtime_checkable

if TYPE_CHECKING:
    from exactcat.sink import SinkWriter


@runtime_checkable
class Format(Protocol):
    """Protocol for formatter implementations.

    Invariant: ``format_write(v, sink)`` returns exactly
    ``format_length(v)`` for every value the formatter accepts.
    """

    def format_length(self, value: Any) -> int:
        """Bytes the UTF-8 rendering of value will occupy."""
        ...

    def format_write(self, value: Any, sink: SinkWriter) -> int:
        """Write the rendering of value to sink and return the bytes written."""
        ...


class Formatter:
    """Base class for concrete formatters.

    Calling a formatter on a value pairs the two into a Formatted element.
    """

    __slots__ = ()

    def __call__(self, value: Any) -> Formatted:
        return Formatted(self, value)


@dataclass(frozen=True, slots=True)
class Formatted:
    """A (formatter, value) pair.

    Formatted elements are Show values themselves, so they can be nested
    inside other formatters (e.g. repeated).
    """

    formatter: Format
    value: Any

    def show_length(self) -> int:
        return self.formatter.format_length(self.value)

    def show_write(self, sink: SinkWriter) -> int:
        return self.formatter.format_write(self.value, sink)
