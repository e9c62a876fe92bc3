"""Repeat formatter: a Show value rendered N times back to back.

Example:
    >>> from exactcat import cat, repeat
    >>> cat("[", repeat("=", 5), "]")
    '[=====]'
    >>> from exactcat import HEX, Repeat
    >>> cat(Repeat(2)(HEX(255)))
    'ffff'
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Any

from exactcat.errors import FormatterConfigError
from exactcat.formatting import Formatted, Formatter
from exactcat.show import show_length, show_write

if TYPE_CHECKING:
    from exactcat.sink import SinkWriter


@dataclass(frozen=True, slots=True)
class Repeat(Formatter):
    """Formatter writing any Show value ``count`` times.

    A sink failure part-way through propagates immediately; the repetitions
    already written are not rolled back.
    """

    count: int

    def __post_init__(self) -> None:
        if self.count < 0:
            raise FormatterConfigError("Repeat", f"count must be >= 0, got {self.count}")

    def format_length(self, value: Any) -> int:
        if not self.count:
            return 0
        return self.count * show_length(value)

    def format_write(self, value: Any, sink: SinkWriter) -> int:
        written = 0
        for _ in range(self.count):
            written += show_write(value, sink)
        return written


def repeat(value: Any, count: int) -> Formatted:
    """Element rendering value ``count`` times."""
    return Repeat(count)(value)
