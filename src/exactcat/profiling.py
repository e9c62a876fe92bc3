"""exactcat CatAccumulator: opt-in profiling for concatenation.

This module provides accumulated metrics across concatenation calls:
- Total profiling time
- Number of concatenations
- Number of elements written
- Bytes produced

Zero overhead when disabled (get_cat_accumulator() returns None).

Example:
    from exactcat import cat
    from exactcat.profiling import profiled_cat

    with profiled_cat() as metrics:
        cat("id=", 7)

    print(metrics.summary())
    # {"total_ms": 0.02, "calls": 1, "elements": 2, "bytes_written": 4}

"""

from collections.abc import Iterator
from contextlib import contextmanager
from contextvars import ContextVar, Token
from dataclasses import dataclass, field
from time import perf_counter
from typing import Any


@dataclass
class CatAccumulator:
    """Accumulated metrics during concatenation.

    Attributes:
        start_time: Profiling start timestamp.
        calls: Number of concatenation calls recorded.
        elements: Total elements across all calls.
        bytes_written: Total bytes produced across all calls.

    """

    start_time: float = field(default_factory=perf_counter)
    calls: int = 0
    elements: int = 0
    bytes_written: int = 0

    def record_cat(self, elements: int, bytes_written: int) -> None:
        """Record one concatenation call.

        Args:
            elements: Number of elements in the call.
            bytes_written: Bytes the call produced.

        """
        self.calls += 1
        self.elements += elements
        self.bytes_written += bytes_written

    @property
    def total_duration_ms(self) -> float:
        """Total profiling duration in milliseconds."""
        return (perf_counter() - self.start_time) * 1000

    def summary(self) -> dict[str, Any]:
        """Get summary of concatenation metrics.

        Returns:
            Dict with total_ms, calls, elements, bytes_written.

        """
        return {
            "total_ms": round(self.total_duration_ms, 2),
            "calls": self.calls,
            "elements": self.elements,
            "bytes_written": self.bytes_written,
        }


_accumulator: ContextVar[CatAccumulator | None] = ContextVar(
    "cat_accumulator",
    default=None,
)


def get_cat_accumulator() -> CatAccumulator | None:
    """Get current accumulator (None if profiling disabled)."""
    return _accumulator.get()


@contextmanager
def profiled_cat() -> Iterator[CatAccumulator]:
    """Context manager for profiled concatenation.

    Creates a CatAccumulator and makes it available via
    get_cat_accumulator() for the duration of the with block.

    Yields:
        CatAccumulator that will be populated by concatenation calls.

    """
    acc = CatAccumulator()
    token: Token[CatAccumulator | None] = _accumulator.set(acc)
    try:
        yield acc
    finally:
        _accumulator.reset(token)
