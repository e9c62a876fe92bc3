"""Concatenation pipeline: sum lengths, allocate once, write once.

Every entry point takes an ordered sequence of items. An item is a
Formatted element (``HEX(255)``, ``Formatted(fmt, value)``), a Bare element,
or any other Show value, which is wrapped in Bare.

Pass 1 sums each element's declared length. Pass 2 writes each element in
the same order. cat() and cat_bytes() write into a FixedBuffer allocated to
exactly the pass-1 total; write_to() streams to an external sink instead.

Example:
    >>> from exactcat import cat
    >>> cat("(", "a", ")", " ", 12, " + ", 7, " = ", 12 + 7)
    '(a) 12 + 7 = 19'

Errors:
    Exceptions raised by a sink propagate unchanged and abort the remaining
    elements. LengthContractError and EncodingContractError signal a broken
    Show or Format implementation.

Thread Safety:
    All state is local to each call. Configuration is read from a ContextVar.

"""

from __future__ import annotations

from collections.abc import Iterable, Sequence
from typing import Any

from exactcat.config import get_cat_config
from exactcat.errors import LengthContractError
from exactcat.formatting import Formatted
from exactcat.profiling import get_cat_accumulator
from exactcat.show import Bare
from exactcat.sink import ByteSink, FixedBuffer, SinkWriter
from exactcat.utils.logger import get_logger

logger = get_logger(__name__)

Element = Bare | Formatted


def as_element(item: Any) -> Element:
    """Wrap a plain value in Bare; elements pass through."""
    if isinstance(item, (Bare, Formatted)):
        return item
    return Bare(item)


def _elements(items: Iterable[Any]) -> tuple[Element, ...]:
    return tuple(as_element(item) for item in items)


def _record(elements: int, written: int) -> None:
    acc = get_cat_accumulator()
    if acc is not None:
        acc.record_cat(elements, written)


def _write_elements(
    writer: SinkWriter,
    elements: Sequence[Element],
    lengths: Sequence[int] | None,
) -> int:
    """Pass 2. When lengths is given, every element is checked against it."""
    total = 0
    for index, element in enumerate(elements):
        try:
            written = element.show_write(writer)
        except Exception:
            logger.debug(
                "Write failed at element %d of %d after %d bytes",
                index,
                len(elements),
                total,
                exc_info=True,
            )
            raise
        if lengths is not None and written != lengths[index]:
            value = element.value
            if isinstance(element, Formatted):
                value_type = f"{type(element.formatter).__name__} of {type(value).__name__}"
            else:
                value_type = type(value).__name__
            logger.debug(
                "Element %d (%s) declared %d bytes, wrote %d",
                index,
                value_type,
                lengths[index],
                written,
            )
            raise LengthContractError(
                expected=lengths[index],
                actual=written,
                element=index,
                value_type=value_type,
            )
        total += written
    return total


def cat_length(*items: Any) -> int:
    """Pass 1: total bytes the items will occupy."""
    return sum(as_element(item).show_length() for item in items)


def cat_write(sink: SinkWriter | ByteSink | bytearray, *items: Any) -> int:
    """Pass 2: write items to sink in order.

    Takes items the same way as cat(), so a Show implementation can forward
    its parts to ``cat_length(...)`` and ``cat_write(sink, ...)`` unchanged.

    Args:
        sink: A SinkWriter (used as-is) or any destination it can wrap
        *items: Elements or Show values

    Returns:
        Total bytes written

    Raises:
        LengthContractError: If check_lengths is on and an element wrote a
            different number of bytes than it declared
    """
    writer = sink if isinstance(sink, SinkWriter) else SinkWriter(sink)
    elements = _elements(items)
    lengths = None
    if get_cat_config().check_lengths:
        lengths = [element.show_length() for element in elements]
    written = _write_elements(writer, elements, lengths)
    _record(len(elements), written)
    return written


def _build(items: Sequence[Any]) -> tuple[FixedBuffer, int]:
    elements = _elements(items)
    lengths = [element.show_length() for element in elements]
    total = sum(lengths)

    buffer = FixedBuffer(total)
    check = lengths if get_cat_config().check_lengths else None
    written = _write_elements(SinkWriter(buffer), elements, check)

    if not buffer.is_full:
        logger.debug("Declared %d bytes, buffer holds %d", total, len(buffer))
        raise LengthContractError(expected=total, actual=written)

    _record(len(elements), total)
    return buffer, total


def cat(*items: Any) -> str:
    """Concatenate items into a string with one exactly-sized allocation.

    The bytes are decoded as UTF-8 once at the end; strictly unless the
    active CatConfig has validate_utf8 turned off.

    Raises:
        LengthContractError: If the output does not fill the allocation exactly
        EncodingContractError: If the output is not valid UTF-8
    """
    buffer, _ = _build(items)
    return buffer.decode(strict=get_cat_config().validate_utf8)


def cat_bytes(*items: Any) -> bytes:
    """Concatenate items into UTF-8 bytes with one exactly-sized allocation."""
    buffer, _ = _build(items)
    return buffer.getvalue()


def write_to(destination: ByteSink | bytearray, *items: Any) -> int:
    """Stream items directly to destination without buffering.

    Returns:
        Total bytes written

    Raises:
        Whatever the destination raises, unchanged; no further elements are
        written after a failure.
    """
    elements = _elements(items)
    lengths = None
    if get_cat_config().check_lengths:
        lengths = [element.show_length() for element in elements]
    written = _write_elements(SinkWriter(destination), elements, lengths)
    _record(len(elements), written)
    return written


def fcat(destination: ByteSink | bytearray, *items: Any) -> int:
    """Build items into one buffer, then hand it to destination in one write.

    Nothing reaches the destination if building fails.

    Returns:
        Total bytes written
    """
    buffer, _ = _build(items)
    return SinkWriter(destination).write_bytes(buffer.getbuffer())
