"""Byte sinks for the write phase.

SinkWriter adapts any byte-accepting destination (file objects, io.BytesIO,
bytearray, FixedBuffer) to the two primitives the write phase needs:
append one character and append a string, each returning the number of
bytes written. FixedBuffer is the single allocation behind cat(): a
bytearray sized to the exact final length up front and filled in place.

Failures raised by a destination propagate unchanged.

Thread Safety:
SinkWriter and FixedBuffer instances are local to each concatenation call.
A destination shared between threads must serialize access externally.

"""

from __future__ import annotations

import errno
import io
from typing import Protocol

from exactcat.errors import EncodingContractError, LengthContractError, SinkError


class ByteSink(Protocol):
    """Anything with a ``write(data)`` method accepting bytes.

    ``write`` returns the number of bytes accepted. Raw ``io`` streams
    return None when a non-blocking write would block, which means nothing
    was written. Other writers may return None to mean the whole chunk was
    taken (the convention of many user-defined writers).
    """

    def write(self, data: bytes | bytearray | memoryview, /) -> int | None: ...


def char_length(ch: str) -> int:
    """UTF-8 byte count of a single character, computed from its code point.

    Raises:
        EncodingContractError: If ch is a lone surrogate.
    """
    cp = ord(ch)
    if cp < 0x80:
        return 1
    if cp < 0x800:
        return 2
    if 0xD800 <= cp <= 0xDFFF:
        raise EncodingContractError(f"lone surrogate U+{cp:04X} is not a Unicode scalar value")
    if cp < 0x10000:
        return 3
    return 4


def str_length(s: str) -> int:
    """UTF-8 byte length of a string (ASCII strings are not encoded)."""
    if s.isascii():
        return len(s)
    return len(encode_str(s))


def encode_str(s: str) -> bytes:
    """Encode to UTF-8, reporting lone surrogates as an encoding contract error."""
    try:
        return s.encode("utf-8")
    except UnicodeEncodeError as e:
        raise EncodingContractError(f"cannot encode {s!r} as UTF-8: {e.reason}") from e


class FixedBuffer:
    """Exactly-sized output buffer.

    Allocates ``capacity`` bytes once and copies writes into place. Writing
    past the end is a length contract violation, never a reallocation.

    Usage:
            >>> buf = FixedBuffer(5)
            >>> buf.write(b"hello")
            5
            >>> buf.is_full
            True
            >>> buf.decode()
            'hello'

    """

    __slots__ = ("_buf", "_view", "_pos")

    def __init__(self, capacity: int) -> None:
        self._buf = bytearray(capacity)
        self._view = memoryview(self._buf)
        self._pos = 0

    @property
    def capacity(self) -> int:
        """Size of the allocation in bytes."""
        return len(self._buf)

    @property
    def remaining(self) -> int:
        """Bytes still to be written before the buffer is full."""
        return len(self._buf) - self._pos

    @property
    def is_full(self) -> bool:
        return self._pos == len(self._buf)

    def write(self, data: bytes | bytearray | memoryview) -> int:
        """Copy data into the buffer at the current position.

        Returns:
            Number of bytes written (always the full chunk)

        Raises:
            LengthContractError: If data does not fit in the remaining space
        """
        end = self._pos + len(data)
        if end > len(self._buf):
            raise LengthContractError(expected=len(self._buf), actual=end)
        self._view[self._pos:end] = data
        self._pos = end
        return len(data)

    def getvalue(self) -> bytes:
        """Return the bytes written so far."""
        return bytes(self._view[: self._pos])

    def getbuffer(self) -> memoryview:
        """Return a read-only view of the bytes written so far, without copying."""
        return self._view[: self._pos].toreadonly()

    def decode(self, *, strict: bool = True) -> str:
        """Decode the written bytes as UTF-8.

        Args:
            strict: Raise on invalid UTF-8. When False, invalid bytes are
                mapped to lone surrogates (``surrogateescape``).

        Raises:
            EncodingContractError: If strict and the bytes are not valid UTF-8
        """
        data = self._view[: self._pos]
        if not strict:
            return str(data, "utf-8", "surrogateescape")
        try:
            return str(data, "utf-8")
        except UnicodeDecodeError as e:
            raise EncodingContractError(
                f"output is not valid UTF-8 at byte {e.start}: {e.reason}"
            ) from e

    def __len__(self) -> int:
        """Return number of bytes written (not capacity)."""
        return self._pos


class SinkWriter:
    """Adapter exposing the write-phase primitives over a byte destination.

    Usage:
            >>> import io
            >>> out = io.BytesIO()
            >>> w = SinkWriter(out)
            >>> w.write_char("é")
            2
            >>> w.write_str("!")
            1
            >>> out.getvalue().decode()
            'é!'

    Thread Safety:
        Instance is local to each concatenation call.

    """

    __slots__ = ("_destination", "_write", "_none_blocks")

    def __init__(self, destination: ByteSink | bytearray) -> None:
        self._destination = destination
        if isinstance(destination, bytearray):
            self._write = self._extend
        else:
            self._write = destination.write
        # io.RawIOBase.write returns None when a non-blocking stream is full
        self._none_blocks = isinstance(destination, io.RawIOBase)

    @property
    def destination(self) -> ByteSink | bytearray:
        return self._destination

    def _extend(self, data: bytes | bytearray | memoryview) -> int:
        self._destination += data
        return len(data)

    def write_bytes(self, data: bytes | bytearray | memoryview) -> int:
        """Write every byte of data to the destination.

        Short writes are retried with the remainder until the whole chunk
        has been accepted.

        Returns:
            len(data)

        Raises:
            BlockingIOError: If a non-blocking raw stream cannot take more
                bytes; ``characters_written`` holds the bytes already accepted
            SinkError: If the destination accepts zero bytes of a non-empty chunk
        """
        size = len(data)
        if not size:
            return 0
        n = self._write(data)
        if n == size:
            return size
        view = memoryview(data)
        offset = 0
        while True:
            if n is None:
                if not self._none_blocks:
                    return size
                raise BlockingIOError(
                    errno.EAGAIN,
                    f"sink would block with {size - offset} of {size} bytes outstanding",
                    offset,
                )
            if not n:
                raise SinkError(
                    f"sink accepted no bytes with {size - offset} of {size} outstanding"
                )
            offset += n
            if offset >= size:
                return size
            n = self._write(view[offset:])

    def write_char(self, ch: str) -> int:
        """Append one character, UTF-8 encoded (1 to 4 bytes)."""
        if ch.isascii():
            return self.write_bytes(ch.encode("ascii"))
        return self.write_bytes(encode_str(ch))

    def write_str(self, s: str) -> int:
        """Append a string, UTF-8 encoded."""
        return self.write_bytes(encode_str(s))
