"""Shared fixtures and helpers for exactcat tests."""

from __future__ import annotations

import pytest

from exactcat.config import reset_cat_config


class RecordingSink:
    """Byte sink that records every chunk and can fail on a given call."""

    def __init__(self, fail_on_call: int | None = None) -> None:
        self.chunks: list[bytes] = []
        self.calls = 0
        self.fail_on_call = fail_on_call

    def write(self, data: bytes) -> int:
        self.calls += 1
        if self.fail_on_call is not None and self.calls >= self.fail_on_call:
            raise OSError("disk full")
        self.chunks.append(bytes(data))
        return len(data)

    def getvalue(self) -> bytes:
        return b"".join(self.chunks)


@pytest.fixture
def make_sink() -> type[RecordingSink]:
    """Factory for recording sinks, optionally failing on the Nth write call."""
    return RecordingSink


@pytest.fixture
def recording_sink() -> RecordingSink:
    return RecordingSink()


@pytest.fixture(autouse=True)
def _default_config() -> None:
    """Every test starts from the default CatConfig."""
    reset_cat_config()
