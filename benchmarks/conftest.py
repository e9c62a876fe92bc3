"""Benchmark fixtures and configuration."""

from __future__ import annotations

import pytest


@pytest.fixture
def log_records() -> list[tuple[str, int, int, str]]:
    """Typical diagnostic-line inputs: (level, request id, status, path)."""
    levels = ["INFO", "WARN", "ERROR"]
    return [
        (levels[i % 3], i * 7919, 200 + (i % 5) * 100, f"/api/v1/items/{i}")
        for i in range(1000)
    ]
