"""Tests for the Repeat formatter."""

from __future__ import annotations

from typing import Any

import pytest

from exactcat import HEX, Repeat, cat, repeat
from exactcat.errors import FormatterConfigError
from exactcat.sink import SinkWriter


class TestRepeat:
    def test_character(self) -> None:
        element = repeat("x", 3)
        assert element.show_length() == 3
        assert cat(element) == "xxx"

    def test_string(self) -> None:
        assert cat("[", repeat("ab", 2), "]") == "[abab]"

    def test_multibyte(self) -> None:
        assert Repeat(3).format_length("é") == 6
        assert cat(repeat("é", 3)) == "ééé"

    def test_integer(self) -> None:
        assert cat(repeat(-1, 3)) == "-1-1-1"

    def test_zero_count(self) -> None:
        assert cat("a", repeat("x", 0), "b") == "ab"
        assert Repeat(0).format_length("anything") == 0

    def test_nested_formatter(self) -> None:
        assert cat(Repeat(2)(HEX(255))) == "ffff"

    def test_nested_repeat(self) -> None:
        assert cat(repeat(repeat("ab", 2), 3)) == "ab" * 6

    def test_negative_count(self) -> None:
        with pytest.raises(FormatterConfigError, match="count"):
            Repeat(-1)

    def test_reusable(self) -> None:
        three = Repeat(3)
        assert cat(three("-"), three(0)) == "---000"

    def test_failure_stops_remaining_iterations(self, make_sink: Any) -> None:
        sink = make_sink(fail_on_call=2)
        with pytest.raises(OSError):
            Repeat(5).format_write("ab", SinkWriter(sink))
        assert sink.calls == 2
        assert sink.getvalue() == b"ab"
