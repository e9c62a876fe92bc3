"""Tests for the concatenation pipeline entry points."""

from __future__ import annotations

import io
from typing import Any

import pytest

from exactcat import (
    HEX,
    HEX_DIGITS,
    Bare,
    CatConfig,
    Formatted,
    IntFormat,
    SignPolicy,
    cat,
    cat_bytes,
    cat_config_context,
    cat_length,
    cat_write,
    fcat,
    repeat,
    write_to,
)
from exactcat.errors import EncodingContractError, LengthContractError, ShowTypeError
from exactcat.sink import SinkWriter


class Liar:
    """Show value whose write disagrees with its declared length."""

    def __init__(self, declared: int, payload: bytes) -> None:
        self.declared = declared
        self.payload = payload

    def show_length(self) -> int:
        return self.declared

    def show_write(self, sink: SinkWriter) -> int:
        return sink.write_bytes(self.payload)


class TestCat:
    def test_end_to_end(self) -> None:
        s = cat("(", "a", ")", " ", 12, " + ", 7, " = ", 12 + 7)
        assert s == "(a) 12 + 7 = 19"

    def test_empty(self) -> None:
        assert cat() == ""

    def test_mixed_formatters(self) -> None:
        s = cat("0x", HEX(255), " ", IntFormat(min_len=4)(7), " ", repeat("-", 3))
        assert s == "0xff 0007 ---"

    def test_explicit_elements(self) -> None:
        assert cat(Bare("n="), Formatted(IntFormat(sign=SignPolicy.PLUS), 5)) == "n=+5"

    def test_none_elements_vanish(self) -> None:
        assert cat("a", None, "b") == "ab"

    def test_non_ascii(self) -> None:
        assert cat("é", "€", 1, "😀") == "é€1😀"

    def test_unsupported_value(self) -> None:
        with pytest.raises(ShowTypeError):
            cat("x", 1.5)


class TestCatBytes:
    def test_bytes(self) -> None:
        assert cat_bytes("id=", 42) == b"id=42"

    def test_no_utf8_validation(self) -> None:
        assert cat_bytes(b"\xff", "a") == b"\xffa"


class TestLengthAndWrite:
    def test_cat_length(self) -> None:
        assert cat_length("(", "a", ")", 12, HEX(255)) == 7

    def test_cat_length_takes_items_like_cat(self) -> None:
        # A lone string is one element, measured as a whole
        assert cat_length("abc") == len(cat("abc")) == 3
        assert cat_length(*(x for x in ["ab", 100])) == 5
        assert cat_length() == 0

    def test_cat_write_to_bytearray(self) -> None:
        buf = bytearray()
        assert cat_write(buf, "é", 10) == 4
        assert buf == "é10".encode()

    def test_cat_write_reuses_sink_writer(self) -> None:
        buf = bytearray()
        writer = SinkWriter(buf)
        cat_write(writer, "a")
        cat_write(writer, "b")
        assert buf == b"ab"


class TestWriteTo:
    def test_returns_byte_count(self) -> None:
        out = io.BytesIO()
        assert write_to(out, "id=", 42, "\n") == 6
        assert out.getvalue() == b"id=42\n"

    def test_streams_per_element(self, recording_sink: Any) -> None:
        write_to(recording_sink, "a", "b", 7)
        assert recording_sink.chunks == [b"a", b"b", b"7"]

    def test_failure_stops_pipeline(self, make_sink: Any) -> None:
        sink = make_sink(fail_on_call=3)
        with pytest.raises(OSError, match="disk full"):
            write_to(sink, "a", "b", "c", "d", "e")
        assert sink.calls == 3
        assert sink.getvalue() == b"ab"

    def test_failure_inside_formatter(self, make_sink: Any) -> None:
        sink = make_sink(fail_on_call=2)
        with pytest.raises(OSError):
            write_to(sink, IntFormat(prefix="#", sign=SignPolicy.PLUS)(12), "tail")
        # whole field written, tail failed
        assert sink.chunks == [b"+#12"]
        assert sink.calls == 2

    def test_one_write_per_number(self, recording_sink: Any) -> None:
        wide = IntFormat(prefix="0x", suffix="h", digits=HEX_DIGITS, min_len=20)
        assert write_to(recording_sink, 2**64 - 1, wide(255), -(2**63)) == 63
        assert recording_sink.chunks == [
            b"18446744073709551615",
            b"0x000000000000000000ffh",
            b"-9223372036854775808",
        ]


class TestFcat:
    def test_single_write(self, recording_sink: Any) -> None:
        assert fcat(recording_sink, "(", "a", ")", 12) == 5
        assert recording_sink.chunks == [b"(a)12"]

    def test_nothing_written_when_build_fails(self, recording_sink: Any) -> None:
        with pytest.raises(ShowTypeError):
            fcat(recording_sink, "ok", object())
        assert recording_sink.calls == 0

    def test_sink_failure_propagates(self, make_sink: Any) -> None:
        with pytest.raises(OSError, match="disk full"):
            fcat(make_sink(fail_on_call=1), "x")


class TestContractViolations:
    def test_short_write_detected(self) -> None:
        with pytest.raises(LengthContractError) as exc_info:
            cat("ok", Liar(3, b"ab"), "!")
        err = exc_info.value
        assert err.element == 1
        assert err.expected == 3
        assert err.actual == 2
        assert "Liar" in str(err)

    def test_short_write_detected_without_per_element_checks(self) -> None:
        with cat_config_context(CatConfig(check_lengths=False)):
            with pytest.raises(LengthContractError) as exc_info:
                cat("ok", Liar(3, b"ab"))
        assert exc_info.value.expected == 5
        assert exc_info.value.actual == 4

    def test_overflow_cannot_grow_buffer(self) -> None:
        with pytest.raises(LengthContractError):
            cat(Liar(1, b"abc"))

    def test_write_to_checks_elements(self) -> None:
        with pytest.raises(LengthContractError):
            write_to(io.BytesIO(), Liar(0, b"x"))

    def test_write_to_unchecked(self) -> None:
        out = io.BytesIO()
        with cat_config_context(CatConfig(check_lengths=False)):
            assert write_to(out, Liar(0, b"x")) == 1
        assert out.getvalue() == b"x"

    def test_formatter_named_in_error(self) -> None:
        class BadFormat:
            def format_length(self, value: object) -> int:
                return 10

            def format_write(self, value: object, sink: SinkWriter) -> int:
                return sink.write_str("short")

        with pytest.raises(LengthContractError, match="BadFormat of int"):
            cat(Formatted(BadFormat(), 3))


class TestUtf8Validation:
    def test_invalid_utf8_fails_loudly(self) -> None:
        with pytest.raises(EncodingContractError):
            cat("a", b"\xff")

    def test_unchecked_variant(self) -> None:
        with cat_config_context(CatConfig(validate_utf8=False)):
            assert cat("a", b"\xff") == "a\udcff"

    def test_valid_raw_bytes(self) -> None:
        assert cat("caf", "é".encode()) == "café"
