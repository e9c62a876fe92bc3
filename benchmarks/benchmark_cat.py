"""Benchmark exactcat against f-strings and str.join.

Run with:
    pytest benchmarks/benchmark_cat.py -v --benchmark-only

Or for quick comparison:
    python benchmarks/benchmark_cat.py
"""

import time

import pytest

from exactcat import HEX, IntFormat, cat

REQUEST_ID = IntFormat(min_len=8)


def line_exactcat(level: str, rid: int, status: int, path: str) -> str:
    return cat("[", level, "] req=", REQUEST_ID(rid), " status=", status, " crc=0x", HEX(rid ^ status), " ", path)


def line_fstring(level: str, rid: int, status: int, path: str) -> str:
    return f"[{level}] req={rid:08d} status={status} crc=0x{rid ^ status:x} {path}"


def line_join(level: str, rid: int, status: int, path: str) -> str:
    return "".join(
        ["[", level, "] req=", f"{rid:08d}", " status=", str(status), " crc=0x", format(rid ^ status, "x"), " ", path]
    )


class TestBenchmarkLines:
    @pytest.mark.benchmark(group="log-line")
    def test_benchmark_exactcat(self, benchmark, log_records):
        benchmark(lambda: [line_exactcat(*r) for r in log_records])

    @pytest.mark.benchmark(group="log-line")
    def test_benchmark_fstring(self, benchmark, log_records):
        benchmark(lambda: [line_fstring(*r) for r in log_records])

    @pytest.mark.benchmark(group="log-line")
    def test_benchmark_join(self, benchmark, log_records):
        benchmark(lambda: [line_join(*r) for r in log_records])

    def test_outputs_agree(self, log_records):
        for r in log_records:
            assert line_exactcat(*r) == line_fstring(*r) == line_join(*r)


def run(fn, records, iterations: int = 20) -> float:
    # Warmup
    for r in records[:10]:
        fn(*r)

    start = time.perf_counter()
    for _ in range(iterations):
        for r in records:
            fn(*r)
    return (time.perf_counter() - start) / iterations


def main() -> None:
    levels = ["INFO", "WARN", "ERROR"]
    records = [(levels[i % 3], i * 7919, 200 + (i % 5) * 100, f"/api/v1/items/{i}") for i in range(1000)]

    print(f"{'variant':<10} {'ms/1000 lines':>14}")
    print("-" * 25)
    for name, fn in [("exactcat", line_exactcat), ("f-string", line_fstring), ("join", line_join)]:
        print(f"{name:<10} {run(fn, records) * 1000:>14.2f}")


if __name__ == "__main__":
    main()
