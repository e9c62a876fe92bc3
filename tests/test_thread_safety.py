"""Thread safety tests for shared formatters.

Formatters are frozen descriptors; sharing one across threads must not
change any thread's output.
"""

from concurrent.futures import ThreadPoolExecutor

from exactcat import HEX, CatConfig, IntFormat, SignPolicy, cat, cat_config_context, get_cat_config
from exactcat.profiling import profiled_cat

PADDED = IntFormat(min_len=8, sign=SignPolicy.PLUS)


def render_line(i: int) -> str:
    return cat("#", i, " 0x", HEX(i * 7919), " ", PADDED(i), " ", -i)


def expected_line(i: int) -> str:
    return f"#{i} 0x{i * 7919:x} +{i:08d} {-i}"


class TestSharedFormatters:
    def test_concurrent_cat(self) -> None:
        with ThreadPoolExecutor(max_workers=8) as pool:
            results = list(pool.map(render_line, range(2000)))
        assert results == [expected_line(i) for i in range(2000)]

    def test_config_is_per_thread(self) -> None:
        def worker(i: int) -> tuple[bool, str]:
            config = CatConfig(validate_utf8=bool(i % 2))
            with cat_config_context(config):
                line = render_line(i)
                return get_cat_config() is config, line

        with ThreadPoolExecutor(max_workers=8) as pool:
            results = list(pool.map(worker, range(200)))

        assert all(same for same, _ in results)
        assert [line for _, line in results] == [expected_line(i) for i in range(200)]

    def test_profiling_is_per_thread(self) -> None:
        def worker(n: int) -> int:
            with profiled_cat() as acc:
                for i in range(n):
                    render_line(i)
            return acc.calls

        with ThreadPoolExecutor(max_workers=4) as pool:
            assert list(pool.map(worker, [1, 5, 10, 20])) == [1, 5, 10, 20]
