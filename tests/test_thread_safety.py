"""Thread safety tests for the formatting pipeline.

The pipeline keeps no shared mutable state, so formatting many sources
concurrently must give exactly the sequential results, and failures in
one input must not leak into another.
"""

from concurrent.futures import ThreadPoolExecutor

from schemat import Formatter, ParseError, format


def _source(i: int) -> str:
    body = " ".join(f"(item{j} {i})" for j in range(i % 15))
    return f"; program {i}\n(define (f{i} x)   {body})\n\n\n'(done {i})"


class TestConcurrentFormatting:
    def test_matches_sequential_results(self) -> None:
        sources = [_source(i) for i in range(200)]
        expected = [format(s) for s in sources]

        with ThreadPoolExecutor(max_workers=8) as ex:
            results = list(ex.map(format, sources))

        assert results == expected

    def test_shared_formatter_instance(self) -> None:
        fmt = Formatter(max_width=30)
        sources = [_source(i) for i in range(100)]
        expected = [fmt(s) for s in sources]

        with ThreadPoolExecutor(max_workers=8) as ex:
            results = list(ex.map(fmt, sources))

        assert results == expected

    def test_failures_are_independent(self) -> None:
        def run(i: int) -> str | None:
            source = "(broken" if i % 2 else _source(i)
            try:
                return format(source)
            except ParseError:
                return None

        with ThreadPoolExecutor(max_workers=8) as ex:
            results = list(ex.map(run, range(100)))

        for i, result in enumerate(results):
            if i % 2:
                assert result is None
            else:
                assert result == format(_source(i))
