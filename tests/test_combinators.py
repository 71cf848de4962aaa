"""Tests for the synchronous combinators of `Iter`."""

from collections.abc import Callable
from typing import Any

import pytest

import pyoseq as ps


def test_map_then_take() -> None:
    """Combinators compose left to right."""
    assert ps.Iter([1, 2, 3]).map(lambda x: x * 2).take(2).to_array() == [2, 4]


def test_nothing_pulled_on_construction(probe: Any) -> None:
    """Building a pipeline never pulls the producer."""
    p = probe([1, 2, 3])
    ps.Iter(p).map(str).filter(bool).take(2).flat_map(list).zip([1]).cycle()
    assert p.pulls == 0


def test_filter_keeps_matching_items() -> None:
    """Only the items satisfying the predicate survive."""
    assert ps.Iter(range(10)).filter(lambda x: x % 3 == 0).to_array() == [0, 3, 6, 9]


class TestTake:
    def test_does_not_over_pull(self, probe: Any) -> None:
        """Reaching the limit stops without an extra pull."""
        p = probe([1, 2, 3])
        assert ps.Iter(p).take(2).to_array() == [1, 2]
        assert p.pulls == 2

    def test_zero_pulls_nothing(self, probe: Any) -> None:
        """take(0) is empty and leaves the producer untouched."""
        p = probe([1, 2, 3])
        assert ps.Iter(p).take(0).to_array() == []
        assert p.pulls == 0

    @pytest.mark.parametrize("limit", [0, 1, 2, 3, 4, 5])
    def test_count_is_bounded(self, limit: int) -> None:
        """take(k) yields min(k, n) items."""
        assert ps.Iter([1, 2, 3]).take(limit).count() == min(limit, 3)

    def test_negative_limit_raises_before_pulling(self, probe: Any) -> None:
        """A negative limit is rejected at construction."""
        p = probe([1, 2, 3])
        with pytest.raises(ValueError, match="non-negative"):
            ps.Iter(p).take(-1)
        assert p.pulls == 0

    def test_non_integer_limit(self) -> None:
        """Limits must be integers."""
        with pytest.raises(TypeError):
            ps.Iter([1]).take(1.5)  # type: ignore[arg-type]
        with pytest.raises(TypeError, match="must be an integer"):
            ps.Iter([1]).drop(True)

    def test_index_protocol(self) -> None:
        """Objects implementing __index__ are accepted."""

        class Two:
            def __index__(self) -> int:
                return 2

        assert ps.Iter("abc").take(Two()).to_array() == ["a", "b"]  # type: ignore[arg-type]


class TestDrop:
    def test_skips_prefix(self) -> None:
        """The first items are discarded."""
        assert ps.Iter([1, 2, 3, 4]).drop(2).to_array() == [3, 4]

    def test_more_than_length(self) -> None:
        """Dropping more than available is empty."""
        assert ps.Iter([1, 2, 3]).drop(10).to_array() == []

    def test_negative_limit(self) -> None:
        """A negative limit is rejected at construction."""
        with pytest.raises(ValueError, match="non-negative"):
            ps.Iter([1]).drop(-3)


def test_as_indexed_pairs() -> None:
    """Items are paired with their position."""
    pairs = ps.Iter("ab").as_indexed_pairs().to_array()
    assert pairs == [(0, "a"), (1, "b")]
    assert pairs[1].idx == 1
    assert pairs[1].value == "b"


class TestFlatMap:
    def test_flattens_one_level(self) -> None:
        """Iterable results are flattened, their own items are not."""
        result = ps.Iter([1, 2]).flat_map(lambda x: [[x], x]).to_array()
        assert result == [[1], 1, [2], 2]

    def test_lazy_nested(self) -> None:
        """Nested producers are drained in order."""
        assert ps.Iter([1, 2]).flat_map(range).to_array() == [0, 0, 1]

    def test_non_iterable_result_is_emitted(self) -> None:
        """Plain values pass through as single items."""
        assert ps.Iter([1, 2]).flat_map(lambda x: x * 10).to_array() == [10, 20]

    def test_strings_are_flattened(self) -> None:
        """Strings are iterables too."""
        assert ps.Iter(["ab", "c"]).flat_map(lambda s: s).to_array() == ["a", "b", "c"]

    def test_empty_results_are_skipped(self) -> None:
        """An empty nested sequence contributes nothing."""
        assert ps.Iter([0, 2, 0]).flat_map(range).to_array() == [0, 1]

    def test_non_callable_mapper(self, probe: Any) -> None:
        """A non-callable mapper is rejected at construction."""
        p = probe([1])
        with pytest.raises(TypeError, match="mapper must be callable"):
            ps.Iter(p).flat_map(42)  # type: ignore[arg-type]
        assert p.pulls == 0


class TestChain:
    def test_concatenates(self) -> None:
        """Each sequence is drained in turn."""
        assert ps.Iter([1, 2]).chain([3], (4, 5)).to_array() == [1, 2, 3, 4, 5]

    def test_returns_last_value(self) -> None:
        """The return value of the last sequence is propagated."""

        def first():
            yield 1
            return "first"

        def second():
            yield 2
            return "second"

        chained = ps.Iter(first()).chain(second())
        assert chained.advance() == ps.Next(1)
        assert chained.advance() == ps.Next(2)
        assert chained.advance() == ps.Done("second")


class TestZip:
    def test_stops_at_shortest(self) -> None:
        """Rows are emitted until any sequence ends."""
        result = ps.Iter([1, 2, 3]).zip("ab", [True, False, True]).to_array()
        assert result == [(1, "a", True), (2, "b", False)]

    def test_round_is_discarded(self, probe: Any) -> None:
        """The partial round that found an exhausted sequence is dropped."""
        left = probe([1, 2, 3])
        right = probe(["x"])
        assert ps.Iter(left).zip(right).to_array() == [(1, "x")]
        assert left.pulls == 2
        assert right.pulls == 2

    def test_first_exhausted_stops_the_round(self, probe: Any) -> None:
        """Sequences are pulled in order, so later ones are skipped."""
        right = probe([1])
        assert ps.Iter([]).zip(right).to_array() == []
        assert right.pulls == 0


class TestTakeWhile:
    def test_prefix(self) -> None:
        """Items are yielded while the predicate holds."""
        assert ps.Iter([1, 2, 4, 0, 1]).take_while(lambda x: x < 3).to_array() == [1, 2]

    def test_failing_item_is_consumed(self, probe: Any) -> None:
        """The first failing item is pulled, then nothing else."""
        p = probe([1, 2, 4, 0, 1])
        it = ps.Iter(p).take_while(lambda x: x < 3)
        assert it.to_array() == [1, 2]
        assert it.advance() == ps.Done()
        assert p.pulls == 3


class TestDropWhile:
    def test_suffix(self) -> None:
        """Later matching items are kept."""
        assert ps.Iter([1, 2, 3, 1]).drop_while(lambda x: x < 3).to_array() == [3, 1]

    def test_predicate_called_on_leading_run_only(self) -> None:
        """The predicate is not evaluated once it failed."""
        seen: list[int] = []

        def small(x: int) -> bool:
            seen.append(x)
            return x < 3

        assert ps.Iter([1, 2, 3, 4, 1]).drop_while(small).to_array() == [3, 4, 1]
        assert seen == [1, 2, 3]


class TestFuse:
    def test_stops_at_none(self) -> None:
        """None ends the sequence."""
        assert ps.Iter([1, 2, 3, None, 5]).fuse().to_array() == [1, 2, 3]

    def test_stops_at_none_option(self) -> None:
        """NONE ends the sequence as well."""
        assert ps.Iter([1, ps.NONE, 2]).fuse().to_array() == [1]

    def test_keeps_falsy_values(self) -> None:
        """Only the absence markers stop it."""
        assert ps.Iter([0, "", False, None]).fuse().to_array() == [0, "", False]


class TestCycle:
    def test_repeats(self) -> None:
        """take(3n) of a cycle is the source three times."""
        assert ps.Iter([1, 2]).cycle().take(6).to_array() == [1, 2] * 3

    def test_empty_source(self) -> None:
        """Cycling nothing ends immediately."""
        assert ps.Iter([]).cycle().to_array() == []

    def test_pulls_source_once(self, probe: Any) -> None:
        """Only the first pass reaches the producer."""
        p = probe([1, 2])
        assert ps.Iter(p).cycle().take(7).to_array() == [1, 2, 1, 2, 1, 2, 1]
        assert p.pulls == 3


@pytest.mark.parametrize(
    "build",
    [
        lambda it: it.map(str),
        lambda it: it.filter(lambda x: x > 1),
        lambda it: it.take(10),
        lambda it: it.drop(1),
        lambda it: it.as_indexed_pairs(),
        lambda it: it.flat_map(lambda x: [x, x]),
        lambda it: it.chain([9]),
        lambda it: it.zip(range(10)),
        lambda it: it.take_while(lambda _: True),
        lambda it: it.drop_while(lambda x: x < 2),
        lambda it: it.fuse(),
    ],
)
def test_exhausted_stays_exhausted(
    probe: Any, build: Callable[[ps.Iter[int]], ps.Iter[Any]]
) -> None:
    """Once done, pulling again is done and never reaches the producer."""
    p = probe([1, 2, 3])
    it = build(ps.Iter(p))
    it.to_array()
    pulls = p.pulls
    assert it.advance() == ps.Done()
    assert it.advance() == ps.Done()
    assert p.pulls == pulls


def test_return_value_through_combinators() -> None:
    """The producer's return value reaches the consumer."""

    def gen():
        yield 1
        yield 2
        return "end"

    it = ps.Iter(gen()).map(lambda x: x + 1).filter(lambda x: x > 2)
    assert it.advance() == ps.Next(3)
    assert it.advance() == ps.Done("end")


def test_error_latches_exhausted() -> None:
    """A producer error propagates once, then the sequence is done."""

    def gen():
        yield 1
        msg = "boom"
        raise RuntimeError(msg)

    it = ps.Iter(gen()).map(str)
    assert it.advance() == ps.Next("1")
    with pytest.raises(RuntimeError, match="boom"):
        it.advance()
    assert it.advance() == ps.Done()


def test_callback_error_propagates() -> None:
    """Errors raised by callbacks reach the consumer unchanged."""
    with pytest.raises(ZeroDivisionError):
        ps.Iter([1, 0]).map(lambda x: 1 / x).to_array()
