"""Tests for the pull handles adapting producers."""

import asyncio
from collections.abc import Generator, Iterator
from typing import Any

import pytest

import pyoseq as ps


class _OnceIterable:
    def __init__(self) -> None:
        self.calls = 0

    def __iter__(self) -> Iterator[int]:
        self.calls += 1
        return iter([1, 2])


class TestSyncSource:
    def test_pulls_then_done(self) -> None:
        """Items come wrapped in Next, then Done for ever."""
        source = ps.SyncSource([1, 2])
        assert source.advance() == ps.Next(1)
        assert source.advance() == ps.Next(2)
        assert source.advance() == ps.Done()
        assert source.advance() == ps.Done()

    def test_not_iterable(self) -> None:
        """Objects without iteration capability are rejected."""
        with pytest.raises(TypeError, match="'int' object is not iterable"):
            ps.SyncSource(42)
        with pytest.raises(TypeError):
            ps.Iter(42)  # type: ignore[arg-type]

    def test_async_only_is_rejected(self) -> None:
        """The sync family can't pull async producers."""
        with pytest.raises(TypeError):
            ps.Iter(ps.AsyncIter([1]))  # type: ignore[arg-type]

    def test_iter_called_once(self) -> None:
        """An iterable is asked for its iterator exactly once."""
        data = _OnceIterable()
        assert ps.Iter(data).to_array() == [1, 2]
        assert data.calls == 1

    def test_resume_ignored_without_send(self) -> None:
        """Plain iterators just move forward."""
        source = ps.SyncSource(iter("ab"))
        assert source.advance() == ps.Next("a")
        assert source.advance("ignored") == ps.Next("b")

    def test_return_value(self) -> None:
        """A generator's return value ends up in Done."""

        def gen() -> Generator[int, Any, str]:
            yield 1
            return "end"

        source = ps.SyncSource(gen())
        assert source.advance() == ps.Next(1)
        assert source.advance() == ps.Done("end")
        assert source.advance() == ps.Done()

    def test_error_latches(self) -> None:
        """After an error, the producer is never pulled again."""
        calls = 0

        class Faulty:
            def __iter__(self) -> Iterator[int]:
                return self

            def __next__(self) -> int:
                nonlocal calls
                calls += 1
                msg = "broken"
                raise OSError(msg)

        source = ps.SyncSource(Faulty())
        with pytest.raises(OSError, match="broken"):
            source.advance()
        assert source.advance() == ps.Done()
        assert calls == 1

    def test_wraps_iter(self) -> None:
        """An Iter is pulled through its own advance."""
        source = ps.SyncSource(ps.Iter([1]).map(str))
        assert source.advance() == ps.Next("1")
        assert source.advance().done


class TestAsyncSource:
    def test_not_iterable(self) -> None:
        """Objects without any iteration capability are rejected."""
        with pytest.raises(TypeError, match="not async or sync iterable"):
            ps.AsyncSource(object())

    @pytest.mark.asyncio
    async def test_sync_producer(self) -> None:
        """Sync producers are adapted."""
        source = ps.AsyncSource((x for x in [1]))
        assert await source.advance() == ps.Next(1)
        assert await source.advance() == ps.Done()

    @pytest.mark.asyncio
    async def test_async_iterable(self) -> None:
        """Async iterables are asked for their iterator."""

        class Ticks:
            async def __aiter__(self):  # noqa: ANN204
                for i in range(2):
                    await asyncio.sleep(0)
                    yield i

        source = ps.AsyncSource(Ticks())
        assert await source.advance() == ps.Next(0)
        assert await source.advance() == ps.Next(1)
        assert await source.advance() == ps.Done()

    @pytest.mark.asyncio
    async def test_wraps_async_iter(self) -> None:
        """An AsyncIter is pulled through its own advance."""
        source = ps.AsyncSource(ps.AsyncIter([1, 2]).drop(1))
        assert await source.advance() == ps.Next(2)
        assert (await source.advance()).done


def test_pull_results_match() -> None:
    """PullResult values support structural pattern matching."""
    seen: list[str] = []
    source = ps.SyncSource("a")
    while True:
        match source.advance():
            case ps.Next(value):
                seen.append(value)
            case ps.Done():
                break
    assert seen == ["a"]
    assert not ps.Next(1).done
    assert ps.Done().done
