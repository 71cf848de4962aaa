from __future__ import annotations

from collections.abc import AsyncIterable, AsyncIterator, Callable, Iterable
from typing import Any

from . import _async
from ._async import ResultStream, resolve
from ._core import Pipeable, deprecated_alias, get_config
from ._errors import EmptyReduceError, check_callable, check_limit
from ._ops import NO_INITIAL, greater, is_present, lesser
from ._results import NONE, Option, Some
from ._source import AsyncSource
from ._types import Done, Indexed, Next, Partitioned, PullResult

type AnyIterable[T] = AsyncIterable[T] | Iterable[T]


class AsyncIter[T](Pipeable, AsyncIterator[T]):
    """The asynchronous twin of `Iter`.

    `AsyncIter` accepts async iterators (their `asend` is used when present), async iterables, and any synchronous producer accepted by `Iter`.

    Each combinator suspends at every upstream pull, and awaits any callback result that is awaitable, so callbacks may be plain functions or coroutine functions.

    Terminal consumers are coroutines.

    Args:
        data (AnyIterable[T]): The producer to wrap.

    Raises:
        TypeError: If **data** is not iterable, synchronously or asynchronously.

    Example:
    ```python
    >>> import asyncio
    >>> import pyoseq as ps
    >>> async def main() -> list[str]:
    ...     return await ps.AsyncIter([1, 2, 3]).filter(lambda x: x % 2).map(str).to_array()
    >>> asyncio.run(main())
    ['1', '3']

    ```
    """

    _inner: AsyncSource[T, Any]

    __slots__ = ("_inner",)

    def __init__(self, data: AnyIterable[T]) -> None:
        self._inner = AsyncSource(data)

    def __aiter__(self) -> AsyncIterator[T]:
        return self

    async def __anext__(self) -> T:
        match await self._inner.advance():
            case Next(value):
                return value
            case Done(value):
                raise StopAsyncIteration(value)

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}({get_config().iter_repr(self._inner)})"

    @classmethod
    def _steps[U](cls, steps: _async.Steps[U]) -> AsyncIter[U]:
        return cls(ResultStream(steps))  # type: ignore[return-value]

    async def advance(self, resume: Any = None) -> PullResult[T, Any]:
        """Pull once, sending **resume** to the producer.

        Args:
            resume (Any): Value injected back into the producer. Defaults to None.

        Returns:
            PullResult[T, Any]: `Next(item)`, or `Done(return_value)` once exhausted.
        """
        return await self._inner.advance(resume)

    async def asend(self, value: Any) -> T:
        """Async-generator-style pull that injects **value** into the producer.

        Raises:
            StopAsyncIteration: Once the sequence is exhausted.
        """
        match await self._inner.advance(value):
            case Next(item):
                return item
            case Done(returned):
                raise StopAsyncIteration(returned)

    async def next(self) -> Option[T]:
        """Return the next item, wrapped in an `Option`.

        Returns:
            Option[T]: `Some(item)`, or `NONE` if the sequence is exhausted.
        """
        match await self._inner.advance():
            case Next(value):
                return Some(value)
            case _:
                return NONE

    # combinators --------------------------------------------------------

    def map[R](self, func: Callable[[T], Any]) -> AsyncIter[R]:
        """Apply **func** to each item, awaiting its result if needed."""
        return self._steps(_async.map_(self._inner, func))

    def filter(self, predicate: Callable[[T], Any]) -> AsyncIter[T]:
        """Keep the items for which **predicate** is truthy, awaiting it if needed."""
        return self._steps(_async.filter_(self._inner, predicate))

    def take(self, limit: int) -> AsyncIter[T]:
        """Yield at most **limit** items, then stop.

        Raises:
            ValueError: If **limit** is negative, before anything is pulled.
            TypeError: If **limit** is not an integer.
        """
        return self._steps(_async.take(self._inner, check_limit(limit)))

    def drop(self, limit: int) -> AsyncIter[T]:
        """Skip the first **limit** items, then yield the rest unchanged.

        Raises:
            ValueError: If **limit** is negative, before anything is pulled.
            TypeError: If **limit** is not an integer.
        """
        return self._steps(_async.drop(self._inner, check_limit(limit)))

    def as_indexed_pairs(self) -> AsyncIter[Indexed[T]]:
        return self._steps(_async.as_indexed_pairs(self._inner))

    def flat_map[R](self, func: Callable[[T], Any]) -> AsyncIter[R]:
        """Apply **func** to each item, flattening async or sync iterable results by one level.

        Raises:
            TypeError: If **func** is not callable.
        """
        check_callable(func, "mapper")
        return self._steps(_async.flat_map(self._inner, func))

    def chain[U](self, *others: AnyIterable[U]) -> AsyncIter[T | U]:
        """Yield this sequence to exhaustion, then each of **others** in order."""
        sources = (self._inner, *(AsyncSource(other) for other in others))
        return self._steps(_async.chain(sources))

    def zip(self, *others: AnyIterable[Any]) -> AsyncIter[tuple[Any, ...]]:
        """Yield tuples of aligned items, until any of the sequences ends.

        Each round pulls every sequence concurrently, and waits for all of them.

        Example:
        ```python
        >>> import asyncio
        >>> import pyoseq as ps
        >>> asyncio.run(ps.AsyncIter([1, 2, 3]).zip(["a", "b"]).to_array())
        [(1, 'a'), (2, 'b')]

        ```
        """
        sources = (self._inner, *(AsyncSource(other) for other in others))
        return self._steps(_async.zip_(sources))

    def take_while(self, predicate: Callable[[T], Any]) -> AsyncIter[T]:
        return self._steps(_async.take_while(self._inner, predicate))

    def drop_while(self, predicate: Callable[[T], Any]) -> AsyncIter[T]:
        return self._steps(_async.drop_while(self._inner, predicate))

    def fuse(self) -> AsyncIter[T]:
        """Yield items until the first `None` or `NONE`."""
        return self._steps(_async.take_while(self._inner, is_present))

    def cycle(self) -> AsyncIter[T]:
        """Yield the items, recording them, then replay the recording forever.

        **Warning** ⚠️
            This creates an infinite iterator, unless the source is empty.
        """
        return self._steps(_async.cycle(self._inner))

    # terminals ----------------------------------------------------------

    async def reduce[U](
        self, func: Callable[[U, T], Any], initial: U = NO_INITIAL  # type: ignore[assignment]
    ) -> U:
        """Fold every item into an accumulator, awaiting **func** if needed.

        Raises:
            EmptyReduceError: If the sequence is empty and no **initial** is given.
        """
        return await self._fold(func, initial, "reduce")

    async def _fold[U](
        self, func: Callable[[U, T], Any], initial: Any, operation: str
    ) -> U:
        acc = initial
        if acc is NO_INITIAL:
            match await self._inner.advance():
                case Next(value):
                    acc = value
                case _:
                    raise EmptyReduceError(operation)
        async for item in self:
            acc = await resolve(func(acc, item))
        return acc

    async def find(self, predicate: Callable[[T], Any]) -> Option[T]:
        """Return the first item satisfying **predicate**, or `NONE`."""
        return await self.filter(predicate).next()

    async def every(self, predicate: Callable[[T], Any]) -> bool:
        async for item in self:
            if not await resolve(predicate(item)):
                return False
        return True

    async def some(self, predicate: Callable[[T], Any]) -> bool:
        async for item in self:
            if await resolve(predicate(item)):
                return True
        return False

    async def count(self) -> int:
        total = 0
        async for _ in self:
            total += 1
        return total

    async def to_array(self, max_count: int | None = None) -> list[T]:
        """Collect up to **max_count** items into a `list`. Nothing is pulled if `max_count <= 0`."""
        values: list[T] = []
        if max_count is not None and max_count <= 0:
            return values
        async for item in self:
            values.append(item)
            if len(values) == max_count:
                break
        return values

    async def for_each(self, func: Callable[[T], Any]) -> None:
        """Call **func** on each item, awaiting each call before the next pull."""
        async for item in self:
            await resolve(func(item))

    async def join(self, separator: str) -> str:
        return separator.join([str(item) async for item in self])

    async def partition(self, predicate: Callable[[T], Any]) -> Partitioned[T]:
        result: Partitioned[T] = Partitioned([], [])
        async for item in self:
            if await resolve(predicate(item)):
                result.matching.append(item)
            else:
                result.rest.append(item)
        return result

    async def find_index(self, predicate: Callable[[T], Any]) -> int:
        """Return the position of the first item satisfying **predicate**, or -1."""
        found = await self.as_indexed_pairs().find(lambda pair: predicate(pair.value))
        return found.map(lambda pair: pair.idx).unwrap_or(-1)

    async def max(self) -> T:
        """Return the greatest item. On ties, the last one wins.

        Raises:
            EmptyReduceError: If the sequence is empty.
        """
        return await self._fold(greater, NO_INITIAL, "max")

    async def min(self) -> T:
        """Return the smallest item. On ties, the last one wins.

        Raises:
            EmptyReduceError: If the sequence is empty.
        """
        return await self._fold(lesser, NO_INITIAL, "min")

    asIndexedPairs = deprecated_alias(as_indexed_pairs, "asIndexedPairs")  # noqa: N815
    flatMap = deprecated_alias(flat_map, "flatMap")  # noqa: N815
    takeWhile = deprecated_alias(take_while, "takeWhile")  # noqa: N815
    dropWhile = deprecated_alias(drop_while, "dropWhile")  # noqa: N815
    toArray = deprecated_alias(to_array, "toArray")  # noqa: N815
    forEach = deprecated_alias(for_each, "forEach")  # noqa: N815
    findIndex = deprecated_alias(find_index, "findIndex")  # noqa: N815
