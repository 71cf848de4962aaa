from __future__ import annotations

import functools
from collections.abc import Callable, Iterable, Iterator
from typing import TYPE_CHECKING, Any, overload

import cytoolz as cz
import more_itertools as mit

from . import _sync
from ._core import Pipeable, deprecated_alias, get_config
from ._errors import EmptyReduceError, check_callable, check_limit
from ._ops import NO_INITIAL, greater, is_present, lesser
from ._results import NONE, Option, Some
from ._source import SyncSource
from ._types import Done, Indexed, Next, Partitioned, PullResult

if TYPE_CHECKING:
    from ._aiter import AsyncIter


def _convert_data[T](data: Iterable[T] | T, *more_data: T) -> Iterable[T]:
    return data if cz.itertoolz.isiterable(data) else (data, *more_data)


class Iter[T](Pipeable, Iterator[T]):
    """A lazy, single-use, pull-driven sequence, with a rich set of combinators and terminal consumers.

    `Iter` accepts any pull-compatible producer:

    - an iterator or a generator (its `send` is used when present),
    - any `Iterable`, whose `__iter__` is called once,
    - another `Iter`.

    Every combinator returns a new `Iter` that exclusively owns its upstream; nothing is pulled until a consumer asks for it.

    Values passed to `Iter.send()` (or `Iter.advance()`) travel upstream, through each combinator, up to the producer's `yield` expression.

    Args:
        data (Iterable[T]): The producer to wrap.

    Raises:
        TypeError: If **data** is not iterable.

    Example:
    ```python
    >>> import pyoseq as ps
    >>> ps.Iter([1, 2, 3]).map(lambda x: x * 2).take(2).to_array()
    [2, 4]

    ```
    """

    _inner: SyncSource[T, Any]

    __slots__ = ("_inner",)

    def __init__(self, data: Iterable[T]) -> None:
        self._inner = SyncSource(data)

    def __iter__(self) -> Iterator[T]:
        return self

    def __next__(self) -> T:
        match self._inner.advance():
            case Next(value):
                return value
            case Done(value):
                raise StopIteration(value)

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}({get_config().iter_repr(self._inner)})"

    def advance(self, resume: Any = None) -> PullResult[T, Any]:
        """Pull once, sending **resume** to the producer.

        The value sent with the very first pull is dropped, as a just-started producer has no `yield` to receive it.

        Args:
            resume (Any): Value injected back into the producer. Defaults to None.

        Returns:
            PullResult[T, Any]: `Next(item)`, or `Done(return_value)` once exhausted.

        Example:
        ```python
        >>> import pyoseq as ps
        >>> def echo():
        ...     received = yield "ready"
        ...     while True:
        ...         received = yield f"got {received}"
        >>> it = ps.Iter(echo()).map(str.upper)
        >>> it.advance()
        Next(value='READY')
        >>> it.advance("ping")
        Next(value='GOT PING')

        ```
        """
        return self._inner.advance(resume)

    def send(self, value: Any) -> T:
        """Generator-style pull that injects **value** into the producer.

        Args:
            value (Any): Value injected back into the producer.

        Returns:
            T: The next item.

        Raises:
            StopIteration: Once the sequence is exhausted, carrying its return value.
        """
        match self._inner.advance(value):
            case Next(item):
                return item
            case Done(returned):
                raise StopIteration(returned)

    def next(self) -> Option[T]:
        """Return the next item, wrapped in an `Option`.

        Returns:
            Option[T]: `Some(item)`, or `NONE` if the sequence is exhausted.

        Example:
        ```python
        >>> import pyoseq as ps
        >>> it = ps.Iter([None])
        >>> it.next()
        Some(value=None)
        >>> it.next()
        NONE

        ```
        """
        match self._inner.advance():
            case Next(value):
                return Some(value)
            case _:
                return NONE

    @overload
    @staticmethod
    def from_[U](data: Iterable[U]) -> Iter[U]: ...
    @overload
    @staticmethod
    def from_[U](data: U, *more_data: U) -> Iter[U]: ...
    @staticmethod
    def from_[U](data: Iterable[U] | U, *more_data: U) -> Iter[U]:
        """Create an `Iter` from any `Iterable`, or from unpacked values.

        Args:
            data (Iterable[U] | U): Iterable to wrap, or a first value.
            *more_data (U): Additional values if **data** is not an `Iterable`.

        Returns:
            Iter[U]: A new `Iter`.

        Example:
        ```python
        >>> import pyoseq as ps
        >>> ps.Iter.from_(1, 2, 3).to_array()
        [1, 2, 3]

        ```
        """
        return Iter(_convert_data(data, *more_data))

    def to_async(self) -> AsyncIter[T]:
        """Lift this `Iter` into the asynchronous family.

        Returns:
            AsyncIter[T]: An `AsyncIter` pulling from this `Iter`.
        """
        from ._aiter import AsyncIter

        return AsyncIter(self)

    # combinators --------------------------------------------------------

    def map[R](self, func: Callable[[T], R]) -> Iter[R]:
        """Apply **func** to each item.

        Args:
            func (Callable[[T], R]): Function to apply to each item.

        Returns:
            Iter[R]: An iterator of transformed items.

        Example:
        ```python
        >>> import pyoseq as ps
        >>> ps.Iter([1, 2]).map(lambda x: x + 1).to_array()
        [2, 3]

        ```
        """
        return Iter(_sync.map_(self._inner, func))

    def filter(self, predicate: Callable[[T], object]) -> Iter[T]:
        """Keep the items for which **predicate** is truthy.

        Discarded items never reach downstream, and the pull that replaces them carries no injected value.

        Note:
            `Iter.filter(f).next()` is equivalent to `Iter.find(f)`.

        Args:
            predicate (Callable[[T], object]): Function to evaluate each item.

        Returns:
            Iter[T]: An iterator of the items that satisfy the predicate.

        Example:
        ```python
        >>> import pyoseq as ps
        >>> ps.Iter((1, 2, 3)).filter(lambda x: x > 1).to_array()
        [2, 3]

        ```
        """
        return Iter(_sync.filter_(self._inner, predicate))

    def take(self, limit: int) -> Iter[T]:
        """Yield at most **limit** items, then stop.

        Never pulls more items from upstream than it yields.

        Args:
            limit (int): Maximum number of items, must be `>= 0`.

        Returns:
            Iter[T]: An iterator over the first items.

        Raises:
            ValueError: If **limit** is negative.
            TypeError: If **limit** is not an integer.

        Example:
        ```python
        >>> import pyoseq as ps
        >>> ps.Iter([1, 2, 3]).take(2).to_array()
        [1, 2]
        >>> ps.Iter([1, 2, 3]).take(-1)
        Traceback (most recent call last):
            ...
        ValueError: limit must be a non-negative integer, got -1

        ```
        """
        return Iter(_sync.take(self._inner, check_limit(limit)))

    def drop(self, limit: int) -> Iter[T]:
        """Skip the first **limit** items, then yield the rest unchanged.

        Args:
            limit (int): Number of items to skip, must be `>= 0`.

        Returns:
            Iter[T]: An iterator over the remaining items.

        Raises:
            ValueError: If **limit** is negative.
            TypeError: If **limit** is not an integer.

        Example:
        ```python
        >>> import pyoseq as ps
        >>> ps.Iter((1, 2, 3)).drop(1).to_array()
        [2, 3]

        ```
        """
        return Iter(_sync.drop(self._inner, check_limit(limit)))

    def as_indexed_pairs(self) -> Iter[Indexed[T]]:
        """Pair each item with its zero-based position.

        Returns:
            Iter[Indexed[T]]: An iterator of `(idx, value)` pairs.

        Example:
        ```python
        >>> import pyoseq as ps
        >>> ps.Iter(["a", "b"]).as_indexed_pairs().to_array()
        [Indexed(idx=0, value='a'), Indexed(idx=1, value='b')]

        ```
        """
        return Iter(_sync.as_indexed_pairs(self._inner))

    def flat_map[R](self, func: Callable[[T], Iterable[R] | R]) -> Iter[R]:
        """Apply **func** to each item, flattening iterable results by one level.

        A non-iterable result is emitted as a single item.

        Args:
            func (Callable[[T], Iterable[R] | R]): Function to apply to each item.

        Returns:
            Iter[R]: An iterator of the flattened results.

        Raises:
            TypeError: If **func** is not callable.

        Example:
        ```python
        >>> import pyoseq as ps
        >>> ps.Iter([1, 2]).flat_map(lambda x: [x, [x * 10]]).to_array()
        [1, [10], 2, [20]]
        >>> ps.Iter([1, 2]).flat_map(lambda x: x * 10).to_array()
        [10, 20]

        ```
        """
        check_callable(func, "mapper")
        return Iter(_sync.flat_map(self._inner, func))

    def chain[U](self, *others: Iterable[U]) -> Iter[T | U]:
        """Yield this sequence to exhaustion, then each of **others** in order.

        Args:
            *others (Iterable[U]): Sequences to append.

        Returns:
            Iter[T | U]: An iterator over all the sequences.

        Example:
        ```python
        >>> import pyoseq as ps
        >>> ps.Iter([1, 2]).chain([3], (4, 5)).to_array()
        [1, 2, 3, 4, 5]

        ```
        """
        sources = (self._inner, *(SyncSource(other) for other in others))
        return Iter(_sync.chain(sources))

    def zip(self, *others: Iterable[Any]) -> Iter[tuple[Any, ...]]:
        """Yield tuples of aligned items, until any of the sequences ends.

        Items pulled during the last, incomplete, round are discarded.

        Args:
            *others (Iterable[Any]): Sequences to zip with.

        Returns:
            Iter[tuple[Any, ...]]: An iterator of tuples.

        Example:
        ```python
        >>> import pyoseq as ps
        >>> ps.Iter([1, 2, 3]).zip("ab").to_array()
        [(1, 'a'), (2, 'b')]

        ```
        """
        sources = (self._inner, *(SyncSource(other) for other in others))
        return Iter(_sync.zip_(sources))

    def take_while(self, predicate: Callable[[T], object]) -> Iter[T]:
        """Yield items while **predicate** holds.

        The first failing item is consumed and discarded, and the sequence ends for good.

        Args:
            predicate (Callable[[T], object]): Function to evaluate each item.

        Returns:
            Iter[T]: An iterator over the leading items satisfying the predicate.

        Example:
        ```python
        >>> import pyoseq as ps
        >>> ps.Iter([1, 2, 4, 0, 1]).take_while(lambda x: x <= 2).to_array()
        [1, 2]

        ```
        """
        return Iter(_sync.take_while(self._inner, predicate))

    def drop_while(self, predicate: Callable[[T], object]) -> Iter[T]:
        """Skip the leading items satisfying **predicate**, then yield everything.

        Args:
            predicate (Callable[[T], object]): Function to evaluate the leading items.

        Returns:
            Iter[T]: An iterator starting at the first item failing the predicate.

        Example:
        ```python
        >>> import pyoseq as ps
        >>> ps.Iter([1, 2, 3, 1]).drop_while(lambda x: x <= 2).to_array()
        [3, 1]

        ```
        """
        return Iter(_sync.drop_while(self._inner, predicate))

    def fuse(self) -> Iter[T]:
        """Yield items until the first `None` or `NONE`.

        Returns:
            Iter[T]: An iterator over the items before the first sentinel.

        Example:
        ```python
        >>> import pyoseq as ps
        >>> ps.Iter([1, 2, 3, None, 5]).fuse().to_array()
        [1, 2, 3]

        ```
        """
        return Iter(_sync.take_while(self._inner, is_present))

    def cycle(self) -> Iter[T]:
        """Yield the items, recording them, then replay the recording forever.

        **Warning** ⚠️
            This creates an infinite iterator, unless the source is empty.
            Be sure to use `Iter.take()` to limit the number of items taken.

        Returns:
            Iter[T]: An infinite iterator.

        Example:
        ```python
        >>> import pyoseq as ps
        >>> ps.Iter([1, 2]).cycle().take(5).to_array()
        [1, 2, 1, 2, 1]

        ```
        """
        return Iter(_sync.cycle(self._inner))

    # terminals ----------------------------------------------------------

    def reduce[U](
        self, func: Callable[[U, T], U], initial: U = NO_INITIAL  # type: ignore[assignment]
    ) -> U:
        """Fold every item into an accumulator.

        Without **initial**, the first item seeds the accumulator.

        Args:
            func (Callable[[U, T], U]): Function of the accumulator and an item.
            initial (U): Starting value of the accumulator.

        Returns:
            U: The final accumulator.

        Raises:
            EmptyReduceError: If the sequence is empty and no **initial** is given.

        Example:
        ```python
        >>> import pyoseq as ps
        >>> ps.Iter([1, 2, 3]).reduce(lambda acc, x: acc + x)
        6
        >>> ps.Iter([]).reduce(lambda acc, x: acc + x, 10)
        10
        >>> ps.Iter([]).reduce(lambda acc, x: acc + x)
        Traceback (most recent call last):
            ...
        pyoseq._errors.EmptyReduceError: reduce() of empty sequence with no initial value

        ```
        """
        return self._fold(func, initial, "reduce")

    def _fold[U](self, func: Callable[[U, T], U], initial: Any, operation: str) -> U:
        if initial is NO_INITIAL:
            match self._inner.advance():
                case Next(value):
                    initial = value
                case _:
                    raise EmptyReduceError(operation)
        return functools.reduce(func, self, initial)

    def find(self, predicate: Callable[[T], object]) -> Option[T]:
        """Return the first item satisfying **predicate**.

        Stops pulling as soon as an item matches.

        Args:
            predicate (Callable[[T], object]): Function to evaluate each item.

        Returns:
            Option[T]: `Some(item)`, or `NONE` if no item matched.

        Example:
        ```python
        >>> import pyoseq as ps
        >>> ps.Iter([1, 2, 3]).find(lambda x: x > 1)
        Some(value=2)
        >>> ps.Iter([1, 2, 3]).find(lambda x: x > 5)
        NONE

        ```
        """
        return self.filter(predicate).next()

    def every(self, predicate: Callable[[T], object]) -> bool:
        """Return `True` if every item satisfies **predicate**, stopping at the first that does not.

        Example:
        ```python
        >>> import pyoseq as ps
        >>> ps.Iter([2, 4]).every(lambda x: x % 2 == 0)
        True
        >>> ps.Iter([]).every(lambda x: False)
        True

        ```
        """
        return all(map(predicate, self))

    def some(self, predicate: Callable[[T], object]) -> bool:
        """Return `True` if any item satisfies **predicate**, stopping at the first that does.

        Example:
        ```python
        >>> import pyoseq as ps
        >>> ps.Iter([1, 2]).some(lambda x: x > 1)
        True
        >>> ps.Iter([]).some(lambda x: True)
        False

        ```
        """
        return any(map(predicate, self))

    def count(self) -> int:
        """Consume the sequence and return the number of items.

        Example:
        ```python
        >>> import pyoseq as ps
        >>> ps.Iter(range(5)).count()
        5

        ```
        """
        return cz.itertoolz.count(self)

    def to_array(self, max_count: int | None = None) -> list[T]:
        """Collect up to **max_count** items into a `list`.

        Args:
            max_count (int | None): Maximum number of items, `None` for all of them. Nothing is pulled if `<= 0`.

        Returns:
            list[T]: The collected items.

        Example:
        ```python
        >>> import pyoseq as ps
        >>> ps.Iter(range(5)).to_array()
        [0, 1, 2, 3, 4]
        >>> ps.Iter(range(5)).to_array(2)
        [0, 1]
        >>> ps.Iter(range(5)).to_array(0)
        []

        ```
        """
        if max_count is None:
            return list(self)
        if max_count <= 0:
            return []
        return list(cz.itertoolz.take(max_count, self))

    def for_each(self, func: Callable[[T], object]) -> None:
        """Call **func** on each item, in order.

        Example:
        ```python
        >>> import pyoseq as ps
        >>> ps.Iter([1, 2]).for_each(print)
        1
        2

        ```
        """
        for item in self:
            func(item)

    def join(self, separator: str) -> str:
        """Concatenate the string form of each item, separated by **separator**.

        Example:
        ```python
        >>> import pyoseq as ps
        >>> ps.Iter([1, "a", None]).join("-")
        '1-a-None'
        >>> ps.Iter([]).join("-")
        ''

        ```
        """
        return separator.join(map(str, self))

    def partition(self, predicate: Callable[[T], object]) -> Partitioned[T]:
        """Consume the sequence, splitting items on **predicate**.

        Args:
            predicate (Callable[[T], object]): Function to evaluate each item.

        Returns:
            Partitioned[T]: The matching items and the other ones, in their original order.

        Example:
        ```python
        >>> import pyoseq as ps
        >>> ps.Iter(range(6)).partition(lambda x: x % 2 == 0)
        Partitioned(matching=[0, 2, 4], rest=[1, 3, 5])

        ```
        """
        rest, matching = mit.partition(predicate, self)
        return Partitioned(list(matching), list(rest))

    def find_index(self, predicate: Callable[[T], object]) -> int:
        """Return the position of the first item satisfying **predicate**, or -1.

        Example:
        ```python
        >>> import pyoseq as ps
        >>> ps.Iter("abc").find_index(lambda c: c == "c")
        2
        >>> ps.Iter("abc").find_index(lambda c: c == "z")
        -1

        ```
        """
        return (
            self.as_indexed_pairs()
            .find(lambda pair: predicate(pair.value))
            .map(lambda pair: pair.idx)
            .unwrap_or(-1)
        )

    def max(self) -> T:
        """Return the greatest item. On ties, the last one wins.

        Raises:
            EmptyReduceError: If the sequence is empty.

        Example:
        ```python
        >>> import pyoseq as ps
        >>> ps.Iter([3, 7, 1]).max()
        7

        ```
        """
        return self._fold(greater, NO_INITIAL, "max")

    def min(self) -> T:
        """Return the smallest item. On ties, the last one wins.

        Raises:
            EmptyReduceError: If the sequence is empty.

        Example:
        ```python
        >>> import pyoseq as ps
        >>> ps.Iter([3, 7, 1]).min()
        1

        ```
        """
        return self._fold(lesser, NO_INITIAL, "min")

    asIndexedPairs = deprecated_alias(as_indexed_pairs, "asIndexedPairs")  # noqa: N815
    flatMap = deprecated_alias(flat_map, "flatMap")  # noqa: N815
    takeWhile = deprecated_alias(take_while, "takeWhile")  # noqa: N815
    dropWhile = deprecated_alias(drop_while, "dropWhile")  # noqa: N815
    toArray = deprecated_alias(to_array, "toArray")  # noqa: N815
    forEach = deprecated_alias(for_each, "forEach")  # noqa: N815
    findIndex = deprecated_alias(find_index, "findIndex")  # noqa: N815
