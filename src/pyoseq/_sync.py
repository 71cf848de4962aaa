"""Generator bodies of the synchronous combinators.

Every function here owns one `SyncSource` (or an ordered tuple of them) and drives it with explicit `advance(resume)` calls.
The value sent into the generator by the downstream consumer is forwarded to the next upstream pull.
What each generator `return`s becomes the `Done` value seen downstream.
"""

from __future__ import annotations

from collections.abc import Callable, Generator
from typing import Any

from ._source import SyncSource, is_sync_iterable
from ._types import Done, Indexed, Next

type Gen[T] = Generator[T, Any, Any]


def forward[T](source: SyncSource[T, Any], resume: Any = None) -> Gen[T]:
    while True:
        match source.advance(resume):
            case Next(value):
                resume = yield value
            case Done(value):
                return value


def map_[T, R](source: SyncSource[T, Any], func: Callable[[T], R]) -> Gen[R]:
    resume = None
    while True:
        match source.advance(resume):
            case Next(value):
                resume = yield func(value)
            case Done(value):
                return value


def filter_[T](source: SyncSource[T, Any], predicate: Callable[[T], object]) -> Gen[T]:
    resume = None
    while True:
        match source.advance(resume):
            case Next(value) if predicate(value):
                resume = yield value
            case Next():
                resume = None
            case Done(value):
                return value


def take[T](source: SyncSource[T, Any], limit: int) -> Gen[T]:
    remaining = limit
    resume = None
    while remaining > 0:
        match source.advance(resume):
            case Next(value):
                remaining -= 1
                resume = yield value
            case Done(value):
                return value
    return None


def drop[T](source: SyncSource[T, Any], limit: int) -> Gen[T]:
    for _ in range(limit):
        skipped = source.advance()
        if skipped.done:
            return skipped.value
    return (yield from forward(source))


def as_indexed_pairs[T](source: SyncSource[T, Any]) -> Gen[Indexed[T]]:
    idx = 0
    resume = None
    while True:
        match source.advance(resume):
            case Next(value):
                resume = yield Indexed(idx, value)
                idx += 1
            case Done(value):
                return value


def flat_map[T, R](source: SyncSource[T, Any], func: Callable[[T], Any]) -> Gen[R]:
    resume = None
    while True:
        match source.advance(resume):
            case Next(value):
                mapped = func(value)
                if is_sync_iterable(mapped):
                    # one level only, nested items are emitted as they are
                    yield from forward(SyncSource(mapped))
                    resume = None
                else:
                    resume = yield mapped
            case Done(value):
                return value


def chain[T](sources: tuple[SyncSource[T, Any], ...]) -> Gen[T]:
    returned = None
    for source in sources:
        returned = yield from forward(source)
    return returned


def zip_(sources: tuple[SyncSource[Any, Any], ...]) -> Gen[tuple[Any, ...]]:
    resume = None
    while True:
        row: list[Any] = []
        for source in sources:
            match source.advance(resume):
                case Next(value):
                    row.append(value)
                case Done():
                    return None
        resume = yield tuple(row)


def take_while[T](
    source: SyncSource[T, Any], predicate: Callable[[T], object]
) -> Gen[T]:
    resume = None
    while True:
        match source.advance(resume):
            case Next(value) if predicate(value):
                resume = yield value
            case Next():
                return None
            case Done(value):
                return value


def drop_while[T](
    source: SyncSource[T, Any], predicate: Callable[[T], object]
) -> Gen[T]:
    while True:
        match source.advance():
            case Next(value) if predicate(value):
                continue
            case Next(value):
                resume = yield value
                return (yield from forward(source, resume))
            case Done(value):
                return value


def cycle[T](source: SyncSource[T, Any]) -> Gen[T]:
    recorded: list[T] = []
    resume = None
    while True:
        match source.advance(resume):
            case Next(value):
                recorded.append(value)
                resume = yield value
            case Done(value):
                if not recorded:
                    return value
                break
    while True:
        # replayed items ignore injected values
        for value in recorded:
            yield value
