"""Async generator bodies of the asynchronous combinators.

Async generators cannot `return` a value, so these bodies yield `PullResult`s instead of raw items:
every item is emitted as `Next(item)` and the final step is a single `Done(return_value)`.
`ResultStream` turns such a generator back into a pull handle.
"""

from __future__ import annotations

import asyncio
import inspect
from collections.abc import AsyncGenerator, Callable
from typing import Any

from ._source import AsyncSource, is_async_iterable, is_sync_iterable
from ._types import Done, Indexed, Next, PullResult

type Steps[T] = AsyncGenerator[PullResult[T, Any], Any]


async def resolve(value: Any) -> Any:
    return await value if inspect.isawaitable(value) else value


class ResultStream[T, R]:
    """Async pull handle over a generator of `PullResult`s.

    The generator is closed as soon as it emitted its `Done` step.
    """

    __slots__ = ("_finished", "_steps")

    def __init__(self, steps: Steps[T]) -> None:
        self._steps = steps
        self._finished = False

    async def advance(self, resume: Any = None) -> PullResult[T, R]:
        if self._finished:
            return Done()
        try:
            step = await self._steps.asend(resume)
        except StopAsyncIteration:
            step = Done()
        except Exception:
            self._finished = True
            raise
        if step.done:
            self._finished = True
            await self._steps.aclose()
        return step


async def map_[T, R](source: AsyncSource[T, Any], func: Callable[[T], Any]) -> Steps[R]:
    resume = None
    while True:
        match await source.advance(resume):
            case Next(value):
                resume = yield Next(await resolve(func(value)))
            case Done() as done:
                yield done
                return


async def filter_[T](
    source: AsyncSource[T, Any], predicate: Callable[[T], Any]
) -> Steps[T]:
    resume = None
    while True:
        match await source.advance(resume):
            case Next(value):
                if await resolve(predicate(value)):
                    resume = yield Next(value)
                else:
                    resume = None
            case Done() as done:
                yield done
                return


async def take[T](source: AsyncSource[T, Any], limit: int) -> Steps[T]:
    remaining = limit
    resume = None
    while remaining > 0:
        match await source.advance(resume):
            case Next(value):
                remaining -= 1
                resume = yield Next(value)
            case Done() as done:
                yield done
                return
    yield Done()


async def drop[T](source: AsyncSource[T, Any], limit: int) -> Steps[T]:
    for _ in range(limit):
        skipped = await source.advance()
        if skipped.done:
            yield skipped
            return
    resume = None
    while True:
        match await source.advance(resume):
            case Next(value):
                resume = yield Next(value)
            case Done() as done:
                yield done
                return


async def as_indexed_pairs[T](source: AsyncSource[T, Any]) -> Steps[Indexed[T]]:
    idx = 0
    resume = None
    while True:
        match await source.advance(resume):
            case Next(value):
                resume = yield Next(Indexed(idx, value))
                idx += 1
            case Done() as done:
                yield done
                return


async def flat_map[T, R](
    source: AsyncSource[T, Any], func: Callable[[T], Any]
) -> Steps[R]:
    resume = None
    while True:
        match await source.advance(resume):
            case Next(value):
                mapped = await resolve(func(value))
                if not (is_async_iterable(mapped) or is_sync_iterable(mapped)):
                    resume = yield Next(mapped)
                    continue
                nested = AsyncSource(mapped)
                resume = None
                while not (step := await nested.advance(resume)).done:
                    resume = yield step
                resume = None
            case Done() as done:
                yield done
                return


async def chain[T](sources: tuple[AsyncSource[T, Any], ...]) -> Steps[T]:
    last: PullResult[T, Any] = Done()
    for source in sources:
        resume = None
        while not (last := await source.advance(resume)).done:
            resume = yield last
    yield last


async def zip_(sources: tuple[AsyncSource[Any, Any], ...]) -> Steps[tuple[Any, ...]]:
    resume = None
    while True:
        # one round, every branch pulled together
        row = await asyncio.gather(*(source.advance(resume) for source in sources))
        if any(step.done for step in row):
            yield Done()
            return
        resume = yield Next(tuple(step.value for step in row))


async def take_while[T](
    source: AsyncSource[T, Any], predicate: Callable[[T], Any]
) -> Steps[T]:
    resume = None
    while True:
        match await source.advance(resume):
            case Next(value):
                if not await resolve(predicate(value)):
                    yield Done()
                    return
                resume = yield Next(value)
            case Done() as done:
                yield done
                return


async def drop_while[T](
    source: AsyncSource[T, Any], predicate: Callable[[T], Any]
) -> Steps[T]:
    dropping = True
    resume = None
    while True:
        match await source.advance(resume):
            case Next(value):
                if dropping and await resolve(predicate(value)):
                    continue
                dropping = False
                resume = yield Next(value)
            case Done() as done:
                yield done
                return


async def cycle[T](source: AsyncSource[T, Any]) -> Steps[T]:
    recorded: list[T] = []
    resume = None
    while not (step := await source.advance(resume)).done:
        recorded.append(step.value)
        resume = yield step
    if not recorded:
        yield step
        return
    while True:
        for value in recorded:
            yield Next(value)
