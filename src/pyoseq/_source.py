"""Uniform pull handles over producers of both families.

A source owns exactly one producer and turns every pull into a `PullResult`.
Once a source reported `Done` (or its producer raised), the producer is never touched again.
"""

from __future__ import annotations

import inspect
from collections.abc import Awaitable, Callable
from typing import Any

from ._types import Done, Next, PullResult

type SyncPull = Callable[[Any], PullResult[Any, Any]]
type AsyncPull = Callable[[Any], Awaitable[PullResult[Any, Any]]]


def _not_iterable(data: object, family: str) -> TypeError:
    msg = f"{type(data).__name__!r} object is not {family}iterable"
    return TypeError(msg)


def _iterator_pull(handle: Any) -> SyncPull:
    send = getattr(handle, "send", None)

    def _pull(resume: Any) -> PullResult[Any, Any]:
        try:
            value = next(handle) if send is None else send(resume)
        except StopIteration as stop:
            return Done(stop.value)
        return Next(value)

    return _pull


def _async_iterator_pull(handle: Any) -> AsyncPull:
    asend = getattr(handle, "asend", None)

    async def _pull(resume: Any) -> PullResult[Any, Any]:
        try:
            value = await (handle.__anext__() if asend is None else asend(resume))
        except StopAsyncIteration as stop:
            return Done(stop.args[0] if stop.args else None)
        return Next(value)

    return _pull


def _sync_pull(data: Any) -> SyncPull | None:
    if hasattr(data, "advance") and hasattr(data, "__next__"):
        return data.advance
    if hasattr(data, "__next__"):
        return _iterator_pull(data)
    if hasattr(data, "__iter__"):
        return _iterator_pull(iter(data))
    return None


def _async_pull(data: Any) -> AsyncPull | None:
    if hasattr(data, "advance") and not hasattr(data, "__next__"):
        return data.advance
    if hasattr(data, "__anext__"):
        return _async_iterator_pull(data)
    if hasattr(data, "__aiter__"):
        return _async_iterator_pull(data.__aiter__())
    sync_pull = _sync_pull(data)
    if sync_pull is None:
        return None

    async def _pull(resume: Any) -> PullResult[Any, Any]:
        return sync_pull(resume)

    return _pull


def is_sync_iterable(data: object) -> bool:
    return hasattr(data, "__next__") or hasattr(data, "__iter__")


def is_async_iterable(data: object) -> bool:
    return hasattr(data, "__anext__") or hasattr(data, "__aiter__")


class SyncSource[T, R]:
    """Pull handle over a synchronous producer.

    Accepts, in order of preference:

    - an object already exposing `advance(resume) -> PullResult` (e.g. an `Iter`),
    - an iterator, whose `send` is used when present so that resume values reach a generator,
    - an iterable, whose `__iter__` is called exactly once.

    Args:
        data (Any): The producer to wrap.

    Raises:
        TypeError: If **data** is neither a pull handle, an iterator nor an iterable.
    """

    __slots__ = ("_finished", "_pull", "_started")

    def __init__(self, data: Any) -> None:
        pull = _sync_pull(data)
        if pull is None:
            raise _not_iterable(data, "")
        self._pull = pull
        self._started = False
        self._finished = False

    def advance(self, resume: Any = None) -> PullResult[T, R]:
        if self._finished:
            return Done()
        if not self._started:
            # a just-started generator only accepts None
            self._started = True
            resume = None
        try:
            result = self._pull(resume)
        except Exception:
            self._finished = True
            raise
        if result.done:
            self._finished = True
        return result


class AsyncSource[T, R]:
    """Pull handle over an asynchronous producer.

    Accepts, in order of preference:

    - an object already exposing `advance(resume)` (e.g. an `AsyncIter`),
    - an async iterator, whose `asend` is used when present,
    - an async iterable, whose `__aiter__` is called exactly once,
    - any synchronous producer accepted by `SyncSource`.

    Args:
        data (Any): The producer to wrap.

    Raises:
        TypeError: If **data** exposes no iteration capability at all.
    """

    __slots__ = ("_finished", "_pull", "_started")

    def __init__(self, data: Any) -> None:
        pull = _async_pull(data)
        if pull is None:
            raise _not_iterable(data, "async or sync ")
        self._pull = pull
        self._started = False
        self._finished = False

    async def advance(self, resume: Any = None) -> PullResult[T, R]:
        if self._finished:
            return Done()
        if not self._started:
            self._started = True
            resume = None
        try:
            result = self._pull(resume)
            if inspect.isawaitable(result):
                result = await result
        except Exception:
            self._finished = True
            raise
        if result.done:
            self._finished = True
        return result
