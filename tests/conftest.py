"""Shared producers recording how they are pulled."""

from collections.abc import AsyncIterator, Generator, Iterable
from typing import Any

import pytest


class Probe:
    """Generator-backed producer counting its pulls and recording injected values."""

    def __init__(self, items: Iterable[Any], returns: Any = None) -> None:
        self.items = list(items)
        self.returns = returns
        self.pulls = 0
        self.received: list[Any] = []

    def __iter__(self) -> Generator[Any, Any, Any]:
        for item in self.items:
            self.pulls += 1
            self.received.append((yield item))
        self.pulls += 1
        return self.returns


class AsyncProbe:
    """Async twin of `Probe`. Async generators can't return, so there is no `returns`."""

    def __init__(self, items: Iterable[Any]) -> None:
        self.items = list(items)
        self.pulls = 0
        self.received: list[Any] = []

    async def __aiter__(self) -> AsyncIterator[Any]:
        for item in self.items:
            self.pulls += 1
            self.received.append((yield item))
        self.pulls += 1


@pytest.fixture
def probe() -> type[Probe]:
    return Probe


@pytest.fixture
def async_probe() -> type[AsyncProbe]:
    return AsyncProbe
