from __future__ import annotations

from dataclasses import dataclass
from typing import ClassVar, NamedTuple

from ._core import get_config

# pull results


@dataclass(slots=True, frozen=True)
class Next[T]:
    """A pull that produced a value.

    Example:
    ```python
    >>> import pyoseq as ps
    >>> ps.Iter([1]).advance()
    Next(value=1)

    ```
    """

    value: T
    done: ClassVar[bool] = False


@dataclass(slots=True, frozen=True)
class Done[R]:
    """A pull that found the sequence exhausted.

    **value** is the producer's return value, `None` for most producers.

    Example:
    ```python
    >>> import pyoseq as ps
    >>> def gen():
    ...     yield 1
    ...     return "end"
    >>> it = ps.Iter(gen())
    >>> it.advance(), it.advance(), it.advance()
    (Next(value=1), Done(value='end'), Done(value=None))

    ```
    """

    value: R = None  # type: ignore[assignment]
    done: ClassVar[bool] = True


type PullResult[T, R] = Next[T] | Done[R]
"""The outcome of one pull: either `Next(value)` or `Done(return_value)`."""

# iteration result types


class Indexed[T](NamedTuple):
    """An item paired with its position, see `Iter.as_indexed_pairs()`."""

    idx: int
    """Zero-based position of the item among the emitted items."""
    value: T
    """The item itself."""


class Partitioned[T](NamedTuple):
    """Result of `Iter.partition()`.

    Both lists keep the relative order of the source.
    """

    matching: list[T]
    """Items for which the predicate held."""
    rest: list[T]
    """Items for which the predicate did not hold."""

    def __repr__(self) -> str:
        config = get_config()
        return (
            f"Partitioned(matching={config.collection_repr(self.matching)}, "
            f"rest={config.collection_repr(self.rest)})"
        )
