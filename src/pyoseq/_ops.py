from typing import Final

from ._results import NONE

NO_INITIAL: Final = object()
"""Marks a reduction called without an initial value."""


def is_present(value: object) -> bool:
    return value is not None and value is not NONE


def greater[T](acc: T, value: T) -> T:
    return acc if acc > value else value  # type: ignore[operator]


def lesser[T](acc: T, value: T) -> T:
    return acc if acc < value else value  # type: ignore[operator]
