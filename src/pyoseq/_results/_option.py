from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import Callable
from dataclasses import dataclass
from typing import Any, Never, TypeIs


class OptionUnwrapError(RuntimeError): ...


class Option[T](ABC):
    """Presence (`Some`) or absence (`NONE`) of a value.

    Terminal consumers such as `Iter.find` return an `Option`, so that "nothing matched" is never confused with a failure, nor with a `None` item.
    """

    __slots__ = ()

    @staticmethod
    def from_[V](value: V | None) -> Option[V]:
        """Wrap **value** in `Some`, or return `NONE` if it is `None`.

        Args:
            value (V | None): The value to wrap.

        Returns:
            Option[V]: `Some(value)` or `NONE`.

        Example:
        ```python
        >>> import pyoseq as ps
        >>> ps.Option.from_(3)
        Some(value=3)
        >>> ps.Option.from_(None)
        NONE

        ```
        """
        return NONE if value is None else Some(value)

    @abstractmethod
    def is_some(self) -> TypeIs[Some[T]]:  # type: ignore[misc]
        """Returns `True` if the option is a `Some` value.

        Example:
        ```python
        >>> import pyoseq as ps
        >>> ps.Some(2).is_some()
        True
        >>> ps.NONE.is_some()
        False

        ```
        """
        ...

    @abstractmethod
    def is_none(self) -> TypeIs[NoneOption]:  # type: ignore[misc]
        """Returns `True` if the option is `NONE`.

        Example:
        ```python
        >>> import pyoseq as ps
        >>> ps.Some(2).is_none()
        False
        >>> ps.NONE.is_none()
        True

        ```
        """
        ...

    @abstractmethod
    def unwrap(self) -> T:
        """Returns the contained `Some` value.

        Returns:
            T: The contained value.

        Raises:
            OptionUnwrapError: If the option is `NONE`.

        Example:
        ```python
        >>> import pyoseq as ps
        >>> ps.Some("car").unwrap()
        'car'
        >>> ps.NONE.unwrap()
        Traceback (most recent call last):
            ...
        pyoseq._results._option.OptionUnwrapError: called `unwrap` on a `None`

        ```
        """
        ...

    def expect(self, msg: str) -> T:
        """Returns the contained `Some` value, or raise with **msg**.

        Args:
            msg (str): The message to include in the exception if the option is `NONE`.

        Returns:
            T: The contained value.

        Raises:
            OptionUnwrapError: If the option is `NONE`.

        Example:
        ```python
        >>> import pyoseq as ps
        >>> ps.Some("value").expect("needs a value")
        'value'
        >>> ps.NONE.expect("needs a value")
        Traceback (most recent call last):
            ...
        pyoseq._results._option.OptionUnwrapError: needs a value (called `expect` on a `None`)

        ```
        """
        if self.is_some():
            return self.unwrap()
        msg = f"{msg} (called `expect` on a `None`)"
        raise OptionUnwrapError(msg)

    def unwrap_or(self, default: T) -> T:
        """Returns the contained `Some` value or **default**.

        Example:
        ```python
        >>> import pyoseq as ps
        >>> ps.Some("car").unwrap_or("bike")
        'car'
        >>> ps.NONE.unwrap_or("bike")
        'bike'

        ```
        """
        return self.unwrap() if self.is_some() else default

    def unwrap_or_else(self, f: Callable[[], T]) -> T:
        """Returns the contained `Some` value or computes it from **f**.

        Example:
        ```python
        >>> import pyoseq as ps
        >>> ps.NONE.unwrap_or_else(lambda: 20)
        20

        ```
        """
        return self.unwrap() if self.is_some() else f()

    def map[U](self, f: Callable[[T], U]) -> Option[U]:
        """Maps an `Option[T]` to `Option[U]`, leaving `NONE` untouched.

        Example:
        ```python
        >>> import pyoseq as ps
        >>> ps.Some("Hello, World!").map(len)
        Some(value=13)
        >>> ps.NONE.map(len)
        NONE

        ```
        """
        if self.is_some():
            return Some(f(self.unwrap()))
        return NONE

    def and_then[U](self, f: Callable[[T], Option[U]]) -> Option[U]:
        """Calls **f** with the contained value if `Some`, otherwise returns `NONE`.

        Example:
        ```python
        >>> import pyoseq as ps
        >>> ps.Some(2).and_then(lambda x: ps.Some(x * x))
        Some(value=4)
        >>> ps.Some(2).and_then(lambda _: ps.NONE)
        NONE

        ```
        """
        if self.is_some():
            return f(self.unwrap())
        return NONE

    def or_else(self, f: Callable[[], Option[T]]) -> Option[T]:
        """Returns the option if it is `Some`, otherwise the result of **f**.

        Example:
        ```python
        >>> import pyoseq as ps
        >>> ps.NONE.or_else(lambda: ps.Some("vikings"))
        Some(value='vikings')

        ```
        """
        return self if self.is_some() else f()


@dataclass(slots=True)
class Some[T](Option[T]):
    """Option variant representing the presence of a value."""

    value: T

    def is_some(self) -> TypeIs[Some[T]]:  # type: ignore[misc]
        return True

    def is_none(self) -> TypeIs[NoneOption]:  # type: ignore[misc]
        return False

    def unwrap(self) -> T:
        return self.value


@dataclass(slots=True)
class NoneOption(Option[Any]):
    """Option variant representing the absence of a value."""

    def __repr__(self) -> str:
        return "NONE"

    def is_some(self) -> TypeIs[Some[Any]]:  # type: ignore[misc]
        return False

    def is_none(self) -> TypeIs[NoneOption]:  # type: ignore[misc]
        return True

    def unwrap(self) -> Never:
        raise OptionUnwrapError("called `unwrap` on a `None`")


NONE: Option[Any] = NoneOption()
"""Singleton instance representing the absence of a value."""
