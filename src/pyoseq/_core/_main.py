from __future__ import annotations

from collections.abc import Callable
from typing import Concatenate, Self


class Pipeable:
    """Mixin class providing pipeable methods for fluent chaining."""

    __slots__ = ()

    def into[**P, R](
        self,
        func: Callable[Concatenate[Self, P], R],
        *args: P.args,
        **kwargs: P.kwargs,
    ) -> R:
        """Convert `Self` to `R`.

        This method allows to pipe the instance into an object or function that can convert `Self` into another type.

        Conceptually, this allow to do `x.into(f)` instead of `f(x)`, hence keeping a fluent chaining style.

        Args:
            func (Callable[Concatenate[Self, P], R]): Function for conversion.
            *args (P.args): Positional arguments to pass to **func**.
            **kwargs (P.kwargs): Keyword arguments to pass to **func**.

        Returns:
            R: The converted value.

        Example:
        ```python
        >>> import pyoseq as ps
        >>> def total(data: ps.Iter[int]) -> int:
        ...     return data.reduce(lambda acc, x: acc + x, 0)
        >>>
        >>> ps.Iter([1, 2, 3]).map(lambda x: x * 10).into(total)
        60

        ```
        """
        return func(self, *args, **kwargs)

    def inspect[**P](
        self,
        func: Callable[Concatenate[Self, P], object],
        *args: P.args,
        **kwargs: P.kwargs,
    ) -> Self:
        """Pass `Self` to **func** to perform side effects without altering the data.

        Nothing is pulled from the sequence unless **func** pulls from it.

        Args:
            func (Callable[Concatenate[Self, P], object]): Function to apply to the instance for side effects.
            *args (P.args): Positional arguments to pass to **func**.
            **kwargs (P.kwargs): Keyword arguments to pass to **func**.

        Returns:
            Self: The instance itself, unchanged.

        Example:
        ```python
        >>> import pyoseq as ps
        >>> seen: list[str] = []
        >>> ps.Iter([1, 2]).inspect(lambda it: seen.append(type(it).__name__)).count()
        2
        >>> seen
        ['Iter']

        ```
        """
        func(self, *args, **kwargs)
        return self
