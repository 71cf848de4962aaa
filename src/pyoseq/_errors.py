import operator


class EmptyReduceError(TypeError):
    """Raised when reducing an empty sequence without an initial value."""

    def __init__(self, operation: str = "reduce") -> None:
        self.operation = operation
        super().__init__(f"{operation}() of empty sequence with no initial value")


def check_limit(limit: int) -> int:
    """Validate a `take`/`drop` limit before anything is pulled."""
    if isinstance(limit, bool):
        msg = f"limit must be an integer, got {limit!r}"
        raise TypeError(msg)
    limit = operator.index(limit)
    if limit < 0:
        msg = f"limit must be a non-negative integer, got {limit}"
        raise ValueError(msg)
    return limit


def check_callable(func: object, name: str) -> None:
    if not callable(func):
        msg = f"{name} must be callable, got {type(func).__name__!r}"
        raise TypeError(msg)
