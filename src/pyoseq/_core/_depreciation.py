import warnings
from collections.abc import Callable
from functools import wraps


def deprecated_alias[**P, R](func: Callable[P, R], old_name: str) -> Callable[P, R]:
    msg = f"`{old_name}` is deprecated, use `{func.__name__}` instead."

    @wraps(func)
    def wrapper(*args: P.args, **kwargs: P.kwargs) -> R:
        warnings.warn(msg, DeprecationWarning, stacklevel=2)
        return func(*args, **kwargs)

    wrapper.__name__ = old_name
    return wrapper
