from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass, replace
from typing import Any

from ._format import collection_repr, handle_repr


@dataclass(slots=True, frozen=True)
class Config:
    """Process-wide display settings.

    Args:
        max_items (int): Maximum number of items rendered for a collection. Defaults to 20.
        depth (int): Maximum nesting depth rendered for a collection. Defaults to 3.
        width (int): Target line width of rendered collections. Defaults to 80.
    """

    max_items: int = 20
    depth: int = 3
    width: int = 80

    def iter_repr(self, data: object) -> str:
        return handle_repr(data)

    def collection_repr(self, values: Sequence[Any]) -> str:
        return collection_repr(
            values, max_items=self.max_items, depth=self.depth, width=self.width
        )


_CONFIG = Config()


def get_config() -> Config:
    """Get the current `Config`.

    Returns:
        Config: The active configuration.

    Example:
    ```python
    >>> import pyoseq as ps
    >>> ps.get_config().max_items
    20

    ```
    """
    return _CONFIG


def set_config(**changes: Any) -> Config:
    """Replace fields of the current `Config`.

    Args:
        **changes (Any): Field names and their new values.

    Returns:
        Config: The new active configuration.

    Example:
    ```python
    >>> import pyoseq as ps
    >>> ps.set_config(max_items=2).max_items
    2
    >>> ps.Iter([1, 2, 3, 4]).partition(lambda x: x > 0)
    Partitioned(matching=[1, 2]..., rest=[])
    >>> _ = ps.set_config(max_items=20)

    ```
    """
    global _CONFIG  # noqa: PLW0603
    _CONFIG = replace(_CONFIG, **changes)
    return _CONFIG
