from collections.abc import Sequence
from pprint import pformat
from typing import Any


def collection_repr(
    v: Sequence[Any],
    max_items: int = 20,
    depth: int = 3,
    width: int = 80,
    *,
    compact: bool = True,
) -> str:
    truncated = list(v[:max_items])
    suffix = "..." if len(v) > max_items else ""
    return pformat(truncated, depth=depth, width=width, compact=compact) + suffix


def handle_repr(v: object) -> str:
    # lazy handles are never consumed for display
    return f"<{type(v).__name__}>"
