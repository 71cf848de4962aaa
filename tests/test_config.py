"""Tests for the display configuration."""

from collections.abc import Iterator

import pytest

import pyoseq as ps


@pytest.fixture
def restore_config() -> Iterator[None]:
    previous = ps.get_config()
    yield
    ps.set_config(
        max_items=previous.max_items, depth=previous.depth, width=previous.width
    )


def test_repr_does_not_consume() -> None:
    """Displaying a sequence never pulls it."""
    it = ps.Iter([1, 2]).map(str)
    assert repr(it) == "Iter(<SyncSource>)"
    assert repr(ps.AsyncIter([1])) == "AsyncIter(<AsyncSource>)"
    assert it.to_array() == ["1", "2"]


def test_set_config_is_immutable(restore_config: None) -> None:  # noqa: ARG001
    """set_config swaps in a new Config instead of mutating."""
    before = ps.get_config()
    after = ps.set_config(max_items=3)
    assert before.max_items == 20
    assert after.max_items == 3
    assert ps.get_config() is after


def test_unknown_field(restore_config: None) -> None:  # noqa: ARG001
    """Only known fields can be changed."""
    with pytest.raises(TypeError):
        ps.set_config(colour="red")


def test_partition_repr(restore_config: None) -> None:  # noqa: ARG001
    """Long halves are truncated."""
    ps.set_config(max_items=3)
    result = ps.Iter(range(5)).partition(lambda x: x < 4)
    assert repr(result) == "Partitioned(matching=[0, 1, 2]..., rest=[4])"
