"""Benchmarks for pyoseq pipelines, each against its builtin counterpart."""

import itertools

import pyoseq as ps

from ._registery import bench


def _square(x: int) -> int:
    return x * x


def _is_even(x: int) -> bool:
    return x % 2 == 0


class Map:
    """Benchmark `map` against the builtin."""

    @bench()
    @staticmethod
    def pyoseq(data: list[int]) -> object:
        """Benchmark Iter.map."""
        return ps.Iter(data).map(_square).to_array()

    @bench()
    @staticmethod
    def builtin(data: list[int]) -> object:
        """Benchmark builtin map."""
        return list(map(_square, data))


class Filter:
    """Benchmark `filter` against the builtin."""

    @bench()
    @staticmethod
    def pyoseq(data: list[int]) -> object:
        """Benchmark Iter.filter."""
        return ps.Iter(data).filter(_is_even).to_array()

    @bench()
    @staticmethod
    def builtin(data: list[int]) -> object:
        """Benchmark builtin filter."""
        return list(filter(_is_even, data))


class Pipeline:
    """Benchmark a filter, map and take chain."""

    @bench()
    @staticmethod
    def pyoseq(data: list[int]) -> object:
        """Benchmark a chained Iter pipeline."""
        return ps.Iter(data).filter(_is_even).map(_square).take(100).to_array()

    @bench()
    @staticmethod
    def builtin(data: list[int]) -> object:
        """Benchmark the equivalent itertools pipeline."""
        return list(itertools.islice(map(_square, filter(_is_even, data)), 100))


class Zip:
    """Benchmark `zip` against the builtin."""

    @bench()
    @staticmethod
    def pyoseq(data: list[int]) -> object:
        """Benchmark Iter.zip."""
        return ps.Iter(data).zip(data).to_array()

    @bench()
    @staticmethod
    def builtin(data: list[int]) -> object:
        """Benchmark builtin zip."""
        return list(zip(data, data, strict=False))


class FlatMap:
    """Benchmark `flat_map` against `itertools.chain`."""

    @bench(gen=lambda size: size.map(lambda x: [x, x]).to_array())
    @staticmethod
    def pyoseq(data: list[list[int]]) -> object:
        """Benchmark Iter.flat_map."""
        return ps.Iter(data).flat_map(lambda pair: pair).to_array()

    @bench(gen=lambda size: size.map(lambda x: [x, x]).to_array())
    @staticmethod
    def builtin(data: list[list[int]]) -> object:
        """Benchmark itertools.chain.from_iterable."""
        return list(itertools.chain.from_iterable(data))


class Reduce:
    """Benchmark `reduce` against `sum`."""

    @bench()
    @staticmethod
    def pyoseq(data: list[int]) -> object:
        """Benchmark Iter.reduce."""
        return ps.Iter(data).reduce(lambda acc, x: acc + x, 0)

    @bench()
    @staticmethod
    def builtin(data: list[int]) -> object:
        """Benchmark builtin sum."""
        return sum(data)
