"""Aggregation and display of benchmark timings."""

import statistics
import subprocess
from typing import NamedTuple

from rich.table import Table

import pyoseq as ps

from ._registery import BENCHMARKS, CALLS_BY_RUN, Benchmark, Row, collect_raw_timings


class Stat(NamedTuple):
    """Median timing of one benchmark variant."""

    category: str
    name: str
    size: int
    runs: int
    median: float


def select(category: str | None) -> list[Benchmark]:
    """Registered benchmarks, optionally restricted to one category."""
    if not BENCHMARKS:
        msg = "No benchmarks registered!"
        raise RuntimeError(msg)
    return (
        ps.Iter(BENCHMARKS)
        .filter(lambda b: category is None or b.category == category)
        .to_array()
    )


def run_pipeline(benchmarks: list[Benchmark]) -> list[Stat]:
    """Time every variant and reduce the raw rows to medians."""
    return _compute_all_stats(collect_raw_timings(benchmarks))


def _compute_all_stats(raw_rows: list[Row]) -> list[Stat]:
    groups: dict[tuple[str, str, int], list[float]] = {}
    for row in raw_rows:
        groups.setdefault((row.category, row.name, row.size), []).append(
            row.time / CALLS_BY_RUN
        )
    return [
        Stat(category, name, size, len(times), statistics.median(times))
        for (category, name, size), times in groups.items()
    ]


def get_git_hash() -> str:
    """Current git commit hash, or `unknown` outside a checkout."""
    try:
        result = subprocess.run(
            ["git", "rev-parse", "--short", "HEAD"],  # noqa: S607
            capture_output=True,
            text=True,
            check=True,
        )
    except (OSError, subprocess.CalledProcessError):
        return "unknown"
    return result.stdout.strip()


def to_table(stats: list[Stat]) -> Table:
    """Render stats, with each pyoseq timing relative to the builtin baseline."""
    baselines = {
        (s.category, s.size): s.median for s in stats if s.name == "builtin"
    }
    table = Table(title=f"pyoseq benchmarks @ {get_git_hash()}")
    for column in ("category", "name", "size", "runs", "median (µs)", "vs builtin"):
        table.add_column(column)
    for stat in stats:
        baseline = baselines.get((stat.category, stat.size))
        ratio = "-" if baseline is None else f"x{stat.median / baseline:.2f}"
        table.add_row(
            stat.category,
            stat.name,
            str(stat.size),
            str(stat.runs),
            f"{stat.median * 1_000_000:.1f}",
            ratio,
        )
    return table
