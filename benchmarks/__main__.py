"""Entry point for benchmarks CLI."""

from typing import Annotated

import typer

from . import benchs  # pyright: ignore[reportUnusedImport] # noqa: F401
from ._pipeline import run_pipeline, select, to_table
from ._registery import BENCHMARKS, CONSOLE

app = typer.Typer(help="Benchmarks for pyoseq developments.")


@app.command(name="list")
def list_() -> None:
    """List all registered benchmarks."""
    for benchmark in BENCHMARKS:
        CONSOLE.print(f"{benchmark.category}: {benchmark.name}")


@app.command()
def run(
    *,
    category: Annotated[
        str | None, typer.Option("--category", "-c", help="Only run this category.")
    ] = None,
) -> None:
    """Run benchmarks and print their median timings."""
    CONSOLE.print("Running benchmarks...", style="bold blue")
    selected = select(category)
    if not selected:
        CONSOLE.print(f"✗ No benchmark in category {category!r}", style="bold red")
        raise typer.Exit(code=1)
    CONSOLE.print(to_table(run_pipeline(selected)))
    CONSOLE.print("✓ Done", style="bold green")


if __name__ == "__main__":
    app()
