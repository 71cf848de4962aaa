"""Check that code blocks in docstrings are closed, and safe to run as doctests."""

import ast
import re
import sys
from pathlib import Path
from typing import NamedTuple, TypeIs

import rich
import rich.table
import rich.text

import pyoseq as ps

SRC_DIR = Path().joinpath("src", "pyoseq")
CODE_BLOCK_PATTERN = re.compile(r"^```(\w*)")
FENCE = "```"


class ErrorDetail(NamedTuple):
    """Detail of an error with its line number."""

    line_no: int
    message: str


class DocstringError(NamedTuple):
    """Errors found in one docstring."""

    file_path: Path
    func_name: str
    errors: list[ErrorDetail]


class Block(NamedTuple):
    """An opened code block."""

    line_no: int
    language: str


def _is_documentable(
    node: ast.AST,
) -> TypeIs[ast.FunctionDef | ast.AsyncFunctionDef | ast.ClassDef]:
    return isinstance(node, (ast.FunctionDef, ast.AsyncFunctionDef, ast.ClassDef))


def _check_file(file_path: Path) -> list[DocstringError]:
    tree = ast.parse(file_path.read_text(encoding="utf-8"))
    return (
        ps.Iter(ast.walk(tree))
        .filter(_is_documentable)
        .map(lambda node: _check_node(file_path, node))
        .filter(lambda error: error.is_some())
        .map(lambda error: error.unwrap())
        .to_array()
    )


def _check_node(
    file_path: Path, node: ast.FunctionDef | ast.AsyncFunctionDef | ast.ClassDef
) -> ps.Option[DocstringError]:
    return (
        ps.Option.from_(ast.get_docstring(node, clean=False))
        .map(lambda doc: _check_code_blocks(doc, node.lineno))
        .and_then(lambda errors: ps.Some(errors) if errors else ps.NONE)
        .map(lambda errors: DocstringError(file_path, node.name, errors))
    )


def _check_code_blocks(docstring: str, start_line: int) -> list[ErrorDetail]:
    """Check that every code block is closed, and that python blocks end with a blank line.

    Without that blank line, doctest would read the closing fence as expected output.
    """
    errors: list[ErrorDetail] = []
    opened: Block | None = None
    previous = ""
    for idx, raw in ps.Iter(docstring.split("\n")).as_indexed_pairs():
        line = raw.strip()
        line_no = start_line + idx
        match (opened, CODE_BLOCK_PATTERN.match(line)):
            case (None, None):
                pass
            case (None, found) if line == FENCE:
                errors.append(
                    ErrorDetail(line_no, "Closing block ``` without matching opening")
                )
            case (None, found):
                opened = Block(line_no, found.group(1) or "plaintext")
            case (Block(language="python"), _) if line == FENCE and previous:
                errors.append(
                    ErrorDetail(line_no, "Missing blank line before closing ```")
                )
                opened = None
            case (Block(), _) if line == FENCE:
                opened = None
            case _:
                pass
        previous = line
    if opened is not None:
        errors.append(ErrorDetail(opened.line_no, f"Unclosed ```{opened.language} block"))
    return errors


def main() -> None:
    """Check all docstrings in the project."""
    rich.print(
        rich.text.Text("Checking docstrings code blocks...", style="cyan bold")
    )
    files = sorted(SRC_DIR.rglob("*.py"))
    rich.print(f"Checking {len(files)} py files...")
    all_errors = ps.Iter(files).flat_map(_check_file).to_array()

    if not all_errors:
        rich.print(rich.text.Text("[OK] No issues found!", style="green"))
        return

    table = rich.table.Table(title="Issues Found", show_header=True)
    table.add_column("File", style="cyan")
    table.add_column("Function", style="magenta")
    table.add_column("Error", style="red")
    for error in all_errors:
        table.add_row(
            f"{error.file_path.relative_to(Path())}:{error.errors[0].line_no}",
            error.func_name,
            ps.Iter(error.errors).map(lambda e: e.message).join("\n"),
        )
    rich.print(table)
    rich.print(
        rich.text.Text(f"\n[FAILED] Found {len(all_errors)} issue(s)", style="red")
    )
    sys.exit(1)


if __name__ == "__main__":
    main()
