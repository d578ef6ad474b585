"""Shared utility functions for next-scaffold.

Provides file materialisation for generated records, JSON loading for
configuration files and Rich-based console output used by the CLI.
"""

from __future__ import annotations

import asyncio
import json
from collections.abc import Iterable
from pathlib import Path
from typing import Any

from rich.console import Console
from rich.markup import escape
from rich.table import Table
from rich.tree import Tree

from .core.errors import ConfigurationError
from .core.models import FileRecord

console = Console()


# ---------------------------------------------------------------------------
# JSON I/O
# ---------------------------------------------------------------------------


def load_json(path: str | Path) -> dict[str, Any]:
    """Load a JSON configuration file that holds an object.

    Raises:
        ConfigurationError: If the file cannot be read, is not valid JSON or
            does not contain an object.
    """
    file_path = Path(path)
    try:
        data = json.loads(file_path.read_text(encoding="utf-8"))
    except OSError as exc:
        raise ConfigurationError(f"Cannot read configuration file {file_path}: {exc.strerror}") from exc
    except json.JSONDecodeError as exc:
        raise ConfigurationError(
            f"Configuration file {file_path} is not valid JSON (line {exc.lineno}, column {exc.colno})"
        ) from exc
    if not isinstance(data, dict):
        raise ConfigurationError(f"Configuration file {file_path} must contain a JSON object")
    return data


# ---------------------------------------------------------------------------
# File-system helpers
# ---------------------------------------------------------------------------


def resolve_inside(root: Path, relative: str) -> Path:
    """Join *relative* onto *root*, refusing paths that leave *root*."""
    base = root.resolve()
    target = (base / relative).resolve()
    if target != base and base not in target.parents:
        raise ValueError(f"Refusing to write outside {base}: {relative}")
    return target


def is_non_empty_dir(path: Path) -> bool:
    return path.is_dir() and any(path.iterdir())


async def write_files(records: Iterable[FileRecord], root: str | Path, overwrite: bool = False) -> list[Path]:
    """Write *records* under *root* and return the written paths.

    Parent directories are created automatically.  Each write runs in a
    thread-pool executor so a large project does not block the event loop.

    Raises:
        FileExistsError: If a target file exists and *overwrite* is false.
        ValueError: If a record path would escape *root*.
    """
    base = Path(root)
    loop = asyncio.get_running_loop()
    written: list[Path] = []
    for record in records:
        target = resolve_inside(base, record.path)
        if target.exists() and not overwrite:
            raise FileExistsError(f"{target} already exists")
        target.parent.mkdir(parents=True, exist_ok=True)
        await loop.run_in_executor(None, _write_text, target, record.content)
        written.append(target)
    return written


def _write_text(path: Path, content: str) -> None:
    # newline="" keeps the generated "\n" line endings on every platform.
    with path.open("w", encoding="utf-8", newline="") as handle:
        handle.write(content)


# ---------------------------------------------------------------------------
# Rich output helpers
# ---------------------------------------------------------------------------


def print_summary_table(data: dict[str, str], title: str = "Summary") -> None:
    """Print a two-column key/value summary table."""
    table = Table(title=title, show_header=True, header_style="bold cyan")
    table.add_column("Item", style="dim", no_wrap=True)
    table.add_column("Value")

    for key, value in data.items():
        table.add_row(escape(key), escape(str(value)))

    console.print(table)
    console.print()


def build_file_tree(paths: Iterable[str], root_label: str) -> Tree:
    """Arrange slash-separated *paths* into a Rich ``Tree``."""
    tree = Tree(f"[bold]{escape(root_label)}/[/bold]")
    nodes: dict[str, Tree] = {}
    for path in sorted(paths):
        parent = tree
        parts = path.split("/")
        for depth, part in enumerate(parts[:-1]):
            key = "/".join(parts[: depth + 1])
            if key not in nodes:
                nodes[key] = parent.add(f"[bold blue]{escape(part)}/[/bold blue]")
            parent = nodes[key]
        parent.add(escape(parts[-1]))
    return tree


def print_file_tree(paths: Iterable[str], root_label: str) -> None:
    console.print(build_file_tree(paths, root_label))


def print_success(message: str) -> None:
    """Print a green success message."""
    console.print(f"[bold green]{escape(message)}[/bold green]")


def print_error(message: str) -> None:
    """Print a red error message."""
    console.print(f"[bold red]{escape(message)}[/bold red]")


def print_warning(message: str) -> None:
    """Print a yellow warning message."""
    console.print(f"[bold yellow]{escape(message)}[/bold yellow]")
