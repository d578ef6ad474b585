"""next-scaffold command line entry point.

Builds a partial configuration from up to three layers, generates the chosen
family and writes the files under ``<output>/<projectName>/``:

1. ``--preset``  a named full configuration of the family
2. ``--config``  a JSON file holding a (partial) configuration object
3. ``--set``     individual ``key=value`` overrides, ``section.key=value``
                 for nested records

Usage::

    next-scaffold --dry-run
    next-scaffold --family auth --preset enterprise --set projectName=acme-auth
    next-scaffold --family forms --config signup.json --output ./out
"""

from __future__ import annotations

import argparse
import asyncio
import json
import logging
import sys
from pathlib import Path
from typing import Any

from pydantic import BaseModel
from rich.markup import escape
from rich.panel import Panel

from . import generate
from .config import Settings
from .core.errors import ConfigurationError
from .core.models import GenerationSuccess
from .core.schema import is_record, resolve_field, unwrap_optional
from .families import get_family, list_families
from .utils import (
    console,
    is_non_empty_dir,
    load_json,
    print_error,
    print_file_tree,
    print_success,
    print_summary_table,
    print_warning,
    write_files,
)

logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# Configuration layering
# ---------------------------------------------------------------------------


def parse_override(assignment: str, model: type[BaseModel] | None = None) -> tuple[list[str], Any]:
    """Split ``key=value`` (or ``section.key=value``) into a key path and a
    value.  The value is decoded as JSON when possible and kept as a plain
    string otherwise, so ``--set projectName=shop`` needs no quoting.  When
    *model* declares the target as a string field the raw text is kept as is,
    so ``--set projectName=2048`` stays a string.

    Raises:
        ConfigurationError: If the assignment has no ``=`` or an empty key.
    """
    key, sep, raw = assignment.partition("=")
    keys = [part.strip() for part in key.split(".")]
    if not sep or not all(keys):
        raise ConfigurationError(f"Invalid --set value {assignment!r}: expected key=value")
    if len(keys) > 2:
        raise ConfigurationError(f"Invalid --set key {key!r}: at most one level of nesting is supported")
    if model is not None and _is_string_field(model, keys):
        return keys, raw
    try:
        value = json.loads(raw)
    except json.JSONDecodeError:
        value = raw
    return keys, value


def _is_string_field(model: type[BaseModel], keys: list[str]) -> bool:
    annotation: Any = model
    for key in keys:
        if not is_record(annotation):
            return False
        resolved = resolve_field(annotation, key)
        if resolved is None:
            return False
        annotation, _ = unwrap_optional(resolved[1].annotation)
    return annotation is str


def layer(base: dict[str, Any], override: dict[str, Any]) -> dict[str, Any]:
    """Lay *override* over *base*: nested objects merge one level deep,
    everything else (lists included) is replaced."""
    merged = dict(base)
    for key, value in override.items():
        current = merged.get(key)
        if isinstance(current, dict) and isinstance(value, dict):
            merged[key] = {**current, **value}
        else:
            merged[key] = value
    return merged


def build_partial(
    family: str,
    preset: str | None = None,
    config_path: str | None = None,
    overrides: list[str] | None = None,
) -> dict[str, Any]:
    """Combine the preset, the config file and ``--set`` overrides."""
    target = get_family(family)
    partial: dict[str, Any] = {}
    if preset:
        partial = target.preset(preset).model_dump(mode="json", by_alias=True)
    if config_path:
        partial = layer(partial, load_json(config_path))
    for assignment in overrides or []:
        keys, value = parse_override(assignment, target.model)
        if len(keys) == 1:
            partial = layer(partial, {keys[0]: value})
        else:
            partial = layer(partial, {keys[0]: {keys[1]: value}})
    return partial


# ---------------------------------------------------------------------------
# Output
# ---------------------------------------------------------------------------


def _print_presets(family: str) -> None:
    target = get_family(family)
    data = {name: getattr(preset, "project_name", "") for name, preset in sorted(target.presets.items())}
    print_summary_table(data, title=f"Presets for '{family}'")


def _print_result(result: GenerationSuccess, settings: Settings) -> None:
    print_summary_table(
        {
            "Family": settings.family,
            "Project": result.config.project_name,
            "Files": str(len(result.files)),
            "Package scripts": ", ".join(result.package_scripts) or "(none)",
        },
        title="Generation Summary",
    )
    if result.instructions:
        console.print(Panel(escape("\n".join(result.instructions)), title="[bold]Next steps[/bold]", border_style="cyan"))


async def materialise(result: GenerationSuccess, settings: Settings) -> list[Path]:
    """Write *result* to disk, or only list it for a dry run."""
    root = settings.project_root(result.config.project_name)
    if settings.dry_run:
        print_file_tree(result.paths, root.as_posix())
        return []
    if is_non_empty_dir(root) and not settings.overwrite:
        raise ConfigurationError(f"{root} is not empty; pass --overwrite to write into it")
    written = await write_files(result.files, root, overwrite=settings.overwrite)
    print_success(f"Wrote {len(written)} file(s) to {root}")
    return written


# ---------------------------------------------------------------------------
# Entry point
# ---------------------------------------------------------------------------


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="next-scaffold",
        description="Config-driven scaffolding for Next.js projects",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=(
            "Examples:\n"
            "  next-scaffold --dry-run\n"
            "  next-scaffold --family database --preset enterprise\n"
            "  next-scaffold --family forms --config contact.json --set formName=Support\n"
        ),
    )
    parser.add_argument("--family", "-f", default=None, choices=list_families(),
                        help="Template family to generate (default: project)")
    parser.add_argument("--preset", "-p", default=None, help="Start from a named preset")
    parser.add_argument("--config", "-c", default=None, help="JSON file with a partial configuration")
    parser.add_argument("--set", dest="overrides", action="append", default=[], metavar="KEY=VALUE",
                        help="Override one configuration value (repeatable)")
    parser.add_argument("--output", "-o", default=None, help="Output directory (default: .)")
    parser.add_argument("--dry-run", action="store_true", help="List the files without writing them")
    parser.add_argument("--overwrite", action="store_true", help="Write into a non-empty project directory")
    parser.add_argument("--list-presets", action="store_true", help="List the presets of the family and exit")
    parser.add_argument("--verbose", "-v", action="store_true", help="Enable debug logging")
    return parser


def main(argv: list[str] | None = None) -> int:
    """CLI entry point for ``next-scaffold``; returns the process exit code."""
    args = build_parser().parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    env = Settings.from_env()
    settings = Settings(
        output_dir=Path(args.output) if args.output else env.output_dir,
        family=args.family or env.family,
        preset=args.preset or env.preset,
        overwrite=args.overwrite or env.overwrite,
        dry_run=args.dry_run,
    )

    try:
        if args.list_presets:
            _print_presets(settings.family)
            return 0

        partial = build_partial(settings.family, settings.preset, args.config, args.overrides)
        logger.debug("Partial configuration: %s", partial)
        result = generate(partial, family=settings.family)

        if not result.success:
            print_error(f"Configuration rejected ({len(result.errors)} error(s)):")
            for error in result.errors:
                console.print(f"  - {escape(error)}")
            return 1

        asyncio.run(materialise(result, settings))
        _print_result(result, settings)
        if settings.dry_run:
            print_warning("Dry run: nothing was written.")
        return 0
    except ConfigurationError as exc:
        print_error(f"Error: {exc}")
        return 1
    except OSError as exc:
        print_error(f"Error: could not write files: {exc}")
        return 1


if __name__ == "__main__":
    sys.exit(main())

