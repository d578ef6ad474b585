"""Package-manager command strings and instruction formatting."""

from __future__ import annotations

from collections.abc import Iterable, Sequence

# Package manager -> (add verb, dev flag, one-off executor)
_COMMANDS: dict[str, tuple[str, str, str]] = {
    "npm": ("npm install", "--save-dev", "npx"),
    "yarn": ("yarn add", "--dev", "yarn dlx"),
    "pnpm": ("pnpm add", "--save-dev", "pnpm dlx"),
    "bun": ("bun add", "--dev", "bunx"),
}


def install_command(package_manager: str) -> str:
    """Install everything declared in ``package.json``: ``pnpm install``."""
    return f"{package_manager} install"


def add_command(package_manager: str, packages: Iterable[str], *, dev: bool = False) -> str:
    """Add *packages* as (dev) dependencies: ``yarn add --dev prettier``."""
    verb, dev_flag, _ = _COMMANDS[package_manager]
    parts = [verb]
    if dev:
        parts.append(dev_flag)
    parts.extend(packages)
    return " ".join(parts)


def run_script(package_manager: str, script: str, *args: str) -> str:
    """Run a ``package.json`` script: ``npm run db:seed``."""
    command = f"{package_manager} run {script}"
    if args:
        separator = " -- " if package_manager == "npm" else " "
        command += separator + " ".join(args)
    return command


def exec_command(package_manager: str, tool: str) -> str:
    """Run a package binary without installing it: ``bunx shadcn@latest``."""
    return f"{_COMMANDS[package_manager][2]} {tool}"


def split_specifier(spec: str) -> tuple[str, str]:
    """Split ``name@version`` (scoped names allowed); bare names map to ``latest``."""
    index = spec.rfind("@")
    if index > 0:
        return spec[:index], spec[index + 1:]
    return spec, "latest"


def numbered_steps(title: str, steps: Sequence[tuple[str, Sequence[str]]], footer: Sequence[str] = ()) -> list[str]:
    """Format ``(heading, indented lines)`` pairs as a numbered checklist.

    Example::

        numbered_steps("Setup", [("Install dependencies", ["npm install"])])
        -> ["Setup", "", "1. Install dependencies", "   npm install", ""]
    """
    lines = [title, ""]
    for number, (heading, body) in enumerate(steps, start=1):
        lines.append(f"{number}. {heading}")
        lines.extend(f"   {line}" if line else "" for line in body)
        lines.append("")
    lines.extend(footer)
    return lines
