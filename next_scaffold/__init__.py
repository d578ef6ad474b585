"""next-scaffold: config-driven scaffolding for Next.js projects.

Quick usage::

    from next_scaffold import generate, validate_config

    validate_config({"projectName": "My App!"})
    # ["Project name 'My App!' is invalid: it may contain only ..."]

    result = generate({"packageManager": "pnpm"}, family="project")
    if result.success:
        print(result.paths)
"""

from __future__ import annotations

from typing import Any

from .core import (
    ConfigurationError,
    FileRecord,
    GenerationFailure,
    GenerationResult,
    GenerationSuccess,
    InvariantViolation,
    TemplateAssembler,
    merge_config,
)
from .core.models import ConfigModel
from .families import DEFAULT_FAMILY, get_family, list_families

__version__ = "0.1.0"

_ASSEMBLERS: dict[str, TemplateAssembler] = {}


def _assembler(family: str) -> TemplateAssembler:
    if family not in _ASSEMBLERS:
        _ASSEMBLERS[family] = TemplateAssembler(get_family(family))
    return _ASSEMBLERS[family]


def validate_config(partial: Any, family: str = DEFAULT_FAMILY) -> list[str]:
    """Return every problem with *partial*; an empty list means it is valid."""
    return get_family(family).validate(partial)


def generate(partial: Any = None, family: str = DEFAULT_FAMILY) -> GenerationResult:
    """Validate, merge and run every section of *family* for *partial*."""
    return _assembler(family).assemble(partial)


def get_preset(family: str, name: str) -> ConfigModel:
    """Return the named full configuration of *family*."""
    return get_family(family).preset(name)


def list_presets(family: str = DEFAULT_FAMILY) -> list[str]:
    return list(get_family(family).presets)


__all__ = [
    "ConfigurationError",
    "FileRecord",
    "GenerationFailure",
    "GenerationResult",
    "GenerationSuccess",
    "InvariantViolation",
    "TemplateAssembler",
    "generate",
    "get_family",
    "get_preset",
    "list_families",
    "list_presets",
    "merge_config",
    "validate_config",
]
