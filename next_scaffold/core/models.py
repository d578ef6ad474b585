"""Pydantic v2 models shared by every template family.

Configuration models use camelCase aliases on the wire (``projectName``,
``packageManager``) and snake_case attributes in Python.  Both spellings are
accepted as input.  Merged configurations are frozen so no section generator
can alter what the next one sees.
"""

from __future__ import annotations

from enum import Enum
from typing import Literal, Union

from pydantic import BaseModel, ConfigDict, Field, SerializeAsAny, field_validator
from pydantic.alias_generators import to_camel


# ---------------------------------------------------------------------------
# Enumerations
# ---------------------------------------------------------------------------

class PackageManager(str, Enum):
    """JavaScript package managers the generated projects can target."""
    NPM = "npm"
    YARN = "yarn"
    PNPM = "pnpm"
    BUN = "bun"


# ---------------------------------------------------------------------------
# Configuration base classes
# ---------------------------------------------------------------------------

class ConfigModel(BaseModel):
    """Base for every configuration record (top-level and nested)."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        use_enum_values=True,
        validate_default=True,
        frozen=True,
        extra="forbid",
    )


class ProjectSettings(ConfigModel):
    """Identity and toolchain fields carried by every family."""

    project_name: str = Field(default="my-app", description="npm package name of the generated project")
    package_manager: PackageManager = Field(default=PackageManager.NPM)
    generated_banner: bool = Field(
        default=False,
        description="Prefix a single 'generated at' comment line to every file that supports comments",
    )


# ---------------------------------------------------------------------------
# Output records
# ---------------------------------------------------------------------------

class FileRecord(BaseModel):
    """One virtual output file: a relative POSIX path and its text content."""

    model_config = ConfigDict(frozen=True)

    path: str
    content: str

    @field_validator("path")
    @classmethod
    def _check_path(cls, value: str) -> str:
        problem = path_problem(value)
        if problem:
            raise ValueError(f"invalid output path {value!r}: {problem}")
        return value


def path_problem(path: str) -> str | None:
    """Return why *path* is not a valid relative output path, or ``None``."""
    if not path:
        return "path is empty"
    if "\\" in path:
        return "backslashes are not allowed"
    if path.startswith("/"):
        return "path must be relative"
    for segment in path.split("/"):
        if segment in ("", ".", ".."):
            return f"segment {segment!r} is not allowed"
    return None


# ---------------------------------------------------------------------------
# Generation results
# ---------------------------------------------------------------------------

class _ResultModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class GenerationSuccess(_ResultModel):
    """Every section ran; *files* is the complete, path-unique output."""

    success: Literal[True] = True
    config: SerializeAsAny[ConfigModel]
    files: list[FileRecord] = Field(default_factory=list)
    package_scripts: dict[str, str] = Field(default_factory=dict)
    instructions: list[str] = Field(default_factory=list)

    @property
    def paths(self) -> list[str]:
        return [record.path for record in self.files]

    def file(self, path: str) -> FileRecord | None:
        """Return the record at *path*, or ``None`` if it was not generated."""
        for record in self.files:
            if record.path == path:
                return record
        return None


class GenerationFailure(_ResultModel):
    """Validation rejected the input; no generator ran."""

    success: Literal[False] = False
    errors: list[str] = Field(default_factory=list)


GenerationResult = Union[GenerationSuccess, GenerationFailure]
