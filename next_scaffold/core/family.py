"""Template family contract.

A family bundles everything the assembler needs to scaffold one output area:
the configuration model and its defaults, the semantic validation rules, the
ordered section generators, the derivation of package scripts and setup
instructions, and the named presets.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import Callable, Mapping
from dataclasses import dataclass, field
from typing import Any, ClassVar

from ..scaffolder.templates import TemplateRenderer
from .errors import ConfigurationError
from .merge import merge_config
from .models import ConfigModel, FileRecord
from .validation import Check, ConfigInspector


# ---------------------------------------------------------------------------
# Section generators
# ---------------------------------------------------------------------------


class SectionGenerator(ABC):
    """Produces the files of one logical output area.

    Subclasses implement :meth:`generate` as a pure function of the merged
    configuration.  Each section owns a disjoint set of output paths and may
    return an empty list when its feature is switched off.
    """

    #: Short name used in logs and invariant messages.
    name: ClassVar[str] = "section"

    def __init__(self, renderer: TemplateRenderer) -> None:
        self.renderer = renderer

    @abstractmethod
    def generate(self, config: Any) -> list[FileRecord]:
        """Return the files for *config*, in a stable order."""

    def render(self, path: str, template: str, **context: Any) -> FileRecord:
        """Render *template* with *context* into a record at *path*."""
        return FileRecord(path=path, content=self.renderer.render(template, context))


# ---------------------------------------------------------------------------
# Family descriptor
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class TemplateFamily:
    """Static description of one template family."""

    name: str
    description: str
    model: type[ConfigModel]
    defaults: ConfigModel
    sections: tuple[type[SectionGenerator], ...]
    checks: tuple[Check, ...]
    package_scripts: Callable[[Any], dict[str, str]]
    instructions: Callable[[Any], list[str]]
    presets: Mapping[str, ConfigModel] = field(default_factory=dict)

    def validate(self, partial: Any) -> list[str]:
        """Every violation in *partial*, or ``[]`` when it is acceptable."""
        return ConfigInspector(partial, self.model, self.defaults).run(self.checks)

    def merge(self, partial: Any) -> ConfigModel:
        return merge_config(partial, self.defaults)

    def preset(self, name: str) -> ConfigModel:
        """Return the preset called *name*.

        Raises:
            ConfigurationError: If the family has no such preset.
        """
        try:
            return self.presets[name]
        except KeyError:
            available = ", ".join(sorted(self.presets)) or "none"
            raise ConfigurationError(
                f"Unknown preset {name!r} for family {self.name!r} (available: {available})"
            ) from None
