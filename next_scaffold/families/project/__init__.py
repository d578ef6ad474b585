"""Base Next.js project: package.json, TypeScript/JavaScript config, app shell,
utilities, optional Prisma bootstrap and tooling."""

from next_scaffold.core.family import TemplateFamily
from next_scaffold.families.project.config import (
    DEFAULTS,
    PRESETS,
    DependencySet,
    ProjectConfig,
    ProjectFeature,
)
from next_scaffold.families.project.sections import SECTIONS, instructions, package_scripts
from next_scaffold.families.project.validator import CHECKS

FAMILY = TemplateFamily(
    name="project",
    description="Next.js base project structure",
    model=ProjectConfig,
    defaults=DEFAULTS,
    sections=SECTIONS,
    checks=CHECKS,
    package_scripts=package_scripts,
    instructions=instructions,
    presets=PRESETS,
)

__all__ = [
    "DEFAULTS",
    "FAMILY",
    "PRESETS",
    "DependencySet",
    "ProjectConfig",
    "ProjectFeature",
]
