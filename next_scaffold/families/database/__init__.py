"""Prisma database layer: schema, seed, client, Zod model schemas, shared
types, client extensions and migration scripts."""

from next_scaffold.core.family import TemplateFamily
from next_scaffold.families.database.config import (
    DEFAULTS,
    PRESETS,
    DatabaseConfig,
    DatabaseFeature,
    DatabaseKind,
    ModelSelection,
)
from next_scaffold.families.database.sections import SECTIONS, instructions, package_scripts
from next_scaffold.families.database.validator import CHECKS

FAMILY = TemplateFamily(
    name="database",
    description="Prisma schema, client, validation and migrations",
    model=DatabaseConfig,
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
    "DatabaseConfig",
    "DatabaseFeature",
    "DatabaseKind",
    "ModelSelection",
]
