"""Semantic rules for the ``project`` family."""

from __future__ import annotations

import re

from ...core.validation import INVALID, ConfigInspector, check_project_name, present

# name@range, with optional @scope/ prefix; bare names are accepted too.
PACKAGE_SPEC_PATTERN = re.compile(r"^(@[a-z0-9][a-z0-9._-]*/)?[a-z0-9][a-z0-9._-]*(@[^\s@]+)?$")

DEPENDENCY_GROUPS = ("core", "dev", "ui", "validation", "database", "auth")


def check_dependencies(inspector: ConfigInspector) -> None:
    """Each dependency entry is an npm ``name@version`` specifier."""
    for group in DEPENDENCY_GROUPS:
        if not inspector.provided("dependencies", group):
            continue
        specs = inspector.value("dependencies", group)
        if specs is INVALID:
            continue
        for index, spec in enumerate(specs):
            if spec is INVALID:
                continue
            if not PACKAGE_SPEC_PATTERN.match(spec):
                inspector.error(
                    f"'{inspector.label('dependencies', group, index)}' {spec!r} is not a valid "
                    f"package specifier (expected name@version)"
                )


def check_feature_requirements(inspector: ConfigInspector) -> None:
    """Seeding needs the Prisma setup that comes with ``database``."""
    features = present(inspector.value("features"))
    if "seeding" in features and "database" not in features:
        inspector.error("Feature 'seeding' requires feature 'database'")


def check_core_dependencies(inspector: ConfigInspector) -> None:
    """``next`` must stay among the core dependencies."""
    specs = inspector.value("dependencies", "core")
    if specs is INVALID or INVALID in specs:
        return
    if any(not PACKAGE_SPEC_PATTERN.match(spec) for spec in specs):
        return
    if "next" not in {_package_name(spec) for spec in specs}:
        inspector.error("'dependencies.core' must include the 'next' package")


def _package_name(spec: str) -> str:
    index = spec.rfind("@")
    return spec[:index] if index > 0 else spec


CHECKS = (
    check_project_name,
    check_dependencies,
    check_feature_requirements,
    check_core_dependencies,
)
