"""Semantic rules for the ``database`` family."""

from __future__ import annotations

import re

from ...core.validation import INVALID, ConfigInspector, check_project_name, present
from ...scaffolder.templates import kebab_case

MODEL_NAME_PATTERN = re.compile(r"^[A-Z][A-Za-z0-9]*$")
BUILT_IN_MODELS = frozenset({"User", "Session", "Post", "Profile", "AuditLog"})
ENUM_NAMES = frozenset({"Role", "Status"})
# File stems already taken under shared/validation/models/.
RESERVED_MODULES = frozenset({"index"} | {kebab_case(name) for name in BUILT_IN_MODELS})


def check_custom_models(inspector: ConfigInspector) -> None:
    """Custom model names are PascalCase, unique and do not shadow built-ins."""
    names = inspector.value("models", "custom")
    if names is INVALID:
        return
    seen: dict[str, str] = {}
    for index, name in enumerate(names):
        if name is INVALID:
            continue
        label = inspector.label("models", "custom", index)
        module = kebab_case(name)
        if not MODEL_NAME_PATTERN.match(name):
            inspector.error(f"'{label}' {name!r} must be a PascalCase model name (e.g. 'Invoice')")
        elif name in BUILT_IN_MODELS:
            inspector.error(f"'{label}' {name!r} clashes with a built-in model")
        elif name in ENUM_NAMES:
            inspector.error(f"'{label}' {name!r} clashes with the generated enum {name!r}")
        elif name in seen.values():
            inspector.error(f"'{label}' {name!r} is declared more than once")
        elif module in RESERVED_MODULES:
            inspector.error(
                f"'{label}' {name!r} would be written to 'shared/validation/models/{module}.ts', "
                "which is already generated"
            )
        elif module in seen:
            inspector.error(
                f"'{label}' {name!r} and {seen[module]!r} would share 'shared/validation/models/{module}.ts'"
            )
        else:
            seen[module] = name


def check_provider_features(inspector: ConfigInspector) -> None:
    """Features that only some database providers support."""
    database = inspector.value("database")
    if database is INVALID:
        return
    features = present(inspector.value("features"))
    if "multi-schema" in features and database != "postgresql":
        inspector.error(f"Feature 'multi-schema' requires database 'postgresql' (got {database!r})")
    if "migrations" in features and database == "mongodb":
        inspector.error("Feature 'migrations' is not available with 'mongodb'; Prisma Migrate does not support it")
    if inspector.value("security", "row_level_security") is True and database != "postgresql":
        inspector.error(f"'security.rowLevelSecurity' requires database 'postgresql' (got {database!r})")


def check_model_relations(inspector: ConfigInspector) -> None:
    """Session, Post and Profile all reference User."""
    if inspector.value("models", "user") is not False:
        return
    for name in ("session", "post", "profile"):
        if inspector.value("models", name) is True:
            inspector.error(f"Model '{name}' requires model 'user' (it holds a relation to User)")


def check_audit_logging(inspector: ConfigInspector) -> None:
    if inspector.value("security", "audit_logging") is not True:
        return
    features = inspector.value("features")
    if features is not INVALID and "audit-trail" not in features:
        inspector.error("'security.auditLogging' requires feature 'audit-trail'")


CHECKS = (
    check_project_name,
    check_custom_models,
    check_provider_features,
    check_model_relations,
    check_audit_logging,
)
