"""Section generators, package scripts and instructions for the database layer.

Sections and the paths they own:

- ``prisma``      prisma/schema.prisma, prisma/seed.ts
- ``client``      src/lib/db.ts, src/lib/db-utils.ts
- ``validation``  shared/validation/database.ts, shared/validation/models/*
- ``types``       shared/types/database.ts, shared/types/prisma.ts
- ``extensions``  prisma/extensions/*
- ``migrations``  scripts/migrate.ts, scripts/reset-db.ts
"""

from __future__ import annotations

from typing import Any

from ...core.commands import add_command, exec_command, install_command, numbered_steps, run_script
from ...core.family import SectionGenerator
from ...core.models import FileRecord
from ...scaffolder.templates import camel_case, kebab_case
from .config import DatabaseConfig, DatabaseFeature
from .prisma import DATABASE_URLS, SchemaBuilder

# Zod shapes of the built-in models, excluding id and timestamps.
_MODEL_FIELDS: dict[str, list[tuple[str, str]]] = {
    "User": [
        ("email", "z.string().email('Invalid email address')"),
        ("name", "z.string().min(2).max(50).nullable()"),
        ("image", "z.string().url().nullable()"),
        ("role", "z.enum(['USER', 'ADMIN', 'MODERATOR'])"),
        ("status", "z.enum(['ACTIVE', 'INACTIVE', 'PENDING', 'SUSPENDED'])"),
    ],
    "Session": [
        ("userId", "{fk}"),
        ("expiresAt", "z.coerce.date()"),
    ],
    "Post": [
        ("title", "z.string().min(1).max(255)"),
        ("content", "z.string().nullable()"),
        ("published", "z.boolean()"),
        ("authorId", "{fk}"),
    ],
    "Profile": [
        ("bio", "z.string().max(500).nullable()"),
        ("website", "z.string().url().nullable()"),
        ("location", "z.string().nullable()"),
        ("userId", "{fk}"),
    ],
}
_CUSTOM_FIELDS = [
    ("name", "z.string().min(1)"),
    ("description", "z.string().nullable()"),
]

_DRIVERS: dict[str, list[str]] = {
    "postgresql": ["pg"],
    "mysql": ["mysql2"],
    "sqlite": [],
    "mongodb": ["mongodb"],
}


def _numeric_ids(config: DatabaseConfig) -> bool:
    return config.database in ("mysql", "sqlite")


def _model_fields(config: DatabaseConfig, model: str) -> list[tuple[str, str]]:
    fk = "z.number().int().positive()" if _numeric_ids(config) else "z.string()"
    fields = [(name, expr.format(fk=fk)) for name, expr in _MODEL_FIELDS.get(model, _CUSTOM_FIELDS)]
    if config.has(DatabaseFeature.SOFT_DELETE) and model in _soft_delete_models(config):
        fields.append(("deletedAt", "z.coerce.date().nullable()"))
    return fields


def _soft_delete_models(config: DatabaseConfig) -> list[str]:
    """Models that carry ``deletedAt`` in the schema."""
    return [name for name in config.enabled_models if name not in ("Session", "Profile")]


def _context(config: DatabaseConfig) -> dict[str, Any]:
    return {
        "project_name": config.project_name,
        "database": config.database,
        "models": config.enabled_models,
        "has_user": config.models.user,
        "has_post": config.models.post,
        "has_profile": config.models.profile,
        "custom_models": list(config.models.custom),
        "numeric_ids": _numeric_ids(config),
        "id_type": "number" if _numeric_ids(config) else "string",
        "soft_delete": config.has(DatabaseFeature.SOFT_DELETE),
        "soft_delete_models": _soft_delete_models(config),
        "audit_trail": config.has(DatabaseFeature.AUDIT_TRAIL),
        "relations": config.has(DatabaseFeature.RELATIONS),
        "migrations": config.has(DatabaseFeature.MIGRATIONS),
        "seeding": config.has(DatabaseFeature.SEEDING),
        "performance": config.performance.model_dump(),
        "security": config.security.model_dump(),
        "run": lambda script: run_script(config.package_manager, script),
    }


# ---------------------------------------------------------------------------
# Package scripts
# ---------------------------------------------------------------------------


def package_scripts(config: DatabaseConfig) -> dict[str, str]:
    """``package.json`` scripts for the Prisma workflow."""
    scripts = {
        "db:generate": "prisma generate",
        "db:push": "prisma db push",
        "db:studio": "prisma studio",
    }
    if config.has(DatabaseFeature.MIGRATIONS):
        scripts["db:migrate"] = "prisma migrate dev"
        scripts["db:migrate:deploy"] = "prisma migrate deploy"
        scripts["db:migrate:status"] = "tsx scripts/migrate.ts status"
        scripts["db:reset"] = "tsx scripts/reset-db.ts"
    if config.has(DatabaseFeature.SEEDING):
        scripts["db:seed"] = "tsx prisma/seed.ts"
    if config.has(DatabaseFeature.ZOD_VALIDATION) and config.validation.use_zod_prisma_types:
        scripts["db:generate:zod"] = "prisma generate --generator zod"
    return scripts


# ---------------------------------------------------------------------------
# Instructions
# ---------------------------------------------------------------------------


def instructions(config: DatabaseConfig) -> list[str]:
    """Ordered setup steps for the Prisma layer."""
    pm = config.package_manager
    runtime = ["@prisma/client", *_DRIVERS[config.database]]
    dev = ["prisma", "tsx"]
    if config.has(DatabaseFeature.ZOD_VALIDATION):
        runtime.append("zod")
        if config.validation.use_zod_prisma_types:
            dev.append("zod-prisma-types")

    steps: list[tuple[str, list[str]]] = [
        ("Install dependencies:", [install_command(pm), add_command(pm, runtime), add_command(pm, dev, dev=True)]),
        ("Set the connection string in .env:", [f'DATABASE_URL="{DATABASE_URLS[config.database]}"']),
        ("Generate the Prisma client:", [run_script(pm, "db:generate")]),
    ]
    if config.has(DatabaseFeature.MIGRATIONS):
        steps.append(("Create the first migration:", [run_script(pm, "db:migrate", "--name", "init")]))
    else:
        steps.append(("Push the schema to the database:", [run_script(pm, "db:push")]))
    if config.has(DatabaseFeature.SEEDING):
        steps.append(("Seed the database:", [run_script(pm, "db:seed")]))
    steps.append(("Browse your data:", [run_script(pm, "db:studio")]))
    if config.security.row_level_security:
        steps.append((
            "Enable row level security on the generated tables:",
            [exec_command(pm, "prisma db execute --file prisma/rls.sql")],
        ))

    footer = [
        "Database layout:",
        "- prisma/schema.prisma: models " + ", ".join(config.enabled_models),
        "- src/lib/db.ts: Prisma client singleton",
    ]
    if config.has(DatabaseFeature.ZOD_VALIDATION):
        footer.append("- shared/validation/: Zod schemas per model")
    return numbered_steps(f"Setting up the {config.database} database", steps, footer=footer)


# ---------------------------------------------------------------------------
# Sections
# ---------------------------------------------------------------------------


class PrismaSchemaSection(SectionGenerator):
    """Schema and seed script."""

    name = "prisma"

    def generate(self, config: DatabaseConfig) -> list[FileRecord]:
        records = [FileRecord(path="prisma/schema.prisma", content=SchemaBuilder(config).build())]
        if config.has(DatabaseFeature.SEEDING):
            records.append(self.render("prisma/seed.ts", "database/prisma/seed.ts.j2", **_context(config)))
        if config.security.row_level_security:
            records.append(self.render("prisma/rls.sql", "database/prisma/rls.sql.j2", **_context(config)))
        return records


class ClientSection(SectionGenerator):
    """Prisma client singleton and query helpers."""

    name = "client"

    def generate(self, config: DatabaseConfig) -> list[FileRecord]:
        ctx = _context(config)
        return [
            self.render("src/lib/db.ts", "database/lib/db.ts.j2", **ctx),
            self.render("src/lib/db-utils.ts", "database/lib/db-utils.ts.j2", **ctx),
        ]


class ZodValidationSection(SectionGenerator):
    """Hand-written Zod schemas per model."""

    name = "validation"

    def generate(self, config: DatabaseConfig) -> list[FileRecord]:
        if not config.has(DatabaseFeature.ZOD_VALIDATION):
            return []
        ctx = _context(config)
        records = [self.render("shared/validation/database.ts", "database/validation/database.ts.j2", **ctx)]
        for model in config.enabled_models:
            records.append(self.render(
                f"shared/validation/models/{kebab_case(model)}.ts",
                "database/validation/model.ts.j2",
                model=model,
                variable=camel_case(model),
                fields=_model_fields(config, model),
                **ctx,
            ))
        records.append(self.render(
            "shared/validation/models/index.ts",
            "database/validation/index.ts.j2",
            modules=[kebab_case(model) for model in config.enabled_models],
        ))
        return records


class TypesSection(SectionGenerator):
    """Shared TypeScript types for query results and helpers."""

    name = "types"

    def generate(self, config: DatabaseConfig) -> list[FileRecord]:
        ctx = _context(config)
        return [
            self.render("shared/types/database.ts", "database/types/database.ts.j2", **ctx),
            self.render("shared/types/prisma.ts", "database/types/prisma.ts.j2", **ctx),
        ]


class ExtensionsSection(SectionGenerator):
    """Prisma client extensions."""

    name = "extensions"

    def generate(self, config: DatabaseConfig) -> list[FileRecord]:
        if not config.has(DatabaseFeature.EXTENSIONS):
            return []
        ctx = _context(config)
        records = [
            self.render("prisma/extensions/index.ts", "database/extensions/index.ts.j2", **ctx),
            self.render("prisma/extensions/pagination.ts", "database/extensions/pagination.ts.j2", **ctx),
        ]
        if config.has(DatabaseFeature.SOFT_DELETE):
            records.append(self.render("prisma/extensions/soft-delete.ts", "database/extensions/soft-delete.ts.j2", **ctx))
        if config.has(DatabaseFeature.AUDIT_TRAIL):
            records.append(self.render("prisma/extensions/audit-trail.ts", "database/extensions/audit-trail.ts.j2", **ctx))
        return records


class MigrationScriptsSection(SectionGenerator):
    """Helper scripts around Prisma Migrate."""

    name = "migrations"

    def generate(self, config: DatabaseConfig) -> list[FileRecord]:
        if not config.has(DatabaseFeature.MIGRATIONS):
            return []
        ctx = _context(config)
        return [
            self.render("scripts/migrate.ts", "database/scripts/migrate.ts.j2", **ctx),
            self.render("scripts/reset-db.ts", "database/scripts/reset-db.ts.j2", **ctx),
        ]


SECTIONS = (
    PrismaSchemaSection,
    ClientSection,
    ZodValidationSection,
    TypesSection,
    ExtensionsSection,
    MigrationScriptsSection,
)
