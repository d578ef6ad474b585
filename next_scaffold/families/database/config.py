"""Configuration model, defaults and presets for the Prisma database layer."""

from __future__ import annotations

from enum import Enum

from pydantic import Field

from ...core.models import ConfigModel, PackageManager, ProjectSettings


class DatabaseKind(str, Enum):
    POSTGRESQL = "postgresql"
    MYSQL = "mysql"
    SQLITE = "sqlite"
    MONGODB = "mongodb"


class Orm(str, Enum):
    PRISMA = "prisma"


class DatabaseFeature(str, Enum):
    MIGRATIONS = "migrations"
    SEEDING = "seeding"
    RELATIONS = "relations"
    SOFT_DELETE = "soft-delete"
    AUDIT_TRAIL = "audit-trail"
    ZOD_VALIDATION = "zod-validation"
    EXTENSIONS = "extensions"
    MULTI_SCHEMA = "multi-schema"


class ModelSelection(ConfigModel):
    """Built-in models to include, plus extra model names."""

    user: bool = True
    session: bool = True
    post: bool = True
    profile: bool = True
    custom: list[str] = Field(default_factory=list, description="PascalCase names of additional models")


class ValidationOptions(ConfigModel):
    """Options for the zod-prisma-types generator."""

    use_zod_prisma_types: bool = True
    generate_input_types: bool = True
    generate_model_types: bool = True
    generate_partial_types: bool = False
    custom_validators: bool = True


class PerformanceOptions(ConfigModel):
    connection_pooling: bool = True
    query_optimization: bool = True
    indexing: bool = True
    caching: bool = False


class SecurityOptions(ConfigModel):
    row_level_security: bool = False
    data_encryption: bool = False
    audit_logging: bool = False


class DatabaseConfig(ProjectSettings):
    """Full configuration of the ``database`` family."""

    database: DatabaseKind = DatabaseKind.POSTGRESQL
    orm: Orm = Orm.PRISMA
    features: list[DatabaseFeature] = Field(
        default_factory=lambda: [
            DatabaseFeature.MIGRATIONS,
            DatabaseFeature.SEEDING,
            DatabaseFeature.RELATIONS,
            DatabaseFeature.ZOD_VALIDATION,
            DatabaseFeature.EXTENSIONS,
        ]
    )
    models: ModelSelection = Field(default_factory=ModelSelection)
    validation: ValidationOptions = Field(default_factory=ValidationOptions)
    performance: PerformanceOptions = Field(default_factory=PerformanceOptions)
    security: SecurityOptions = Field(default_factory=SecurityOptions)

    def has(self, feature: DatabaseFeature | str) -> bool:
        return DatabaseFeature(feature).value in self.features

    @property
    def enabled_models(self) -> list[str]:
        """Enabled model names in schema order."""
        names = [
            name
            for name, enabled in (
                ("User", self.models.user),
                ("Session", self.models.session),
                ("Post", self.models.post),
                ("Profile", self.models.profile),
            )
            if enabled
        ]
        return names + list(self.models.custom)


DEFAULTS = DatabaseConfig()


PRESETS: dict[str, DatabaseConfig] = {
    "basic": DatabaseConfig(
        project_name="basic-db",
        database=DatabaseKind.SQLITE,
        features=[DatabaseFeature.MIGRATIONS, DatabaseFeature.SEEDING],
        models=ModelSelection(user=True, session=True, post=False, profile=False),
        validation=ValidationOptions(use_zod_prisma_types=False),
    ),
    "standard": DatabaseConfig(project_name="standard-db"),
    "enterprise": DatabaseConfig(
        project_name="enterprise-db",
        package_manager=PackageManager.PNPM,
        features=list(DatabaseFeature),
        models=ModelSelection(custom=["Organization", "Invoice"]),
        validation=ValidationOptions(generate_partial_types=True),
        performance=PerformanceOptions(caching=True),
        security=SecurityOptions(row_level_security=True, data_encryption=True, audit_logging=True),
    ),
}
