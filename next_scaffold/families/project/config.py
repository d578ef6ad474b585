"""Configuration model, defaults and presets for the base Next.js project."""

from __future__ import annotations

from enum import Enum

from pydantic import Field

from ...core.models import ConfigModel, PackageManager, ProjectSettings


class ProjectFeature(str, Enum):
    """Optional parts of the base project."""
    DATABASE = "database"
    SEEDING = "seeding"
    MIDDLEWARE = "middleware"
    LINTING = "linting"
    FORMATTING = "formatting"
    TESTING = "testing"


class DependencySet(ConfigModel):
    """``name@version`` specifiers grouped by purpose."""

    core: list[str] = Field(
        default_factory=lambda: ["next@^15.1.0", "react@^19.0.0", "react-dom@^19.0.0"]
    )
    dev: list[str] = Field(
        default_factory=lambda: [
            "@types/node@^22.0.0",
            "@types/react@^19.0.0",
            "@types/react-dom@^19.0.0",
            "typescript@^5.7.0",
        ]
    )
    ui: list[str] = Field(
        default_factory=lambda: [
            "tailwindcss@^4.0.0",
            "@tailwindcss/postcss@^4.0.0",
            "class-variance-authority@^0.7.0",
            "clsx@^2.1.0",
            "tailwind-merge@^2.5.0",
            "lucide-react@^0.460.0",
        ]
    )
    validation: list[str] = Field(
        default_factory=lambda: ["zod@^3.24.0", "@hookform/resolvers@^3.9.0", "react-hook-form@^7.53.0"]
    )
    database: list[str] = Field(default_factory=lambda: ["prisma@^6.0.0", "@prisma/client@^6.0.0"])
    auth: list[str] = Field(default_factory=lambda: ["better-auth@^1.0.0"])


class ProjectConfig(ProjectSettings):
    """Full configuration of the ``project`` family."""

    project_name: str = Field(default="nextjs-app")
    use_type_script: bool = Field(default=True, alias="useTypeScript")
    use_src_directory: bool = Field(default=True)
    use_app_router: bool = Field(default=True)
    features: list[ProjectFeature] = Field(
        default_factory=lambda: [
            ProjectFeature.DATABASE,
            ProjectFeature.SEEDING,
            ProjectFeature.MIDDLEWARE,
            ProjectFeature.LINTING,
            ProjectFeature.FORMATTING,
        ]
    )
    dependencies: DependencySet = Field(default_factory=DependencySet)

    def has(self, feature: ProjectFeature | str) -> bool:
        return ProjectFeature(feature).value in self.features

    @property
    def src(self) -> str:
        """Prefix for source folders: ``"src/"`` or ``""``."""
        return "src/" if self.use_src_directory else ""

    @property
    def ext(self) -> str:
        return "ts" if self.use_type_script else "js"

    @property
    def jsx_ext(self) -> str:
        return "tsx" if self.use_type_script else "jsx"


DEFAULTS = ProjectConfig()


PRESETS: dict[str, ProjectConfig] = {
    "basic": ProjectConfig(
        project_name="basic-app",
        use_src_directory=False,
        features=[ProjectFeature.LINTING, ProjectFeature.FORMATTING],
        dependencies=DependencySet(database=[], auth=[]),
    ),
    "standard": ProjectConfig(project_name="standard-app"),
    "enterprise": ProjectConfig(
        project_name="enterprise-app",
        package_manager=PackageManager.PNPM,
        features=list(ProjectFeature),
    ),
}
