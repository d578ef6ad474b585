"""Section generators, package scripts and instructions for the base project.

Sections and the paths they own:

- ``config``     package.json, tsconfig/jsconfig, next/postcss config,
                 components.json, .gitignore, .env.example, README.md
- ``app-shell``  app/ (App Router) or pages/ + styles/ (Pages Router)
- ``utilities``  <src>lib/utils, <src>lib/constants, <src>hooks/*, shared/types
- ``database``   prisma/*, <src>lib/db
- ``tooling``    <src>middleware, ESLint, Prettier and Jest files
"""

from __future__ import annotations

import json
from typing import Any

from ...core.commands import exec_command, install_command, numbered_steps, run_script, split_specifier
from ...core.family import SectionGenerator
from ...core.models import FileRecord
from .config import ProjectConfig, ProjectFeature

# Extra dev dependencies pulled in by a feature, on top of ``dependencies.dev``.
_FEATURE_DEV_DEPENDENCIES: dict[str, dict[str, str]] = {
    "linting": {"eslint": "^9.0.0", "eslint-config-next": "^15.1.0", "@eslint/eslintrc": "^3.0.0"},
    "formatting": {"prettier": "^3.4.0", "prettier-plugin-tailwindcss": "^0.6.0"},
    "seeding": {"tsx": "^4.19.0"},
    "testing": {
        "jest": "^29.7.0",
        "jest-environment-jsdom": "^29.7.0",
        "@testing-library/react": "^16.1.0",
        "@testing-library/jest-dom": "^6.6.0",
    },
}


def _context(config: ProjectConfig) -> dict[str, Any]:
    """Template variables shared by every project template."""
    return {
        "project_name": config.project_name,
        "package_manager": config.package_manager,
        "typescript": config.use_type_script,
        "src": config.src,
        "app_router": config.use_app_router,
        "features": list(config.features),
        "has_database": config.has(ProjectFeature.DATABASE),
        "has_seeding": config.has(ProjectFeature.SEEDING) and config.has(ProjectFeature.DATABASE),
        "has_auth": bool(config.dependencies.auth),
        "run": lambda script: run_script(config.package_manager, script),
    }


def _json(data: Any) -> str:
    return json.dumps(data, indent=2) + "\n"


def _dependency_map(specs: list[str]) -> dict[str, str]:
    return dict(split_specifier(spec) for spec in specs)


# ---------------------------------------------------------------------------
# Package scripts
# ---------------------------------------------------------------------------


def package_scripts(config: ProjectConfig) -> dict[str, str]:
    """``package.json`` scripts for the enabled features."""
    scripts = {
        "dev": "next dev",
        "build": "next build",
        "start": "next start",
    }
    if config.has(ProjectFeature.LINTING):
        scripts["lint"] = "next lint"
        scripts["lint:fix"] = "next lint --fix"
    if config.use_type_script:
        scripts["type-check"] = "tsc --noEmit"
    if config.has(ProjectFeature.FORMATTING):
        scripts["format"] = "prettier --write ."
        scripts["format:check"] = "prettier --check ."
    if config.has(ProjectFeature.DATABASE):
        scripts["db:generate"] = "prisma generate"
        scripts["db:push"] = "prisma db push"
        scripts["db:migrate"] = "prisma migrate dev"
        scripts["db:studio"] = "prisma studio"
        if config.has(ProjectFeature.SEEDING):
            scripts["db:seed"] = f"tsx prisma/seed.{config.ext}"
    if config.has(ProjectFeature.TESTING):
        scripts["test"] = "jest"
        scripts["test:watch"] = "jest --watch"
        scripts["test:coverage"] = "jest --coverage"
    return scripts


# ---------------------------------------------------------------------------
# Instructions
# ---------------------------------------------------------------------------


def instructions(config: ProjectConfig) -> list[str]:
    """Ordered setup steps for the generated project."""
    pm = config.package_manager
    steps: list[tuple[str, list[str]]] = [
        ("Install dependencies:", [install_command(pm)]),
        ("Configure environment variables:", ["cp .env.example .env", "# then edit .env with your values"]),
    ]
    if config.has(ProjectFeature.DATABASE):
        database_steps = [run_script(pm, "db:push")]
        if config.has(ProjectFeature.SEEDING):
            database_steps.append(run_script(pm, "db:seed"))
        steps.append(("Set up the database:", database_steps))
    steps.append((
        "Add the base shadcn/ui components:",
        [exec_command(pm, "shadcn@latest add button input form card")],
    ))
    steps.append(("Start the development server:", [run_script(pm, "dev")]))
    steps.append(("Open http://localhost:3000 in your browser", []))

    layout = [
        "Project layout:",
        "- app/: routes and layouts" if config.use_app_router else "- pages/: routes (Pages Router)",
        f"- {config.src or './'}: lib, hooks, components and services",
        "- shared/: types and validation shared by client and server",
    ]
    if config.has(ProjectFeature.DATABASE):
        layout.append("- prisma/: database schema" + (" and seed script" if config.has(ProjectFeature.SEEDING) else ""))
    return numbered_steps(f"Setting up {config.project_name}", steps, footer=layout)


# ---------------------------------------------------------------------------
# Sections
# ---------------------------------------------------------------------------


class ConfigFilesSection(SectionGenerator):
    """Root configuration files."""

    name = "config"

    def generate(self, config: ProjectConfig) -> list[FileRecord]:
        ctx = _context(config)
        next_config = "next.config.ts" if config.use_type_script else "next.config.mjs"
        return [
            FileRecord(path="package.json", content=_json(self._package_json(config))),
            self._language_config(config),
            self.render(next_config, "project/next.config.j2", **ctx),
            self.render("postcss.config.mjs", "project/postcss.config.mjs.j2", **ctx),
            FileRecord(path="components.json", content=_json(self._components_json(config))),
            self.render(".gitignore", "project/gitignore.j2", **ctx),
            self.render(".env.example", "project/env.example.j2", **ctx),
            self.render("README.md", "project/README.md.j2", **ctx),
        ]

    def _package_json(self, config: ProjectConfig) -> dict[str, Any]:
        deps = config.dependencies
        runtime = deps.core + deps.ui + deps.validation + deps.auth
        if config.has(ProjectFeature.DATABASE):
            runtime += deps.database
        dev = _dependency_map(deps.dev)
        for feature, extra in _FEATURE_DEV_DEPENDENCIES.items():
            if config.has(feature):
                dev.update(extra)

        package: dict[str, Any] = {
            "name": config.project_name,
            "version": "0.1.0",
            "private": True,
            "scripts": package_scripts(config),
            "dependencies": dict(sorted(_dependency_map(runtime).items())),
            "devDependencies": dict(sorted(dev.items())),
        }
        if config.has(ProjectFeature.SEEDING) and config.has(ProjectFeature.DATABASE):
            package["prisma"] = {"seed": f"tsx prisma/seed.{config.ext}"}
        return package

    def _language_config(self, config: ProjectConfig) -> FileRecord:
        src = f"./{config.src}" if config.src else "./"
        paths = {
            "@/*": [f"{src}*"],
            "@/app/*": ["./app/*"],
            "@/shared/*": ["./shared/*"],
            "@/components/*": [f"{src}components/*"],
            "@/lib/*": [f"{src}lib/*"],
            "@/hooks/*": [f"{src}hooks/*"],
            "@/services/*": [f"{src}services/*"],
        }
        if not config.use_type_script:
            return FileRecord(
                path="jsconfig.json",
                content=_json({"compilerOptions": {"baseUrl": ".", "paths": paths}}),
            )
        return FileRecord(
            path="tsconfig.json",
            content=_json({
                "compilerOptions": {
                    "target": "ES2020",
                    "lib": ["dom", "dom.iterable", "esnext"],
                    "allowJs": True,
                    "skipLibCheck": True,
                    "strict": True,
                    "noEmit": True,
                    "esModuleInterop": True,
                    "module": "esnext",
                    "moduleResolution": "bundler",
                    "resolveJsonModule": True,
                    "isolatedModules": True,
                    "jsx": "preserve",
                    "incremental": True,
                    "plugins": [{"name": "next"}],
                    "baseUrl": ".",
                    "paths": paths,
                    "forceConsistentCasingInFileNames": True,
                },
                "include": ["next-env.d.ts", "**/*.ts", "**/*.tsx", ".next/types/**/*.ts"],
                "exclude": ["node_modules"],
            }),
        )

    def _components_json(self, config: ProjectConfig) -> dict[str, Any]:
        css = "app/globals.css" if config.use_app_router else "styles/globals.css"
        return {
            "$schema": "https://ui.shadcn.com/schema.json",
            "style": "new-york",
            "rsc": config.use_app_router,
            "tsx": config.use_type_script,
            "tailwind": {"config": "", "css": css, "baseColor": "zinc", "cssVariables": True, "prefix": ""},
            "aliases": {
                "components": "@/components",
                "utils": "@/lib/utils",
                "ui": "@/components/ui",
                "lib": "@/lib",
                "hooks": "@/hooks",
            },
            "iconLibrary": "lucide",
        }


class AppShellSection(SectionGenerator):
    """Routes, layouts and global styles."""

    name = "app-shell"

    _APP_FILES = ("layout", "page", "loading", "error", "not-found")
    _PAGES_FILES = ("_app", "index", "404")

    def generate(self, config: ProjectConfig) -> list[FileRecord]:
        ctx = _context(config)
        jsx = config.jsx_ext
        if config.use_app_router:
            records = [
                self.render(f"app/{name}.{jsx}", f"project/app/{name}.j2", **ctx)
                for name in self._APP_FILES
            ]
            records.append(self.render("app/globals.css", "project/globals.css.j2", **ctx))
            return records
        records = [
            self.render(f"pages/{name}.{jsx}", f"project/pages/{name}.j2", **ctx)
            for name in self._PAGES_FILES
        ]
        records.append(self.render("styles/globals.css", "project/globals.css.j2", **ctx))
        return records


class UtilitiesSection(SectionGenerator):
    """Shared helpers, hooks and base types."""

    name = "utilities"

    def generate(self, config: ProjectConfig) -> list[FileRecord]:
        ctx = _context(config)
        src, ext = config.src, config.ext
        records = [
            self.render(f"{src}lib/utils.{ext}", "project/lib/utils.j2", **ctx),
            self.render(f"{src}lib/constants.{ext}", "project/lib/constants.j2", **ctx),
            self.render(f"{src}hooks/use-local-storage.{ext}", "project/hooks/use-local-storage.j2", **ctx),
            self.render(f"{src}hooks/use-debounce.{ext}", "project/hooks/use-debounce.j2", **ctx),
        ]
        if config.use_type_script:
            records.append(self.render("shared/types/index.ts", "project/shared/types.ts.j2", **ctx))
        return records


class DatabaseSection(SectionGenerator):
    """Prisma schema, client singleton and optional seed script."""

    name = "database"

    def generate(self, config: ProjectConfig) -> list[FileRecord]:
        if not config.has(ProjectFeature.DATABASE):
            return []
        ctx = _context(config)
        records = [
            self.render("prisma/schema.prisma", "project/prisma/schema.prisma.j2", **ctx),
            self.render(f"{config.src}lib/db.{config.ext}", "project/lib/db.j2", **ctx),
        ]
        if config.has(ProjectFeature.SEEDING):
            records.append(self.render(f"prisma/seed.{config.ext}", "project/prisma/seed.j2", **ctx))
        return records


class ToolingSection(SectionGenerator):
    """Middleware plus lint, format and test configuration."""

    name = "tooling"

    def generate(self, config: ProjectConfig) -> list[FileRecord]:
        ctx = _context(config)
        records: list[FileRecord] = []
        if config.has(ProjectFeature.MIDDLEWARE):
            records.append(self.render(f"{config.src}middleware.{config.ext}", "project/middleware.j2", **ctx))
        if config.has(ProjectFeature.LINTING):
            extends = ["next/core-web-vitals"]
            if config.use_type_script:
                extends.append("next/typescript")
            records.append(FileRecord(
                path=".eslintrc.json",
                content=_json({
                    "extends": extends,
                    "rules": {"prefer-const": "error", "no-var": "error"},
                }),
            ))
        if config.has(ProjectFeature.FORMATTING):
            records.append(FileRecord(
                path=".prettierrc",
                content=_json({
                    "semi": True,
                    "trailingComma": "es5",
                    "singleQuote": True,
                    "printWidth": 80,
                    "tabWidth": 2,
                    "plugins": ["prettier-plugin-tailwindcss"],
                }),
            ))
            records.append(self.render(".prettierignore", "project/prettierignore.j2", **ctx))
        if config.has(ProjectFeature.TESTING):
            records.append(self.render("jest.config.mjs", "project/testing/jest.config.mjs.j2", **ctx))
            records.append(self.render(f"jest.setup.{config.ext}", "project/testing/jest.setup.j2", **ctx))
            records.append(self.render(f"__tests__/utils.test.{config.ext}", "project/testing/utils.test.j2", **ctx))
        return records


SECTIONS = (
    ConfigFilesSection,
    AppShellSection,
    UtilitiesSection,
    DatabaseSection,
    ToolingSection,
)
